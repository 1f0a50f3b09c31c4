#!/usr/bin/env python3
"""
ECG Export Inspector - summarize an exported ECG CSV file.

Usage:
    ecg-inspect ecg_20261019_081500_20261019_131200_000123.csv
    ecg-inspect export.csv --rows 10
"""

import argparse
import sys
from pathlib import Path

import numpy as np

from ..core.exceptions import ECGExportError
from ..export.csv_exporter import load_export, preview


class ExportInspector:
    """Loads one export file and reports on it."""

    def __init__(self, csv_file: str):
        """
        Initialize the inspector with an export file.

        Args:
            csv_file: Path to the exported CSV file
        """
        self.csv_file = Path(csv_file)
        self.recording = None

    def load(self):
        """Load the export."""
        self.recording = load_export(self.csv_file)
        return self.recording

    def estimated_rate(self) -> float:
        """Sample rate implied by the time column."""
        times = self.recording.data["Time(s)"].to_numpy()
        if times.size < 2:
            return 0.0
        step = np.median(np.diff(times))
        return float(1.0 / step) if step > 0 else 0.0

    def report(self, rows: int = 3) -> str:
        """Human-readable report."""
        if self.recording is None:
            self.load()

        lines = [f"File: {self.csv_file.name}"]
        for label, value in self.recording.metadata.items():
            lines.append(f"{label}: {value}")

        stats = self.recording.summary()
        lines.append("")
        lines.append(f"Samples: {stats['samples']}")
        if stats["samples"]:
            lines.append(f"Duration: {stats['duration']:.3f} s "
                         f"(~{self.estimated_rate():.1f} Hz from time column)")
            lines.append(f"Voltage mean: {stats['mean']:.4f} mV, std: {stats['std']:.4f} mV")
            lines.append(f"Voltage range: {stats['min']:.4f} .. {stats['max']:.4f} mV")

        lines.append("")
        lines.append(preview(self.csv_file.read_text(encoding="utf-8"), data_lines=rows))
        return "\n".join(lines)


def main():
    """Main function with command line interface."""
    parser = argparse.ArgumentParser(description="Summarize an ECG export CSV file")
    parser.add_argument("csv_file", help="Exported CSV file")
    parser.add_argument("--rows", "-r", type=int, default=3, help="Data rows to show in the preview")

    args = parser.parse_args()

    if not Path(args.csv_file).exists():
        print(f"Error: File {args.csv_file} not found")
        sys.exit(1)

    inspector = ExportInspector(args.csv_file)
    try:
        print(inspector.report(rows=args.rows))
    except ECGExportError as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
