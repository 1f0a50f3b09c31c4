"""CSV rendering and read-back of ECG exports."""

import io
import math
from pathlib import Path
from typing import Dict, List, Sequence, Union

import pandas as pd

from ..core.exceptions import ECGExportError
from ..core.models import ClassifiedReading, ECGReading, ExportedRecording

TITLE_LINE = "ECG Recording"
TIME_COLUMN = "Time(s)"
VOLTAGE_COLUMN = "Voltage(mV)"
DATA_HEADER = f"{TIME_COLUMN},{VOLTAGE_COLUMN}"

# Assumed rate for the time column; not taken from the voltage stream.
DEFAULT_SAMPLE_RATE = 500.0
DEFAULT_DATE_FORMAT = "%x %X"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def render(reading: ECGReading, classified: ClassifiedReading, voltages: Sequence[float],
           date_format: str = DEFAULT_DATE_FORMAT,
           sample_rate: float = DEFAULT_SAMPLE_RATE) -> str:
    """
    Render one reading and its voltages as a CSV document.

    Args:
        reading: The source reading (date and heart rate)
        classified: Symptom labels for the reading
        voltages: Voltage samples in volts
        date_format: strftime format of the Date line
        sample_rate: Rate used to derive the time column (Hz)

    Returns:
        The CSV text, every line terminated by a newline
    """
    lines = [
        TITLE_LINE,
        f"Date: {reading.start_date.strftime(date_format)}",
    ]
    if reading.average_heart_rate is not None:
        lines.append(f"Heart Rate: {_round_half_up(reading.average_heart_rate)} BPM")
    lines.append(f"Classification: {', '.join(classified.symptoms)}")
    if classified.reported_symptoms:
        lines.append(f"Reported Symptoms: {', '.join(classified.reported_symptoms)}")

    lines.append("")
    lines.append(DATA_HEADER)

    for index, voltage in enumerate(voltages):
        # seconds, then volts -> millivolts
        lines.append(f"{index / sample_rate:.3f},{voltage * 1000:.6f}")

    return "\n".join(lines) + "\n"


def _split_lines(text: str) -> List[str]:
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def _data_header_index(lines: List[str]) -> int:
    for index, line in enumerate(lines):
        if line.startswith("Time(s),Voltage"):
            return index
    return -1


def preview(csv_text: str, header_lines: int = 5, data_lines: int = 3) -> str:
    """Short human-readable preview of an export: header, first rows and count."""
    lines = _split_lines(csv_text)
    parts = lines[:header_lines]

    parts.append("")
    parts.append("[Voltage Data Preview]")

    header_index = _data_header_index(lines)
    if header_index >= 0:
        data = lines[header_index + 1:]
    else:
        data = []
    parts.extend(data[:data_lines])
    parts.append("...")
    parts.append("")
    parts.append(f"Total Measurements: {len(data)}")

    return "\n".join(parts)


def parse_export(csv_text: str) -> ExportedRecording:
    """
    Parse an export document back into metadata and a data table.

    Raises:
        ECGExportError: The text is not an ECG export
    """
    lines = _split_lines(csv_text)
    if not lines or lines[0] != TITLE_LINE:
        raise ECGExportError("Not an ECG export: missing title line")

    header_index = _data_header_index(lines)
    if header_index < 0:
        raise ECGExportError("Not an ECG export: missing voltage table header")

    metadata: Dict[str, str] = {}
    for line in lines[1:header_index]:
        if ": " in line:
            label, value = line.split(": ", 1)
            metadata[label] = value

    table = "\n".join(lines[header_index:]) + "\n"
    data = pd.read_csv(
        io.StringIO(table),
        dtype={TIME_COLUMN: float, VOLTAGE_COLUMN: float},
    )
    return ExportedRecording(metadata=metadata, data=data)


def load_export(path: Union[str, Path]) -> ExportedRecording:
    """Read an export file from disk."""
    return parse_export(Path(path).read_text(encoding="utf-8"))
