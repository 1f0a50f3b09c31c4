#!/usr/bin/env python3
"""Fetch, classify and export ECG readings from a simulated health store."""

import asyncio
import sys
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from ..core.config import Config, SamplingConfig
from ..core.exceptions import ConfigurationError, ECGExportError
from ..core.logging import setup_logging
from ..data_acquisition.health_manager import HealthManager
from ..data_acquisition.simulated import SimulatedHealthSource
from ..data_acquisition.voltage_sampler import VoltageSampler
from ..export.csv_exporter import preview
from ..export.pipeline import ECGExporter
from ..payment.manager import PaymentManager, SimulatedPaymentGateway


class ExportDemo:
    """Runs the export pipeline end to end against simulated data."""

    def __init__(self, config: Config, realtime: bool = False, seed: Optional[int] = None):
        """
        Initialize demo.

        Args:
            config: Configuration object
            realtime: Pace voltage streams at the sample rate
            seed: Random seed for the simulated data
        """
        self.config = config
        self.source = SimulatedHealthSource(
            duration=max(config.sampling.window * 2, 10.0),
            sample_rate=config.export.sample_rate,
            realtime=realtime,
            seed=seed,
        )
        self.health = HealthManager(self.source)
        self.sampler = VoltageSampler(self.source, config.sampling.window)
        self.exporter = ECGExporter.from_config(self.sampler, config)
        self.payments = PaymentManager(SimulatedPaymentGateway(), config.payment)

    async def run(self, export_all: bool = False, pay: bool = False,
                  share: bool = False, clear: bool = False) -> int:
        """Run the demo; returns the number of exports written."""
        if clear:
            self.exporter.storage.clear()
            print(f"Cleared {self.exporter.storage.directory}")

        readings = await self.health.request_permission()

        print(f"Found {len(readings)} ECG readings")
        print("-" * 50)
        for classified in readings:
            reading = classified.reading
            heart_rate = (f"{int(reading.average_heart_rate)} BPM"
                          if reading.average_heart_rate is not None else "N/A")
            print(f"{reading.start_date:%Y-%m-%d %H:%M}  {heart_rate:>8}  "
                  f"{', '.join(classified.symptoms)}")
            if classified.reported_symptoms:
                print(f"{'':28}Reported: {', '.join(classified.reported_symptoms)}")
        print("-" * 50)

        targets = readings if export_all else readings[:1]
        written = 0
        for classified in targets:
            if pay:
                result = await self.exporter.request_detailed_analysis(classified, self.payments)
                if result is None:
                    print("Payment failed")
                    continue
                print("Thank you! Your detailed ECG analysis will be delivered to you shortly.")
            else:
                result = await self.exporter.save_and_share(classified)

            written += 1
            print(f"Exported {result.sample_count} samples to {result.path}")
            print(preview(self.exporter.storage.read(result.path)))
            if share:
                print(f"Shared to {self.exporter.storage.share(result.path)}")
            print()

        if self.exporter.uploader is not None:
            await self.exporter.uploader.wait_pending()

        return written


def build_config(window: float = 5.0, endpoint: Optional[str] = None, upload: bool = True,
                 export_dir: Optional[Path] = None, log_level: str = "INFO",
                 json_logs: bool = False) -> Config:
    """
    Build a validated configuration from command line values.

    Raises:
        ConfigurationError: A value failed validation
    """
    try:
        config = Config.create_default(endpoint)
        config.sampling = SamplingConfig(window=window)
        config.upload.enabled = upload
        if export_dir:
            config.export.temp_root = export_dir
        config.log_level = log_level
        config.json_logs = json_logs
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
    return config


async def main():
    """Main function."""
    import argparse

    parser = argparse.ArgumentParser(description="ECG export demo with simulated readings")
    parser.add_argument("--window", type=float, default=5.0, help="Voltage collection window (s)")
    parser.add_argument("--endpoint", help="Upload endpoint URL")
    parser.add_argument("--no-upload", action="store_true", help="Do not upload exports")
    parser.add_argument("--all", action="store_true", help="Export every reading")
    parser.add_argument("--pay", action="store_true", help="Run the detailed-analysis payment first")
    parser.add_argument("--share", action="store_true", help="Copy exports to the documents directory")
    parser.add_argument("--clear", action="store_true", help="Clear the export directory first")
    parser.add_argument("--export-dir", type=Path, help="Temp root for the export directory")
    parser.add_argument("--realtime", action="store_true", help="Pace voltage streams in real time")
    parser.add_argument("--seed", type=int, help="Random seed for simulated data")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON log lines")

    args = parser.parse_args()

    try:
        config = build_config(window=args.window, endpoint=args.endpoint,
                              upload=not args.no_upload, export_dir=args.export_dir,
                              log_level=args.log_level, json_logs=args.json_logs)
        setup_logging(config)

        demo = ExportDemo(config, realtime=args.realtime, seed=args.seed)
        await demo.run(export_all=args.all, pay=args.pay, share=args.share, clear=args.clear)

    except ConfigurationError as e:
        print(e)
        sys.exit(2)
    except ECGExportError as e:
        print(f"Export failed: {e}")
        sys.exit(1)


def main_sync():
    """Console script entry point."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\nProgram stopped.")


if __name__ == "__main__":
    main_sync()
