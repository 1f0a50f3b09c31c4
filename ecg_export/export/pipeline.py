"""Export orchestration: sample, render, write, upload."""

import asyncio
from typing import Optional

import structlog

from ..core.config import Config
from ..core.exceptions import ExportFailed
from ..core.models import ClassifiedReading, ExportResult, PaymentResult
from ..data_acquisition.voltage_sampler import VoltageSampler
from ..payment.manager import PaymentManager
from ..upload.client import UploadClient
from .csv_exporter import render
from .storage import ExportStorage

logger = structlog.get_logger(__name__)


class ECGExporter:
    """Turns a classified reading into an export file and a background upload."""

    def __init__(self, sampler: VoltageSampler, storage: ExportStorage,
                 uploader: Optional[UploadClient] = None,
                 config: Optional[Config] = None):
        """
        Initialize exporter.

        Args:
            sampler: Voltage sampler for the reading's stream
            storage: Export directory
            uploader: Upload client, None to skip uploads
            config: Configuration object
        """
        self.config = config or Config()
        self.sampler = sampler
        self.storage = storage
        self.uploader = uploader

    async def save_and_share(self, classified: ClassifiedReading) -> ExportResult:
        """
        Export one reading.

        Raises:
            ExportFailed: The export file could not be written
        """
        reading = classified.reading
        voltages = await self.sampler.sample(reading, self.config.sampling.window)

        text = render(
            reading,
            classified,
            voltages,
            date_format=self.config.export.date_format,
            sample_rate=self.config.export.sample_rate,
        )
        file_name = self.storage.new_file_name(reading)

        loop = asyncio.get_running_loop()
        try:
            path = await loop.run_in_executor(None, self.storage.write, file_name, text)
        except OSError as e:
            logger.error("export_failed", file=file_name, error=str(e))
            raise ExportFailed(f"Failed to write ECG export {file_name}: {e}") from e

        upload_scheduled = False
        if self.uploader is not None and self.config.upload.enabled:
            self.uploader.schedule_upload(text.encode("utf-8"), file_name)
            upload_scheduled = True

        logger.info("export_finished", file=file_name, samples=len(voltages),
                    upload_scheduled=upload_scheduled)
        return ExportResult(
            path=path,
            file_name=file_name,
            sample_count=len(voltages),
            upload_scheduled=upload_scheduled,
        )

    async def request_detailed_analysis(self, classified: ClassifiedReading,
                                        payments: PaymentManager) -> Optional[ExportResult]:
        """Take payment, then export; None if the payment did not succeed."""
        result = await payments.start_payment()
        if result != PaymentResult.SUCCESS:
            logger.info("detailed_analysis_declined", handle=classified.reading.handle)
            return None
        return await self.save_and_share(classified)

    @classmethod
    def from_config(cls, sampler: VoltageSampler, config: Config,
                    transport=None) -> 'ECGExporter':
        """Build an exporter with storage and uploader taken from ``config``."""
        uploader = UploadClient(config.upload, transport=transport) if config.upload.enabled else None
        return cls(sampler, ExportStorage(config.export), uploader, config)
