"""Async voltage sampler for ECG export system."""

import asyncio
import time
from typing import AsyncIterator, List, Optional, Union

import structlog

from ..core.models import ECGReading, VoltageMeasurement
from .health_source import HealthDataSource

logger = structlog.get_logger(__name__)


class VoltageSampler:
    """Best-effort collector of a reading's lead I voltages."""

    def __init__(self, source: HealthDataSource, window: float = 5.0):
        """
        Initialize voltage sampler.

        Args:
            source: Health data source providing voltage streams
            window: Default collection window in seconds
        """
        self.source = source
        self.window = window

    async def sample(self, reading: Union[ECGReading, str],
                     window: Optional[float] = None) -> List[float]:
        """
        Drain the reading's voltage stream for at most ``window`` seconds.

        Stops on stream end, stream error or window elapse, whichever comes
        first. Never raises for stream problems; the accumulated voltages
        (possibly none) are always returned.
        """
        handle = reading.handle if isinstance(reading, ECGReading) else reading
        window = self.window if window is None else window
        voltages: List[float] = []
        started = time.monotonic()

        try:
            await asyncio.wait_for(self._drain(handle, voltages), timeout=window)
            logger.debug("voltage_stream_done", handle=handle, samples=len(voltages))
        except asyncio.TimeoutError:
            logger.info("voltage_window_elapsed", handle=handle, window=window,
                        samples=len(voltages))
        except Exception as e:
            logger.warning("voltage_stream_error", handle=handle, error=str(e),
                           error_type=type(e).__name__, samples=len(voltages))

        logger.info("voltage_sampling_finished", handle=handle, samples=len(voltages),
                    elapsed=round(time.monotonic() - started, 3))
        return voltages

    async def _drain(self, handle: str, voltages: List[float]) -> None:
        """Append lead I voltages until the stream ends."""
        stream: AsyncIterator[VoltageMeasurement] = self.source.voltage_measurements(handle)
        try:
            async for measurement in stream:
                if measurement.lead_i_voltage is not None:
                    voltages.append(measurement.lead_i_voltage)
        finally:
            aclose = getattr(stream, "aclose", None)
            if aclose is not None:
                await aclose()
