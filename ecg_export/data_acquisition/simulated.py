"""
Simulated health data source.

Generates a set of ECG readings covering every classification together with
synthetic ECG-like voltage waveforms, so the export pipeline can be run
without a platform health store.
"""

import asyncio
import random
from datetime import datetime, timedelta
from typing import AsyncIterator, List, Optional

import numpy as np
import structlog

from ..core.models import ECGClassification, ECGReading, SymptomsStatus, VoltageMeasurement
from .health_source import InMemoryHealthSource

logger = structlog.get_logger(__name__)


# (classification, heart rate, symptoms status)
DEFAULT_PROFILES = [
    (ECGClassification.SINUS_RHYTHM, 72.0, SymptomsStatus.NONE),
    (ECGClassification.ATRIAL_FIBRILLATION, 145.0, SymptomsStatus.PRESENT),
    (ECGClassification.INCONCLUSIVE_LOW_HEART_RATE, 48.0, SymptomsStatus.NONE),
    (ECGClassification.INCONCLUSIVE_HIGH_HEART_RATE, 128.0, SymptomsStatus.NOT_SET),
    (ECGClassification.INCONCLUSIVE_POOR_READING, None, SymptomsStatus.NOT_SET),
    (ECGClassification.INCONCLUSIVE_OTHER, 88.0, SymptomsStatus.PRESENT),
]


def synthetic_ecg(duration: float, sample_rate: float = 500.0, heart_rate: float = 75.0,
                  noise: float = 0.00002, seed: Optional[int] = None) -> np.ndarray:
    """
    Generate a synthetic ECG-like waveform in volts.

    Args:
        duration: Duration in seconds
        sample_rate: Sample rate in Hz
        heart_rate: Beats per minute
        noise: Standard deviation of additive noise (V)
        seed: Random seed for reproducible noise
    """
    samples_count = int(duration * sample_rate)
    t = np.arange(samples_count) / sample_rate
    rr_interval = 60.0 / max(heart_rate, 1.0)

    ecg = np.zeros_like(t)
    for beat_time in np.arange(0, duration, rr_interval):
        dt = t - beat_time
        # P wave, Q wave, R wave, S wave, T wave (amplitudes in mV)
        ecg += 0.15 * np.exp(-((dt + 0.16) / 0.025) ** 2)
        ecg -= 0.2 * np.exp(-((dt - 0.01) / 0.005) ** 2)
        ecg += 1.0 * np.exp(-((dt - 0.05) / 0.01) ** 2)
        ecg -= 0.3 * np.exp(-((dt - 0.09) / 0.005) ** 2)
        ecg += 0.3 * np.exp(-((dt - 0.3) / 0.04) ** 2)

    rng = np.random.default_rng(seed)
    ecg_volts = ecg / 1000.0 + rng.normal(0.0, noise, samples_count)
    return ecg_volts


class SimulatedHealthSource(InMemoryHealthSource):
    """In-memory source pre-populated with synthetic readings."""

    def __init__(self, count: int = len(DEFAULT_PROFILES), duration: float = 30.0,
                 sample_rate: float = 500.0, realtime: bool = False,
                 chunk_size: int = 50, now: Optional[datetime] = None,
                 seed: Optional[int] = None):
        """
        Initialize simulated source.

        Args:
            count: Number of readings to generate
            duration: Recording duration per reading in seconds
            sample_rate: Sample rate of the synthetic waveform
            realtime: Pace the voltage stream at the sample rate
            chunk_size: Samples delivered per pacing step
            now: Reference time for reading start dates
            seed: Random seed for reproducible data
        """
        super().__init__(sample_rate=sample_rate)
        self.duration = duration
        self.realtime = realtime
        self.chunk_size = chunk_size
        self._random = random.Random(seed)

        now = now or datetime.now()
        for index in range(count):
            classification, heart_rate, status = DEFAULT_PROFILES[index % len(DEFAULT_PROFILES)]
            start = now - timedelta(hours=6 * (index + 1), minutes=self._random.randint(0, 59))
            handle = f"sim-{index:04d}"
            reading = ECGReading(
                classification=classification,
                average_heart_rate=heart_rate,
                symptoms_status=status,
                start_date=start,
                handle=handle,
            )
            waveform = synthetic_ecg(duration, sample_rate, heart_rate or 75.0,
                                     seed=None if seed is None else seed + index)
            self.add_reading(reading, waveform.tolist())

        logger.info("simulated_source_ready", readings=count, duration=duration,
                    sample_rate=sample_rate)

    async def voltage_measurements(self, handle: str) -> AsyncIterator[VoltageMeasurement]:
        if not self.realtime:
            async for measurement in super().voltage_measurements(handle):
                yield measurement
            return

        interval = 1.0 / self.sample_rate
        chunk_delay = self.chunk_size * interval
        index = 0
        async for measurement in super().voltage_measurements(handle):
            yield measurement
            index += 1
            if index % self.chunk_size == 0:
                await asyncio.sleep(chunk_delay)
