"""
Health data source abstraction and in-memory implementation.

A health data source supplies ECG readings through a query interface and a
per-reading stream of voltage measurements keyed by the reading's handle.
Platform-backed sources should inherit from HealthDataSource.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import AsyncIterator, Dict, Iterable, List, Optional

from ..core.models import AuthorizationStatus, ECGReading, VoltageMeasurement, ensure_aware


class HealthDataSource(ABC):
    """Abstract base class for ECG health data sources."""

    @abstractmethod
    def is_health_data_available(self) -> bool:
        """Whether health data exists on this device at all."""
        pass

    @abstractmethod
    def authorization_status(self) -> AuthorizationStatus:
        """Current read authorization for ECG data."""
        pass

    @abstractmethod
    async def request_authorization(self) -> bool:
        """
        Ask for read access to ECG data.

        Returns:
            True if access was granted. Implementations raise on errors.
        """
        pass

    @abstractmethod
    async def query_readings(self, end: datetime, descending: bool = True,
                             limit: Optional[int] = None) -> List[ECGReading]:
        """
        Query readings with a start date up to ``end``.

        Args:
            end: Inclusive upper bound on the reading start date
            descending: Sort newest first
            limit: Maximum number of readings, None for no limit
        """
        pass

    @abstractmethod
    def voltage_measurements(self, handle: str) -> AsyncIterator[VoltageMeasurement]:
        """
        Open the voltage stream for a reading.

        Exhausting the iterator signals the stream is done; an exception
        signals a stream error.
        """
        pass


class InMemoryHealthSource(HealthDataSource):
    """Health data source backed by readings and voltages held in memory."""

    def __init__(self, readings: Iterable[ECGReading] = (),
                 voltages: Optional[Dict[str, List[float]]] = None,
                 available: bool = True,
                 grant_access: bool = True,
                 sample_rate: float = 500.0):
        self._readings = list(readings)
        self._voltages = dict(voltages or {})
        self._available = available
        self._grant_access = grant_access
        self._status = AuthorizationStatus.NOT_DETERMINED
        self.sample_rate = sample_rate

    def add_reading(self, reading: ECGReading, voltages: Optional[List[float]] = None) -> None:
        """Add a reading and optionally its voltage samples."""
        self._readings.append(reading)
        if voltages is not None:
            self._voltages[reading.handle] = list(voltages)

    def is_health_data_available(self) -> bool:
        return self._available

    def authorization_status(self) -> AuthorizationStatus:
        return self._status

    async def request_authorization(self) -> bool:
        self._status = (AuthorizationStatus.SHARING_AUTHORIZED if self._grant_access
                        else AuthorizationStatus.SHARING_DENIED)
        return self._grant_access

    async def query_readings(self, end: datetime, descending: bool = True,
                             limit: Optional[int] = None) -> List[ECGReading]:
        end = ensure_aware(end)
        matching = [r for r in self._readings if r.start_date <= end]
        matching.sort(key=lambda r: r.start_date, reverse=descending)
        if limit is not None:
            matching = matching[:limit]
        return matching

    async def voltage_measurements(self, handle: str) -> AsyncIterator[VoltageMeasurement]:
        interval = 1.0 / self.sample_rate
        for index, voltage in enumerate(self._voltages.get(handle, [])):
            yield VoltageMeasurement(time_since_start=index * interval, lead_i_voltage=voltage)
