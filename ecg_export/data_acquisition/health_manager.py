"""ECG reading retrieval and classification."""

import asyncio
from datetime import datetime, timezone
from typing import List, Optional, Set, Union

import structlog

from ..analysis.classifier import classify_reading
from ..core.exceptions import (
    HealthDataError,
    HealthDataUnavailableError,
    PermissionDeniedError,
    QueryError,
)
from ..core.models import (
    AuthorizationStatus,
    ClassifiedReading,
    FetchFailed,
    ReadingsUpdated,
    ensure_aware,
)
from .health_source import HealthDataSource

logger = structlog.get_logger(__name__)

HealthEvent = Union[ReadingsUpdated, FetchFailed]

NO_READINGS_MESSAGE = ("No ECG readings found. Please ensure your Apple Watch supports ECG "
                       "and try taking a reading.")


class HealthManager:
    """Fetches ECG readings from a health source and publishes them as events."""

    def __init__(self, source: HealthDataSource):
        """
        Initialize health manager.

        Args:
            source: Health data source to query
        """
        self.source = source
        self._subscribers: Set[asyncio.Queue] = set()

    def subscribe(self) -> asyncio.Queue:
        """Open an event channel receiving ReadingsUpdated / FetchFailed events."""
        queue: asyncio.Queue = asyncio.Queue()
        self._subscribers.add(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue) -> None:
        """Close an event channel."""
        self._subscribers.discard(queue)

    def _publish(self, event: HealthEvent) -> None:
        for queue in self._subscribers:
            queue.put_nowait(event)

    def is_ecg_available(self) -> bool:
        """Whether health data exists and ECG read access is granted."""
        return (self.source.is_health_data_available() and
                self.source.authorization_status() == AuthorizationStatus.SHARING_AUTHORIZED)

    async def request_permission(self) -> List[ClassifiedReading]:
        """
        Request ECG read access, then fetch readings.

        Raises:
            HealthDataUnavailableError: Health data is not available on this device
            PermissionDeniedError: Access was refused or the request failed
            QueryError: Readings could not be fetched
        """
        logger.info("ecg_permission_requested")

        if not self.source.is_health_data_available():
            error = HealthDataUnavailableError("Health data is not available on this device")
            self._publish(FetchFailed(message=str(error)))
            raise error

        try:
            granted = await self.source.request_authorization()
        except Exception as e:
            logger.error("ecg_permission_error", error=str(e))
            error = PermissionDeniedError(f"Failed to get ECG permissions: {e}")
            self._publish(FetchFailed(message=str(error)))
            raise error from e

        if not granted:
            logger.warning("ecg_permission_denied")
            error = PermissionDeniedError("Failed to get ECG permissions: access denied")
            self._publish(FetchFailed(message=str(error)))
            raise error

        logger.info("ecg_permission_granted")
        return await self.fetch_readings()

    async def fetch_readings(self, end: Optional[datetime] = None) -> List[ClassifiedReading]:
        """
        Fetch all readings up to ``end`` (default now), newest first, and classify them.

        Raises:
            QueryError: The query failed or returned no readings
        """
        end = ensure_aware(end) if end else datetime.now(timezone.utc)
        logger.info("ecg_fetch_started", end=end.isoformat())

        try:
            readings = await self.source.query_readings(end, descending=True, limit=None)
        except HealthDataError as e:
            self._publish(FetchFailed(message=str(e)))
            raise
        except Exception as e:
            logger.error("ecg_fetch_error", error=str(e))
            error = QueryError(f"Error fetching ECG data: {e}")
            self._publish(FetchFailed(message=str(error)))
            raise error from e

        if not readings:
            logger.warning("ecg_fetch_empty")
            error = QueryError(NO_READINGS_MESSAGE)
            self._publish(FetchFailed(message=str(error)))
            raise error

        # Newest first regardless of source ordering
        ordered = sorted(readings, key=lambda r: r.start_date, reverse=True)
        classified = [classify_reading(reading) for reading in ordered]

        logger.info("ecg_fetch_finished", readings=len(classified))
        self._publish(ReadingsUpdated(readings=classified))
        return classified
