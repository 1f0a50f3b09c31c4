"""Best-effort HTTP upload of ECG exports."""

import asyncio
from typing import Optional, Sequence, Set

import httpx
import structlog

from ..core.config import UploadConfig

logger = structlog.get_logger(__name__)

CSV_MIME_TYPE = "text/csv"


class UploadClient:
    """
    Fire-and-forget uploader for exported CSV files.

    Results are only logged: uploads are never retried and failures never
    reach the caller.
    """

    def __init__(self, config: Optional[UploadConfig] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Initialize upload client.

        Args:
            config: Upload configuration
            transport: Optional httpx transport (e.g. a MockTransport in tests)
        """
        self.config = config or UploadConfig()
        self._transport = transport
        self._pending: Set[asyncio.Task] = set()

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.config.timeout, transport=self._transport)

    async def upload(self, file_bytes: bytes, file_name: str,
                     endpoint: Optional[str] = None) -> bool:
        """
        POST one file as multipart/form-data.

        httpx generates a fresh random boundary for every request.

        Returns:
            True on a 2xx response, False otherwise
        """
        url = endpoint or self.config.endpoint
        files = {self.config.field_name: (file_name, file_bytes, CSV_MIME_TYPE)}

        try:
            async with self._client() as client:
                response = await client.post(url, files=files)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("upload_failed", file=file_name, url=url, error=str(e),
                           error_type=type(e).__name__)
            return False

        if response.is_success:
            logger.info("upload_succeeded", file=file_name, url=url,
                        status=response.status_code, size=len(file_bytes))
            return True

        logger.warning("upload_rejected", file=file_name, url=url, status=response.status_code)
        return False

    def schedule_upload(self, file_bytes: bytes, file_name: str,
                        endpoint: Optional[str] = None) -> asyncio.Task:
        """Start an upload in the background without waiting for it."""
        task = asyncio.create_task(self.upload(file_bytes, file_name, endpoint))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        logger.debug("upload_scheduled", file=file_name, pending=len(self._pending))
        return task

    @property
    def pending_count(self) -> int:
        """Get number of uploads still in flight."""
        return len(self._pending)

    async def wait_pending(self) -> None:
        """Wait for all scheduled uploads to finish."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    async def upload_waveform(self, waveform: Sequence[float], url: str) -> bool:
        """
        PUT a raw waveform as a JSON array.

        Returns:
            True only on a 200 response
        """
        try:
            async with self._client() as client:
                response = await client.put(url, json=list(waveform))
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("waveform_upload_failed", url=url, error=str(e))
            return False

        if response.status_code == 200:
            logger.info("waveform_uploaded", url=url, samples=len(waveform))
            return True

        logger.warning("waveform_upload_rejected", url=url, status=response.status_code)
        return False
