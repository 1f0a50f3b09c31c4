"""Shared pytest fixtures for ECG export tests."""

import asyncio
from datetime import datetime

import httpx
import pytest

from ecg_export.analysis.classifier import classify_reading
from ecg_export.core.config import Config, ExportConfig, UploadConfig
from ecg_export.core.models import ECGClassification, ECGReading, SymptomsStatus, VoltageMeasurement
from ecg_export.data_acquisition.health_source import InMemoryHealthSource

UPLOAD_URL = "https://uploads.example.test/ecg"


@pytest.fixture
def sinus_reading():
    return ECGReading(
        classification=ECGClassification.SINUS_RHYTHM,
        average_heart_rate=72.0,
        symptoms_status=SymptomsStatus.NONE,
        start_date=datetime(2025, 4, 11, 9, 30, 15),
        handle="reading-sinus",
    )


@pytest.fixture
def afib_reading():
    return ECGReading(
        classification=ECGClassification.ATRIAL_FIBRILLATION,
        average_heart_rate=145.0,
        symptoms_status=SymptomsStatus.PRESENT,
        start_date=datetime(2025, 4, 12, 18, 5, 0),
        handle="reading-afib",
    )


@pytest.fixture
def sinus_classified(sinus_reading):
    return classify_reading(sinus_reading)


@pytest.fixture
def afib_classified(afib_reading):
    return classify_reading(afib_reading)


@pytest.fixture
def health_source(sinus_reading, afib_reading):
    source = InMemoryHealthSource()
    source.add_reading(sinus_reading, [0.001, -0.0005, 0.00025])
    source.add_reading(afib_reading, [0.0002] * 10)
    return source


@pytest.fixture
def config(tmp_path):
    return Config(
        export=ExportConfig(
            temp_root=tmp_path / "tmp",
            documents_dir=tmp_path / "Documents",
            date_format="%Y-%m-%d %H:%M:%S",
        ),
        upload=UploadConfig(endpoint=UPLOAD_URL),
    )


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it handled."""

    def __init__(self, status_code: int = 200):
        self.requests = []
        self.status_code = status_code
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        return httpx.Response(self.status_code, json={"ok": self.status_code < 400})


@pytest.fixture
def recording_transport():
    return RecordingTransport()


class ScriptedStreamSource(InMemoryHealthSource):
    """
    Source whose voltage stream follows a script.

    Floats (or None) are emitted as measurements, exceptions are raised and
    "hang" blocks forever.
    """

    def __init__(self, script):
        super().__init__()
        self.script = script
        self.closed = False

    async def voltage_measurements(self, handle):
        try:
            for step in self.script:
                if isinstance(step, Exception):
                    raise step
                if step == "hang":
                    await asyncio.Event().wait()
                yield VoltageMeasurement(time_since_start=0.0, lead_i_voltage=step)
        finally:
            self.closed = True
