"""Tests for the best-effort upload client."""

import json

import httpx
import pytest

from ecg_export.core.config import UploadConfig
from ecg_export.upload.client import UploadClient

from .conftest import UPLOAD_URL, RecordingTransport


@pytest.mark.asyncio
async def test_multipart_wire_format(recording_transport):
    client = UploadClient(UploadConfig(endpoint=UPLOAD_URL), transport=recording_transport)

    assert await client.upload(b"ECG Recording\n", "ecg_test.csv") is True

    request = recording_transport.requests[0]
    assert request.method == "POST"
    assert str(request.url) == UPLOAD_URL
    content_type = request.headers["content-type"]
    assert content_type.startswith("multipart/form-data; boundary=")

    body = request.content
    assert b'name="file"' in body
    assert b'filename="ecg_test.csv"' in body
    assert b"Content-Type: text/csv" in body
    assert b"ECG Recording\n" in body


@pytest.mark.asyncio
async def test_boundary_changes_per_request(recording_transport):
    client = UploadClient(UploadConfig(endpoint=UPLOAD_URL), transport=recording_transport)
    await client.upload(b"a", "a.csv")
    await client.upload(b"b", "b.csv")

    first, second = (r.headers["content-type"] for r in recording_transport.requests)
    assert first != second


@pytest.mark.asyncio
async def test_custom_field_and_endpoint(recording_transport):
    config = UploadConfig(endpoint=UPLOAD_URL, field_name="ecg")
    client = UploadClient(config, transport=recording_transport)

    await client.upload(b"x", "x.csv", endpoint="https://other.example.test/in")

    request = recording_transport.requests[0]
    assert str(request.url) == "https://other.example.test/in"
    assert b'name="ecg"' in request.content


@pytest.mark.asyncio
async def test_rejected_upload_returns_false():
    client = UploadClient(UploadConfig(endpoint=UPLOAD_URL), transport=RecordingTransport(500))
    assert await client.upload(b"x", "x.csv") is False


@pytest.mark.asyncio
async def test_network_error_is_not_raised():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = UploadClient(UploadConfig(endpoint=UPLOAD_URL), transport=httpx.MockTransport(refuse))
    assert await client.upload(b"x", "x.csv") is False


@pytest.mark.asyncio
async def test_schedule_upload_runs_in_background(recording_transport):
    client = UploadClient(UploadConfig(endpoint=UPLOAD_URL), transport=recording_transport)

    task = client.schedule_upload(b"x", "x.csv")
    assert client.pending_count == 1

    await client.wait_pending()
    assert task.result() is True
    assert client.pending_count == 0
    assert len(recording_transport.requests) == 1


@pytest.mark.asyncio
async def test_wait_pending_without_uploads():
    await UploadClient().wait_pending()


@pytest.mark.asyncio
async def test_upload_waveform_puts_json(recording_transport):
    client = UploadClient(transport=recording_transport)

    assert await client.upload_waveform([0.001, -0.002], "https://sink.example.test/wave") is True

    request = recording_transport.requests[0]
    assert request.method == "PUT"
    assert request.headers["content-type"] == "application/json"
    assert json.loads(request.content) == [0.001, -0.002]


@pytest.mark.asyncio
async def test_upload_waveform_requires_200():
    client = UploadClient(transport=RecordingTransport(201))
    assert await client.upload_waveform([0.1], "https://sink.example.test/wave") is False


@pytest.mark.asyncio
async def test_malformed_endpoint_is_logged_not_raised(recording_transport):
    client = UploadClient(transport=recording_transport)

    assert await client.upload(b"x", "x.csv", endpoint="https://exa mple.com/\x00") is False
    assert recording_transport.requests == []


@pytest.mark.asyncio
async def test_scheduled_upload_to_malformed_endpoint_completes(recording_transport):
    client = UploadClient(transport=recording_transport)

    task = client.schedule_upload(b"x", "x.csv", endpoint="https://exa mple.com/\x00")
    await client.wait_pending()

    assert task.result() is False


@pytest.mark.asyncio
async def test_waveform_to_malformed_url_returns_false():
    client = UploadClient(transport=RecordingTransport())
    assert await client.upload_waveform([0.1], "https://exa mple.com/\x00") is False
