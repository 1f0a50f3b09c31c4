"""Tests for the async voltage sampler."""

import asyncio
from datetime import datetime

import pytest

from ecg_export.data_acquisition.simulated import SimulatedHealthSource
from ecg_export.data_acquisition.voltage_sampler import VoltageSampler

from .conftest import ScriptedStreamSource


@pytest.mark.asyncio
async def test_collects_until_stream_done(health_source, sinus_reading):
    sampler = VoltageSampler(health_source, window=1.0)
    assert await sampler.sample(sinus_reading) == [0.001, -0.0005, 0.00025]


@pytest.mark.asyncio
async def test_accepts_a_handle(health_source):
    sampler = VoltageSampler(health_source)
    assert len(await sampler.sample("reading-afib")) == 10


@pytest.mark.asyncio
async def test_unknown_handle_yields_empty(health_source):
    sampler = VoltageSampler(health_source)
    assert await sampler.sample("missing") == []


@pytest.mark.asyncio
async def test_skips_measurements_without_voltage():
    sampler = VoltageSampler(ScriptedStreamSource([0.1, None, 0.2]))
    assert await sampler.sample("any") == [0.1, 0.2]


@pytest.mark.asyncio
async def test_stream_error_keeps_partial_data():
    source = ScriptedStreamSource([0.1, 0.2, RuntimeError("sensor lost")])
    sampler = VoltageSampler(source)

    assert await sampler.sample("any") == [0.1, 0.2]
    assert source.closed


@pytest.mark.asyncio
async def test_immediate_error_yields_empty():
    sampler = VoltageSampler(ScriptedStreamSource([ValueError("no data")]))
    assert await sampler.sample("any") == []


@pytest.mark.asyncio
async def test_window_elapses_on_silent_stream():
    source = ScriptedStreamSource(["hang"])
    sampler = VoltageSampler(source, window=0.05)

    assert await sampler.sample("any") == []
    assert source.closed


@pytest.mark.asyncio
async def test_window_keeps_samples_received_before_timeout():
    source = ScriptedStreamSource([0.3, 0.4, "hang"])
    sampler = VoltageSampler(source)

    assert await sampler.sample("any", window=0.05) == [0.3, 0.4]


@pytest.mark.asyncio
async def test_realtime_stream_is_bounded_by_window():
    source = SimulatedHealthSource(count=1, duration=10.0, realtime=True, chunk_size=50, seed=1)
    reading = (await source.query_readings(datetime.now()))[0]
    sampler = VoltageSampler(source, window=0.25)

    voltages = await sampler.sample(reading)
    assert 0 < len(voltages) < 5000


@pytest.mark.asyncio
async def test_concurrent_sampling(health_source, sinus_reading, afib_reading):
    sampler = VoltageSampler(health_source)
    first, second = await asyncio.gather(sampler.sample(sinus_reading), sampler.sample(afib_reading))
    assert len(first) == 3
    assert len(second) == 10
