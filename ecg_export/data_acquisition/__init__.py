"""Data acquisition module for ECG export system."""

from .health_source import HealthDataSource, InMemoryHealthSource
from .simulated import SimulatedHealthSource
from .voltage_sampler import VoltageSampler
from .health_manager import HealthManager

__all__ = [
    "HealthDataSource",
    "InMemoryHealthSource",
    "SimulatedHealthSource",
    "VoltageSampler",
    "HealthManager",
]
