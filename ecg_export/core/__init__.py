"""Core module for ECG export system."""

from .config import Config
from .models import ECGReading, ClassifiedReading, VoltageMeasurement, ExportResult
from .exceptions import ECGExportError, ConfigurationError, ExportFailed

__all__ = [
    "Config",
    "ECGReading",
    "ClassifiedReading",
    "VoltageMeasurement",
    "ExportResult",
    "ECGExportError",
    "ConfigurationError",
    "ExportFailed",
]
