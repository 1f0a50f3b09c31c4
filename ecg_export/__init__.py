"""ECG Export - ECG reading classification, CSV export and upload."""

__version__ = "0.1.0"
__author__ = "Mehrshad"
__email__ = "mehrshad@example.com"

# Core imports for easy access
from .core.config import Config, SamplingConfig, ExportConfig, UploadConfig, PaymentConfig
from .core.models import (
    ECGClassification,
    SymptomsStatus,
    ECGReading,
    ClassifiedReading,
    VoltageMeasurement,
    ExportResult,
    ExportedRecording,
    PaymentResult,
    ReadingsUpdated,
    FetchFailed,
)
from .core.exceptions import (
    ECGExportError,
    ConfigurationError,
    HealthDataError,
    HealthDataUnavailableError,
    PermissionDeniedError,
    QueryError,
    ExportFailed,
    PaymentError,
)
from .core.logging import configure_logging, setup_logging
from .analysis.classifier import classify, classify_reading
from .data_acquisition.health_source import HealthDataSource, InMemoryHealthSource
from .data_acquisition.simulated import SimulatedHealthSource
from .data_acquisition.voltage_sampler import VoltageSampler
from .data_acquisition.health_manager import HealthManager
from .export.csv_exporter import render, preview, parse_export, load_export
from .export.storage import ExportStorage
from .export.pipeline import ECGExporter
from .upload.client import UploadClient
from .payment.manager import PaymentGateway, PaymentManager, SimulatedPaymentGateway

__all__ = [
    # Version info
    "__version__",
    "__author__",
    "__email__",

    # Configuration
    "Config",
    "SamplingConfig",
    "ExportConfig",
    "UploadConfig",
    "PaymentConfig",
    "configure_logging",
    "setup_logging",

    # Data models
    "ECGClassification",
    "SymptomsStatus",
    "ECGReading",
    "ClassifiedReading",
    "VoltageMeasurement",
    "ExportResult",
    "ExportedRecording",
    "PaymentResult",
    "ReadingsUpdated",
    "FetchFailed",

    # Exceptions
    "ECGExportError",
    "ConfigurationError",
    "HealthDataError",
    "HealthDataUnavailableError",
    "PermissionDeniedError",
    "QueryError",
    "ExportFailed",
    "PaymentError",

    # Core components
    "classify",
    "classify_reading",
    "HealthDataSource",
    "InMemoryHealthSource",
    "SimulatedHealthSource",
    "VoltageSampler",
    "HealthManager",
    "render",
    "preview",
    "parse_export",
    "load_export",
    "ExportStorage",
    "ECGExporter",
    "UploadClient",
    "PaymentGateway",
    "PaymentManager",
    "SimulatedPaymentGateway",
]
