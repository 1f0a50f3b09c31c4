"""Custom exceptions for ECG export system."""


class ECGExportError(Exception):
    """Base exception for ECG export system."""
    pass


class ConfigurationError(ECGExportError):
    """Raised when there's a configuration error."""
    pass


class HealthDataError(ECGExportError):
    """Raised when ECG readings cannot be obtained from the health store."""
    pass


class HealthDataUnavailableError(HealthDataError):
    """Raised when health data is not available on this device."""
    pass


class PermissionDeniedError(HealthDataError):
    """Raised when read access to ECG data is refused."""
    pass


class QueryError(HealthDataError):
    """Raised when the ECG readings query fails or finds nothing."""
    pass


class ExportFailed(ECGExportError):
    """Raised when the CSV export cannot be written."""
    pass


class PaymentError(ECGExportError):
    """Raised when the payment gateway misbehaves."""
    pass
