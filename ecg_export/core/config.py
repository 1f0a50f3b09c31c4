"""Configuration management for ECG export system."""

from decimal import Decimal
from pathlib import Path
from typing import Optional, Dict, Any
from pydantic import BaseModel, ConfigDict, Field, field_validator


DEFAULT_UPLOAD_ENDPOINT = "https://httpbin.org/post"


class SamplingConfig(BaseModel):
    """Voltage collection configuration."""
    window: float = Field(default=5.0, gt=0, description="Collection window in seconds")


class ExportConfig(BaseModel):
    """CSV export configuration."""
    sample_rate: float = Field(default=500.0, gt=0, description="Assumed sample rate for the time column (Hz)")
    directory_name: str = Field(default="ECGExports", min_length=1, description="Export directory under the temp root")
    temp_root: Optional[Path] = Field(default=None, description="Temp root (defaults to the system temp dir)")
    documents_dir: Optional[Path] = Field(default=None, description="Share destination (defaults to ~/Documents)")
    date_format: str = Field(default="%x %X", description="strftime format for the Date line")
    file_prefix: str = Field(default="ecg", description="Export file name prefix")


class UploadConfig(BaseModel):
    """Upload sink configuration."""
    endpoint: str = Field(default=DEFAULT_UPLOAD_ENDPOINT, description="Multipart upload URL")
    field_name: str = Field(default="file", min_length=1, description="Multipart form field name")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    enabled: bool = Field(default=True, description="Upload after each export")

    @field_validator('endpoint')
    @classmethod
    def validate_endpoint(cls, v):
        """Validate endpoint scheme."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("Upload endpoint must be an http(s) URL")
        return v


class PaymentConfig(BaseModel):
    """Detailed-analysis payment configuration."""
    merchant_identifier: str = Field(default="merchant.com.RewardleApp")
    country_code: str = Field(default="AU", min_length=2, max_length=2)
    currency_code: str = Field(default="AUD", min_length=3, max_length=3)
    label: str = Field(default="ECG Analysis")
    amount: Decimal = Field(default=Decimal("4.99"), gt=0)


class Config(BaseModel):
    """Main configuration for ECG export system."""
    model_config = ConfigDict(validate_assignment=True)

    sampling: SamplingConfig = Field(default_factory=SamplingConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    upload: UploadConfig = Field(default_factory=UploadConfig)
    payment: PaymentConfig = Field(default_factory=PaymentConfig)

    # Logging options
    log_level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    enable_logging: bool = Field(default=True)
    json_logs: bool = Field(default=False)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Create configuration from dictionary."""
        return cls(**data)

    @classmethod
    def create_default(cls, endpoint: Optional[str] = None) -> 'Config':
        """Create default configuration, optionally for a given upload endpoint."""
        upload = UploadConfig(endpoint=endpoint) if endpoint else UploadConfig()
        return cls(
            sampling=SamplingConfig(),
            export=ExportConfig(),
            upload=upload,
            payment=PaymentConfig()
        )
