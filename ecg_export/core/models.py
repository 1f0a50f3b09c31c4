"""Data models for ECG export system."""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import List, Optional, Dict, Any
from pydantic import BaseModel, ConfigDict, Field, field_validator
import pandas as pd


def ensure_aware(value: datetime) -> datetime:
    """Attach the local timezone to a naive datetime; aware values pass through."""
    if value.tzinfo is None or value.utcoffset() is None:
        return value.astimezone()
    return value


class ECGClassification(str, Enum):
    """Classification assigned to a reading by the health store."""
    SINUS_RHYTHM = "sinusRhythm"
    ATRIAL_FIBRILLATION = "atrialFibrillation"
    INCONCLUSIVE_LOW_HEART_RATE = "inconclusiveLowHeartRate"
    INCONCLUSIVE_HIGH_HEART_RATE = "inconclusiveHighHeartRate"
    INCONCLUSIVE_POOR_READING = "inconclusivePoorReading"
    INCONCLUSIVE_OTHER = "inconclusiveOther"
    UNRECOGNIZED = "unrecognized"


class SymptomsStatus(str, Enum):
    """Whether the user reported symptoms while recording."""
    NOT_SET = "notSet"
    NONE = "none"
    PRESENT = "present"


class AuthorizationStatus(str, Enum):
    """Read authorization state for ECG data."""
    NOT_DETERMINED = "notDetermined"
    SHARING_DENIED = "sharingDenied"
    SHARING_AUTHORIZED = "sharingAuthorized"


class ECGReading(BaseModel):
    """A single ECG recording as supplied by the health store."""
    model_config = ConfigDict(frozen=True)

    classification: ECGClassification = Field(..., description="Classification category")
    average_heart_rate: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False,
                                                description="Average heart rate (BPM)")
    symptoms_status: SymptomsStatus = Field(default=SymptomsStatus.NOT_SET, description="Symptoms reported flag")
    start_date: datetime = Field(..., description="Recording start")
    handle: str = Field(..., min_length=1, description="Opaque voltage stream handle")

    @field_validator("start_date")
    @classmethod
    def start_date_is_aware(cls, v: datetime) -> datetime:
        return ensure_aware(v)

    @property
    def symptoms_reported(self) -> bool:
        """True when the user reported symptoms."""
        return self.symptoms_status == SymptomsStatus.PRESENT


class ClassifiedReading(BaseModel):
    """A reading with its derived and reported symptom labels."""
    model_config = ConfigDict(frozen=True)

    reading: ECGReading
    symptoms: List[str] = Field(default_factory=list, description="Derived symptom labels")
    reported_symptoms: List[str] = Field(default_factory=list, description="Reported symptom labels")


class VoltageMeasurement(BaseModel):
    """One event from a reading's voltage stream."""
    time_since_start: float = Field(..., ge=0, description="Seconds since recording start")
    lead_i_voltage: Optional[float] = Field(default=None, description="Lead I equivalent voltage (V)")


class ExportResult(BaseModel):
    """Outcome of a single export."""
    path: Path
    file_name: str
    sample_count: int = Field(..., ge=0)
    upload_scheduled: bool = Field(default=False)


class ExportedRecording(BaseModel):
    """An export file read back into memory."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    metadata: Dict[str, str] = Field(default_factory=dict, description="Header lines keyed by label")
    data: pd.DataFrame = Field(..., description="Time(s) and Voltage(mV) columns")

    @property
    def sample_count(self) -> int:
        """Get number of voltage samples."""
        return len(self.data)

    @property
    def heart_rate(self) -> Optional[int]:
        """Get rounded heart rate, if recorded."""
        value = self.metadata.get("Heart Rate")
        if not value:
            return None
        return int(value.split()[0])

    @property
    def classification(self) -> List[str]:
        """Get classification labels."""
        value = self.metadata.get("Classification", "")
        return [label for label in value.split(", ") if label]

    @property
    def reported_symptoms(self) -> List[str]:
        """Get reported symptom labels."""
        value = self.metadata.get("Reported Symptoms", "")
        return [label for label in value.split(", ") if label]

    def voltages(self) -> List[float]:
        """Get voltages back in volts."""
        return [mv / 1000.0 for mv in self.data["Voltage(mV)"].tolist()]

    def summary(self) -> Dict[str, Any]:
        """Basic statistics over the voltage column (mV)."""
        column = self.data["Voltage(mV)"]
        if column.empty:
            return {"samples": 0, "duration": 0.0}
        return {
            "samples": int(column.size),
            "duration": float(self.data["Time(s)"].iloc[-1]),
            "mean": float(column.mean()),
            "std": float(column.std()) if column.size > 1 else 0.0,
            "min": float(column.min()),
            "max": float(column.max()),
        }


class PaymentSummaryItem(BaseModel):
    """A line item shown on the payment sheet."""
    label: str
    amount: Decimal = Field(..., gt=0)


class PaymentRequest(BaseModel):
    """Payment request for a detailed analysis."""
    merchant_identifier: str
    country_code: str
    currency_code: str
    summary_items: List[PaymentSummaryItem] = Field(..., min_length=1)

    @field_validator('summary_items')
    @classmethod
    def validate_items(cls, v):
        """Validate summary items."""
        if not v:
            raise ValueError("Payment request must contain at least one item")
        return v

    @property
    def total(self) -> Decimal:
        """Get total amount."""
        return sum((item.amount for item in self.summary_items), Decimal("0"))


class PaymentResult(str, Enum):
    """Terminal state of a payment attempt."""
    SUCCESS = "success"
    FAILURE = "failure"


class ReadingsUpdated(BaseModel):
    """Event published after a successful fetch."""
    readings: List[ClassifiedReading]


class FetchFailed(BaseModel):
    """Event published when readings could not be fetched."""
    message: str
