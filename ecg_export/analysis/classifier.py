"""Symptom classification for ECG readings."""

from typing import List, Optional, Tuple, Union

import structlog

from ..core.models import ClassifiedReading, ECGClassification, ECGReading

logger = structlog.get_logger(__name__)


CLASSIFICATION_LABELS = {
    ECGClassification.SINUS_RHYTHM: "Normal Sinus Rhythm",
    ECGClassification.ATRIAL_FIBRILLATION: "Atrial Fibrillation detected",
    ECGClassification.INCONCLUSIVE_LOW_HEART_RATE: "Low Heart Rate (inconclusive)",
    ECGClassification.INCONCLUSIVE_HIGH_HEART_RATE: "High Heart Rate (inconclusive)",
    ECGClassification.INCONCLUSIVE_POOR_READING: "Poor Reading Quality",
    ECGClassification.INCONCLUSIVE_OTHER: "Inconclusive Reading",
}
UNKNOWN_LABEL = "Unknown Classification"

SYMPTOMS_REPORTED_LABEL = "Symptoms reported"
TACHYCARDIA_LABEL = "Tachycardia (High Heart Rate)"
BRADYCARDIA_LABEL = "Bradycardia (Low Heart Rate)"

# BPM, exclusive bounds
TACHYCARDIA_THRESHOLD = 100.0
BRADYCARDIA_THRESHOLD = 60.0


def classification_label(classification: Union[ECGClassification, str, None]) -> str:
    """Map a classification (or raw value) to its base label."""
    try:
        category = ECGClassification(classification)
    except ValueError:
        return UNKNOWN_LABEL
    return CLASSIFICATION_LABELS.get(category, UNKNOWN_LABEL)


def classify(classification: Union[ECGClassification, str, None],
             average_heart_rate: Optional[float],
             symptoms_reported: bool) -> Tuple[List[str], List[str]]:
    """
    Derive symptom labels for one reading.

    Args:
        classification: Classification category from the health store
        average_heart_rate: Average heart rate in BPM, if known
        symptoms_reported: Whether the user reported symptoms

    Returns:
        Tuple of (symptoms, reported_symptoms)
    """
    symptoms = [classification_label(classification)]
    reported: List[str] = []

    if symptoms_reported:
        reported.append(SYMPTOMS_REPORTED_LABEL)

    if average_heart_rate is not None:
        if average_heart_rate > TACHYCARDIA_THRESHOLD:
            symptoms.append(TACHYCARDIA_LABEL)
        elif average_heart_rate < BRADYCARDIA_THRESHOLD:
            symptoms.append(BRADYCARDIA_LABEL)

    logger.debug(
        "ecg_classified",
        classification=getattr(classification, "value", classification),
        average_heart_rate=average_heart_rate,
        symptoms=symptoms,
        reported=reported,
    )
    return symptoms, reported


def classify_reading(reading: ECGReading) -> ClassifiedReading:
    """Classify a reading into a ClassifiedReading."""
    symptoms, reported = classify(
        reading.classification,
        reading.average_heart_rate,
        reading.symptoms_reported,
    )
    return ClassifiedReading(reading=reading, symptoms=symptoms, reported_symptoms=reported)
