"""Analysis module for ECG export system."""

from .classifier import classify, classify_reading, classification_label

__all__ = ["classify", "classify_reading", "classification_label"]
