"""Upload module for ECG export system."""

from .client import UploadClient

__all__ = ["UploadClient"]
