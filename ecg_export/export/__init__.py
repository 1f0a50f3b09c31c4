"""Export module for ECG export system."""

from .csv_exporter import render, preview, parse_export, load_export
from .storage import ExportStorage
from .pipeline import ECGExporter

__all__ = ["render", "preview", "parse_export", "load_export", "ExportStorage", "ECGExporter"]
