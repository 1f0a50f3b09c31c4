"""ECG Export examples module."""

from .export_demo import ExportDemo, main as demo_main, main_sync as demo_main_sync
from .inspect_export import ExportInspector, main as inspect_main

__all__ = [
    "ExportDemo",
    "demo_main",
    "demo_main_sync",
    "ExportInspector",
    "inspect_main",
]
