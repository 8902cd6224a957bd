"""
Driftboard I/O Module

Export of the placed artwork to PNG and PDF files.
"""

from .exporter import (
    export_png, export_hires_png, export_pdf, timestamp_string, qimage_to_array
)

__all__ = [
    'export_png',
    'export_hires_png',
    'export_pdf',
    'timestamp_string',
    'qimage_to_array',
]
