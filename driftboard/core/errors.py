"""
Driftboard error types.
"""


class DriftboardError(Exception):
    """Base error for the application."""


class ExportError(DriftboardError):
    """An export could not be rendered, encoded or written."""


class SettingsError(DriftboardError, ValueError):
    """Invalid composition settings."""
