"""
Driftboard - drag floating shapes and text onto an artboard and export the result.
"""

__version__ = "0.1.0"
