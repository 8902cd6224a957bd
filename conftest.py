"""
Test configuration.

Qt tests render off screen; this must be set before any Qt module loads.
"""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
