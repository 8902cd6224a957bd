"""
Driftboard UI Module

User interface components:
- MainWindow: Primary application window with the header controls
- Canvas: Stage widget running the tick loop and routing input
"""
