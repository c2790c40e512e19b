"""
Pygame-based visualization package for the neuroevolution simulation.

Provides:
    - COLORS (shared color palette)
    - ChartData (dataclass for charts)
    - PygameMonitor (render callback drawing the world and charts)
"""

from .colors import COLORS
from .chart_data import ChartData
from .monitor import PygameMonitor

__all__ = ["COLORS", "ChartData", "PygameMonitor"]
