"""
Neuroevolution agent simulation.

Agents steered by small feed-forward networks evolve through a genetic
algorithm with speciation and lineage tracking.

Provides:
    - CFG (configuration dataclass)
    - Simulation (world state, tick loop, generations)
    - TimeController (fixed-timestep scheduler)
"""

from .config import CFG
from .clock import TimeController
from .sim import Simulation

__all__ = ["CFG", "Simulation", "TimeController"]
