from typing import List, Sequence, Tuple
from dataclasses import dataclass


@dataclass
class ChartData:
    """One series shown in the side panel, with its cached value range"""
    values: List[float]
    max_value: float
    min_value: float
    color: Tuple[int, int, int]
    title: str

    def set_values(self, values: Sequence[float], window: int = 200):
        # keep only the most recent `window` points on screen
        self.values = [float(v) for v in values][-window:]
        if self.values:
            self.max_value = max(self.values)
            self.min_value = min(self.values)
