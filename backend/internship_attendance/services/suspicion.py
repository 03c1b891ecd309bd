"""Suspicion flags attached when a gate is passed only via photo evidence."""
import math
from dataclasses import dataclass
from typing import Optional

def round_meters(value: float) -> int:
    """Round half up to the whole meter."""
    return int(math.floor(value + 0.5))

@dataclass(frozen=True)
class SuspicionFlag:
    is_suspicious: bool = False
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.is_suspicious

CLEAR = SuspicionFlag()

class SuspicionClassifier:
    """Builds the reason text stored with suspicious attendance."""

    @staticmethod
    def low_accuracy(accuracy: float) -> SuspicionFlag:
        return SuspicionFlag(True, f"Low Accuracy ({round_meters(accuracy)}m). Photo Verified.")

    @staticmethod
    def location_mismatch(distance: float) -> SuspicionFlag:
        return SuspicionFlag(True, f"Location Mismatch ({round_meters(distance)}m away). Photo Verified.")

    @staticmethod
    def extreme_distance(distance: float) -> SuspicionFlag:
        return SuspicionFlag(True, f"Extreme Distance: {round_meters(distance)}m")

