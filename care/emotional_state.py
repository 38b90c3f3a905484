# care/emotional_state.py
"""
Fluia Care — Emotional State Deriver v1.0.0

Turns the raw check-in into a qualitative emotional state:
- zone (1-5) from a weighted average of the four dimensions
- intensity (low/medium/high) from the dispersion of the dimensions
- coherence (0-1), how aligned the dimensions are
- dominant dimension, the one furthest from the mean
- attention flags (overload, lowEnergy, emotionalDistance, physicalDiscomfort)

Flags are signals for adjusting care, never diagnoses. Metrics are NOT
computed here (see care.metrics).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Literal, Optional

from care.checkin import CheckinDimensions, DayMoment

logger = logging.getLogger("fluia.state")


# =============================================================================
# TYPES
# =============================================================================

Intensity = Literal["low", "medium", "high"]
DominantDimension = Literal["mood", "energy", "body", "bond"]

FLAG_OVERLOAD = "overload"
FLAG_LOW_ENERGY = "lowEnergy"
FLAG_EMOTIONAL_DISTANCE = "emotionalDistance"
FLAG_PHYSICAL_DISCOMFORT = "physicalDiscomfort"

ALL_FLAGS = (
    FLAG_OVERLOAD,
    FLAG_LOW_ENERGY,
    FLAG_EMOTIONAL_DISTANCE,
    FLAG_PHYSICAL_DISCOMFORT,
)


@dataclass(frozen=True)
class EmotionalState:
    """
    Derived, ephemeral emotional state.

    Invariants: zone in 1..5, coherence in [0, 1]. `flags` is empty when no
    attention flag is active and is then left out of `to_dict()`.
    """
    zone: int
    intensity: Intensity
    coherence: float
    dominant_dimension: DominantDimension
    flags: FrozenSet[str] = field(default_factory=frozenset)

    def has_flag(self, name: str) -> bool:
        return name in self.flags

    @property
    def overload(self) -> bool:
        return FLAG_OVERLOAD in self.flags

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "zone": self.zone,
            "intensity": self.intensity,
            "coherence": self.coherence,
            "dominantDimension": self.dominant_dimension,
        }
        if self.flags:
            data["flags"] = {name: True for name in ALL_FLAGS if name in self.flags}
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EmotionalState":
        raw_flags = data.get("flags") or {}
        if isinstance(raw_flags, dict):
            flags = frozenset(k for k, v in raw_flags.items() if v)
        else:
            flags = frozenset(raw_flags)
        return cls(
            zone=int(data.get("zone", 3)),
            intensity=data.get("intensity", "low"),
            coherence=float(data.get("coherence", 1.0)),
            dominant_dimension=data.get("dominantDimension", "mood"),
            flags=flags,
        )


# =============================================================================
# CONSTANTS
# =============================================================================

DIMENSION_WEIGHTS: Dict[str, float] = {
    "mood": 0.35,
    "energy": 0.25,
    "body": 0.20,
    "bond": 0.20,
}

# Upper bound (inclusive) of the weighted score for zones 1-4; above -> 5
ZONE_THRESHOLDS = (
    (1.7, 1),
    (2.4, 2),
    (3.5, 3),
    (4.3, 4),
)

INTENSITY_HIGH_STDDEV = 1.2
INTENSITY_MEDIUM_STDDEV = 0.7

# Coherence bands (used by is_stable_state)
COHERENCE_LOW = 0.5
COHERENCE_MEDIUM = 0.75

# A dimension at or below this value counts as "low"
LOW_DIMENSION_VALUE = 2
OVERLOAD_MIN_LOW_DIMENSIONS = 3

ZONE_LABELS = {
    1: "Very low",
    2: "Low",
    3: "Intermediate",
    4: "Strengthened",
    5: "Very strengthened",
}


# =============================================================================
# SCORING
# =============================================================================

def _round_half_up(value: float, digits: int = 0) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def weighted_score(dimensions: CheckinDimensions) -> float:
    """Weighted average of the four dimensions (1.0 - 5.0)."""
    return (
        dimensions.mood * DIMENSION_WEIGHTS["mood"] +
        dimensions.energy * DIMENSION_WEIGHTS["energy"] +
        dimensions.body * DIMENSION_WEIGHTS["body"] +
        dimensions.bond * DIMENSION_WEIGHTS["bond"]
    )


def calculate_zone(dimensions: CheckinDimensions) -> int:
    """Threshold the weighted score into a zone 1-5."""
    score = weighted_score(dimensions)
    for upper, zone in ZONE_THRESHOLDS:
        if score <= upper:
            return zone
    return 5


def _variance(dimensions: CheckinDimensions) -> float:
    values = dimensions.values()
    avg = sum(values) / len(values)
    return sum((v - avg) ** 2 for v in values) / len(values)


def calculate_intensity(dimensions: CheckinDimensions) -> Intensity:
    """
    Classify the dispersion of the dimensions.

    High spread means a sharper, more acute state.
    """
    std_dev = math.sqrt(_variance(dimensions))
    if std_dev > INTENSITY_HIGH_STDDEV:
        return "high"
    if std_dev > INTENSITY_MEDIUM_STDDEV:
        return "medium"
    return "low"


def calculate_coherence(dimensions: CheckinDimensions) -> float:
    """
    1 - variance/4, floored at 0 and rounded to two decimals.

    Equals 1.0 only when all four dimensions are identical.
    """
    coherence = 1 - min(_variance(dimensions) / 4, 1)
    return _round_half_up(coherence, 2)


def find_dominant_dimension(dimensions: CheckinDimensions) -> DominantDimension:
    """The dimension furthest from the mean; ties keep the earlier one."""
    values = dimensions.values()
    avg = sum(values) / len(values)

    dominant = "mood"
    max_deviation = 0.0
    for name, value in dimensions.items():
        deviation = abs(value - avg)
        if deviation > max_deviation:
            max_deviation = deviation
            dominant = name
    return dominant  # type: ignore[return-value]


def identify_flags(dimensions: CheckinDimensions) -> FrozenSet[str]:
    """Each flag is thresholded independently."""
    flags = set()

    low_count = sum(1 for v in dimensions.values() if v <= LOW_DIMENSION_VALUE)
    if low_count >= OVERLOAD_MIN_LOW_DIMENSIONS:
        flags.add(FLAG_OVERLOAD)
    if dimensions.energy <= LOW_DIMENSION_VALUE:
        flags.add(FLAG_LOW_ENERGY)
    if dimensions.bond <= LOW_DIMENSION_VALUE:
        flags.add(FLAG_EMOTIONAL_DISTANCE)
    if dimensions.body <= LOW_DIMENSION_VALUE:
        flags.add(FLAG_PHYSICAL_DISCOMFORT)

    return frozenset(flags)


# =============================================================================
# MAIN
# =============================================================================

def derive_emotional_state(
    dimensions: CheckinDimensions,
    gestational_week: Optional[int] = None,
    moment: Optional[DayMoment] = None,
) -> EmotionalState:
    """
    Derive the emotional state for one check-in.

    `gestational_week` and `moment` are accepted for context but do not
    enter the formula. Always returns a complete state.
    """
    state = EmotionalState(
        zone=calculate_zone(dimensions),
        intensity=calculate_intensity(dimensions),
        coherence=calculate_coherence(dimensions),
        dominant_dimension=find_dominant_dimension(dimensions),
        flags=identify_flags(dimensions),
    )
    logger.debug(
        "derived zone=%d intensity=%s coherence=%.2f flags=%s",
        state.zone, state.intensity, state.coherence, sorted(state.flags),
    )
    return state


# =============================================================================
# HELPERS
# =============================================================================

def is_vulnerable_state(state: EmotionalState) -> bool:
    """Needs extra care: low zone or overload."""
    return state.zone <= 2 or state.overload


def is_stable_state(state: EmotionalState) -> bool:
    """Suitable for reflection and growth."""
    return state.zone >= 4 and state.coherence >= COHERENCE_MEDIUM


def zone_label(zone: int) -> str:
    return ZONE_LABELS.get(zone, "Unknown")


# =============================================================================
# EXPORTS
# =============================================================================

__all__ = [
    "Intensity",
    "DominantDimension",
    "FLAG_OVERLOAD",
    "FLAG_LOW_ENERGY",
    "FLAG_EMOTIONAL_DISTANCE",
    "FLAG_PHYSICAL_DISCOMFORT",
    "ALL_FLAGS",
    "EmotionalState",
    "DIMENSION_WEIGHTS",
    "ZONE_THRESHOLDS",
    "weighted_score",
    "calculate_zone",
    "calculate_intensity",
    "calculate_coherence",
    "find_dominant_dimension",
    "identify_flags",
    "derive_emotional_state",
    "is_vulnerable_state",
    "is_stable_state",
    "zone_label",
]
