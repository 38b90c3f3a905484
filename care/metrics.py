# care/metrics.py
"""
Fluia Care — Metrics Calculator v1.0.0

Four pedagogical wellbeing scores, each 0-100:
- RE  Emotional Regulation
- BS  Safety Base
- RS  Resilience
- CA  Affective Connection

Each metric is a weighted blend of scaled dimensions (RE also blends
coherence), adjusted by the state flags and clamped. Raw numbers are never
shown to the user; `metric_to_zone` turns them into a 1-5 reading.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional, Sequence

from care.checkin import CheckinDimensions
from care.emotional_state import (
    EmotionalState,
    FLAG_EMOTIONAL_DISTANCE,
    FLAG_LOW_ENERGY,
    FLAG_OVERLOAD,
    FLAG_PHYSICAL_DISCOMFORT,
)

logger = logging.getLogger("fluia.metrics")


# =============================================================================
# TYPES
# =============================================================================

METRIC_KEYS = ("RE", "BS", "RS", "CA")

TrendDirection = Literal["improving", "stable", "declining"]


@dataclass(frozen=True)
class Metrics:
    RE: int
    BS: int
    RS: int
    CA: int

    def get(self, key: str) -> int:
        return getattr(self, key)

    def items(self):
        return [(key, getattr(self, key)) for key in METRIC_KEYS]

    def to_dict(self) -> Dict[str, int]:
        return {key: getattr(self, key) for key in METRIC_KEYS}


@dataclass(frozen=True)
class MetricTrend:
    metric: str
    direction: TrendDirection
    strength: float  # 0-1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metric": self.metric,
            "direction": self.direction,
            "strength": self.strength,
        }


# =============================================================================
# CONSTANTS
# =============================================================================

# Ordinal 1-5 -> percentage
SCALE_TO_PERCENT = {
    1: 10,
    2: 30,
    3: 50,
    4: 75,
    5: 95,
}

METRIC_FORMULAS: Dict[str, Dict[str, float]] = {
    "RE": {"mood": 0.40, "energy": 0.30, "coherence": 0.30},
    "BS": {"body": 0.40, "mood": 0.30, "bond": 0.30},
    "RS": {"energy": 0.40, "mood": 0.30, "body": 0.30},
    "CA": {"bond": 0.70, "mood": 0.30},
}

# flag -> (metrics affected, penalty)
FLAG_PENALTIES = (
    (FLAG_OVERLOAD, METRIC_KEYS, 15),
    (FLAG_LOW_ENERGY, ("RS",), 10),
    (FLAG_EMOTIONAL_DISTANCE, ("CA",), 15),
    (FLAG_PHYSICAL_DISCOMFORT, ("BS",), 10),
)

# Low onboarding mood earns a flat bonus (progress relative to start)
BASELINE_LOW_MOOD = 2
BASELINE_BONUS = 5

TREND_THRESHOLD = 10
TREND_FULL_STRENGTH = 30

METRIC_LABELS = {
    "RE": "Emotional Regulation",
    "BS": "Safety Base",
    "RS": "Resilience",
    "CA": "Affective Connection",
}


# =============================================================================
# CALCULATION
# =============================================================================

def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _clamp(value: float, lo: int = 0, hi: int = 100) -> int:
    return int(max(lo, min(hi, value)))


def scale_to_percent(value: int) -> int:
    return SCALE_TO_PERCENT.get(value, 50)


def _blend(metric: str, dimensions: CheckinDimensions, state: EmotionalState) -> int:
    inputs = {
        "mood": scale_to_percent(dimensions.mood),
        "energy": scale_to_percent(dimensions.energy),
        "body": scale_to_percent(dimensions.body),
        "bond": scale_to_percent(dimensions.bond),
        "coherence": state.coherence * 100,
    }
    total = sum(inputs[name] * weight for name, weight in METRIC_FORMULAS[metric].items())
    return _round_half_up(total)


def apply_flag_adjustments(values: Dict[str, int], state: EmotionalState) -> Dict[str, int]:
    adjusted = dict(values)
    for flag, targets, penalty in FLAG_PENALTIES:
        if state.has_flag(flag):
            for key in targets:
                adjusted[key] -= penalty
    return {key: _clamp(value) for key, value in adjusted.items()}


def adjust_for_baseline(values: Dict[str, int], baseline: Optional[Dict[str, Any]]) -> Dict[str, int]:
    if not baseline or baseline.get("mood") is None:
        return dict(values)
    if baseline["mood"] > BASELINE_LOW_MOOD:
        return dict(values)
    return {key: min(100, value + BASELINE_BONUS) for key, value in values.items()}


def calculate_metrics(
    state: EmotionalState,
    dimensions: CheckinDimensions,
    baseline: Optional[Dict[str, Any]] = None,
) -> Metrics:
    """
    Compute RE/BS/RS/CA for one check-in.

    Args:
        state: derived emotional state (coherence and flags are used)
        dimensions: the raw check-in
        baseline: onboarding baseline, e.g. {"mood": 2}

    Returns:
        Metrics with every value in [0, 100]
    """
    values = {key: _blend(key, dimensions, state) for key in METRIC_KEYS}
    values = apply_flag_adjustments(values, state)
    values = adjust_for_baseline(values, baseline)

    metrics = Metrics(**values)
    logger.debug("metrics %s", metrics.to_dict())
    return metrics


# =============================================================================
# HELPERS
# =============================================================================

def metric_to_zone(value: int) -> int:
    """0-100 -> 1-5 reading for display."""
    if value <= 20:
        return 1
    if value <= 40:
        return 2
    if value <= 60:
        return 3
    if value <= 80:
        return 4
    return 5


def lowest_metric(metrics: Metrics) -> str:
    """Metric needing the most attention; ties keep RE, BS, RS, CA order."""
    lowest = "RE"
    for key, value in metrics.items():
        if value < metrics.get(lowest):
            lowest = key
    return lowest


def _trend(current: float, history: Sequence[float]):
    if not history:
        return "stable", 0.0
    avg = sum(history) / len(history)
    diff = current - avg
    strength = round(min(1.0, abs(diff) / TREND_FULL_STRENGTH), 2)
    if diff > TREND_THRESHOLD:
        return "improving", strength
    if diff < -TREND_THRESHOLD:
        return "declining", strength
    return "stable", strength


def calculate_trend(current: float, history: Optional[Sequence[float]] = None) -> TrendDirection:
    """Direction of `current` against the mean of recent values."""
    direction, _ = _trend(current, history or [])
    return direction


def calculate_metric_trends(metrics: Metrics, recent: Sequence[Metrics]) -> List[MetricTrend]:
    trends = []
    for key, value in metrics.items():
        direction, strength = _trend(value, [m.get(key) for m in recent])
        trends.append(MetricTrend(metric=key, direction=direction, strength=strength))
    return trends


def metric_label(metric: str) -> str:
    return METRIC_LABELS.get(metric, metric)


# =============================================================================
# EXPORTS
# =============================================================================

__all__ = [
    "METRIC_KEYS",
    "Metrics",
    "MetricTrend",
    "SCALE_TO_PERCENT",
    "METRIC_FORMULAS",
    "scale_to_percent",
    "apply_flag_adjustments",
    "adjust_for_baseline",
    "calculate_metrics",
    "metric_to_zone",
    "lowest_metric",
    "calculate_trend",
    "calculate_metric_trends",
    "metric_label",
]
