#!/usr/bin/env python3
"""
Fluia Care Metrics Calculator Tests — v1.0.0

Tests for:
- Metric blends and flag penalties
- Low-baseline bonus
- Display helpers and trends
"""

import unittest
from pathlib import Path
import sys

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from care.checkin import CheckinDimensions
from care.emotional_state import EmotionalState, derive_emotional_state
from care.metrics import (
    Metrics,
    adjust_for_baseline,
    apply_flag_adjustments,
    calculate_metric_trends,
    calculate_metrics,
    calculate_trend,
    lowest_metric,
    metric_label,
    metric_to_zone,
)


def metrics_for(mood, energy, body, bond, baseline=None):
    dims = CheckinDimensions(mood=mood, energy=energy, body=body, bond=bond)
    return calculate_metrics(derive_emotional_state(dims), dims, baseline)


class TestCalculateMetrics(unittest.TestCase):

    def test_neutral_day(self):
        metrics = metrics_for(3, 3, 3, 3)
        self.assertEqual(metrics.to_dict(), {"RE": 65, "BS": 50, "RS": 50, "CA": 50})

    def test_hard_day_is_penalized_and_clamped(self):
        metrics = metrics_for(1, 1, 2, 2)
        self.assertEqual(metrics.to_dict(), {"RE": 20, "BS": 0, "RS": 0, "CA": 0})

    def test_low_energy_hits_resilience_only(self):
        metrics = metrics_for(3, 2, 3, 3)
        self.assertEqual(metrics.RS, 32)
        self.assertEqual(metrics.BS, 50)
        self.assertEqual(metrics.CA, 50)

    def test_values_stay_in_range(self):
        for value in range(1, 6):
            for _, score in metrics_for(value, value, value, value).items():
                self.assertGreaterEqual(score, 0)
                self.assertLessEqual(score, 100)

    def test_low_baseline_adds_bonus(self):
        metrics = metrics_for(1, 1, 2, 2, baseline={"mood": 2})
        self.assertEqual(metrics.to_dict(), {"RE": 25, "BS": 5, "RS": 5, "CA": 5})

    def test_higher_baseline_changes_nothing(self):
        self.assertEqual(metrics_for(3, 3, 3, 3, baseline={"mood": 3}), metrics_for(3, 3, 3, 3))
        self.assertEqual(metrics_for(3, 3, 3, 3, baseline={}), metrics_for(3, 3, 3, 3))


class TestAdjustments(unittest.TestCase):

    def test_overload_penalizes_all(self):
        state = EmotionalState(3, "low", 1.0, "mood", frozenset({"overload"}))
        adjusted = apply_flag_adjustments({"RE": 50, "BS": 50, "RS": 10, "CA": 50}, state)
        self.assertEqual(adjusted, {"RE": 35, "BS": 35, "RS": 0, "CA": 35})

    def test_baseline_bonus_capped(self):
        self.assertEqual(adjust_for_baseline({"RE": 98, "BS": 50}, {"mood": 1}), {"RE": 100, "BS": 55})


class TestHelpers(unittest.TestCase):

    def test_metric_to_zone(self):
        self.assertEqual(metric_to_zone(0), 1)
        self.assertEqual(metric_to_zone(20), 1)
        self.assertEqual(metric_to_zone(41), 3)
        self.assertEqual(metric_to_zone(100), 5)

    def test_lowest_metric_ties_keep_order(self):
        self.assertEqual(lowest_metric(Metrics(RE=40, BS=30, RS=30, CA=60)), "BS")
        self.assertEqual(lowest_metric(Metrics(RE=50, BS=50, RS=50, CA=50)), "RE")

    def test_trend_direction(self):
        self.assertEqual(calculate_trend(70, [50, 55]), "improving")
        self.assertEqual(calculate_trend(40, [55, 60]), "declining")
        self.assertEqual(calculate_trend(52, [50, 55]), "stable")
        self.assertEqual(calculate_trend(90), "stable")

    def test_metric_trends(self):
        current = Metrics(RE=80, BS=50, RS=20, CA=50)
        recent = [Metrics(RE=50, BS=50, RS=50, CA=50)]
        trends = {t.metric: t for t in calculate_metric_trends(current, recent)}
        self.assertEqual(trends["RE"].direction, "improving")
        self.assertEqual(trends["RE"].strength, 1.0)
        self.assertEqual(trends["BS"].direction, "stable")
        self.assertEqual(trends["RS"].direction, "declining")

    def test_labels(self):
        self.assertEqual(metric_label("CA"), "Affective Connection")
        self.assertEqual(metric_label("XX"), "XX")


if __name__ == "__main__":
    unittest.main(verbosity=2)
