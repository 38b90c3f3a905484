#!/usr/bin/env python3
"""
Fluia Care Prescription Generator Tests — v1.0.0

Tests for:
- Problem detection order
- Training count and selection
- Tone and goal rules
"""

import unittest
from pathlib import Path
import sys

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from care.checkin import CheckinDimensions
from care.emotional_state import derive_emotional_state
from care.metrics import Metrics, calculate_metrics
from care.prescription import (
    DEFAULT_GOAL,
    DetectedProblem,
    detect_problems,
    determine_tone,
    generate_goal,
    generate_prescription,
    is_micro_prescription,
    select_trainings,
    target_training_count,
    total_duration,
)
from care.training_catalog import (
    FALLBACK_TRAINING_ID,
    TRAINING_CATALOG,
    catalog_stats,
    get_training_by_id,
    get_training_instructions,
)


def prescribe(mood, energy, body, bond, **kwargs):
    dims = CheckinDimensions(mood=mood, energy=energy, body=body, bond=bond)
    state = derive_emotional_state(dims)
    return generate_prescription(calculate_metrics(state, dims), state, **kwargs)


class TestDetectProblems(unittest.TestCase):

    def test_hard_day_priority_order(self):
        dims = CheckinDimensions(mood=1, energy=1, body=2, bond=2)
        state = derive_emotional_state(dims)
        problems = detect_problems(state, calculate_metrics(state, dims))
        self.assertEqual(
            [p.issue for p in problems],
            ["lowZone", "overload", "lowEnergy", "physicalDiscomfort", "emotionalDistance",
             "lowBS", "lowRS", "lowCA", "lowRE"],
        )
        priorities = [p.priority for p in problems]
        self.assertEqual(priorities, sorted(priorities))

    def test_low_metrics_sorted_by_value(self):
        state = derive_emotional_state(CheckinDimensions(3, 3, 3, 3))
        problems = detect_problems(state, Metrics(RE=30, BS=20, RS=20, CA=50))
        self.assertEqual([p.issue for p in problems], ["lowBS", "lowRS", "lowRE"])
        self.assertEqual(problems[0].value, 20)

    def test_high_zone_is_an_opportunity(self):
        state = derive_emotional_state(CheckinDimensions(5, 5, 5, 5))
        problems = detect_problems(state, Metrics(RE=90, BS=90, RS=90, CA=90))
        self.assertEqual([p.issue for p in problems], ["highZone"])
        self.assertEqual(problems[0].priority, 3)


class TestTrainingSelection(unittest.TestCase):

    def test_target_count(self):
        overload = DetectedProblem("flag", "overload", 1, ("pause-micro",))
        self.assertEqual(target_training_count(2, []), 1)
        self.assertEqual(target_training_count(4, [overload]), 1)
        self.assertEqual(target_training_count(3, []), 2)
        self.assertEqual(target_training_count(5, []), 3)

    def test_fallback_when_no_problems(self):
        trainings = select_trainings([], 3)
        self.assertEqual(len(trainings), 1)
        self.assertEqual(trainings[0].id, FALLBACK_TRAINING_ID)
        self.assertEqual(trainings[0].targets_problem, "default")

    def test_no_duplicate_types(self):
        prescription = prescribe(3, 2, 2, 3)
        types = [t.type for t in prescription.trainings]
        self.assertEqual(len(types), len(set(types)))

    def test_trainings_fit_zone(self):
        for value in range(1, 6):
            prescription = prescribe(value, value, value, value)
            for training in prescription.trainings:
                template = get_training_by_id(training.id)
                self.assertTrue(template.fits_zone(value))


class TestToneAndGoal(unittest.TestCase):

    def test_tone_priority(self):
        many = [DetectedProblem("flag", f"p{i}", 1, ()) for i in range(3)]
        self.assertEqual(determine_tone(2, many), "compassionate")
        self.assertEqual(determine_tone(3, many), "gentle")
        self.assertEqual(determine_tone(3, []), "balanced")
        self.assertEqual(determine_tone(4, []), "encouraging")
        self.assertEqual(determine_tone(5, []), "celebratory")

    def test_goal_for_low_metric(self):
        low_ca = DetectedProblem("metric", "lowCA", 2, ("bonding",), value=25)
        self.assertEqual(generate_goal(3, [low_ca]), "Let's nurture the bond with your baby today.")

    def test_default_goal(self):
        self.assertEqual(generate_goal(3, []), DEFAULT_GOAL)


class TestGeneratePrescription(unittest.TestCase):

    def test_hard_day(self):
        prescription = prescribe(1, 1, 2, 2)
        self.assertEqual(len(prescription.trainings), 1)
        self.assertEqual(prescription.trainings[0].id, "grounding-body")
        self.assertEqual(prescription.trainings[0].targets_problem, "lowZone")
        self.assertEqual(prescription.tone, "compassionate")
        self.assertTrue(is_micro_prescription(prescription))

    def test_neutral_day_gets_fallback(self):
        prescription = prescribe(3, 3, 3, 3)
        self.assertEqual([t.id for t in prescription.trainings], ["pause-micro"])
        self.assertEqual(prescription.tone, "balanced")
        self.assertEqual(prescription.goal, DEFAULT_GOAL)

    def test_tired_day(self):
        prescription = prescribe(3, 2, 3, 3)
        self.assertEqual([t.id for t in prescription.trainings], ["pause-micro", "breathing-calm"])
        self.assertEqual([t.targets_problem for t in prescription.trainings], ["lowEnergy", "lowRS"])
        self.assertEqual(prescription.goal, "Let's restore your energy, one step at a time.")
        self.assertEqual(total_duration(prescription), 3)

    def test_many_problems_gentle(self):
        self.assertEqual(prescribe(3, 2, 2, 3).tone, "gentle")

    def test_great_day(self):
        prescription = prescribe(5, 5, 5, 5, is_first_checkin=True)
        self.assertEqual(prescription.tone, "celebratory")
        self.assertEqual([t.id for t in prescription.trainings], ["breathing-active"])
        data = prescription.to_dict()
        self.assertTrue(data["isFirstCheckIn"])
        self.assertEqual(data["detectedProblems"][0]["issue"], "highZone")


class TestCatalog(unittest.TestCase):

    def test_catalog_shape(self):
        self.assertEqual(len(TRAINING_CATALOG), 15)
        ids = [t.id for t in TRAINING_CATALOG]
        self.assertEqual(len(ids), len(set(ids)))
        self.assertEqual(catalog_stats()["totalTrainings"], 15)

    def test_instructions(self):
        self.assertTrue(get_training_instructions("pause-micro"))
        self.assertEqual(get_training_instructions("missing"), [])


if __name__ == "__main__":
    unittest.main(verbosity=2)
