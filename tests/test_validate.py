#!/usr/bin/env python3
"""
Fluia Care Payload Validation Tests — v1.0.0

Tests for:
- (is_valid, error_message) validators for each payload
- *_from_payload parsers
"""

import unittest
from pathlib import Path
import sys

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from care.checkin import DayMoment
from care.validate import (
    InvalidPayloadError,
    checkin_from_payload,
    composer_context_from_payload,
    micromoment_context_from_payload,
    milestone_context_from_payload,
    validate_checkin_payload,
    validate_composer_payload,
    validate_micromoment_payload,
    validate_milestone_payload,
)


def checkin_payload(**overrides):
    data = {"dimensions": {"mood": 3, "energy": 2, "body": 4, "bond": 5}}
    data.update(overrides)
    return data


def micromoment_payload(**overrides):
    data = {
        "presenceDays": 10,
        "completedJourneys": 2,
        "zone": 4,
        "riskLevel": 1,
        "practiceCompletedToday": False,
        "isFirstAccessToday": False,
        "hasCheckinToday": True,
        "isPremium": False,
    }
    data.update(overrides)
    return data


def milestone_payload(**overrides):
    data = {
        "presenceDays": 7,
        "gestationalWeek": 16,
        "isPremium": False,
        "isPostpartum": False,
    }
    data.update(overrides)
    return data


class TestCheckinPayload(unittest.TestCase):

    def test_valid(self):
        self.assertEqual(validate_checkin_payload(checkin_payload()), (True, ""))

    def test_none_and_wrong_type(self):
        self.assertEqual(validate_checkin_payload(None), (False, "Payload is None"))
        valid, error = validate_checkin_payload(["mood"])
        self.assertFalse(valid)
        self.assertIn("Expected dict", error)

    def test_missing_dimension(self):
        valid, error = validate_checkin_payload({"dimensions": {"mood": 3, "energy": 2, "body": 4}})
        self.assertFalse(valid)
        self.assertIn("bond", error)

    def test_out_of_range_dimension(self):
        valid, error = validate_checkin_payload(checkin_payload(dimensions={"mood": 6, "energy": 2, "body": 4, "bond": 5}))
        self.assertFalse(valid)
        self.assertIn("mood", error)

    def test_bool_is_not_an_integer(self):
        valid, _ = validate_checkin_payload(checkin_payload(dimensions={"mood": True, "energy": 2, "body": 4, "bond": 5}))
        self.assertFalse(valid)

    def test_optional_fields(self):
        self.assertFalse(validate_checkin_payload(checkin_payload(moment="brunch"))[0])
        self.assertFalse(validate_checkin_payload(checkin_payload(gestationalWeek=43))[0])
        self.assertFalse(validate_checkin_payload(checkin_payload(baseline={"mood": 0}))[0])
        self.assertTrue(validate_checkin_payload(checkin_payload(moment="night", gestationalWeek=12))[0])

    def test_parser(self):
        kwargs = checkin_from_payload(checkin_payload(moment="evening", isFirstCheckIn=True, baseline={"mood": 2}))
        self.assertEqual(kwargs["checkin"].values(), (3, 2, 4, 5))
        self.assertEqual(kwargs["moment"], DayMoment.EVENING)
        self.assertTrue(kwargs["is_first_checkin"])
        self.assertEqual(kwargs["baseline"], {"mood": 2})

    def test_first_checkin_key_shared_with_composer(self):
        kwargs = checkin_from_payload(checkin_payload(isFirstCheckIn=True))
        composer = composer_context_from_payload({"gestationalWeeks": 20, "zone": 3, "isFirstCheckIn": True})
        self.assertTrue(kwargs["is_first_checkin"])
        self.assertTrue(composer.is_first_checkin)
        self.assertFalse(checkin_from_payload(checkin_payload(isFirstCheckin=True))["is_first_checkin"])

    def test_parser_raises(self):
        with self.assertRaises(InvalidPayloadError):
            checkin_from_payload({})


class TestComposerPayload(unittest.TestCase):

    def test_valid_minimal(self):
        self.assertEqual(validate_composer_payload({"gestationalWeeks": 20, "zone": 3}), (True, ""))

    def test_rejects_bad_week_and_zone(self):
        self.assertFalse(validate_composer_payload({"gestationalWeeks": 0, "zone": 3})[0])
        self.assertFalse(validate_composer_payload({"gestationalWeeks": 20, "zone": 6})[0])

    def test_seen_lists_must_be_strings(self):
        valid, error = validate_composer_payload({"gestationalWeeks": 20, "zone": 3, "seenCores": [1, 2]})
        self.assertFalse(valid)
        self.assertIn("seenCores", error)

    def test_parser_defaults(self):
        context = composer_context_from_payload({"gestationalWeeks": 20, "zone": 3})
        self.assertEqual(context.time_of_day, DayMoment.MORNING)
        self.assertEqual(context.presence_days, 1)
        self.assertIsNone(context.baby_name)
        self.assertEqual(tuple(context.seen_openings), ())

    def test_parser_full(self):
        context = composer_context_from_payload({
            "gestationalWeeks": 30,
            "zone": 2,
            "timeOfDay": "night",
            "presenceDays": 12,
            "babyName": "Luna",
            "seenOpenings": ["op-t3-evening-1"],
            "isFirstCheckIn": True,
            "uid": "u1",
        })
        self.assertEqual(context.time_of_day, DayMoment.NIGHT)
        self.assertEqual(context.baby_name, "Luna")
        self.assertEqual(tuple(context.seen_openings), ("op-t3-evening-1",))
        self.assertTrue(context.is_first_checkin)


class TestMicromomentPayload(unittest.TestCase):

    def test_valid(self):
        self.assertEqual(validate_micromoment_payload(micromoment_payload()), (True, ""))

    def test_risk_level_range(self):
        valid, error = validate_micromoment_payload(micromoment_payload(riskLevel=0))
        self.assertFalse(valid)
        self.assertIn("riskLevel", error)

    def test_negative_counter(self):
        self.assertFalse(validate_micromoment_payload(micromoment_payload(presenceDays=-1))[0])

    def test_missing_flag(self):
        data = micromoment_payload()
        del data["isPremium"]
        self.assertEqual(validate_micromoment_payload(data), (False, "Missing required field: 'isPremium'"))

    def test_event_validation(self):
        bad_action = micromoment_payload(events=[{"action": "clicked", "timestamp": "2025-03-10T10:00:00Z"}])
        self.assertFalse(validate_micromoment_payload(bad_action)[0])
        bad_time = micromoment_payload(events=[{"action": "shown", "timestamp": "yesterday"}])
        valid, error = validate_micromoment_payload(bad_time)
        self.assertFalse(valid)
        self.assertIn("timestamp", error)

    def test_parser_builds_events(self):
        context = micromoment_context_from_payload(micromoment_payload(events=[
            {"micromomentId": "MM2-1", "type": "MM2", "action": "shown", "timestamp": "2025-03-10T10:00:00Z"},
        ]))
        self.assertEqual(len(context.events), 1)
        self.assertEqual(context.events[0].action, "shown")
        self.assertIsNotNone(context.events[0].timestamp.tzinfo)


class TestMilestonePayload(unittest.TestCase):

    def test_valid(self):
        self.assertEqual(validate_milestone_payload(milestone_payload()), (True, ""))

    def test_week_range(self):
        self.assertFalse(validate_milestone_payload(milestone_payload(gestationalWeek=50))[0])
        self.assertFalse(validate_milestone_payload(milestone_payload(lastGestationalWeek=0))[0])

    def test_event_needs_category(self):
        data = milestone_payload(events=[
            {"type": "PRESENCE_7", "category": "other", "action": "shown", "timestamp": "2025-03-10T10:00:00Z"},
        ])
        self.assertFalse(validate_milestone_payload(data)[0])

    def test_parser(self):
        context = milestone_context_from_payload(milestone_payload(
            lastGestationalWeek=15,
            events=[{
                "milestoneId": "NEW_WEEK-15-1",
                "type": "NEW_WEEK",
                "category": "gestational",
                "action": "shown",
                "timestamp": "2025-03-03T10:00:00Z",
                "context": {"gestationalWeek": 15},
            }],
        ))
        self.assertEqual(context.last_gestational_week, 15)
        self.assertEqual(context.events[0].gestational_week, 15)

    def test_parser_raises(self):
        with self.assertRaises(InvalidPayloadError):
            milestone_context_from_payload(milestone_payload(isPremium="yes"))

    def test_parser_keeps_only_gate_fields(self):
        context = milestone_context_from_payload(milestone_payload(babyName="Luna", completedJourneys=3))
        self.assertEqual(context.presence_days, 7)
        self.assertFalse(hasattr(context, "baby_name"))
        self.assertFalse(hasattr(context, "completed_journeys"))


if __name__ == "__main__":
    unittest.main(verbosity=2)
