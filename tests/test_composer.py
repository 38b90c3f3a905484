#!/usr/bin/env python3
"""
Fluia Care Content Composer Tests — v1.0.0

Tests for:
- Three-part composition by trimester, zone and presence
- Seen-ID rotation, exhaustion and reset signals
- Milestone overrides
- Content catalog coverage
"""

import random
import unittest
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo
import sys

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from care.checkin import DayMoment, DEFAULT_TIMEZONE
from care.composer import (
    ComposerContext,
    available_milestones,
    content_stats,
    count_possible_combinations,
    generate_message,
    generate_preview_message,
    has_seen_today_message,
    normalize_time_of_day,
    reset_signals,
    trimester_for_week,
)
from care.content import (
    ALL_CLOSINGS,
    ALL_CORES,
    ALL_MILESTONES,
    ALL_OPENINGS,
    NEUTRAL_ZONE,
    get_closings,
    get_cores,
    get_openings,
)

SP = ZoneInfo(DEFAULT_TIMEZONE)
NOW = datetime(2025, 3, 10, 10, 0, tzinfo=SP)


def context(**overrides):
    values = dict(
        gestational_week=16,
        zone=3,
        time_of_day=DayMoment.MORNING,
        presence_days=5,
        uid="user-1",
    )
    values.update(overrides)
    return ComposerContext(**values)


class TestHelpers(unittest.TestCase):

    def test_trimester_boundaries(self):
        self.assertEqual(trimester_for_week(13), 1)
        self.assertEqual(trimester_for_week(14), 2)
        self.assertEqual(trimester_for_week(27), 2)
        self.assertEqual(trimester_for_week(28), 3)

    def test_night_uses_evening_lines(self):
        self.assertEqual(normalize_time_of_day(DayMoment.NIGHT), "evening")
        self.assertEqual(normalize_time_of_day("afternoon"), "afternoon")

    def test_reset_signal_at_eighty_percent(self):
        seen = [o.id for o in ALL_OPENINGS[:14]]
        signals = reset_signals(context(seen_openings=seen))
        self.assertTrue(signals["openings"])
        self.assertFalse(signals["cores"])
        self.assertFalse(reset_signals(context(seen_openings=seen[:13]))["openings"])


class TestGenerateMessage(unittest.TestCase):

    def test_three_parts_match_context(self):
        output = generate_message(context(), now=NOW)
        message = output.message
        self.assertFalse(message.is_milestone)
        self.assertTrue(message.opening_id.startswith("op-t2-morning-"))
        self.assertTrue(message.core_id.startswith("core-z3-mid-"))
        self.assertTrue(message.closing_id.startswith("cl-p4-"))
        self.assertEqual(message.id, "msg-2025-03-10-z3-w16")
        self.assertEqual(message.date, "2025-03-10")
        self.assertEqual(message.context.baby_name, "Little Flower")
        self.assertEqual(message.full_text.count("\n\n"), 2)
        self.assertNotIn("{baby_name}", message.full_text)

    def test_same_day_same_message(self):
        first = generate_message(context(), now=NOW)
        later = generate_message(context(), now=NOW.replace(hour=21))
        self.assertEqual(first.message.full_text, later.message.full_text)

    def test_day_key_respects_rollover(self):
        output = generate_message(context(), now=datetime(2025, 3, 11, 2, 0, tzinfo=SP))
        self.assertEqual(output.message.date, "2025-03-10")

    def test_picks_unseen_items(self):
        output = generate_message(context(seen_openings=["op-t2-morning-1"]), now=NOW)
        self.assertEqual(output.message.opening_id, "op-t2-morning-2")
        self.assertFalse(output.catalog_status["openingsExhausted"])
        self.assertEqual(output.new_seen_ids.opening, "op-t2-morning-2")

    def test_exhausted_catalog_still_picks(self):
        seen = ["core-z3-mid-1", "core-z3-mid-2"]
        output = generate_message(context(seen_cores=seen), now=NOW)
        self.assertIn(output.message.core_id, seen)
        self.assertTrue(output.catalog_status["coresExhausted"])

    def test_unknown_zone_uses_neutral_cores(self):
        output = generate_message(context(zone=7), now=NOW)
        core_zone = int(output.message.core_id.split("-")[1][1:])
        self.assertEqual(core_zone, NEUTRAL_ZONE)

    def test_zero_presence_uses_first_day_closings(self):
        output = generate_message(context(presence_days=0), now=NOW)
        self.assertTrue(output.message.closing_id.startswith("cl-p1-"))

    def test_custom_baby_name(self):
        output = generate_message(context(baby_name="Luna"), now=NOW)
        self.assertEqual(output.message.context.baby_name, "Luna")

    def test_injected_rng(self):
        a = generate_message(context(), now=NOW, rng=random.Random(7))
        b = generate_message(context(), now=NOW, rng=random.Random(7))
        self.assertEqual(a.to_dict(), b.to_dict())

    def test_to_dict_shape(self):
        data = generate_message(context(), now=NOW).to_dict()
        self.assertEqual(set(data), {"message", "newSeenIds", "shouldResetSeen", "catalogStatus"})
        self.assertIn("components", data["message"])
        self.assertNotIn("milestone", data["newSeenIds"])


class TestMilestoneOverride(unittest.TestCase):

    def test_first_checkin(self):
        output = generate_message(context(is_first_checkin=True), now=NOW)
        message = output.message
        self.assertTrue(message.is_milestone)
        self.assertEqual(message.id, "ms-first-checkin")
        self.assertEqual(output.new_seen_ids.milestone, "ms-first-checkin")
        self.assertIn("Our first conversation", message.full_text)
        self.assertIn("Little Flower", message.full_text)
        self.assertFalse(any(output.should_reset_seen.values()))

    def test_exact_week(self):
        output = generate_message(context(gestational_week=20), now=NOW)
        self.assertEqual(output.message.id, "ms-week-20")

    def test_trimester_start(self):
        output = generate_message(context(gestational_week=14), now=NOW)
        self.assertEqual(output.message.id, "ms-trimester-2")

    def test_presence_fires_once_reached(self):
        output = generate_message(context(presence_days=9), now=NOW)
        self.assertEqual(output.message.id, "ms-presence-7")

    def test_seen_milestone_is_skipped(self):
        output = generate_message(
            context(is_first_checkin=True, seen_milestones=["ms-first-checkin"]), now=NOW)
        self.assertFalse(output.message.is_milestone)

    def test_catalog_order_is_priority(self):
        output = generate_message(context(gestational_week=20, presence_days=7), now=NOW)
        self.assertEqual(output.message.id, "ms-week-20")

    def test_available_milestones(self):
        ids = [m.id for m in available_milestones(21, 8, ["ms-first-checkin"])]
        self.assertEqual(
            ids,
            ["ms-week-6", "ms-week-12", "ms-week-20", "ms-trimester-2", "ms-presence-7"],
        )


class TestExtras(unittest.TestCase):

    def test_has_seen_today_message(self):
        self.assertTrue(has_seen_today_message("2025-03-10", now=NOW))
        self.assertFalse(has_seen_today_message("2025-03-09", now=NOW))
        self.assertTrue(has_seen_today_message("2025-03-10T13:00:00Z", now=NOW))
        self.assertFalse(has_seen_today_message("", now=NOW))

    def test_content_stats(self):
        stats = content_stats()
        self.assertEqual(stats["openings"], 18)
        self.assertEqual(stats["cores"], 30)
        self.assertEqual(stats["closings"], 14)
        self.assertEqual(stats["milestones"], 12)
        self.assertEqual(count_possible_combinations(), 18 * 30 * 14)

    def test_preview_message(self):
        message = generate_preview_message(zone=4, gestational_week=30, now=NOW)
        self.assertEqual(message.context.time_of_day, "morning")
        self.assertEqual(message.context.baby_name, "Little Fruit")


class TestContentCoverage(unittest.TestCase):

    def test_every_trimester_and_period_has_openings(self):
        for trimester in (1, 2, 3):
            for period in ("morning", "afternoon", "evening"):
                self.assertTrue(get_openings(trimester, period))

    def test_every_zone_and_week_has_cores(self):
        for zone in range(1, 6):
            for week in range(1, 43):
                self.assertTrue(get_cores(zone, week), (zone, week))

    def test_every_presence_day_has_closings(self):
        for days in (1, 3, 4, 7, 8, 14, 15, 30, 31, 60, 61, 100, 101, 400):
            self.assertTrue(get_closings(days), days)

    def test_ids_unique(self):
        ids = [c.id for c in ALL_OPENINGS + ALL_CORES + ALL_CLOSINGS + ALL_MILESTONES]
        self.assertEqual(len(ids), len(set(ids)))

    def test_package_exports_resolve(self):
        import care.content as content
        for name in content.__all__:
            self.assertTrue(hasattr(content, name), name)
        self.assertNotIn("week_range", content.__all__)
        self.assertNotIn("presence_range", content.__all__)


if __name__ == "__main__":
    unittest.main(verbosity=2)
