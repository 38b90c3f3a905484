#!/usr/bin/env python3
"""
Fluia Care Rule Table Tests — v1.0.0
"""

import unittest
from pathlib import Path
import sys

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from care.rules import Rule, all_matches, first_match, first_matching_rule

RULES = (
    Rule("negative", lambda n: n < 0, "negative"),
    Rule("small", lambda n: n < 10, "small"),
    Rule("even", lambda n: n % 2 == 0, lambda n: f"even:{n}"),
)


class TestRules(unittest.TestCase):

    def test_first_match_wins(self):
        self.assertEqual(first_match(RULES, -4), "negative")
        self.assertEqual(first_match(RULES, 4), "small")

    def test_callable_result(self):
        self.assertEqual(first_match(RULES, 12), "even:12")

    def test_default(self):
        self.assertIsNone(first_match(RULES, 11))
        self.assertEqual(first_match(RULES, 11, "other"), "other")

    def test_all_matches_in_table_order(self):
        self.assertEqual(all_matches(RULES, -2), ["negative", "small", "even:-2"])
        self.assertEqual(all_matches(RULES, 11), [])

    def test_first_matching_rule(self):
        self.assertEqual(first_matching_rule(RULES, 4).name, "small")
        self.assertIsNone(first_matching_rule(RULES, 11))


if __name__ == "__main__":
    unittest.main(verbosity=2)
