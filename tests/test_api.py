#!/usr/bin/env python3
"""
Fluia Care API Tests — v1.0.0

Tests for:
- Success envelopes on each route
- JSON error envelopes (400 / 404 / 405)
"""

import unittest
from pathlib import Path
import sys

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from fluia_api import app, config


class TestFluiaApi(unittest.TestCase):

    def setUp(self):
        app.config["TESTING"] = True
        self.client = app.test_client()

    def test_health(self):
        response = self.client.get("/api/health")
        self.assertEqual(response.status_code, 200)
        data = response.get_json()
        self.assertTrue(data["ok"])
        self.assertEqual(data["timezone"], config.timezone)

    def test_checkin(self):
        response = self.client.post("/api/care/checkin", json={
            "dimensions": {"mood": 1, "energy": 1, "body": 2, "bond": 2},
        })
        self.assertEqual(response.status_code, 200)
        data = response.get_json()
        self.assertTrue(data["ok"])
        self.assertEqual(data["state"]["zone"], 1)
        self.assertTrue(data["state"]["flags"]["overload"])
        self.assertEqual(data["prescription"]["tone"], "compassionate")
        self.assertEqual(len(data["prescription"]["trainings"]), 1)

    def test_checkin_first_checkin_flag(self):
        response = self.client.post("/api/care/checkin", json={
            "dimensions": {"mood": 4, "energy": 4, "body": 4, "bond": 4},
            "isFirstCheckIn": True,
        })
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.get_json()["prescription"]["isFirstCheckIn"])

    def test_checkin_invalid_payload(self):
        response = self.client.post("/api/care/checkin", json={"dimensions": {"mood": 9}})
        self.assertEqual(response.status_code, 400)
        data = response.get_json()
        self.assertFalse(data["ok"])
        self.assertEqual(data["error"], "invalid_payload")

    def test_invalid_json(self):
        response = self.client.post(
            "/api/care/checkin", data="{not json", content_type="application/json")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["error"], "invalid_json")

    def test_message(self):
        response = self.client.post("/api/care/message", json={
            "gestationalWeeks": 20,
            "zone": 3,
            "isFirstCheckIn": True,
        })
        self.assertEqual(response.status_code, 200)
        data = response.get_json()
        self.assertTrue(data["message"]["isMilestone"])
        self.assertEqual(data["newSeenIds"]["milestone"], "ms-first-checkin")

    def test_micromoment_premium(self):
        response = self.client.post("/api/micromoment", json={
            "presenceDays": 30,
            "completedJourneys": 10,
            "zone": 5,
            "riskLevel": 1,
            "practiceCompletedToday": True,
            "isFirstAccessToday": False,
            "hasCheckinToday": True,
            "isPremium": True,
        })
        data = response.get_json()
        self.assertTrue(data["ok"])
        self.assertFalse(data["eligible"])
        self.assertIsNone(data["suggestion"])
        self.assertEqual(data["reason"], "premium_user")

    def test_milestone(self):
        response = self.client.post("/api/milestone", json={
            "presenceDays": 7,
            "gestationalWeek": 16,
            "isPremium": False,
            "isPostpartum": False,
            "events": [],
        })
        data = response.get_json()
        self.assertEqual(data["count"], 1)
        self.assertEqual(data["milestones"][0]["type"], "PRESENCE_7")

    def test_unknown_route(self):
        response = self.client.get("/api/nothing")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json()["error"], "not_found")

    def test_wrong_method(self):
        response = self.client.get("/api/milestone")
        self.assertEqual(response.status_code, 405)
        self.assertFalse(response.get_json()["ok"])


if __name__ == "__main__":
    unittest.main(verbosity=2)
