# care/content/milestones.py
"""
Baby-voice milestone messages.

A milestone replaces the composed message on the day it triggers and is
shown at most once. Catalog order is the trigger priority.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Literal, Optional, Tuple

MilestoneTrigger = Literal[
    "first_checkin",
    "gestational_week",
    "trimester_start",
    "presence_days",
    "due_date",
]

TRIMESTER_START_WEEKS = {2: 14, 3: 28}
DUE_DATE_WEEK = 40


@dataclass(frozen=True)
class MilestoneMessage:
    id: str
    trigger: str
    trigger_value: Optional[int]
    title: str
    text: str
    emoji: str = ""

    def is_triggered(self, is_first_checkin: bool, week: int, presence_days: int) -> bool:
        """Exact-week triggers fire only on that week; presence fires from the count on."""
        if self.trigger == "first_checkin":
            return is_first_checkin
        if self.trigger == "gestational_week":
            return week == self.trigger_value
        if self.trigger == "trimester_start":
            return week == TRIMESTER_START_WEEKS.get(self.trigger_value)
        if self.trigger == "presence_days":
            return presence_days >= (self.trigger_value or 0)
        if self.trigger == "due_date":
            return week >= DUE_DATE_WEEK
        return False

    def is_reachable(self, week: int, presence_days: int) -> bool:
        """Whether the trigger point has been reached at some time."""
        if self.trigger == "first_checkin":
            return True
        if self.trigger == "gestational_week":
            return week >= (self.trigger_value or 0)
        if self.trigger == "trimester_start":
            return week >= TRIMESTER_START_WEEKS.get(self.trigger_value, DUE_DATE_WEEK)
        if self.trigger == "presence_days":
            return presence_days >= (self.trigger_value or 0)
        if self.trigger == "due_date":
            return week >= DUE_DATE_WEEK
        return False

    def to_dict(self) -> Dict[str, object]:
        data: Dict[str, object] = {
            "id": self.id,
            "type": "milestone",
            "trigger": self.trigger,
            "title": self.title,
            "text": self.text,
            "emoji": self.emoji,
        }
        if self.trigger_value is not None:
            data["triggerValue"] = self.trigger_value
        return data


ALL_MILESTONES: Tuple[MilestoneMessage, ...] = (
    MilestoneMessage(
        "ms-first-checkin", "first_checkin", None,
        "Our first conversation",
        "Mom, this is the first time we talk like this. From today on, I'll be here "
        "every day to tell you how I'm doing in here. I love you already, {baby_name}.",
        "💜",
    ),
    # ---- Gestational weeks ------------------------------------------------------
    MilestoneMessage(
        "ms-week-6", "gestational_week", 6,
        "My heart is beating",
        "Around now my little heart started to beat. It beats close to yours.",
        "💓",
    ),
    MilestoneMessage(
        "ms-week-12", "gestational_week", 12,
        "End of the first stretch",
        "Twelve weeks! All my main parts are formed. We got through the beginning together.",
        "🌱",
    ),
    MilestoneMessage(
        "ms-week-20", "gestational_week", 20,
        "Halfway there",
        "We're halfway on this journey. Every week you care for yourself, you care for me.",
        "🌗",
    ),
    MilestoneMessage(
        "ms-week-24", "gestational_week", 24,
        "I can hear you",
        "My ears are working now. Talk to me, sing to me, I'm listening, {baby_name}.",
        "👂",
    ),
    MilestoneMessage(
        "ms-week-37", "gestational_week", 37,
        "Ready to meet you",
        "Thirty-seven weeks. I'm considered full term now. Any day could be our day.",
        "🌟",
    ),
    # ---- Trimester starts ---------------------------------------------------------
    MilestoneMessage(
        "ms-trimester-2", "trimester_start", 2,
        "Welcome to the second trimester",
        "A new phase begins. Many moms feel more energy now. I'm growing fast!",
        "🌸",
    ),
    MilestoneMessage(
        "ms-trimester-3", "trimester_start", 3,
        "Welcome to the third trimester",
        "The last stretch! I'm getting bigger and stronger to meet you.",
        "🌻",
    ),
    # ---- Presence -----------------------------------------------------------------
    MilestoneMessage(
        "ms-presence-7", "presence_days", 7,
        "One week together",
        "Seven days of showing up for us. That's a beautiful beginning.",
        "✨",
    ),
    MilestoneMessage(
        "ms-presence-30", "presence_days", 30,
        "A month of presence",
        "Thirty days of care. You've built something lovely for both of us.",
        "🌟",
    ),
    MilestoneMessage(
        "ms-presence-100", "presence_days", 100,
        "One hundred days",
        "A hundred days together. I will carry this care with me forever.",
        "🏆",
    ),
    # ---- Due date -------------------------------------------------------------------
    MilestoneMessage(
        "ms-due-date", "due_date", DUE_DATE_WEEK,
        "Our due date",
        "We've reached forty weeks. I'll come when I'm ready. Rest, Mom, we're almost there.",
        "🎉",
    ),
)

TOTAL_MILESTONES = len(ALL_MILESTONES)

_BY_ID = {m.id: m for m in ALL_MILESTONES}


def get_milestone(milestone_id: str) -> Optional[MilestoneMessage]:
    return _BY_ID.get(milestone_id)


def check_milestone(
    is_first_checkin: bool,
    week: int,
    presence_days: int,
    seen: Iterable[str],
) -> Optional[MilestoneMessage]:
    """First unseen milestone whose trigger holds, in catalog order."""
    seen_ids = set(seen)
    for milestone in ALL_MILESTONES:
        if milestone.id in seen_ids:
            continue
        if milestone.is_triggered(is_first_checkin, week, presence_days):
            return milestone
    return None


def reachable_milestones(week: int, presence_days: int, seen: Iterable[str]) -> List[MilestoneMessage]:
    seen_ids = set(seen)
    return [
        m for m in ALL_MILESTONES
        if m.id not in seen_ids and m.is_reachable(week, presence_days)
    ]
