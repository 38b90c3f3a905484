# care/tracking.py
"""
Caller-side helpers for the composer's seen-ID tracking.

The composer never touches tracking state. After showing a message the
caller applies the returned delta with `apply_composer_output`, which
appends the new IDs and clears any catalog flagged for reset.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from care.composer import ComposerOutput

WEEKS_AT_DUE_DATE = 40
MIN_WEEK = 1
MAX_WEEK = 42


@dataclass(frozen=True)
class BabyVoiceTracking:
    seen_openings: List[str] = field(default_factory=list)
    seen_cores: List[str] = field(default_factory=list)
    seen_closings: List[str] = field(default_factory=list)
    seen_milestones: List[str] = field(default_factory=list)
    last_message_date: str = ""
    last_message_id: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seenOpenings": list(self.seen_openings),
            "seenCores": list(self.seen_cores),
            "seenClosings": list(self.seen_closings),
            "seenMilestones": list(self.seen_milestones),
            "lastMessageDate": self.last_message_date,
            "lastMessageId": self.last_message_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BabyVoiceTracking":
        return cls(
            seen_openings=list(data.get("seenOpenings", [])),
            seen_cores=list(data.get("seenCores", [])),
            seen_closings=list(data.get("seenClosings", [])),
            seen_milestones=list(data.get("seenMilestones", [])),
            last_message_date=data.get("lastMessageDate", "") or "",
            last_message_id=data.get("lastMessageId", "") or "",
        )


def _add_if_missing(items: List[str], item: str) -> List[str]:
    if item in items:
        return list(items)
    return list(items) + [item]


def mark_milestone_seen(current: BabyVoiceTracking, milestone_id: str) -> BabyVoiceTracking:
    return replace(current, seen_milestones=_add_if_missing(current.seen_milestones, milestone_id))


def apply_composer_output(current: BabyVoiceTracking, output: ComposerOutput) -> BabyVoiceTracking:
    """
    New tracking state after a message was shown.

    Milestone messages only mark the milestone. Otherwise catalogs flagged
    for reset are emptied before the new IDs are appended.
    """
    message = output.message
    if message.is_milestone and output.new_seen_ids.milestone:
        updated = mark_milestone_seen(current, output.new_seen_ids.milestone)
        return replace(updated, last_message_date=message.date, last_message_id=message.id)

    reset = output.should_reset_seen
    openings = [] if reset.get("openings") else current.seen_openings
    cores = [] if reset.get("cores") else current.seen_cores
    closings = [] if reset.get("closings") else current.seen_closings

    return BabyVoiceTracking(
        seen_openings=_add_if_missing(openings, output.new_seen_ids.opening),
        seen_cores=_add_if_missing(cores, output.new_seen_ids.core),
        seen_closings=_add_if_missing(closings, output.new_seen_ids.closing),
        seen_milestones=list(current.seen_milestones),
        last_message_date=message.date,
        last_message_id=message.id,
    )


def calculate_gestational_weeks(due_date: str, today: Optional[date] = None) -> int:
    """
    Gestational week from the due date (due date = week 40).

    Clamped to 1..42; an empty due date gives 0.
    """
    if not due_date:
        return 0
    due = date.fromisoformat(due_date[:10])
    today = today or datetime.now().date()
    weeks_until_due = (due - today).days // 7
    return max(MIN_WEEK, min(MAX_WEEK, WEEKS_AT_DUE_DATE - weeks_until_due))


__all__ = [
    "BabyVoiceTracking",
    "mark_milestone_seen",
    "apply_composer_output",
    "calculate_gestational_weeks",
]
