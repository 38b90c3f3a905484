# care/events.py
"""
Fluia Care — Event Records v1.0.0

Append-only factual logs the caller keeps per user:
- MicromomentEvent: a transactional suggestion was shown, dismissed or accepted
- MilestoneEvent: a celebration was shown, dismissed or explored

Both eligibility gates read these logs as their only source of temporal
truth. Records are never edited; the engine only reads them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Literal, Optional

from care.checkin import parse_timestamp


MicromomentType = Literal["MM2", "MM3", "MM4"]
MicromomentAction = Literal["shown", "dismiss", "accept"]

MilestoneCategory = Literal["presence", "gestational"]
MilestoneAction = Literal["shown", "dismissed", "explored"]

MICROMOMENT_TYPES = ("MM2", "MM3", "MM4")
MICROMOMENT_ACTIONS = ("shown", "dismiss", "accept")
MILESTONE_CATEGORIES = ("presence", "gestational")
MILESTONE_ACTIONS = ("shown", "dismissed", "explored")


@dataclass(frozen=True)
class MicromomentEvent:
    micromoment_id: str
    type: str
    action: str
    timestamp: datetime
    context: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "micromomentId": self.micromoment_id,
            "type": self.type,
            "action": self.action,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.context:
            data["context"] = dict(self.context)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MicromomentEvent":
        return cls(
            micromoment_id=data.get("micromomentId", ""),
            type=data.get("type", ""),
            action=data["action"],
            timestamp=parse_timestamp(data["timestamp"]),
            context=dict(data.get("context") or {}),
        )


@dataclass(frozen=True)
class MilestoneEvent:
    milestone_id: str
    type: str
    category: str
    action: str
    timestamp: datetime
    context: Dict[str, Any] = field(default_factory=dict)

    @property
    def gestational_week(self) -> Optional[int]:
        return self.context.get("gestationalWeek")

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "milestoneId": self.milestone_id,
            "type": self.type,
            "category": self.category,
            "action": self.action,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.context:
            data["context"] = dict(self.context)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MilestoneEvent":
        return cls(
            milestone_id=data.get("milestoneId", ""),
            type=data["type"],
            category=data["category"],
            action=data["action"],
            timestamp=parse_timestamp(data["timestamp"]),
            context=dict(data.get("context") or {}),
        )


def micromoment_events_from_list(items: Iterable[Dict[str, Any]]) -> List[MicromomentEvent]:
    return [MicromomentEvent.from_dict(item) for item in items]


def milestone_events_from_list(items: Iterable[Dict[str, Any]]) -> List[MilestoneEvent]:
    return [MilestoneEvent.from_dict(item) for item in items]


__all__ = [
    "MicromomentType",
    "MicromomentAction",
    "MilestoneCategory",
    "MilestoneAction",
    "MICROMOMENT_TYPES",
    "MICROMOMENT_ACTIONS",
    "MILESTONE_CATEGORIES",
    "MILESTONE_ACTIONS",
    "MicromomentEvent",
    "MilestoneEvent",
    "micromoment_events_from_list",
    "milestone_events_from_list",
]
