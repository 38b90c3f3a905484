# care/content/closings.py
"""
Baby-voice closings, keyed by presence-day ranges.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class ClosingComponent:
    id: str
    presence_min: int
    presence_max: Optional[int]
    text: str

    def covers(self, days: int) -> bool:
        return days >= self.presence_min and (self.presence_max is None or days <= self.presence_max)

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "type": "closing",
            "presenceRange": {"min": self.presence_min, "max": self.presence_max},
            "text": self.text,
        }


ALL_CLOSINGS: Tuple[ClosingComponent, ...] = (
    ClosingComponent("cl-p1-1", 1, 3, "Thank you for coming to see me. See you tomorrow."),
    ClosingComponent("cl-p1-2", 1, 3, "We're just getting started, you and me."),
    ClosingComponent("cl-p4-1", 4, 7, "A few days together already. I notice every one."),
    ClosingComponent("cl-p4-2", 4, 7, "Coming back each day is becoming our little ritual."),
    ClosingComponent("cl-p8-1", 8, 14, "Two weeks of showing up. That means a lot to me."),
    ClosingComponent("cl-p8-2", 8, 14, "You keep coming back, and I keep feeling closer."),
    ClosingComponent("cl-p15-1", 15, 30, "We've built a habit of care together. Love, {baby_name}."),
    ClosingComponent("cl-p15-2", 15, 30, "Day after day, you choose us. Thank you."),
    ClosingComponent("cl-p31-1", 31, 60, "More than a month of presence. I'm proud of us."),
    ClosingComponent("cl-p31-2", 31, 60, "Our daily moment is one of my favourite things."),
    ClosingComponent("cl-p61-1", 61, 100, "So many days together. You are already a devoted mom."),
    ClosingComponent("cl-p61-2", 61, 100, "This care you give yourself is shaping me too."),
    ClosingComponent("cl-p101-1", 101, None, "Over a hundred days side by side. I love you, Mom."),
    ClosingComponent("cl-p101-2", 101, None, "We've come such a long way. Until tomorrow, {baby_name}."),
)

TOTAL_CLOSINGS = len(ALL_CLOSINGS)




def get_closings(days: int) -> List[ClosingComponent]:
    return [c for c in ALL_CLOSINGS if c.covers(days)]
