# care/content/openings.py
"""
Baby-voice openings, keyed by trimester and time of day.

Night visits use the evening openings.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Literal, Tuple

TimeOfDay = Literal["morning", "afternoon", "evening"]


@dataclass(frozen=True)
class OpeningComponent:
    id: str
    trimester: int
    time_of_day: str
    text: str

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "type": "opening",
            "trimester": self.trimester,
            "timeOfDay": self.time_of_day,
            "text": self.text,
        }


ALL_OPENINGS: Tuple[OpeningComponent, ...] = (
    # ---- Trimester 1 -------------------------------------------------------
    OpeningComponent("op-t1-morning-1", 1, "morning",
                     "Good morning, Mom. I'm still tiny, but I woke up with you."),
    OpeningComponent("op-t1-morning-2", 1, "morning",
                     "A new day started, and I'm growing a little more in it."),
    OpeningComponent("op-t1-afternoon-1", 1, "afternoon",
                     "Hi, Mom. It's {baby_name} here, keeping you company this afternoon."),
    OpeningComponent("op-t1-afternoon-2", 1, "afternoon",
                     "The afternoon is passing, and I'm here with you the whole time."),
    OpeningComponent("op-t1-evening-1", 1, "evening",
                     "The day is winding down. I stayed close to you through all of it."),
    OpeningComponent("op-t1-evening-2", 1, "evening",
                     "Good evening, Mom. Time to slow down together."),
    # ---- Trimester 2 -------------------------------------------------------
    OpeningComponent("op-t2-morning-1", 2, "morning",
                     "Good morning! Did you feel me stretching while you woke up?"),
    OpeningComponent("op-t2-morning-2", 2, "morning",
                     "Morning, Mom. I can hear your heartbeat starting the day."),
    OpeningComponent("op-t2-afternoon-1", 2, "afternoon",
                     "Hi, Mom. I'm moving around in here, exploring my little world."),
    OpeningComponent("op-t2-afternoon-2", 2, "afternoon",
                     "This afternoon, {baby_name} wants to say hello."),
    OpeningComponent("op-t2-evening-1", 2, "evening",
                     "Good evening. Your voice is my favourite sound of the day."),
    OpeningComponent("op-t2-evening-2", 2, "evening",
                     "The night is coming, and I'm cozy right here with you."),
    # ---- Trimester 3 -------------------------------------------------------
    OpeningComponent("op-t3-morning-1", 3, "morning",
                     "Good morning, Mom. We're getting closer to meeting."),
    OpeningComponent("op-t3-morning-2", 3, "morning",
                     "Morning! There's less room in here, but plenty of love."),
    OpeningComponent("op-t3-afternoon-1", 3, "afternoon",
                     "Hi, Mom. {baby_name} is practicing for the big day."),
    OpeningComponent("op-t3-afternoon-2", 3, "afternoon",
                     "This afternoon I'm resting and listening to you."),
    OpeningComponent("op-t3-evening-1", 3, "evening",
                     "Good evening. Soon I'll see the face behind this voice."),
    OpeningComponent("op-t3-evening-2", 3, "evening",
                     "Another evening together, one of the last like this."),
)

TOTAL_OPENINGS = len(ALL_OPENINGS)


def get_openings(trimester: int, time_of_day: str) -> List[OpeningComponent]:
    return [
        o for o in ALL_OPENINGS
        if o.trimester == trimester and o.time_of_day == time_of_day
    ]


def get_openings_for_trimester(trimester: int) -> List[OpeningComponent]:
    return [o for o in ALL_OPENINGS if o.trimester == trimester]
