# care/content/cores.py
"""
Baby-voice cores, keyed by emotional zone and gestational week range.

Zone 3 cores double as the neutral fallback.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple


@dataclass(frozen=True)
class CoreComponent:
    id: str
    zone: int
    week_min: int
    week_max: int
    text: str

    def covers_week(self, week: int) -> bool:
        return self.week_min <= week <= self.week_max

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "type": "core",
            "zone": self.zone,
            "weekRange": {"min": self.week_min, "max": self.week_max},
            "text": self.text,
        }


EARLY = (1, 13)
MIDDLE = (14, 27)
LATE = (28, 42)


def _core(core_id: str, zone: int, weeks: Tuple[int, int], text: str) -> CoreComponent:
    return CoreComponent(core_id, zone, weeks[0], weeks[1], text)


ALL_CORES: Tuple[CoreComponent, ...] = (
    # ---- Zone 1 --------------------------------------------------------------
    _core("core-z1-early-1", 1, EARLY,
          "I know today is heavy. You don't need to be strong for me, just be here."),
    _core("core-z1-early-2", 1, EARLY,
          "Even on hard days, I feel held. Resting is enough right now."),
    _core("core-z1-mid-1", 1, MIDDLE,
          "When you feel tired and low, I'm still growing safely inside you."),
    _core("core-z1-mid-2", 1, MIDDLE,
          "It's okay not to be okay. I love you on the grey days too."),
    _core("core-z1-late-1", 1, LATE,
          "The waiting can weigh a lot. Lean on the people around you, I'm fine in here."),
    _core("core-z1-late-2", 1, LATE,
          "You're carrying so much. Let today be small and gentle."),
    # ---- Zone 2 --------------------------------------------------------------
    _core("core-z2-early-1", 2, EARLY,
          "Some days start slow. A glass of water and a deep breath already help us both."),
    _core("core-z2-early-2", 2, EARLY,
          "Your body is doing big work for me, even when you feel you did nothing."),
    _core("core-z2-mid-1", 2, MIDDLE,
          "I don't need a perfect day from you. A calm minute is a gift to me."),
    _core("core-z2-mid-2", 2, MIDDLE,
          "When you pause, I feel it. Pausing is care too."),
    _core("core-z2-late-1", 2, LATE,
          "These last weeks ask a lot of you. Slowing down is part of getting ready."),
    _core("core-z2-late-2", 2, LATE,
          "Your tired body is still my safest place."),
    # ---- Zone 3 --------------------------------------------------------------
    _core("core-z3-early-1", 3, EARLY,
          "Every day you show up, my world gets a bit more solid."),
    _core("core-z3-early-2", 3, EARLY,
          "I'm small, but I'm already learning the rhythm of your days."),
    _core("core-z3-mid-1", 3, MIDDLE,
          "I'm starting to hear sounds out there. Your voice is the one I know best."),
    _core("core-z3-mid-2", 3, MIDDLE,
          "An ordinary day with you is a good day for me."),
    _core("core-z3-late-1", 3, LATE,
          "I'm getting ready to meet you, one quiet day at a time."),
    _core("core-z3-late-2", 3, LATE,
          "You're preparing a home for me, and the most important part is you."),
    # ---- Zone 4 --------------------------------------------------------------
    _core("core-z4-early-1", 4, EARLY,
          "When you feel good, it reaches me too. Let's enjoy it."),
    _core("core-z4-early-2", 4, EARLY,
          "Today feels lighter. Maybe tell me something that made you smile?"),
    _core("core-z4-mid-1", 4, MIDDLE,
          "Your good mood makes me want to move and dance in here."),
    _core("core-z4-mid-2", 4, MIDDLE,
          "Days like this are perfect to talk to me a little."),
    _core("core-z4-late-1", 4, LATE,
          "You seem steady today. I'm taking notes on how calm feels."),
    _core("core-z4-late-2", 4, LATE,
          "Hold on to this feeling, Mom. It's part of what you'll give me."),
    # ---- Zone 5 --------------------------------------------------------------
    _core("core-z5-early-1", 5, EARLY,
          "What a bright day! I can almost feel you glowing."),
    _core("core-z5-early-2", 5, EARLY,
          "Your joy is one of the first things I'm learning about the world."),
    _core("core-z5-mid-1", 5, MIDDLE,
          "Today is full of energy. Let's celebrate being together."),
    _core("core-z5-mid-2", 5, MIDDLE,
          "I love days like this, when everything feels right between us."),
    _core("core-z5-late-1", 5, LATE,
          "You're radiant, Mom. I can't wait to see that smile from the outside."),
    _core("core-z5-late-2", 5, LATE,
          "This happiness is the welcome I'll remember."),
)

TOTAL_CORES = len(ALL_CORES)

NEUTRAL_ZONE = 3


def get_cores(zone: int, week: int) -> List[CoreComponent]:
    return [c for c in ALL_CORES if c.zone == zone and c.covers_week(week)]


def get_cores_for_zone(zone: int) -> List[CoreComponent]:
    return [c for c in ALL_CORES if c.zone == zone]
