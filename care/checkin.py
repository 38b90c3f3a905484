# care/checkin.py
"""
Fluia Care — Check-in Records v1.0.0

The daily check-in is the single primary source of truth: every derived
value in the engine starts from these four ordinal dimensions.

Provides:
- CheckinDimensions (mood / energy / body / bond, each 1-5)
- DayMoment (moment of the day the check-in was made)
- Day keys with the 04:00 rollover used for "today" comparisons
- PresenceData bookkeeping (total days, streaks, recent dates)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple
from zoneinfo import ZoneInfo


DEFAULT_TIMEZONE = "America/Sao_Paulo"
DEFAULT_DAY_RESET_HOUR = 4

# Presence history kept on the profile
PRESENCE_WINDOW_DAYS = 90

DIMENSION_NAMES: Tuple[str, ...] = ("mood", "energy", "body", "bond")


# =============================================================================
# DAY MOMENT
# =============================================================================

class DayMoment(Enum):
    """Moment of the day a check-in or visit happens."""
    MORNING = "morning"      # 5am - 12pm
    AFTERNOON = "afternoon"  # 12pm - 6pm
    EVENING = "evening"      # 6pm - 10pm
    NIGHT = "night"          # 10pm - 5am

    @classmethod
    def from_hour(cls, hour: int) -> "DayMoment":
        """Get the moment from an hour (0-23)."""
        if 5 <= hour < 12:
            return cls.MORNING
        elif 12 <= hour < 18:
            return cls.AFTERNOON
        elif 18 <= hour < 22:
            return cls.EVENING
        else:
            return cls.NIGHT

    @classmethod
    def parse(cls, value: Any, default: Optional["DayMoment"] = None) -> "DayMoment":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return default or cls.MORNING


# =============================================================================
# CHECK-IN DIMENSIONS
# =============================================================================

@dataclass(frozen=True)
class CheckinDimensions:
    """
    One day's self-report. Every value is an ordinal 1-5.

    - mood: overall mood
    - energy: energy level
    - body: bodily comfort
    - bond: felt connection with the baby
    """
    mood: int
    energy: int
    body: int
    bond: int

    def values(self) -> Tuple[int, int, int, int]:
        return (self.mood, self.energy, self.body, self.bond)

    def items(self) -> List[Tuple[str, int]]:
        return list(zip(DIMENSION_NAMES, self.values()))

    def to_dict(self) -> Dict[str, int]:
        return {
            "mood": self.mood,
            "energy": self.energy,
            "body": self.body,
            "bond": self.bond,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CheckinDimensions":
        return cls(
            mood=int(data["mood"]),
            energy=int(data["energy"]),
            body=int(data["body"]),
            bond=int(data["bond"]),
        )


# =============================================================================
# DAY KEYS
# =============================================================================

def now_in(timezone: str = DEFAULT_TIMEZONE) -> datetime:
    """Current aware datetime in the given timezone."""
    return datetime.now(ZoneInfo(timezone))


def to_local(moment: datetime, timezone: str = DEFAULT_TIMEZONE) -> datetime:
    """Convert to the given timezone. Naive datetimes are taken as already local."""
    tz = ZoneInfo(timezone)
    if moment.tzinfo is None:
        return moment.replace(tzinfo=tz)
    return moment.astimezone(tz)


def day_of(
    moment: datetime,
    timezone: str = DEFAULT_TIMEZONE,
    reset_hour: int = DEFAULT_DAY_RESET_HOUR,
) -> date:
    """
    Calendar day a moment belongs to.

    The day rolls over at `reset_hour` local time, so 02:30 still counts as
    the previous day.
    """
    local = to_local(moment, timezone)
    if local.hour < reset_hour:
        local = local - timedelta(days=1)
    return local.date()


def date_key(
    moment: Optional[datetime] = None,
    timezone: str = DEFAULT_TIMEZONE,
    reset_hour: int = DEFAULT_DAY_RESET_HOUR,
) -> str:
    """YYYY-MM-DD key for a moment (defaults to now)."""
    moment = moment or now_in(timezone)
    return day_of(moment, timezone, reset_hour).isoformat()


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO-8601 timestamp, accepting a trailing 'Z'."""
    if isinstance(value, datetime):
        return value
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


# =============================================================================
# PRESENCE
# =============================================================================

@dataclass
class PresenceData:
    """
    Presence bookkeeping kept on the user profile.

    A presence day is a calendar day with a completed check-in.
    """
    total_days: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    last_checkin_date: str = ""  # YYYY-MM-DD
    checkin_dates: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalDays": self.total_days,
            "currentStreak": self.current_streak,
            "longestStreak": self.longest_streak,
            "lastCheckInDate": self.last_checkin_date,
            "checkInDates": list(self.checkin_dates),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PresenceData":
        return cls(
            total_days=int(data.get("totalDays", 0)),
            current_streak=int(data.get("currentStreak", 0)),
            longest_streak=int(data.get("longestStreak", 0)),
            last_checkin_date=data.get("lastCheckInDate", "") or "",
            checkin_dates=list(data.get("checkInDates", [])),
        )


def _is_next_day(previous: str, current: str) -> bool:
    if not previous:
        return False
    try:
        prev = date.fromisoformat(previous)
        curr = date.fromisoformat(current)
    except ValueError:
        return False
    return prev + timedelta(days=1) == curr


def update_presence_after_checkin(current: PresenceData, checkin_date: str) -> PresenceData:
    """
    Return presence data updated for a check-in on `checkin_date`.

    A second check-in on the same day changes nothing. The input is not
    modified.
    """
    if current.last_checkin_date == checkin_date:
        return current

    streak = current.current_streak + 1 if _is_next_day(current.last_checkin_date, checkin_date) else 1
    dates = (list(current.checkin_dates) + [checkin_date])[-PRESENCE_WINDOW_DAYS:]

    return PresenceData(
        total_days=current.total_days + 1,
        current_streak=streak,
        longest_streak=max(current.longest_streak, streak),
        last_checkin_date=checkin_date,
        checkin_dates=dates,
    )


# =============================================================================
# EXPORTS
# =============================================================================

__all__ = [
    "DEFAULT_TIMEZONE",
    "DEFAULT_DAY_RESET_HOUR",
    "DIMENSION_NAMES",
    "DayMoment",
    "CheckinDimensions",
    "now_in",
    "to_local",
    "day_of",
    "date_key",
    "parse_timestamp",
    "PresenceData",
    "update_presence_after_checkin",
]
