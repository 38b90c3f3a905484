# care/composer.py
"""
Fluia Care — Content Composer v1.0.0

Composes the daily "baby voice" message.

Flow:
1. Milestone check. The first unseen milestone whose trigger holds replaces
   the whole message.
2. Otherwise compose opening + core + closing:
   - opening by trimester and time of day (night counts as evening)
   - core by zone and gestational week
   - closing by presence days
   Each part is picked among unseen candidates; when all were seen the full
   candidate list is used and the catalog is reported exhausted.
3. Substitute {baby_name} and join the parts with blank lines.
4. Report which catalogs crossed 80% seen so the caller can reset them.

Selection is deterministic per day: the pick for each part is seeded from
the date, the user id, the zone, the week and the part name. Seen lists are
owned by the caller and never modified here.
"""

from __future__ import annotations

import hashlib
import logging
import math
import random
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple, TypeVar

from care.checkin import (
    DEFAULT_DAY_RESET_HOUR,
    DEFAULT_TIMEZONE,
    DayMoment,
    date_key,
    parse_timestamp,
)
from care.content import (
    NEUTRAL_ZONE,
    TOTAL_CLOSINGS,
    TOTAL_CORES,
    TOTAL_MILESTONES,
    TOTAL_OPENINGS,
    ClosingComponent,
    CoreComponent,
    MilestoneMessage,
    OpeningComponent,
    check_milestone,
    get_closings,
    get_cores,
    get_cores_for_zone,
    get_openings,
    get_openings_for_trimester,
    reachable_milestones,
)

logger = logging.getLogger("fluia.composer")

T = TypeVar("T")


# =============================================================================
# CONSTANTS
# =============================================================================

RESET_THRESHOLD = 0.8
BABY_NAME_PLACEHOLDER = "{baby_name}"

DEFAULT_BABY_NAMES = {
    1: "Little Seed",
    2: "Little Flower",
    3: "Little Fruit",
}

CATALOG_SIZES = {
    "openings": TOTAL_OPENINGS,
    "cores": TOTAL_CORES,
    "closings": TOTAL_CLOSINGS,
}


# =============================================================================
# TYPES
# =============================================================================

@dataclass
class ComposerContext:
    """
    Everything the composer needs for one visit.

    The seen lists are snapshots of the caller's tracking state.
    """
    gestational_week: int
    zone: int
    time_of_day: DayMoment = DayMoment.MORNING
    presence_days: int = 1
    baby_name: Optional[str] = None
    seen_openings: Sequence[str] = ()
    seen_cores: Sequence[str] = ()
    seen_closings: Sequence[str] = ()
    seen_milestones: Sequence[str] = ()
    is_first_checkin: bool = False
    uid: str = ""


@dataclass(frozen=True)
class MessageContext:
    trimester: int
    gestational_week: int
    zone: int
    time_of_day: str
    presence_days: int
    baby_name: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "trimester": self.trimester,
            "gestationalWeeks": self.gestational_week,
            "zone": self.zone,
            "timeOfDay": self.time_of_day,
            "presenceDays": self.presence_days,
            "babyName": self.baby_name,
        }


@dataclass(frozen=True)
class ComposedMessage:
    id: str
    date: str
    full_text: str
    opening_id: str
    core_id: str
    closing_id: str
    context: MessageContext
    is_milestone: bool = False
    milestone: Optional[MilestoneMessage] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "date": self.date,
            "fullText": self.full_text,
            "components": {
                "openingId": self.opening_id,
                "coreId": self.core_id,
                "closingId": self.closing_id,
            },
            "context": self.context.to_dict(),
            "isMilestone": self.is_milestone,
        }
        if self.milestone is not None:
            data["milestone"] = self.milestone.to_dict()
        return data


@dataclass(frozen=True)
class NewSeenIds:
    opening: str
    core: str
    closing: str
    milestone: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        data = {"opening": self.opening, "core": self.core, "closing": self.closing}
        if self.milestone is not None:
            data["milestone"] = self.milestone
        return data


@dataclass(frozen=True)
class ComposerOutput:
    message: ComposedMessage
    new_seen_ids: NewSeenIds
    should_reset_seen: Dict[str, bool] = field(default_factory=dict)
    catalog_status: Dict[str, bool] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message.to_dict(),
            "newSeenIds": self.new_seen_ids.to_dict(),
            "shouldResetSeen": dict(self.should_reset_seen),
            "catalogStatus": dict(self.catalog_status),
        }


# =============================================================================
# HELPERS
# =============================================================================

def trimester_for_week(week: int) -> int:
    if week <= 13:
        return 1
    if week <= 27:
        return 2
    return 3


def normalize_time_of_day(moment: Any) -> str:
    """Catalog period for a moment; night uses the evening lines."""
    value = DayMoment.parse(moment)
    if value is DayMoment.NIGHT:
        return DayMoment.EVENING.value
    return value.value


def default_baby_name(trimester: int) -> str:
    return DEFAULT_BABY_NAMES.get(trimester, DEFAULT_BABY_NAMES[1])


def resolve_baby_name(custom_name: Optional[str], trimester: int) -> str:
    return custom_name or default_baby_name(trimester)


def seeded_rng(*parts: Any) -> random.Random:
    """Random generator seeded from the given parts, stable across runs."""
    key = "|".join(str(p) for p in parts)
    digest = hashlib.sha256(key.encode("utf-8")).hexdigest()
    return random.Random(int(digest[:16], 16))


def pick_unseen(items: Sequence[T], seen: Sequence[str], rng: random.Random) -> Tuple[T, bool]:
    """
    Pick one item not in `seen`.

    Returns (item, exhausted). When every item was seen, picks from all of
    them and reports exhausted=True.
    """
    seen_ids = set(seen)
    unseen = [item for item in items if item.id not in seen_ids]
    if not unseen:
        return rng.choice(list(items)), True
    return rng.choice(unseen), False


def _fill(text: str, baby_name: str) -> str:
    return text.replace(BABY_NAME_PLACEHOLDER, baby_name)


def reset_signals(context: ComposerContext) -> Dict[str, bool]:
    seen_counts = {
        "openings": len(context.seen_openings),
        "cores": len(context.seen_cores),
        "closings": len(context.seen_closings),
    }
    return {
        name: seen_counts[name] >= math.floor(size * RESET_THRESHOLD)
        for name, size in CATALOG_SIZES.items()
    }


# -----------------------------------------------------------------------------
# Part selection
# -----------------------------------------------------------------------------

def select_opening(
    trimester: int, time_of_day: str, seen: Sequence[str], rng: random.Random
) -> Tuple[OpeningComponent, bool]:
    candidates = get_openings(trimester, time_of_day) or get_openings_for_trimester(trimester)
    return pick_unseen(candidates, seen, rng)


def select_core(
    zone: int, week: int, seen: Sequence[str], rng: random.Random
) -> Tuple[CoreComponent, bool]:
    candidates = get_cores(zone, week) or get_cores_for_zone(zone) or get_cores_for_zone(NEUTRAL_ZONE)
    return pick_unseen(candidates, seen, rng)


def select_closing(
    presence_days: int, seen: Sequence[str], rng: random.Random
) -> Tuple[ClosingComponent, bool]:
    candidates = get_closings(presence_days) or get_closings(1)
    return pick_unseen(candidates, seen, rng)


# =============================================================================
# MAIN
# =============================================================================

def generate_message(
    context: ComposerContext,
    now: Optional[datetime] = None,
    timezone: str = DEFAULT_TIMEZONE,
    reset_hour: int = DEFAULT_DAY_RESET_HOUR,
    rng: Optional[random.Random] = None,
) -> ComposerOutput:
    """
    Compose today's message.

    Args:
        context: visit context and seen-ID snapshots
        now: moment of the visit (defaults to now in `timezone`)
        rng: injected generator; by default each part uses a per-day seed

    Returns:
        ComposerOutput with the message, the IDs to append, and the
        reset / exhaustion signals per catalog.
    """
    today = date_key(now, timezone, reset_hour)
    trimester = trimester_for_week(context.gestational_week)
    time_of_day = normalize_time_of_day(context.time_of_day)
    baby_name = resolve_baby_name(context.baby_name, trimester)

    message_context = MessageContext(
        trimester=trimester,
        gestational_week=context.gestational_week,
        zone=context.zone,
        time_of_day=time_of_day,
        presence_days=context.presence_days,
        baby_name=baby_name,
    )

    milestone = check_milestone(
        context.is_first_checkin,
        context.gestational_week,
        context.presence_days,
        context.seen_milestones,
    )
    if milestone is not None:
        logger.debug("milestone %s on %s", milestone.id, today)
        message = ComposedMessage(
            id=milestone.id,
            date=today,
            full_text=f"{milestone.emoji} {milestone.title}\n\n{_fill(milestone.text, baby_name)}",
            opening_id=milestone.id,
            core_id=milestone.id,
            closing_id=milestone.id,
            context=message_context,
            is_milestone=True,
            milestone=milestone,
        )
        return ComposerOutput(
            message=message,
            new_seen_ids=NewSeenIds(milestone.id, milestone.id, milestone.id, milestone=milestone.id),
            should_reset_seen={name: False for name in CATALOG_SIZES},
            catalog_status={
                "openingsExhausted": False,
                "coresExhausted": False,
                "closingsExhausted": False,
            },
        )

    def rng_for(part: str) -> random.Random:
        if rng is not None:
            return rng
        return seeded_rng(today, context.uid, context.zone, context.gestational_week, part)

    opening, openings_exhausted = select_opening(
        trimester, time_of_day, context.seen_openings, rng_for("opening"))
    core, cores_exhausted = select_core(
        context.zone, context.gestational_week, context.seen_cores, rng_for("core"))
    closing, closings_exhausted = select_closing(
        context.presence_days, context.seen_closings, rng_for("closing"))

    full_text = "\n\n".join(
        _fill(part.text, baby_name) for part in (opening, core, closing)
    )

    message = ComposedMessage(
        id=f"msg-{today}-z{context.zone}-w{context.gestational_week}",
        date=today,
        full_text=full_text,
        opening_id=opening.id,
        core_id=core.id,
        closing_id=closing.id,
        context=message_context,
    )

    logger.debug(
        "composed %s from %s/%s/%s", message.id, opening.id, core.id, closing.id,
    )

    return ComposerOutput(
        message=message,
        new_seen_ids=NewSeenIds(opening.id, core.id, closing.id),
        should_reset_seen=reset_signals(context),
        catalog_status={
            "openingsExhausted": openings_exhausted,
            "coresExhausted": cores_exhausted,
            "closingsExhausted": closings_exhausted,
        },
    )


# =============================================================================
# EXTRAS
# =============================================================================

def has_seen_today_message(
    last_message_date: Optional[str],
    now: Optional[datetime] = None,
    timezone: str = DEFAULT_TIMEZONE,
    reset_hour: int = DEFAULT_DAY_RESET_HOUR,
) -> bool:
    """True when `last_message_date` (day key or ISO timestamp) is today."""
    if not last_message_date:
        return False
    today = date_key(now, timezone, reset_hour)
    if len(last_message_date) == 10:
        return last_message_date == today
    try:
        seen_at = parse_timestamp(last_message_date)
    except ValueError:
        return False
    return date_key(seen_at, timezone, reset_hour) == today


def available_milestones(week: int, presence_days: int, seen: Sequence[str]) -> List[MilestoneMessage]:
    """Milestones whose trigger point was reached and that were never seen."""
    return reachable_milestones(week, presence_days, seen)


def is_milestone_available(milestone_id: str, seen: Sequence[str]) -> bool:
    return milestone_id not in seen


def count_possible_combinations() -> int:
    return TOTAL_OPENINGS * TOTAL_CORES * TOTAL_CLOSINGS


def content_stats() -> Dict[str, int]:
    return {
        "openings": TOTAL_OPENINGS,
        "cores": TOTAL_CORES,
        "closings": TOTAL_CLOSINGS,
        "milestones": TOTAL_MILESTONES,
        "totalComponents": TOTAL_OPENINGS + TOTAL_CORES + TOTAL_CLOSINGS + TOTAL_MILESTONES,
        "possibleCombinations": count_possible_combinations(),
    }


def generate_preview_message(
    zone: int,
    gestational_week: int,
    baby_name: Optional[str] = None,
    now: Optional[datetime] = None,
) -> ComposedMessage:
    """A morning message for a first-day user, ignoring all tracking."""
    context = ComposerContext(
        gestational_week=gestational_week,
        zone=zone,
        time_of_day=DayMoment.MORNING,
        presence_days=1,
        baby_name=baby_name,
    )
    return generate_message(context, now=now).message


# =============================================================================
# EXPORTS
# =============================================================================

__all__ = [
    "RESET_THRESHOLD",
    "DEFAULT_BABY_NAMES",
    "ComposerContext",
    "MessageContext",
    "ComposedMessage",
    "NewSeenIds",
    "ComposerOutput",
    "trimester_for_week",
    "normalize_time_of_day",
    "default_baby_name",
    "resolve_baby_name",
    "seeded_rng",
    "pick_unseen",
    "reset_signals",
    "select_opening",
    "select_core",
    "select_closing",
    "generate_message",
    "has_seen_today_message",
    "available_milestones",
    "is_milestone_available",
    "count_possible_combinations",
    "content_stats",
    "generate_preview_message",
]
