# care/micromoments.py
"""
Fluia Care — Transactional Eligibility Gate v1.0.0

Decides whether a recurring upsell suggestion ("micromoment") may be shown
on this visit. At most one suggestion per call.

Rules:
- Presence days (check-ins) measure intent; completed journeys measure
  transformation. The weekly report needs both.
- Hard blocks run in a fixed order and the first one wins.
- When nothing blocks, candidate types are tried by priority MM4 > MM3 > MM2.

The event log is the only temporal truth. "Today" is the day key of `now`
in the configured timezone (the day rolls over at 04:00).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, FrozenSet, Optional, Sequence, Tuple

from care.checkin import (
    DEFAULT_DAY_RESET_HOUR,
    DEFAULT_TIMEZONE,
    day_of,
    now_in,
    to_local,
)
from care.events import MicromomentEvent
from care.rules import Rule, first_match

logger = logging.getLogger("fluia.micromoments")


# =============================================================================
# RULES
# =============================================================================

GRACE_PERIOD_PRESENCE = 7
BLOCK_RISK_LEVEL = 4
MAX_PER_DAY = 1
MAX_PER_WEEK = 2
WEEK_WINDOW_DAYS = 7
COOLDOWN_AFTER_ACCEPT_DAYS = 7
COOLDOWN_AFTER_DISMISS_DAYS = 3
MM4_MIN_COMPLETED_JOURNEYS = 7

REASON_PREMIUM = "premium_user"
REASON_GRACE = "grace_period"
REASON_RISK = "risk_level_high"
REASON_MAX_DAY = "max_per_day"
REASON_MAX_WEEK = "max_per_week"
REASON_COOLDOWN_ACCEPT = "cooldown_after_accept"
REASON_COOLDOWN_DISMISS = "cooldown_after_dismiss"
REASON_FIRST_ACCESS = "first_access_today"
REASON_NO_CHECKIN = "no_checkin_today"
REASON_NO_TYPE = "no_eligible_type"


@dataclass(frozen=True)
class MicromomentTrigger:
    type: str
    zones: FrozenSet[int]
    min_presence_days: int
    requires_practice: bool = False
    pillars: Optional[FrozenSet[str]] = None
    min_completed_journeys: int = 0


ALL_ZONES = frozenset({1, 2, 3, 4, 5})

# Priority order
TRIGGERS: Tuple[MicromomentTrigger, ...] = (
    # Weekly report: needs real data
    MicromomentTrigger(
        type="MM4",
        zones=ALL_ZONES,
        min_presence_days=7,
        requires_practice=True,
        min_completed_journeys=MM4_MIN_COMPLETED_JOURNEYS,
    ),
    # Practice interpretation
    MicromomentTrigger(
        type="MM3",
        zones=ALL_ZONES,
        min_presence_days=7,
        requires_practice=True,
        pillars=frozenset({"BS", "RE", "RS"}),
    ),
    # Connection rituals: stable or strengthened days only
    MicromomentTrigger(
        type="MM2",
        zones=frozenset({4, 5}),
        min_presence_days=7,
    ),
)

CONTENT: Dict[str, Dict[str, str]] = {
    "MM2": {
        "title": "Connection Rituals",
        "message": "Special moments to strengthen the bond with your baby, even on the most intense days.",
        "tone": "gentle",
        "reason": "You are going through an intense moment",
    },
    "MM3": {
        "title": "Understanding Your Practice",
        "message": "See what today's practice reveals about your emotional journey.",
        "tone": "reflective",
        "reason": "Today's practice deserves a deeper reflection",
    },
    "MM4": {
        "title": "Your Weekly Report",
        "message": "A week of care! See what your journey reveals about you and your baby.",
        "tone": "reflective",
        "reason": "7 days of completed journeys",
    },
}


# =============================================================================
# TYPES
# =============================================================================

@dataclass
class MicromomentContext:
    """Live context for one evaluation. `events` is the caller's log snapshot."""
    presence_days: int
    completed_journeys: int
    zone: int
    risk_level: int
    practice_completed_today: bool
    is_first_access_today: bool
    has_checkin_today: bool
    is_premium: bool
    events: Sequence[MicromomentEvent] = ()
    pillar: Optional[str] = None
    uid: str = ""


@dataclass(frozen=True)
class MicromomentSuggestion:
    micromoment_id: str
    type: str
    title: str
    message: str
    tone: str
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "micromomentId": self.micromoment_id,
            "type": self.type,
            "title": self.title,
            "message": self.message,
            "tone": self.tone,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class MicromomentEvaluation:
    eligible: bool
    suggestion: Optional[MicromomentSuggestion] = None
    reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "eligible": self.eligible,
            "suggestion": self.suggestion.to_dict() if self.suggestion else None,
        }
        if self.reason:
            data["reason"] = self.reason
        return data


# =============================================================================
# EVENT WINDOWS
# =============================================================================

@dataclass(frozen=True)
class _GateView:
    """Context plus the counts derived from the event log."""
    context: MicromomentContext
    shown_today: int
    shown_this_week: int
    days_since_accept: Optional[int]
    days_since_dismiss: Optional[int]


def _elapsed_days(now: datetime, then: datetime) -> int:
    return (now - then) // timedelta(days=1)


def _latest(events: Sequence[MicromomentEvent], action: str, timezone: str) -> Optional[datetime]:
    """Local timestamp of the most recent event with `action`."""
    stamps = [to_local(e.timestamp, timezone) for e in events if e.action == action]
    return max(stamps) if stamps else None


def _build_view(
    context: MicromomentContext,
    now: datetime,
    timezone: str,
    reset_hour: int,
) -> _GateView:
    local_now = to_local(now, timezone)
    today = day_of(local_now, timezone, reset_hour)

    shown = [to_local(e.timestamp, timezone) for e in context.events if e.action == "shown"]
    shown_today = sum(1 for ts in shown if day_of(ts, timezone, reset_hour) == today)
    shown_this_week = sum(
        1 for ts in shown
        if abs(_elapsed_days(local_now, ts)) < WEEK_WINDOW_DAYS
    )

    last_accept = _latest(context.events, "accept", timezone)
    last_dismiss = _latest(context.events, "dismiss", timezone)

    return _GateView(
        context=context,
        shown_today=shown_today,
        shown_this_week=shown_this_week,
        days_since_accept=(
            _elapsed_days(local_now, last_accept) if last_accept else None
        ),
        days_since_dismiss=(
            _elapsed_days(local_now, last_dismiss) if last_dismiss else None
        ),
    )


# =============================================================================
# HARD BLOCKS
# =============================================================================

def _in_cooldown(days: Optional[int], length: int) -> bool:
    return days is not None and days < length


# Strict order; the first block that holds is the reason
BLOCK_RULES: Tuple[Rule, ...] = (
    Rule(REASON_PREMIUM, lambda v: v.context.is_premium, REASON_PREMIUM),
    Rule(REASON_GRACE, lambda v: v.context.presence_days < GRACE_PERIOD_PRESENCE, REASON_GRACE),
    Rule(REASON_RISK, lambda v: v.context.risk_level >= BLOCK_RISK_LEVEL, REASON_RISK),
    Rule(REASON_MAX_DAY, lambda v: v.shown_today >= MAX_PER_DAY, REASON_MAX_DAY),
    Rule(REASON_MAX_WEEK, lambda v: v.shown_this_week >= MAX_PER_WEEK, REASON_MAX_WEEK),
    Rule(REASON_COOLDOWN_ACCEPT,
         lambda v: _in_cooldown(v.days_since_accept, COOLDOWN_AFTER_ACCEPT_DAYS),
         REASON_COOLDOWN_ACCEPT),
    Rule(REASON_COOLDOWN_DISMISS,
         lambda v: _in_cooldown(v.days_since_dismiss, COOLDOWN_AFTER_DISMISS_DAYS),
         REASON_COOLDOWN_DISMISS),
    Rule(REASON_FIRST_ACCESS, lambda v: v.context.is_first_access_today, REASON_FIRST_ACCESS),
    Rule(REASON_NO_CHECKIN, lambda v: not v.context.has_checkin_today, REASON_NO_CHECKIN),
)


# =============================================================================
# CANDIDATES
# =============================================================================

def trigger_holds(trigger: MicromomentTrigger, context: MicromomentContext) -> bool:
    if context.presence_days < trigger.min_presence_days:
        return False
    if context.zone not in trigger.zones:
        return False
    if trigger.pillars is not None and context.pillar and context.pillar not in trigger.pillars:
        return False
    if trigger.requires_practice and not context.practice_completed_today:
        return False
    if context.completed_journeys < trigger.min_completed_journeys:
        return False
    return True


def create_suggestion(micromoment_type: str, now: datetime) -> MicromomentSuggestion:
    content = CONTENT[micromoment_type]
    return MicromomentSuggestion(
        micromoment_id=f"{micromoment_type}-{int(now.timestamp() * 1000)}",
        type=micromoment_type,
        title=content["title"],
        message=content["message"],
        tone=content["tone"],
        reason=content["reason"],
    )


# =============================================================================
# MAIN
# =============================================================================

def evaluate_micromoment(
    context: MicromomentContext,
    now: Optional[datetime] = None,
    timezone: str = DEFAULT_TIMEZONE,
    reset_hour: int = DEFAULT_DAY_RESET_HOUR,
) -> MicromomentEvaluation:
    """
    Evaluate the transactional gate for one visit.

    Returns an eligible result with exactly one suggestion, or an
    ineligible one carrying the blocking reason.
    """
    now = now or now_in(timezone)
    view = _build_view(context, now, timezone, reset_hour)

    blocked = first_match(BLOCK_RULES, view)
    if blocked:
        logger.debug("micromoment blocked: %s", blocked)
        return MicromomentEvaluation(eligible=False, reason=blocked)

    for trigger in TRIGGERS:
        if trigger_holds(trigger, context):
            suggestion = create_suggestion(trigger.type, now)
            logger.debug("micromoment eligible: %s", suggestion.micromoment_id)
            return MicromomentEvaluation(eligible=True, suggestion=suggestion)

    logger.debug("micromoment blocked: %s", REASON_NO_TYPE)
    return MicromomentEvaluation(eligible=False, reason=REASON_NO_TYPE)


__all__ = [
    "GRACE_PERIOD_PRESENCE",
    "BLOCK_RISK_LEVEL",
    "MAX_PER_DAY",
    "MAX_PER_WEEK",
    "COOLDOWN_AFTER_ACCEPT_DAYS",
    "COOLDOWN_AFTER_DISMISS_DAYS",
    "MicromomentTrigger",
    "TRIGGERS",
    "BLOCK_RULES",
    "MicromomentContext",
    "MicromomentSuggestion",
    "MicromomentEvaluation",
    "trigger_holds",
    "create_suggestion",
    "evaluate_micromoment",
]
