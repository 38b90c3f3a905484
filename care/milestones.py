# care/milestones.py
"""
Fluia Care — Celebration Eligibility Gate v1.0.0

Finds the one-time celebrations ("milestones") due on this visit.

Concept:
- Milestones are celebrations, not offers. Each fires at most once ever;
  there is no cooldown.
- Everyone gets the celebration text; subscribers also get a product.
- Only "shown" events count as seen.

Families:
- presence: 7 / 30 / 60 / 100 presence days, plus JOURNEY_COMPLETE once
  postpartum
- gestational: NEW_WEEK whenever the week advanced past the last one seen,
  plus fixed weeks 14, 28, 37 and 40. Skipped entirely once postpartum.

Results are presence first, capped per call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

from care.checkin import DEFAULT_TIMEZONE, now_in
from care.events import MilestoneEvent

logger = logging.getLogger("fluia.milestones")


# =============================================================================
# RULES
# =============================================================================

PRESENCE_THRESHOLDS = (7, 30, 60, 100)
MAX_MILESTONES_PER_EVALUATION = 3

REASON_NONE_PENDING = "no_pending_milestones"

JOURNEY_COMPLETE = "JOURNEY_COMPLETE"
NEW_WEEK = "NEW_WEEK"


# =============================================================================
# TYPES
# =============================================================================

@dataclass(frozen=True)
class MilestoneBadge:
    icon: str
    color: str
    name: str

    def to_dict(self) -> Dict[str, str]:
        return {"icon": self.icon, "color": self.color, "name": self.name}


@dataclass(frozen=True)
class MilestoneProduct:
    product_id: str
    product_type: str
    title: str
    description: str
    premium_only: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "productId": self.product_id,
            "productType": self.product_type,
            "title": self.title,
            "description": self.description,
            "premiumOnly": self.premium_only,
        }


@dataclass(frozen=True)
class MilestoneConfig:
    """
    Static definition of one milestone.

    `threshold` is presence days for the presence family and the exact week
    for the gestational family. JOURNEY_COMPLETE and NEW_WEEK have none.
    Text fields may use {week} and {week_message}.
    """
    type: str
    category: str
    threshold: Optional[int]
    badge: MilestoneBadge
    title: str
    celebration_message: str
    baby_message: str
    product: MilestoneProduct
    tone: str


@dataclass
class MilestoneContext:
    presence_days: int
    gestational_week: int
    is_premium: bool
    is_postpartum: bool
    events: Sequence[MilestoneEvent] = ()
    last_gestational_week: Optional[int] = None
    uid: str = ""


@dataclass(frozen=True)
class MilestoneSuggestion:
    milestone_id: str
    type: str
    category: str
    title: str
    celebration_message: str
    baby_message: str
    badge: MilestoneBadge
    tone: str
    value: int
    label: str
    product: Optional[MilestoneProduct] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "milestoneId": self.milestone_id,
            "type": self.type,
            "category": self.category,
            "title": self.title,
            "celebrationMessage": self.celebration_message,
            "babyMessage": self.baby_message,
            "badge": self.badge.to_dict(),
            "tone": self.tone,
            "contextData": {"value": self.value, "label": self.label},
        }
        if self.product is not None:
            data["product"] = self.product.to_dict()
        return data


@dataclass(frozen=True)
class MilestoneEvaluation:
    milestones: Tuple[MilestoneSuggestion, ...]
    reason: Optional[str] = None

    @property
    def count(self) -> int:
        return len(self.milestones)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "milestones": [m.to_dict() for m in self.milestones],
            "count": self.count,
        }
        if self.reason:
            data["reason"] = self.reason
        return data


# =============================================================================
# CATALOG
# =============================================================================

PRESENCE_MILESTONES: Tuple[MilestoneConfig, ...] = (
    MilestoneConfig(
        type="PRESENCE_7",
        category="presence",
        threshold=7,
        badge=MilestoneBadge("🌱", "#9B8DD3", "First Week"),
        title="7 Days Together!",
        celebration_message="A week of care! You are building a special bond.",
        baby_message="Mom, it's been a week of you caring for both of us. I feel every moment. 💜",
        product=MilestoneProduct(
            "letter-7-days", "special_letter", "'7 Days Together' Letter",
            "A special message from your baby about your first week",
        ),
        tone="celebratory",
    ),
    MilestoneConfig(
        type="PRESENCE_30",
        category="presence",
        threshold=30,
        badge=MilestoneBadge("🌿", "#7BC47F", "A Month of Presence"),
        title="30 Days of Journey!",
        celebration_message="A whole month of making time for you and your baby. That's remarkable!",
        baby_message="Mom, a month! You didn't give up a single day. I feel so loved. 💜",
        product=MilestoneProduct(
            "compilation-30-days", "monthly_compilation", "First Month Compilation",
            "Your month in review, patterns found and emotional progress",
        ),
        tone="celebratory",
    ),
    MilestoneConfig(
        type="PRESENCE_60",
        category="presence",
        threshold=60,
        badge=MilestoneBadge("🌳", "#4A9B5D", "Two Months of Care"),
        title="60 Days of Transformation!",
        celebration_message="Two months on this journey. Look back and see how far you've come!",
        baby_message="Mom, two months of talking every day. I know your voice so well now. 💜",
        product=MilestoneProduct(
            "evolution-60-days", "evolution_report", "Progress Report",
            "Month one compared with month two, plus growth insights",
        ),
        tone="reflective",
    ),
    MilestoneConfig(
        type="PRESENCE_100",
        category="presence",
        threshold=100,
        badge=MilestoneBadge("🌟", "#FFD700", "100 Days of Light"),
        title="100 Days of Presence!",
        celebration_message="One hundred days! You created a habit of love that will shape your bond forever.",
        baby_message="Mom, 100 days. You taught me that presence is the greatest gift. Thank you. 💜",
        product=MilestoneProduct(
            "retrospective-100-days", "retrospective", "Full Retrospective",
            "Timeline, every insight and a celebration of 100 days",
        ),
        tone="emotional",
    ),
    MilestoneConfig(
        type=JOURNEY_COMPLETE,
        category="presence",
        threshold=None,
        badge=MilestoneBadge("👶", "#E8A589", "Journey Complete"),
        title="Your Journey Is Complete!",
        celebration_message="You walked the whole pregnancy journey with us. A new chapter begins!",
        baby_message="Mom, I'm here! You were with me every step of the way. Now we're truly together. 💜",
        product=MilestoneProduct(
            "certificate-journey", "certificate", "Journey Certificate",
            "Completion keepsake, statistics and a final message",
        ),
        tone="emotional",
    ),
)

GESTATIONAL_MILESTONES: Tuple[MilestoneConfig, ...] = (
    MilestoneConfig(
        type=NEW_WEEK,
        category="gestational",
        threshold=None,
        badge=MilestoneBadge("📅", "#9B8DD3", "New Week"),
        title="Week {week}!",
        celebration_message="A new week of development. Your baby is growing!",
        baby_message="Mom, I'm in week {week}! {week_message}",
        product=MilestoneProduct(
            "week-letter", "week_letter", "Week {week} Letter",
            "What is happening with me this week, plus a special message",
        ),
        tone="celebratory",
    ),
    MilestoneConfig(
        type="TRIMESTER_1_END",
        category="gestational",
        threshold=14,
        badge=MilestoneBadge("🎉", "#FF9B9B", "First Trimester Done"),
        title="First Trimester Complete!",
        celebration_message="The first trimester is over! Nausea tends to ease and energy returns. You did it!",
        baby_message="Mom, we made it through the first three months together! I'm stronger now, and so are you. 💜",
        product=MilestoneProduct(
            "trimester-1-closure", "trimester_closure", "First Trimester Closure",
            "Emotional look back, progress and preparation for the second trimester",
        ),
        tone="celebratory",
    ),
    MilestoneConfig(
        type="TRIMESTER_2_END",
        category="gestational",
        threshold=28,
        badge=MilestoneBadge("🌟", "#FFD93D", "Second Trimester Done"),
        title="Second Trimester Complete!",
        celebration_message="Two trimesters! You're in the final stretch. Your baby already knows your voice.",
        baby_message="Mom, I can hear you! When you talk, I move. We're almost there. 💜",
        product=MilestoneProduct(
            "trimester-2-closure", "trimester_closure", "Second Trimester Closure",
            "Look back, preparing for the arrival and a connection ritual",
        ),
        tone="reflective",
    ),
    MilestoneConfig(
        type="TERM_37",
        category="gestational",
        threshold=37,
        badge=MilestoneBadge("🍼", "#87CEEB", "Full Term"),
        title="Week 37, Full Term!",
        celebration_message="Your baby is full term and could arrive any time. You are ready.",
        baby_message="Mom, I'm ready! I could come any moment. I can't wait to meet you. 💜",
        product=MilestoneProduct(
            "term-special", "term_special", "'Almost There' Special",
            "Emotional preparation, a welcome ritual and a message for the meeting",
        ),
        tone="emotional",
    ),
    MilestoneConfig(
        type="DUE_DATE_40",
        category="gestational",
        threshold=40,
        badge=MilestoneBadge("💜", "#9B8DD3", "Due Date"),
        title="Due Date, Week 40!",
        celebration_message="The due date is here! Every moment now is special. Trust your body.",
        baby_message="Mom, it's our day! If I haven't come yet, I'm getting ready. See you soon. 💜",
        product=MilestoneProduct(
            "journey-book", "journey_book", "Journey Book",
            "Your whole pregnancy journey, collected in one place",
        ),
        tone="emotional",
    ),
)

WEEK_MESSAGES: Dict[int, str] = {
    4: "I just nestled into your womb!",
    5: "My little heart is starting to form.",
    6: "My heart started beating!",
    7: "I'm about the size of a blueberry.",
    8: "My tiny fingers are forming.",
    9: "I'm starting to move, though you can't feel it yet.",
    10: "All my main organs are in place!",
    11: "I'm about the size of a lime.",
    12: "My reflexes are developing.",
    13: "I can make faces now!",
    14: "I'm starting to suck my thumb.",
    15: "My unique fingerprints are forming.",
    16: "My bones are getting stronger.",
    17: "You might start feeling me soon!",
    18: "I can already hear sounds!",
    19: "I'm covered in soft, fine hair.",
    20: "We're halfway there, Mom!",
    21: "My movements are more coordinated.",
    22: "I'm developing my sense of touch.",
    23: "I recognize your voice among all the others.",
    24: "My face is almost fully formed.",
    25: "I'm gaining weight quickly!",
    26: "My eyes are starting to open.",
    27: "I can get hiccups now, and you can feel them!",
    28: "I already dream in your belly.",
    29: "I'm getting chubbier.",
    30: "My brain is growing very fast.",
    31: "I'm practicing breathing.",
    32: "I'm turning head down, getting ready.",
    33: "My bones are hardening, except my skull.",
    34: "I'm almost the size I'll be at birth!",
    35: "My kidneys are fully developed.",
    36: "I'm shedding my fine hair.",
    37: "I'm full term! I could arrive any moment.",
    38: "I'm practicing grabbing things.",
    39: "My lungs are ready to breathe.",
    40: "It's our day! See you soon, Mom.",
    41: "I'm still cozy in here, but I'll meet you soon.",
    42: "I'm so ready to meet you!",
}
DEFAULT_WEEK_MESSAGE = "I'm growing and developing!"


# =============================================================================
# HELPERS
# =============================================================================

def _epoch_ms(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def has_seen(
    events: Sequence[MilestoneEvent],
    milestone_type: str,
    category: str,
    week: Optional[int] = None,
) -> bool:
    """
    Whether a milestone was already shown.

    For NEW_WEEK pass `week`: only an event for that same week counts.
    """
    for event in events:
        if event.type != milestone_type or event.category != category:
            continue
        if event.action != "shown":
            continue
        if milestone_type == NEW_WEEK and week is not None:
            if event.gestational_week == week:
                return True
            continue
        return True
    return False


def _interpolate(template: str, week: int) -> str:
    return template.format(
        week=week,
        week_message=WEEK_MESSAGES.get(week, DEFAULT_WEEK_MESSAGE),
    )


# -----------------------------------------------------------------------------
# Suggestions
# -----------------------------------------------------------------------------

def _presence_suggestion(config: MilestoneConfig, context: MilestoneContext, now: datetime) -> MilestoneSuggestion:
    if config.threshold is None:
        value, label = -1, "Journey complete"
    else:
        value, label = config.threshold, f"{config.threshold} days"
    return MilestoneSuggestion(
        milestone_id=f"{config.type}-{_epoch_ms(now)}",
        type=config.type,
        category=config.category,
        title=config.title,
        celebration_message=config.celebration_message,
        baby_message=config.baby_message,
        badge=config.badge,
        tone=config.tone,
        value=value,
        label=label,
        product=config.product if context.is_premium else None,
    )


def _gestational_suggestion(config: MilestoneConfig, context: MilestoneContext, now: datetime) -> MilestoneSuggestion:
    week = context.gestational_week
    badge = config.badge
    product = None
    if config.type == NEW_WEEK:
        badge = replace(badge, name=f"Week {week}")
    if context.is_premium:
        product = replace(config.product, title=_interpolate(config.product.title, week))
        if config.type == NEW_WEEK:
            product = replace(product, product_id=f"week-letter-{week}")

    return MilestoneSuggestion(
        milestone_id=f"{config.type}-{week}-{_epoch_ms(now)}",
        type=config.type,
        category=config.category,
        title=_interpolate(config.title, week),
        celebration_message=_interpolate(config.celebration_message, week),
        baby_message=_interpolate(config.baby_message, week),
        badge=badge,
        tone=config.tone,
        value=week,
        label=f"Week {week}",
        product=product,
    )


# =============================================================================
# EVALUATION
# =============================================================================

def evaluate_presence_milestones(context: MilestoneContext, now: datetime) -> List[MilestoneSuggestion]:
    results = []
    for config in PRESENCE_MILESTONES:
        if config.type == JOURNEY_COMPLETE:
            if context.is_postpartum and not has_seen(context.events, config.type, "presence"):
                results.append(_presence_suggestion(config, context, now))
            continue
        if context.presence_days < config.threshold:
            continue
        if has_seen(context.events, config.type, "presence"):
            continue
        results.append(_presence_suggestion(config, context, now))
    return results


def evaluate_gestational_milestones(context: MilestoneContext, now: datetime) -> List[MilestoneSuggestion]:
    if context.is_postpartum:
        return []

    week = context.gestational_week
    results = []
    for config in GESTATIONAL_MILESTONES:
        if config.type == NEW_WEEK:
            advanced = (
                context.last_gestational_week is not None
                and week > context.last_gestational_week
            )
            if advanced and not has_seen(context.events, NEW_WEEK, "gestational", week):
                results.append(_gestational_suggestion(config, context, now))
            continue
        if week != config.threshold:
            continue
        if has_seen(context.events, config.type, "gestational"):
            continue
        results.append(_gestational_suggestion(config, context, now))
    return results


def evaluate_milestones(
    context: MilestoneContext,
    now: Optional[datetime] = None,
    timezone: str = DEFAULT_TIMEZONE,
) -> MilestoneEvaluation:
    """
    Every milestone due on this visit, presence family first, capped at
    MAX_MILESTONES_PER_EVALUATION.
    """
    now = now or now_in(timezone)
    found = evaluate_presence_milestones(context, now) + evaluate_gestational_milestones(context, now)
    found = found[:MAX_MILESTONES_PER_EVALUATION]

    if not found:
        logger.debug("no pending milestones")
        return MilestoneEvaluation(milestones=(), reason=REASON_NONE_PENDING)

    logger.debug("milestones due: %s", [m.type for m in found])
    return MilestoneEvaluation(milestones=tuple(found))


def get_milestone_config(milestone_type: str) -> Optional[MilestoneConfig]:
    for config in PRESENCE_MILESTONES + GESTATIONAL_MILESTONES:
        if config.type == milestone_type:
            return config
    return None


__all__ = [
    "PRESENCE_THRESHOLDS",
    "MAX_MILESTONES_PER_EVALUATION",
    "REASON_NONE_PENDING",
    "MilestoneBadge",
    "MilestoneProduct",
    "MilestoneConfig",
    "MilestoneContext",
    "MilestoneSuggestion",
    "MilestoneEvaluation",
    "PRESENCE_MILESTONES",
    "GESTATIONAL_MILESTONES",
    "WEEK_MESSAGES",
    "has_seen",
    "evaluate_presence_milestones",
    "evaluate_gestational_milestones",
    "evaluate_milestones",
    "get_milestone_config",
]
