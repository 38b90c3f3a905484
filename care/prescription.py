# care/prescription.py
"""
Fluia Care — Prescription Generator v1.0.0

Builds the daily care prescription:
1. Detect problems (zone, flags, low metrics) and order them by priority
2. Pick practices for the most urgent problems, never repeating a type
3. Decide the tone and the goal text for the day

Problem detection, tone and goal are ordered rule tables (see care.rules)
so the priority order can be read top to bottom. Always returns at least
one practice.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Sequence, Tuple

from care.checkin import DayMoment
from care.emotional_state import (
    EmotionalState,
    FLAG_EMOTIONAL_DISTANCE,
    FLAG_LOW_ENERGY,
    FLAG_OVERLOAD,
    FLAG_PHYSICAL_DISCOMFORT,
)
from care.metrics import Metrics
from care.rules import Rule, all_matches, first_match
from care.training_catalog import (
    FALLBACK_TRAINING_ID,
    TRAINING_CATALOG,
    TrainingTemplate,
    get_training_by_id,
)

logger = logging.getLogger("fluia.prescription")


# =============================================================================
# TYPES
# =============================================================================

ProblemType = Literal["zone", "flag", "metric"]
PrescriptionTone = Literal["compassionate", "gentle", "balanced", "encouraging", "celebratory"]

LOW_METRIC_THRESHOLD = 40
MICRO_PRESCRIPTION_MINUTES = 3


@dataclass(frozen=True)
class DetectedProblem:
    """
    A reason to care, found in today's state.

    priority: 0 is the most urgent. Fresh per evaluation, never stored.
    """
    type: ProblemType
    issue: str
    priority: int
    recommended_types: Tuple[str, ...]
    value: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "type": self.type,
            "issue": self.issue,
            "priority": self.priority,
            "recommendedTypes": list(self.recommended_types),
        }
        if self.value is not None:
            data["value"] = self.value
        return data


@dataclass(frozen=True)
class TrainingPrescription:
    id: str
    type: str
    title: str
    description: str
    why: str
    duration_minutes: int
    intensity: str
    focus_metric: str
    targets_problem: str

    @classmethod
    def from_template(cls, template: TrainingTemplate, targets_problem: str) -> "TrainingPrescription":
        return cls(
            id=template.id,
            type=template.type,
            title=template.title,
            description=template.description,
            why=template.why,
            duration_minutes=template.duration_minutes,
            intensity=template.intensity,
            focus_metric=template.focus_metric,
            targets_problem=targets_problem,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "title": self.title,
            "description": self.description,
            "why": self.why,
            "durationMinutes": self.duration_minutes,
            "intensity": self.intensity,
            "focusMetric": self.focus_metric,
            "targetsProblem": self.targets_problem,
        }


@dataclass(frozen=True)
class DailyPrescription:
    trainings: Tuple[TrainingPrescription, ...]
    goal: str
    tone: PrescriptionTone
    detected_problems: Tuple[DetectedProblem, ...] = field(default_factory=tuple)
    is_first_checkin: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "trainings": [t.to_dict() for t in self.trainings],
            "goal": self.goal,
            "tone": self.tone,
            "detectedProblems": [p.to_dict() for p in self.detected_problems],
            "isFirstCheckIn": self.is_first_checkin,
        }


# =============================================================================
# PROBLEM DETECTION
# =============================================================================

# Priority tiers
PRIORITY_ZONE = 0
PRIORITY_FLAG = 1
PRIORITY_METRIC = 2
PRIORITY_OPPORTUNITY = 3

# Practice types that help each low metric (RE, BS, RS, CA order)
METRIC_RECOMMENDED_TYPES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("RE", ("mindfulness", "reflection", "breathing")),
    ("BS", ("grounding-body", "body-scan")),
    ("RS", ("resilience", "boundary", "breathing")),
    ("CA", ("bonding", "bond", "gratitude")),
)

# Tiers 0 and 1: evaluated against the emotional state
STATE_PROBLEM_RULES: Tuple[Rule, ...] = (
    Rule(
        "lowZone",
        lambda s: s.zone <= 2,
        DetectedProblem("zone", "lowZone", PRIORITY_ZONE,
                        ("grounding-body", "self-compassion", "breathing", "pause-micro")),
    ),
    Rule(
        FLAG_OVERLOAD,
        lambda s: s.has_flag(FLAG_OVERLOAD),
        DetectedProblem("flag", FLAG_OVERLOAD, PRIORITY_FLAG,
                        ("pause-micro", "boundary", "grounding-body")),
    ),
    Rule(
        FLAG_LOW_ENERGY,
        lambda s: s.has_flag(FLAG_LOW_ENERGY),
        DetectedProblem("flag", FLAG_LOW_ENERGY, PRIORITY_FLAG,
                        ("pause-micro", "breathing")),
    ),
    Rule(
        FLAG_PHYSICAL_DISCOMFORT,
        lambda s: s.has_flag(FLAG_PHYSICAL_DISCOMFORT),
        DetectedProblem("flag", FLAG_PHYSICAL_DISCOMFORT, PRIORITY_FLAG,
                        ("grounding-body", "body-scan")),
    ),
    Rule(
        FLAG_EMOTIONAL_DISTANCE,
        lambda s: s.has_flag(FLAG_EMOTIONAL_DISTANCE),
        DetectedProblem("flag", FLAG_EMOTIONAL_DISTANCE, PRIORITY_FLAG,
                        ("bonding", "bond")),
    ),
)

# Tier 3: growth opportunity
OPPORTUNITY_RULES: Tuple[Rule, ...] = (
    Rule(
        "highZone",
        lambda s: s.zone >= 4,
        DetectedProblem("zone", "highZone", PRIORITY_OPPORTUNITY,
                        ("gratitude", "bonding", "breathing")),
    ),
)


def _metric_problems(metrics: Metrics) -> List[DetectedProblem]:
    low = [
        (metrics.get(key), index, key, types)
        for index, (key, types) in enumerate(METRIC_RECOMMENDED_TYPES)
        if metrics.get(key) < LOW_METRIC_THRESHOLD
    ]
    low.sort(key=lambda entry: (entry[0], entry[1]))
    return [
        DetectedProblem("metric", f"low{key}", PRIORITY_METRIC, types, value=value)
        for value, _, key, types in low
    ]


def detect_problems(state: EmotionalState, metrics: Metrics) -> List[DetectedProblem]:
    """
    Problems ordered by priority (0 first).

    Low metrics are ordered lowest value first.
    """
    problems: List[DetectedProblem] = []
    problems.extend(all_matches(STATE_PROBLEM_RULES, state))
    problems.extend(_metric_problems(metrics))
    problems.extend(all_matches(OPPORTUNITY_RULES, state))
    problems.sort(key=lambda p: p.priority)
    return problems


# =============================================================================
# TRAINING SELECTION
# =============================================================================

def target_training_count(zone: int, problems: Sequence[DetectedProblem]) -> int:
    """1 when vulnerable, 2 at zone 3, otherwise 3."""
    if zone <= 2 or any(p.issue == FLAG_OVERLOAD for p in problems):
        return 1
    if zone == 3:
        return 2
    return 3


def select_training_for_problem(
    problem: DetectedProblem,
    zone: int,
    exclude_types: Sequence[str] = (),
) -> Optional[TrainingTemplate]:
    candidates = [
        t for t in TRAINING_CATALOG
        if (problem.issue in t.best_for or t.type in problem.recommended_types)
        and t.fits_zone(zone)
        and t.type not in exclude_types
    ]

    if not candidates:
        # Any practice that suits the zone
        for t in TRAINING_CATALOG:
            if t.fits_zone(zone) and t.type not in exclude_types:
                return t
        return None

    if zone <= 2:
        gentle = [t for t in candidates if t.is_gentle]
        if gentle:
            return gentle[0]

    return candidates[0]


def select_trainings(problems: Sequence[DetectedProblem], zone: int) -> List[TrainingPrescription]:
    limit = target_training_count(zone, problems)
    trainings: List[TrainingPrescription] = []
    used_types: List[str] = []

    for problem in problems:
        if len(trainings) >= limit:
            break
        template = select_training_for_problem(problem, zone, used_types)
        if template is None:
            continue
        trainings.append(TrainingPrescription.from_template(template, problem.issue))
        used_types.append(template.type)

    if not trainings:
        fallback = get_training_by_id(FALLBACK_TRAINING_ID)
        trainings.append(TrainingPrescription.from_template(fallback, "default"))

    return trainings


# =============================================================================
# TONE & GOAL
# =============================================================================

@dataclass(frozen=True)
class _DecisionContext:
    zone: int
    problems: Tuple[DetectedProblem, ...]

    def has_issue(self, issue: str) -> bool:
        return any(p.issue == issue for p in self.problems)

    def first_metric_problem(self) -> Optional[DetectedProblem]:
        for p in self.problems:
            if p.type == "metric":
                return p
        return None


TONE_RULES: Tuple[Rule, ...] = (
    Rule("lowZone", lambda c: c.zone <= 2, "compassionate"),
    Rule("manyProblems", lambda c: len(c.problems) >= 3, "gentle"),
    Rule("midZone", lambda c: c.zone == 3, "balanced"),
    Rule("goodZone", lambda c: c.zone == 4, "encouraging"),
)
DEFAULT_TONE: PrescriptionTone = "celebratory"

METRIC_GOALS = {
    "lowRE": "Let's work on steadying your emotions, at your own pace.",
    "lowBS": "Let's strengthen your sense of safety and grounding.",
    "lowRS": "Let's build resilience, one small step at a time.",
    "lowCA": "Let's nurture the bond with your baby today.",
}
METRIC_GOAL_FALLBACK = "Let's take care of you today."

GOAL_RULES: Tuple[Rule, ...] = (
    Rule("lowZone", lambda c: c.zone <= 2,
         "Today the focus is presence and comfort. No pressure, no hurry."),
    Rule(FLAG_OVERLOAD, lambda c: c.has_issue(FLAG_OVERLOAD),
         "Let's ease the overload. You don't have to handle everything."),
    Rule(FLAG_LOW_ENERGY, lambda c: c.has_issue(FLAG_LOW_ENERGY),
         "Let's restore your energy, one step at a time."),
    Rule("lowMetric", lambda c: c.first_metric_problem() is not None,
         lambda c: METRIC_GOALS.get(c.first_metric_problem().issue, METRIC_GOAL_FALLBACK)),
    Rule("highZone", lambda c: c.zone >= 4,
         "You're doing well! Let's use this moment to grow even stronger."),
)
DEFAULT_GOAL = "A day of care and presence is waiting for you."


def determine_tone(zone: int, problems: Sequence[DetectedProblem]) -> PrescriptionTone:
    return first_match(TONE_RULES, _DecisionContext(zone, tuple(problems)), DEFAULT_TONE)


def generate_goal(zone: int, problems: Sequence[DetectedProblem]) -> str:
    return first_match(GOAL_RULES, _DecisionContext(zone, tuple(problems)), DEFAULT_GOAL)


# =============================================================================
# MAIN
# =============================================================================

def generate_prescription(
    metrics: Metrics,
    state: EmotionalState,
    moment: Optional[DayMoment] = None,
    is_first_checkin: bool = False,
    gestational_week: Optional[int] = None,
) -> DailyPrescription:
    """
    Generate today's prescription from metrics and state.

    `moment` and `gestational_week` are carried as context only.
    """
    problems = detect_problems(state, metrics)
    trainings = select_trainings(problems, state.zone)
    tone = determine_tone(state.zone, problems)
    goal = generate_goal(state.zone, problems)

    logger.debug(
        "zone=%d problems=%s trainings=%s tone=%s",
        state.zone, [p.issue for p in problems], [t.id for t in trainings], tone,
    )

    return DailyPrescription(
        trainings=tuple(trainings),
        goal=goal,
        tone=tone,
        detected_problems=tuple(problems),
        is_first_checkin=is_first_checkin,
    )


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------

def total_duration(prescription: DailyPrescription) -> int:
    return sum(t.duration_minutes for t in prescription.trainings)


def is_micro_prescription(prescription: DailyPrescription) -> bool:
    """Three minutes or less in total."""
    return total_duration(prescription) <= MICRO_PRESCRIPTION_MINUTES


TONE_LABELS = {
    "compassionate": "Compassionate",
    "gentle": "Gentle",
    "balanced": "Balanced",
    "encouraging": "Encouraging",
    "celebratory": "Celebratory",
}


def tone_label(tone: str) -> str:
    return TONE_LABELS.get(tone, tone)


# =============================================================================
# EXPORTS
# =============================================================================

__all__ = [
    "PrescriptionTone",
    "DetectedProblem",
    "TrainingPrescription",
    "DailyPrescription",
    "LOW_METRIC_THRESHOLD",
    "STATE_PROBLEM_RULES",
    "TONE_RULES",
    "GOAL_RULES",
    "detect_problems",
    "target_training_count",
    "select_training_for_problem",
    "select_trainings",
    "determine_tone",
    "generate_goal",
    "generate_prescription",
    "total_duration",
    "is_micro_prescription",
    "tone_label",
]
