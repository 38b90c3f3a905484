# care/pipeline.py
"""
Fluia Care — Pipelines v1.0.0

Two entry points for the outer layer:

- run_care_pipeline: one check-in through State Deriver -> Metrics
  Calculator -> Prescription Generator
- evaluate_visit: one visit through the Content Composer (always) and both
  eligibility gates (only once today's check-in exists)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from care.checkin import (
    DEFAULT_DAY_RESET_HOUR,
    DEFAULT_TIMEZONE,
    CheckinDimensions,
    DayMoment,
    now_in,
)
from care.composer import ComposerContext, ComposerOutput, generate_message
from care.emotional_state import EmotionalState, derive_emotional_state
from care.metrics import Metrics, calculate_metrics
from care.micromoments import MicromomentContext, MicromomentEvaluation, evaluate_micromoment
from care.milestones import MilestoneContext, MilestoneEvaluation, evaluate_milestones
from care.prescription import DailyPrescription, generate_prescription

logger = logging.getLogger("fluia.pipeline")


@dataclass(frozen=True)
class CareResult:
    state: EmotionalState
    metrics: Metrics
    prescription: DailyPrescription

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state.to_dict(),
            "metrics": self.metrics.to_dict(),
            "prescription": self.prescription.to_dict(),
        }


def run_care_pipeline(
    checkin: CheckinDimensions,
    baseline: Optional[Dict[str, Any]] = None,
    moment: Optional[DayMoment] = None,
    gestational_week: Optional[int] = None,
    is_first_checkin: bool = False,
) -> CareResult:
    state = derive_emotional_state(checkin, gestational_week, moment)
    metrics = calculate_metrics(state, checkin, baseline)
    prescription = generate_prescription(
        metrics,
        state,
        moment=moment,
        is_first_checkin=is_first_checkin,
        gestational_week=gestational_week,
    )
    logger.info(
        "care pipeline zone=%d trainings=%d tone=%s",
        state.zone, len(prescription.trainings), prescription.tone,
    )
    return CareResult(state=state, metrics=metrics, prescription=prescription)


@dataclass(frozen=True)
class VisitResult:
    message: ComposerOutput
    micromoment: Optional[MicromomentEvaluation] = None
    milestones: Optional[MilestoneEvaluation] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message.to_dict(),
            "micromoment": self.micromoment.to_dict() if self.micromoment else None,
            "milestones": self.milestones.to_dict() if self.milestones else None,
        }


def evaluate_visit(
    composer_context: ComposerContext,
    micromoment_context: Optional[MicromomentContext] = None,
    milestone_context: Optional[MilestoneContext] = None,
    has_checkin_today: bool = False,
    now: Optional[datetime] = None,
    timezone: str = DEFAULT_TIMEZONE,
    reset_hour: int = DEFAULT_DAY_RESET_HOUR,
) -> VisitResult:
    """
    Evaluate everything a visit can show.

    The gates are skipped until today's check-in exists; a gate whose
    context is not given is skipped too.
    """
    now = now or now_in(timezone)
    message = generate_message(composer_context, now=now, timezone=timezone, reset_hour=reset_hour)

    if not has_checkin_today:
        return VisitResult(message=message)

    micromoment = None
    if micromoment_context is not None:
        micromoment = evaluate_micromoment(micromoment_context, now=now, timezone=timezone, reset_hour=reset_hour)

    milestones = None
    if milestone_context is not None:
        milestones = evaluate_milestones(milestone_context, now=now, timezone=timezone)

    return VisitResult(message=message, micromoment=micromoment, milestones=milestones)


__all__ = [
    "CareResult",
    "VisitResult",
    "run_care_pipeline",
    "evaluate_visit",
]
