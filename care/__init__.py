# care/__init__.py
"""
Fluia Care — Core Package

Deterministic pregnancy-care engine.

Contains:
- checkin: check-in dimensions, day keys, presence bookkeeping
- emotional_state: State Deriver (zone, intensity, coherence, flags)
- metrics: Metrics Calculator (RE / BS / RS / CA on 0-100)
- prescription: Prescription Generator over the training catalog
- composer: Content Composer for the daily baby-voice message
- micromoments: transactional eligibility gate
- milestones: celebration eligibility gate
- pipeline: check-in and visit entry points
- validate: payload boundary checks

Pure functions only: no I/O, no persistence, no clock reads when `now`
is given.
"""

from care.checkin import (
    CheckinDimensions,
    DayMoment,
    PresenceData,
    DEFAULT_TIMEZONE,
    DEFAULT_DAY_RESET_HOUR,
    date_key,
    day_of,
    update_presence_after_checkin,
)

from care.emotional_state import (
    EmotionalState,
    derive_emotional_state,
    is_vulnerable_state,
    is_stable_state,
)

from care.metrics import (
    Metrics,
    calculate_metrics,
    calculate_metric_trends,
)

from care.prescription import (
    DailyPrescription,
    TrainingPrescription,
    DetectedProblem,
    generate_prescription,
)

from care.composer import (
    ComposerContext,
    ComposerOutput,
    generate_message,
    generate_preview_message,
)

from care.tracking import (
    BabyVoiceTracking,
    apply_composer_output,
    calculate_gestational_weeks,
)

from care.events import (
    MicromomentEvent,
    MilestoneEvent,
)

from care.micromoments import (
    MicromomentContext,
    MicromomentEvaluation,
    evaluate_micromoment,
)

from care.milestones import (
    MilestoneContext,
    MilestoneEvaluation,
    evaluate_milestones,
)

from care.pipeline import (
    CareResult,
    VisitResult,
    run_care_pipeline,
    evaluate_visit,
)

from care.validate import (
    InvalidPayloadError,
    validate_checkin_payload,
    validate_composer_payload,
    validate_micromoment_payload,
    validate_milestone_payload,
)

__all__ = [
    # Check-in
    "CheckinDimensions",
    "DayMoment",
    "PresenceData",
    "DEFAULT_TIMEZONE",
    "DEFAULT_DAY_RESET_HOUR",
    "date_key",
    "day_of",
    "update_presence_after_checkin",
    # State / metrics / prescription
    "EmotionalState",
    "derive_emotional_state",
    "is_vulnerable_state",
    "is_stable_state",
    "Metrics",
    "calculate_metrics",
    "calculate_metric_trends",
    "DailyPrescription",
    "TrainingPrescription",
    "DetectedProblem",
    "generate_prescription",
    # Composer
    "ComposerContext",
    "ComposerOutput",
    "generate_message",
    "generate_preview_message",
    "BabyVoiceTracking",
    "apply_composer_output",
    "calculate_gestational_weeks",
    # Gates
    "MicromomentEvent",
    "MilestoneEvent",
    "MicromomentContext",
    "MicromomentEvaluation",
    "evaluate_micromoment",
    "MilestoneContext",
    "MilestoneEvaluation",
    "evaluate_milestones",
    # Pipelines
    "CareResult",
    "VisitResult",
    "run_care_pipeline",
    "evaluate_visit",
    # Validation
    "InvalidPayloadError",
    "validate_checkin_payload",
    "validate_composer_payload",
    "validate_micromoment_payload",
    "validate_milestone_payload",
]
