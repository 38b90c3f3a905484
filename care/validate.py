# care/validate.py
"""
Fluia Care — Payload Validation

Boundary checks for raw JSON payloads before they reach the engine. The
engine itself assumes in-range input; everything out of range is stopped
here.

Each validate_* returns (is_valid, error_message). The *_from_payload
parsers validate and build the engine's input types, raising
InvalidPayloadError on bad input.

v1.0.0: Initial implementation
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from care.checkin import CheckinDimensions, DayMoment, DIMENSION_NAMES, parse_timestamp
from care.composer import ComposerContext
from care.events import (
    MICROMOMENT_ACTIONS,
    MILESTONE_ACTIONS,
    MILESTONE_CATEGORIES,
    micromoment_events_from_list,
    milestone_events_from_list,
)
from care.micromoments import MicromomentContext
from care.milestones import MilestoneContext


MIN_WEEK = 1
MAX_WEEK = 42
VALID_MOMENTS = {m.value for m in DayMoment}
SEEN_LIST_KEYS = ("seenOpenings", "seenCores", "seenClosings", "seenMilestones")


class InvalidPayloadError(ValueError):
    """A request payload failed boundary validation."""


# -----------------------------------------------------------------------------
# Field helpers
# -----------------------------------------------------------------------------

def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_int(
    data: Dict[str, Any],
    key: str,
    lo: Optional[int] = None,
    hi: Optional[int] = None,
    required: bool = True,
) -> str:
    if key not in data or data[key] is None:
        return f"Missing required field: '{key}'" if required else ""
    value = data[key]
    if not _is_int(value):
        return f"'{key}' must be an integer, got {type(value).__name__}"
    if lo is not None and value < lo:
        return f"'{key}' must be >= {lo}, got {value}"
    if hi is not None and value > hi:
        return f"'{key}' must be <= {hi}, got {value}"
    return ""


def _check_bool(data: Dict[str, Any], key: str, required: bool = True) -> str:
    if key not in data or data[key] is None:
        return f"Missing required field: '{key}'" if required else ""
    if not isinstance(data[key], bool):
        return f"'{key}' must be a boolean, got {type(data[key]).__name__}"
    return ""


def _check_str(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        return f"'{key}' must be a string, got {type(value).__name__}"
    return ""


def _first_error(*errors: str) -> str:
    for error in errors:
        if error:
            return error
    return ""


def _check_dict(data: Optional[Any]) -> str:
    if data is None:
        return "Payload is None"
    if not isinstance(data, dict):
        return f"Expected dict, got {type(data).__name__}"
    return ""


def _check_events(
    events: Any,
    actions: Tuple[str, ...],
    categories: Optional[Tuple[str, ...]] = None,
) -> str:
    if events is None:
        return ""
    if not isinstance(events, list):
        return f"'events' must be a list, got {type(events).__name__}"
    for i, event in enumerate(events):
        if not isinstance(event, dict):
            return f"Event {i} must be a dict"
        if event.get("action") not in actions:
            return f"Event {i} has invalid action '{event.get('action')}', must be one of {list(actions)}"
        if categories is not None:
            if "type" not in event:
                return f"Event {i} missing field 'type'"
            if event.get("category") not in categories:
                return f"Event {i} has invalid category '{event.get('category')}'"
        try:
            parse_timestamp(event.get("timestamp", ""))
        except (TypeError, ValueError):
            return f"Event {i} has invalid timestamp '{event.get('timestamp')}'"
    return ""


# -----------------------------------------------------------------------------
# Check-in
# -----------------------------------------------------------------------------

def validate_dimensions(data: Optional[Dict[str, Any]]) -> Tuple[bool, str]:
    """All four dimensions present, each an integer 1-5."""
    error = _check_dict(data)
    if error:
        return False, error
    for name in DIMENSION_NAMES:
        error = _check_int(data, name, 1, 5)
        if error:
            return False, error
    return True, ""


def validate_checkin_payload(data: Optional[Dict[str, Any]]) -> Tuple[bool, str]:
    """
    Validate a check-in request.

    Expected: {dimensions, baseline?, moment?, gestationalWeek?, isFirstCheckIn?}
    """
    error = _check_dict(data)
    if error:
        return False, error

    ok, error = validate_dimensions(data.get("dimensions"))
    if not ok:
        return False, f"dimensions: {error}"

    baseline = data.get("baseline")
    if baseline is not None:
        if not isinstance(baseline, dict):
            return False, f"'baseline' must be a dict, got {type(baseline).__name__}"
        error = _check_int(baseline, "mood", 1, 5, required=False)
        if error:
            return False, f"baseline: {error}"

    moment = data.get("moment")
    if moment is not None and moment not in VALID_MOMENTS:
        return False, f"Invalid moment '{moment}', must be one of {sorted(VALID_MOMENTS)}"

    error = _first_error(
        _check_int(data, "gestationalWeek", MIN_WEEK, MAX_WEEK, required=False),
        _check_bool(data, "isFirstCheckIn", required=False),
    )
    if error:
        return False, error
    return True, ""


def checkin_from_payload(data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Keyword arguments for run_care_pipeline."""
    ok, error = validate_checkin_payload(data)
    if not ok:
        raise InvalidPayloadError(error)
    moment = data.get("moment")
    return {
        "checkin": CheckinDimensions.from_dict(data["dimensions"]),
        "baseline": data.get("baseline"),
        "moment": DayMoment(moment) if moment else None,
        "gestational_week": data.get("gestationalWeek"),
        "is_first_checkin": bool(data.get("isFirstCheckIn", False)),
    }


# -----------------------------------------------------------------------------
# Composer
# -----------------------------------------------------------------------------

def validate_composer_payload(data: Optional[Dict[str, Any]]) -> Tuple[bool, str]:
    error = _check_dict(data)
    if error:
        return False, error

    error = _first_error(
        _check_int(data, "gestationalWeeks", MIN_WEEK, MAX_WEEK),
        _check_int(data, "zone", 1, 5),
        _check_int(data, "presenceDays", 0, required=False),
        _check_bool(data, "isFirstCheckIn", required=False),
        _check_str(data, "babyName"),
        _check_str(data, "uid"),
    )
    if error:
        return False, error

    time_of_day = data.get("timeOfDay")
    if time_of_day is not None and time_of_day not in VALID_MOMENTS:
        return False, f"Invalid timeOfDay '{time_of_day}', must be one of {sorted(VALID_MOMENTS)}"

    for key in SEEN_LIST_KEYS:
        items = data.get(key)
        if items is None:
            continue
        if not isinstance(items, list) or not all(isinstance(i, str) for i in items):
            return False, f"'{key}' must be a list of strings"

    return True, ""


def composer_context_from_payload(data: Optional[Dict[str, Any]]) -> ComposerContext:
    ok, error = validate_composer_payload(data)
    if not ok:
        raise InvalidPayloadError(error)
    return ComposerContext(
        gestational_week=data["gestationalWeeks"],
        zone=data["zone"],
        time_of_day=DayMoment.parse(data.get("timeOfDay"), DayMoment.MORNING),
        presence_days=data.get("presenceDays") or 1,
        baby_name=data.get("babyName") or None,
        seen_openings=tuple(data.get("seenOpenings") or ()),
        seen_cores=tuple(data.get("seenCores") or ()),
        seen_closings=tuple(data.get("seenClosings") or ()),
        seen_milestones=tuple(data.get("seenMilestones") or ()),
        is_first_checkin=bool(data.get("isFirstCheckIn", False)),
        uid=data.get("uid") or "",
    )


# -----------------------------------------------------------------------------
# Transactional gate
# -----------------------------------------------------------------------------

def validate_micromoment_payload(data: Optional[Dict[str, Any]]) -> Tuple[bool, str]:
    error = _check_dict(data)
    if error:
        return False, error

    error = _first_error(
        _check_int(data, "presenceDays", 0),
        _check_int(data, "completedJourneys", 0),
        _check_int(data, "zone", 1, 5),
        _check_int(data, "riskLevel", 1, 5),
        _check_bool(data, "practiceCompletedToday"),
        _check_bool(data, "isFirstAccessToday"),
        _check_bool(data, "hasCheckinToday"),
        _check_bool(data, "isPremium"),
        _check_str(data, "pillar"),
        _check_events(data.get("events"), MICROMOMENT_ACTIONS),
    )
    if error:
        return False, error
    return True, ""


def micromoment_context_from_payload(data: Optional[Dict[str, Any]]) -> MicromomentContext:
    ok, error = validate_micromoment_payload(data)
    if not ok:
        raise InvalidPayloadError(error)
    return MicromomentContext(
        presence_days=data["presenceDays"],
        completed_journeys=data["completedJourneys"],
        zone=data["zone"],
        risk_level=data["riskLevel"],
        practice_completed_today=data["practiceCompletedToday"],
        is_first_access_today=data["isFirstAccessToday"],
        has_checkin_today=data["hasCheckinToday"],
        is_premium=data["isPremium"],
        events=tuple(micromoment_events_from_list(data.get("events") or [])),
        pillar=data.get("pillar") or None,
        uid=data.get("uid") or "",
    )


# -----------------------------------------------------------------------------
# Celebration gate
# -----------------------------------------------------------------------------

def validate_milestone_payload(data: Optional[Dict[str, Any]]) -> Tuple[bool, str]:
    error = _check_dict(data)
    if error:
        return False, error

    error = _first_error(
        _check_int(data, "presenceDays", 0),
        _check_int(data, "gestationalWeek", MIN_WEEK, MAX_WEEK),
        _check_int(data, "lastGestationalWeek", MIN_WEEK, MAX_WEEK, required=False),
        _check_bool(data, "isPremium"),
        _check_bool(data, "isPostpartum"),
        _check_events(data.get("events"), MILESTONE_ACTIONS, MILESTONE_CATEGORIES),
    )
    if error:
        return False, error
    return True, ""


def milestone_context_from_payload(data: Optional[Dict[str, Any]]) -> MilestoneContext:
    ok, error = validate_milestone_payload(data)
    if not ok:
        raise InvalidPayloadError(error)
    return MilestoneContext(
        presence_days=data["presenceDays"],
        gestational_week=data["gestationalWeek"],
        is_premium=data["isPremium"],
        is_postpartum=data["isPostpartum"],
        events=tuple(milestone_events_from_list(data.get("events") or [])),
        last_gestational_week=data.get("lastGestationalWeek"),
        uid=data.get("uid") or "",
    )


__all__ = [
    "InvalidPayloadError",
    "validate_dimensions",
    "validate_checkin_payload",
    "validate_composer_payload",
    "validate_micromoment_payload",
    "validate_milestone_payload",
    "checkin_from_payload",
    "composer_context_from_payload",
    "micromoment_context_from_payload",
    "milestone_context_from_payload",
]
