# care/training_catalog.py
"""
Fluia Care — Practice Library v1.0.0

Static catalog of short practices (1-5 minutes) the prescription generator
picks from. Order matters: when several practices fit a problem, the
earlier entry wins.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional, Tuple


TrainingType = Literal[
    "breathing",
    "grounding-body",
    "body-scan",
    "mindfulness",
    "bond",
    "reflection",
    "pause-micro",
    "self-compassion",
    "resilience",
    "boundary",
    "gratitude",
    "bonding",
]

TrainingIntensity = Literal["minimal", "light", "moderate", "active"]

GENTLE_INTENSITIES = ("minimal", "light")


@dataclass(frozen=True)
class TrainingTemplate:
    id: str
    type: str
    title: str
    description: str
    why: str
    duration_minutes: int
    intensity: str
    focus_metric: str
    best_for: Tuple[str, ...]
    min_zone: int
    max_zone: int
    instructions: Tuple[str, ...] = ()

    def fits_zone(self, zone: int) -> bool:
        return self.min_zone <= zone <= self.max_zone

    @property
    def is_gentle(self) -> bool:
        return self.intensity in GENTLE_INTENSITIES

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
            "bestFor": list(self.best_for),
            "minZone": self.min_zone,
            "maxZone": self.max_zone,
            "instructions": list(self.instructions),
        }


# =============================================================================
# CATALOG
# =============================================================================

TRAINING_CATALOG: Tuple[TrainingTemplate, ...] = (
    # ---- Low zones: presence and regulation ---------------------------------
    TrainingTemplate(
        id="grounding-body",
        type="grounding-body",
        title="Anchor in Your Body",
        description="When everything feels blurry, noticing your body brings you back.",
        why="Coming back to the body settles the mind and restores presence.",
        duration_minutes=2,
        intensity="light",
        focus_metric="BS",
        best_for=("lowZone", "overload", "anxiety", "physicalDiscomfort"),
        min_zone=1,
        max_zone=3,
        instructions=(
            "Sit or lie down somewhere comfortable.",
            "Feel your feet on the floor, or your back against the surface.",
            "Name three things you can feel right now.",
            "Rest one hand on your belly and notice its warmth.",
            "Breathe slowly and stay here for a moment.",
        ),
    ),
    TrainingTemplate(
        id="self-compassion",
        type="self-compassion",
        title="Kindness Toward Yourself",
        description="You deserve the same care you give everyone else.",
        why="Being gentle with yourself lowers stress and builds resilience.",
        duration_minutes=3,
        intensity="light",
        focus_metric="RE",
        best_for=("lowZone", "selfCriticism", "overload"),
        min_zone=1,
        max_zone=3,
        instructions=(
            "Place a hand over your heart.",
            "Say quietly: this is a hard moment.",
            "Remember that many mothers feel exactly this.",
            "Offer yourself a kind sentence, as you would to a friend.",
            "Stay with that kindness for a few breaths.",
        ),
    ),
    TrainingTemplate(
        id="pause-micro",
        type="pause-micro",
        title="Mindful Micro-Pause",
        description="Sometimes a single minute of pause already makes a difference.",
        why="Pausing on purpose restores energy and mental clarity.",
        duration_minutes=1,
        intensity="minimal",
        focus_metric="RE",
        best_for=("lowEnergy", "overload"),
        min_zone=1,
        max_zone=5,
        instructions=(
            "Stop whatever you are doing.",
            "Close your eyes or soften your gaze.",
            "Take three slow breaths.",
            "Notice how you feel, without changing anything.",
        ),
    ),
    TrainingTemplate(
        id="breathing-calm",
        type="breathing",
        title="Calm Breathing",
        description="Your breath is an anchor that is always available.",
        why="Slow breathing switches on the body's calming response.",
        duration_minutes=2,
        intensity="light",
        focus_metric="RE",
        best_for=("lowEnergy", "anxiety", "lowZone"),
        min_zone=1,
        max_zone=4,
        instructions=(
            "Breathe in through your nose for four counts.",
            "Hold gently for two counts.",
            "Breathe out through your mouth for six counts.",
            "Repeat five times, at your own pace.",
        ),
    ),
    TrainingTemplate(
        id="breathing-active",
        type="breathing",
        title="Energizing Breath",
        description="When you need a lift, breathing with intention brings energy.",
        why="A brisker breath raises oxygen and alertness.",
        duration_minutes=2,
        intensity="active",
        focus_metric="RS",
        best_for=("needsEnergy", "highZone"),
        min_zone=3,
        max_zone=5,
        instructions=(
            "Sit upright with your shoulders relaxed.",
            "Take a quick, full breath in through the nose.",
            "Let it out through the mouth in one go.",
            "Repeat ten times, then breathe normally.",
            "Stop if you feel dizzy.",
        ),
    ),
    # ---- Body ----------------------------------------------------------------
    TrainingTemplate(
        id="body-scan",
        type="body-scan",
        title="Body Scan",
        description="Noticing discomfort without judging it is already care.",
        why="Kind attention to the body eases tension and invites rest.",
        duration_minutes=5,
        intensity="moderate",
        focus_metric="BS",
        best_for=("physicalDiscomfort", "body", "tension"),
        min_zone=2,
        max_zone=5,
        instructions=(
            "Lie down or sit comfortably.",
            "Bring attention to your feet, then slowly move upward.",
            "Pause wherever you notice tension.",
            "Breathe toward that place and let it soften.",
            "Finish with your attention on your belly and your baby.",
        ),
    ),
    # ---- Resilience and limits ------------------------------------------------
    TrainingTemplate(
        id="boundary-practice",
        type="boundary",
        title="Healthy Limits",
        description="Saying no is also a way of caring for both of you.",
        why="Setting limits protects your energy and wellbeing.",
        duration_minutes=3,
        intensity="light",
        focus_metric="RS",
        best_for=("overload", "boundary", "exhaustion"),
        min_zone=1,
        max_zone=4,
        instructions=(
            "Think of one thing that is draining you this week.",
            "Ask yourself whether it really has to be you, and now.",
            "Pick one small thing you can let go of or postpone.",
            "Say out loud: I can choose what I carry.",
        ),
    ),
    TrainingTemplate(
        id="resilience-focus",
        type="resilience",
        title="Growing Resilience",
        description="Small steps build inner strength.",
        why="Remembering what you already overcame strengthens self-trust.",
        duration_minutes=4,
        intensity="moderate",
        focus_metric="RS",
        best_for=("lowRS", "lowConfidence"),
        min_zone=2,
        max_zone=5,
        instructions=(
            "Recall a difficult moment you got through.",
            "Notice what helped you then.",
            "Name one strength you showed.",
            "Remind yourself that this strength is still yours.",
        ),
    ),
    # ---- Emotional regulation ----------------------------------------------
    TrainingTemplate(
        id="mindfulness-observation",
        type="mindfulness",
        title="Observing Without Judging",
        description="Noticing emotions without judging them is the first step to regulating them.",
        why="Observing emotions creates room between feeling and reacting.",
        duration_minutes=3,
        intensity="moderate",
        focus_metric="RE",
        best_for=("lowRE", "emotionalReactivity"),
        min_zone=2,
        max_zone=4,
        instructions=(
            "Sit quietly and notice what you are feeling.",
            "Give the feeling a simple name.",
            "Notice where it lives in your body.",
            "Let it be there, without pushing it away.",
        ),
    ),
    TrainingTemplate(
        id="reflection-gentle",
        type="reflection",
        title="A Pause to Feel",
        description="Stopping to feel is an act of care, not weakness.",
        why="Giving emotions space keeps them from piling up.",
        duration_minutes=2,
        intensity="light",
        focus_metric="RE",
        best_for=("lowRE", "emotionalSuppression"),
        min_zone=1,
        max_zone=3,
        instructions=(
            "Ask yourself: how am I, really?",
            "Let the answer come without editing it.",
            "If you like, write one word about it.",
            "Thank yourself for listening.",
        ),
    ),
    TrainingTemplate(
        id="grounding-present",
        type="grounding-body",
        title="Here and Now",
        description="Anchoring in the present moment eases worry and brings clarity.",
        why="Focusing on the present quiets worries about past and future.",
        duration_minutes=3,
        intensity="moderate",
        focus_metric="BS",
        best_for=("lowBS", "anxiety", "worry"),
        min_zone=2,
        max_zone=4,
        instructions=(
            "Name five things you can see.",
            "Name four things you can touch.",
            "Name three things you can hear.",
            "Name two things you can smell.",
            "Name one thing you can taste.",
        ),
    ),
    # ---- Connection -------------------------------------------------------------
    TrainingTemplate(
        id="baby-bond",
        type="bonding",
        title="Connecting With Your Baby",
        description="Intentional moments strengthen the bond.",
        why="Conscious connection strengthens the bond between you and your baby.",
        duration_minutes=3,
        intensity="light",
        focus_metric="CA",
        best_for=("lowCA", "emotionalDistance", "bond"),
        min_zone=1,
        max_zone=5,
        instructions=(
            "Rest both hands on your belly.",
            "Breathe slowly and picture your baby.",
            "Say something to your baby, out loud or in thought.",
            "Notice anything you feel in return.",
        ),
    ),
    TrainingTemplate(
        id="bond-gratitude",
        type="bonding",
        title="Shared Gratitude",
        description="Giving thanks together with your baby deepens the connection.",
        why="Gratitude lifts mood and strengthens bonds.",
        duration_minutes=3,
        intensity="moderate",
        focus_metric="CA",
        best_for=("lowCA", "highZone"),
        min_zone=3,
        max_zone=5,
        instructions=(
            "Hands on your belly, think of something good from today.",
            "Tell your baby about it.",
            "Add one thing you look forward to sharing together.",
        ),
    ),
    TrainingTemplate(
        id="gratitude-practice",
        type="gratitude",
        title="Celebrating the Present",
        description="Moments like this deserve to be savored.",
        why="Celebrating good moments raises wellbeing and resilience.",
        duration_minutes=3,
        intensity="light",
        focus_metric="CA",
        best_for=("highZone", "celebration"),
        min_zone=4,
        max_zone=5,
        instructions=(
            "Name three things you are grateful for today.",
            "Pick one and stay with it for a few breaths.",
            "Smile, even a little, and notice how it feels.",
        ),
    ),
    TrainingTemplate(
        id="baby-bond-deep",
        type="bonding",
        title="Deep Connection",
        description="Use this good energy to connect even more.",
        why="Positive states are ideal for strengthening the bond.",
        duration_minutes=5,
        intensity="moderate",
        focus_metric="CA",
        best_for=("highZone", "celebration", "deepConnection"),
        min_zone=4,
        max_zone=5,
        instructions=(
            "Find a quiet spot and put on soft music if you like.",
            "Hands on your belly, breathe together with your baby.",
            "Tell your baby about the life that is waiting for them.",
            "Imagine your first meeting.",
            "Close with a silent thank-you.",
        ),
    ),
)

FALLBACK_TRAINING_ID = "pause-micro"

TRAINING_TYPE_LABELS = {
    "breathing": "Breathing",
    "grounding-body": "Grounding",
    "body-scan": "Body Scan",
    "mindfulness": "Mindfulness",
    "bond": "Bond",
    "bonding": "Connection",
    "reflection": "Reflection",
    "pause-micro": "Micro-Pause",
    "self-compassion": "Self-Compassion",
    "resilience": "Resilience",
    "boundary": "Limits",
    "gratitude": "Gratitude",
}

_BY_ID = {t.id: t for t in TRAINING_CATALOG}


# =============================================================================
# LOOKUPS
# =============================================================================

def get_training_by_id(training_id: str) -> Optional[TrainingTemplate]:
    return _BY_ID.get(training_id)


def get_training_instructions(training_id: str) -> List[str]:
    training = get_training_by_id(training_id)
    return list(training.instructions) if training else []


def all_trainings() -> List[TrainingTemplate]:
    return list(TRAINING_CATALOG)


def training_type_label(training_type: str) -> str:
    return TRAINING_TYPE_LABELS.get(training_type, training_type)


def catalog_stats() -> Dict[str, Any]:
    return {
        "totalTrainings": len(TRAINING_CATALOG),
        "byType": dict(Counter(t.type for t in TRAINING_CATALOG)),
        "byIntensity": dict(Counter(t.intensity for t in TRAINING_CATALOG)),
    }


__all__ = [
    "TrainingType",
    "TrainingIntensity",
    "TrainingTemplate",
    "TRAINING_CATALOG",
    "FALLBACK_TRAINING_ID",
    "get_training_by_id",
    "get_training_instructions",
    "all_trainings",
    "training_type_label",
    "catalog_stats",
]
