# care/content/__init__.py
"""
Fluia Care Content Subpackage

Contains:
- openings: opening lines by trimester and time of day
- cores: core lines by zone and gestational week range
- closings: closing lines by presence-day range
- milestones: one-time milestone messages in trigger order

Catalogs are immutable tuples built once at import.
"""

from .openings import (
    OpeningComponent,
    ALL_OPENINGS,
    TOTAL_OPENINGS,
    get_openings,
    get_openings_for_trimester,
)

from .cores import (
    CoreComponent,
    ALL_CORES,
    TOTAL_CORES,
    NEUTRAL_ZONE,
    get_cores,
    get_cores_for_zone,
)

from .closings import (
    ClosingComponent,
    ALL_CLOSINGS,
    TOTAL_CLOSINGS,
    get_closings,
)

from .milestones import (
    MilestoneMessage,
    ALL_MILESTONES,
    TOTAL_MILESTONES,
    get_milestone,
    check_milestone,
    reachable_milestones,
)

__all__ = [
    "OpeningComponent",
    "ALL_OPENINGS",
    "TOTAL_OPENINGS",
    "get_openings",
    "get_openings_for_trimester",
    "CoreComponent",
    "ALL_CORES",
    "TOTAL_CORES",
    "NEUTRAL_ZONE",
    "get_cores",
    "get_cores_for_zone",
    "ClosingComponent",
    "ALL_CLOSINGS",
    "TOTAL_CLOSINGS",
    "get_closings",
    "MilestoneMessage",
    "ALL_MILESTONES",
    "TOTAL_MILESTONES",
    "get_milestone",
    "check_milestone",
    "reachable_milestones",
]
