"""Round recap: vs-all simulation, hole averages and leaders."""

from .builder import build_round_recap  # noqa: F401
from .holes import birdie_eagle_leaders, hole_averages  # noqa: F401
from .schemas import (  # noqa: F401
    CourseInfo,
    HeadToHeadResult,
    HoleAverage,
    LeaderEntry,
    Leaders,
    PlayerFactForSim,
    RoundRecap,
    VsAllRecord,
)
from .vs_all import compute_vs_all_for_round, simulate_head_to_head  # noqa: F401
