"""Match-play scoring core."""

from .boilerplate import (  # noqa: F401
    default_status,
    empty_holes_for,
    ensure_side_size,
    normalize_holes,
    zeros18,
)
from .handicap import course_handicap, spin_down, strokes_received  # noqa: F401
from .holes import ball_scores, decide_hole  # noqa: F401
from .schemas import (  # noqa: F401
    CourseHole,
    Format,
    HoleInput,
    HoleResult,
    MatchData,
    MatchResult,
    MatchStatus,
    MatchSummary,
    PlayerInMatch,
    Side,
)
from .summary import (  # noqa: F401
    build_status_and_result,
    iter_completed_holes,
    summarize,
)
