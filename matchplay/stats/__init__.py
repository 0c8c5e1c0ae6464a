"""Per-match player facts and lifetime aggregation."""

from .aggregate import (  # noqa: F401
    aggregate_by_opponent,
    aggregate_by_opponent_tier,
    aggregate_by_series,
    aggregate_player_stats,
)
from .facts import (  # noqa: F401
    count_lead_changes,
    derive_player_facts,
    was_never_behind,
)
from .schemas import (  # noqa: F401
    HolePerformance,
    MatchContext,
    PlayerMatchFact,
    PlayerStats,
    RecordLine,
)
