"""Shared scoring constants."""

from __future__ import annotations

HOLE_COUNT = 18

DEFAULT_HOLE_PAR = 4

# Standard slope; course handicap scales the index by slope / 113.
STANDARD_SLOPE = 113

# Running-margin swing (holes) that qualifies for comeback / blown-lead badges.
COMEBACK_THRESHOLD = 3

# Momentum flags are tracked once the walk reaches this hole.
BACK_NINE_MOMENTUM_FROM_HOLE = 9

# Worst-ball total minus best-ball total at or above this earns Jekyll & Hyde.
JEKYLL_AND_HYDE_THRESHOLD = 24
