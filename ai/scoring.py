"""Score sentinels and leaf evaluation policies for depth-limited search."""

from __future__ import annotations

from typing import Tuple

WIN_SCORE = 2**31 - 1
LOSS_SCORE = -(2**31)

CONSISTENT = "consistent"
LEGACY = "legacy"
LEAF_POLICIES: Tuple[str, ...] = (CONSISTENT, LEGACY)


def check_leaf_policy(policy: str) -> str:
    """Validate a leaf policy name.

    ``consistent`` scores terminal leaves the same way at every depth.
    ``legacy`` keeps the asymmetric rules: wins are only recognised at the
    outermost ply and deeper leaves fall back to raw board scores.
    """
    if policy not in LEAF_POLICIES:
        raise ValueError(f"Unknown leaf policy {policy!r}; expected one of {LEAF_POLICIES}")
    return policy
