"""Agent settings and construction."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Optional

from ai.base_ai import BaseAI
from ai.maxn_ai import MaxNAI
from ai.mcts_ai import MCTSAI, MCTSConfig
from ai.paranoid_ai import ParanoidAI
from ai.random_ai import RandomAI
from ai.scoring import check_leaf_policy

LOGGER = logging.getLogger(__name__)

AGENT_KINDS = ("mcts", "maxn", "paranoid", "random")


def _section(payload: Dict[str, object], name: str) -> Dict[str, object]:
    section = payload.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"config section {name!r} must be an object, got {type(section).__name__}")
    return section


class AgentConfig:
    """Container for agent and game settings loaded from a config file."""

    def __init__(self, payload: Dict[str, object]) -> None:
        mcts = _section(payload, "mcts")
        self.mcts_time_limit_ms = float(mcts.get("time_limit_ms", 200.0))
        self.mcts_exploration = float(mcts.get("exploration", 1.0))
        max_iterations = mcts.get("max_iterations")
        self.mcts_max_iterations = None if max_iterations is None else int(max_iterations)

        maxn = _section(payload, "maxn")
        self.maxn_depth = int(maxn.get("depth", 2))
        self.maxn_leaf_policy = check_leaf_policy(str(maxn.get("leaf_policy", "consistent")))

        paranoid = _section(payload, "paranoid")
        self.paranoid_depth = int(paranoid.get("depth", 2))
        self.paranoid_leaf_policy = check_leaf_policy(str(paranoid.get("leaf_policy", "consistent")))
        self.paranoid_pruning = bool(paranoid.get("pruning", True))

        game = _section(payload, "game")
        self.draw_no_progress_limit = int(game.get("draw_no_progress_limit", 60))
        self.max_plies = int(game.get("max_plies", 600))

        if self.mcts_time_limit_ms <= 0:
            raise ValueError("mcts.time_limit_ms must be positive")
        if self.maxn_depth < 0 or self.paranoid_depth < 0:
            raise ValueError("search depth must be non-negative")

    @classmethod
    def from_json(cls, path: str | Path) -> "AgentConfig":
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls(payload)

    def mcts_config(self) -> MCTSConfig:
        return MCTSConfig(
            time_limit_ms=self.mcts_time_limit_ms,
            exploration=self.mcts_exploration,
            max_iterations=self.mcts_max_iterations,
        )


def build_agent(kind: str, config: Optional[AgentConfig] = None, seed: Optional[int] = None) -> BaseAI:
    """Construct an agent by kind name."""
    config = config or AgentConfig({})
    LOGGER.debug("Building %s agent seed=%s", kind, seed)
    if kind == "mcts":
        return MCTSAI(config=config.mcts_config(), seed=seed)
    if kind == "maxn":
        return MaxNAI(depth=config.maxn_depth, seed=seed, leaf_policy=config.maxn_leaf_policy)
    if kind == "paranoid":
        return ParanoidAI(
            depth=config.paranoid_depth,
            seed=seed,
            leaf_policy=config.paranoid_leaf_policy,
            pruning=config.paranoid_pruning,
        )
    if kind == "random":
        return RandomAI(seed=seed)
    raise ValueError(f"Unknown agent kind {kind!r}; expected one of {AGENT_KINDS}")
