from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from block_blast.game import BOARD_SIZE, PIECES, BlockBlastGame, GameConfig, ScoringRules

logger = logging.getLogger(__name__)


def _compute_action_mask(game: BlockBlastGame) -> np.ndarray:
    k = game.config.pieces_per_set
    mask = np.zeros((k, BOARD_SIZE, BOARD_SIZE), dtype=np.bool_)
    for piece_idx, row, col in game.get_valid_actions():
        if 0 <= piece_idx < k:
            mask[piece_idx, row, col] = True
    return mask


class BlockBlastEnv(gym.Env):
    """Place tray pieces on the 10x10 board.

    Action: (piece_idx, row, col). Invalid actions leave the game untouched
    and earn `invalid_action_penalty`. The episode terminates when no tray
    piece fits anywhere and truncates after `max_episode_steps` placements.
    """

    metadata = {"render_modes": []}

    def __init__(self, config: Optional[GameConfig] = None,
                 rules: Optional[ScoringRules] = None,
                 score_scale: float = 0.01,
                 invalid_action_penalty: float = -0.1,
                 terminal_penalty: float = 0.0,
                 max_episode_steps: int = 10_000) -> None:
        super().__init__()
        # The env has no notion of wall-clock time: refill as soon as the tray empties
        config = replace(config or GameConfig(), refill_delay=0.0)
        self.game = BlockBlastGame(config, rules)

        self.score_scale = float(score_scale)
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.terminal_penalty = float(terminal_penalty)
        self.max_episode_steps = int(max_episode_steps)

        k = config.pieces_per_set
        # Observation space: occupancy grid (0/1) and tray piece kinds (-1 for empty slots)
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=0, high=1, shape=(BOARD_SIZE, BOARD_SIZE), dtype=np.int8),
                "pieces": spaces.Box(low=-1, high=len(PIECES), shape=(k,), dtype=np.int8),
                "pieces_remaining": spaces.Discrete(k + 1),
            }
        )
        self.action_space = spaces.MultiDiscrete((k, BOARD_SIZE, BOARD_SIZE))

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        k = self.game.config.pieces_per_set
        pieces = np.full((k,), -1, dtype=np.int8)
        for i, kind in enumerate(self.game.tray.kinds()[:k]):
            pieces[i] = kind
        return {
            "grid": (self.game.board != 0).astype(np.int8),
            "pieces": pieces,
            "pieces_remaining": len(self.game.tray),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": _compute_action_mask(self.game),
            "valid_actions": self.game.get_valid_actions(),
            "score": self.game.score,
            "level": self.game.level,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset(seed)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: np.ndarray | Tuple[int, int, int]):
        piece_idx, row, col = map(int, action)

        outcome = None
        if 0 <= piece_idx < len(self.game.tray):
            outcome = self.game.place_piece(piece_idx, row, col)

        reward_components: Dict[str, float] = {}
        if outcome is not None and outcome.success:
            reward_components["score"] = self.score_scale * float(outcome.score_gained)
        else:
            reward_components["invalid"] = self.invalid_action_penalty

        self._steps += 1
        terminated = bool(self.game.game_over)
        truncated = self._steps >= self.max_episode_steps
        if terminated:
            reward_components["terminal"] = self.terminal_penalty
            logger.debug("episode over after %d steps, score %d", self._steps, self.game.score)

        reward = float(sum(reward_components.values()))
        info = self._get_info()
        info["reward_components"] = reward_components
        info["engine_score_delta"] = float(outcome.score_gained if outcome is not None else 0.0)
        info["lines_cleared"] = outcome.lines_cleared if outcome is not None else 0
        return self._get_obs(), reward, terminated, truncated, info

    def close(self) -> None:
        pass
