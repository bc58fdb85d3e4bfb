"""Gymnasium environment for Block Blast."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Register the placement environment: (piece_idx, row, col) actions
register(
    id="BlockBlast-10x10-v0",
    entry_point="block_blast.env.block_blast_env:BlockBlastEnv",
)

__all__ = ["BlockBlast-10x10-v0"]
