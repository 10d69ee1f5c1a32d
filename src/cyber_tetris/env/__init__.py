"""Gymnasium environments for Cyber Tetris."""

from __future__ import annotations

from gymnasium.envs.registration import register

ENV_ID = "CyberTetris-10x20-v0"

register(
    id=ENV_ID,
    entry_point="cyber_tetris.env.tetris_env:TetrisEnv",
)

__all__ = ["ENV_ID"]
