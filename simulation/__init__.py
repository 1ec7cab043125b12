"""
Simulation engines for the game score estimator.
Turns two teams' efficiency stats plus a per-call config into a game result,
either drive by drive or as one Gaussian projection per team.
"""
from .engine import EngineKind, simulate_game, resolve_engine
from .rng import create_rng, LehmerRandom
from .validation import InvalidInput, PositiveViolation, NonNegativeViolation
from .drive_engine import simulate_drive
from .projection_engine import calculate_team_detail, simulate_ot_points, gaussian

__all__ = [
    "EngineKind",
    "simulate_game",
    "resolve_engine",
    "create_rng",
    "LehmerRandom",
    "InvalidInput",
    "PositiveViolation",
    "NonNegativeViolation",
    "simulate_drive",
    "calculate_team_detail",
    "simulate_ot_points",
    "gaussian",
]
