"""
DTOs for the game score estimator: team stats, per-call configs and results.
"""
from .team_stats import DriveTeamStats, ProjectionTeamStats
from .game_config import (
    OvertimeConfig,
    DriveGameConfig,
    ProjectionGameConfig,
    TiebreakPolicy,
)
from .game_result import (
    DriveResult,
    DriveOutcome,
    DriveSummary,
    DriveGameResult,
    TeamSimulationDetail,
    OvertimeResult,
    ProjectionGameResult,
)

__all__ = [
    "DriveTeamStats",
    "ProjectionTeamStats",
    "OvertimeConfig",
    "DriveGameConfig",
    "ProjectionGameConfig",
    "TiebreakPolicy",
    "DriveResult",
    "DriveOutcome",
    "DriveSummary",
    "DriveGameResult",
    "TeamSimulationDetail",
    "OvertimeResult",
    "ProjectionGameResult",
]
