"""
Game result DTOs for the game score estimator.

DriveOutcome is one resolved possession; DriveGameResult collects both teams'
drives for a drive-engine game. TeamSimulationDetail holds one team's
projection breakdown; ProjectionGameResult wraps both details plus the
optional OvertimeResult.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, List

from .game_config import TiebreakPolicy


class DriveResult(str, Enum):
    """How a drive ended."""

    TD = "TD"
    FG = "FG"
    NONE = "NONE"


@dataclass(frozen=True)
class DriveOutcome:
    """One drive: its result and the points it produced (7, 3 or 0)."""

    result: DriveResult = DriveResult.NONE
    points: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"result": self.result.value, "points": self.points}


@dataclass
class DriveSummary:
    """Touchdown / field goal counters for both sides."""

    home_tds: int = 0
    home_fgs: int = 0
    away_tds: int = 0
    away_fgs: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "home_tds": self.home_tds,
            "home_fgs": self.home_fgs,
            "away_tds": self.away_tds,
            "away_fgs": self.away_fgs,
        }


@dataclass
class DriveGameResult:
    """Full result of a drive-engine game.

    ``home_drives`` / ``away_drives`` hold regulation drives followed by one
    drive per overtime round, so each list has
    ``drives_per_team + overtime_rounds`` entries.
    """

    home_score: int = 0
    away_score: int = 0
    home_drives: List[DriveOutcome] = field(default_factory=list)
    away_drives: List[DriveOutcome] = field(default_factory=list)
    summary: DriveSummary = field(default_factory=DriveSummary)
    drives_per_team: int = 0
    overtime_rounds: int = 0

    @property
    def is_tie(self) -> bool:
        return self.home_score == self.away_score

    def to_dict(self) -> Dict[str, Any]:
        return {
            "home_score": self.home_score,
            "away_score": self.away_score,
            "home_drives": [d.to_dict() for d in self.home_drives],
            "away_drives": [d.to_dict() for d in self.away_drives],
            "summary": self.summary.to_dict(),
            "drives_per_team": self.drives_per_team,
            "overtime_rounds": self.overtime_rounds,
        }


@dataclass
class TeamSimulationDetail:
    """One team's projection breakdown; ``overtime_points`` grows per OT round."""

    expected_points: float = 0.0
    variation: float = 0.0
    turnover_penalty: float = 0.0
    raw_projection: float = 0.0
    final_points: int = 0
    overtime_points: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "expected_points": self.expected_points,
            "variation": self.variation,
            "turnover_penalty": self.turnover_penalty,
            "raw_projection": self.raw_projection,
            "final_points": self.final_points,
            "overtime_points": list(self.overtime_points),
        }


@dataclass
class OvertimeResult:
    """Overtime record: rounds played, per-round points and any forced tiebreak."""

    rounds: int = 0
    home_points: List[int] = field(default_factory=list)
    away_points: List[int] = field(default_factory=list)
    tiebreak_applied: TiebreakPolicy | None = None
    tiebreak_winner: str | None = None  # "home" / "away"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rounds": self.rounds,
            "home_points": list(self.home_points),
            "away_points": list(self.away_points),
            "tiebreak_applied": self.tiebreak_applied.value if self.tiebreak_applied else "none",
            "tiebreak_winner": self.tiebreak_winner,
        }


@dataclass
class ProjectionGameResult:
    """Full result of a projection-engine game. ``overtime`` is None unless it ran."""

    home_score: int = 0
    away_score: int = 0
    home_detail: TeamSimulationDetail = field(default_factory=TeamSimulationDetail)
    away_detail: TeamSimulationDetail = field(default_factory=TeamSimulationDetail)
    overtime: OvertimeResult | None = None

    @property
    def is_tie(self) -> bool:
        return self.home_score == self.away_score

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "home_score": self.home_score,
            "away_score": self.away_score,
            "home_detail": self.home_detail.to_dict(),
            "away_detail": self.away_detail.to_dict(),
        }
        if self.overtime is not None:
            d["overtime"] = self.overtime.to_dict()
        return d
