"""
Team statistics DTOs for the game score estimator.
DriveTeamStats feeds the drive engine (points per drive); ProjectionTeamStats
feeds the projection engine (per-game averages). Both are supplied fresh for
every simulation call and never mutated.
"""
from dataclasses import dataclass
from typing import Dict, Any


@dataclass(frozen=True)
class DriveTeamStats:
    """Average points scored / allowed per drive."""

    off_pts_drive: float = 0.0
    def_pts_drive: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "off_pts_drive": self.off_pts_drive,
            "def_pts_drive": self.def_pts_drive,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DriveTeamStats":
        return cls(
            off_pts_drive=data.get("off_pts_drive", 0.0),
            def_pts_drive=data.get("def_pts_drive", 0.0),
        )


@dataclass(frozen=True)
class ProjectionTeamStats:
    """Per-game averages: scoring, points allowed, yards per play, turnovers."""

    points_per_game: float = 0.0
    points_allowed_per_game: float = 0.0
    yards_per_play: float = 0.0
    turnover_rate: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "points_per_game": self.points_per_game,
            "points_allowed_per_game": self.points_allowed_per_game,
            "yards_per_play": self.yards_per_play,
            "turnover_rate": self.turnover_rate,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProjectionTeamStats":
        return cls(**{k: data.get(k, getattr(cls(), k)) for k in cls.__dataclass_fields__})
