"""
Per-call game configuration DTOs.

Every field is optional: ``None`` means "use the engine default" (see
models/constants.py). Configs are immutable; one is built per simulation call.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any


class TiebreakPolicy(str, Enum):
    """Rule that awards the deciding point when overtime cannot break a tie."""

    EXPECTED = "expected"  # team with the higher expected points (home on equality)
    HOME = "home"          # always the home team


@dataclass(frozen=True)
class OvertimeConfig:
    """Drive-engine overtime settings. ``max_rounds=math.inf`` is unbounded."""

    enabled: bool = True
    max_rounds: float | None = None

    def to_dict(self) -> Dict[str, Any]:
        return {"enabled": self.enabled, "max_rounds": self.max_rounds}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OvertimeConfig":
        return cls(
            enabled=data.get("enabled", True),
            max_rounds=data.get("max_rounds"),
        )


@dataclass(frozen=True)
class DriveGameConfig:
    """Configuration for one drive-engine game."""

    drives_per_team: int | None = None
    allow_ties: bool | None = None
    overtime: OvertimeConfig | None = None
    seed: int | None = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "drives_per_team": self.drives_per_team,
            "allow_ties": self.allow_ties,
            "overtime": self.overtime.to_dict() if self.overtime is not None else None,
            "seed": self.seed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DriveGameConfig":
        overtime = data.get("overtime")
        return cls(
            drives_per_team=data.get("drives_per_team"),
            allow_ties=data.get("allow_ties"),
            overtime=OvertimeConfig.from_dict(overtime) if overtime is not None else None,
            seed=data.get("seed"),
        )


@dataclass(frozen=True)
class ProjectionGameConfig:
    """Configuration for one projection-engine game."""

    seed: int | None = None
    allow_ties: bool | None = None
    max_ot_rounds: float | None = None
    ot_scale: float | None = None
    tiebreak_policy: TiebreakPolicy | str | None = None

    def to_dict(self) -> Dict[str, Any]:
        policy = self.tiebreak_policy
        return {
            "seed": self.seed,
            "allow_ties": self.allow_ties,
            "max_ot_rounds": self.max_ot_rounds,
            "ot_scale": self.ot_scale,
            "tiebreak_policy": policy.value if isinstance(policy, TiebreakPolicy) else policy,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProjectionGameConfig":
        return cls(**{k: data.get(k) for k in cls.__dataclass_fields__})
