"""
Engine selection for the game score estimator.

The drive engine and the projection engine are two independent strategies
over the same problem. ``EngineKind`` names them and ``simulate_game`` routes
a call to the matching pure function; the stats and config types must match
the chosen engine.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Callable

from . import drive_engine, projection_engine
from .validation import InvalidInput


class EngineKind(str, Enum):
    DRIVE = "drive"
    PROJECTION = "projection"


ENGINES: dict[EngineKind, Callable[..., Any]] = {
    EngineKind.DRIVE: drive_engine.simulate_game,
    EngineKind.PROJECTION: projection_engine.simulate_game,
}


def resolve_engine(kind: EngineKind | str) -> EngineKind:
    try:
        return EngineKind(kind)
    except ValueError:
        choices = ", ".join(k.value for k in EngineKind)
        raise InvalidInput("engine", f"engine must be one of {choices}, got {kind!r}") from None


def simulate_game(kind: EngineKind | str, home: Any, away: Any, config: Any = None) -> Any:
    """Run one game with the engine named by *kind*.

    ``drive`` takes DriveTeamStats / DriveGameConfig and returns a
    DriveGameResult; ``projection`` takes ProjectionTeamStats /
    ProjectionGameConfig and returns a ProjectionGameResult.
    """
    return ENGINES[resolve_engine(kind)](home, away, config)
