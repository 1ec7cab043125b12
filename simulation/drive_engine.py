"""
Drive-by-drive game engine.

A game is an alternating sequence of possessions (home, then away), each
resolved independently into a touchdown, a field goal or nothing. The chance
that a drive scores grows with the ratio of the offense's points per drive to
the opposing defense's points allowed per drive.

Ties are allowed by default. With ties disallowed, sudden-death overtime adds
home-then-away drive rounds until the scores differ or the round cap is hit;
a tie that survives the cap is returned as-is.
"""
from __future__ import annotations

import math
import random

from models.constants import (
    MIN_POINTS_PER_DRIVE,
    MAX_POINTS_PER_DRIVE,
    MAX_SCORING_PROBABILITY,
    BASE_SCORING_MULTIPLIER,
    TOUCHDOWN_SHARE,
    TOUCHDOWN_POINTS,
    FIELD_GOAL_POINTS,
    DEFAULT_DRIVES_PER_TEAM,
    DEFAULT_DRIVE_ALLOW_TIES,
    DEFAULT_DRIVE_OT_ROUNDS,
)
from models.game_config import DriveGameConfig, OvertimeConfig
from models.game_result import DriveResult, DriveOutcome, DriveSummary, DriveGameResult
from models.team_stats import DriveTeamStats
from .rng import RandomFn, create_rng
from .validation import InvalidInput, require_positive, require_positive_int, require_flag


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def _validate_team(stats: DriveTeamStats, label: str) -> None:
    require_positive(f"{label}.off_pts_drive", stats.off_pts_drive)
    require_positive(f"{label}.def_pts_drive", stats.def_pts_drive)


def _resolve_max_rounds(overtime: OvertimeConfig, enabled: bool) -> float:
    """Round cap for overtime; ``math.inf`` means no cap."""
    if overtime.max_rounds is None:
        return DEFAULT_DRIVE_OT_ROUNDS if enabled else 0
    max_rounds = overtime.max_rounds
    if isinstance(max_rounds, bool) or not isinstance(max_rounds, (int, float)) or math.isnan(max_rounds):
        raise InvalidInput(
            "overtime.max_rounds",
            f"overtime.max_rounds must be a number, got {max_rounds!r}",
        )
    return max_rounds


def simulate_drive(
    offense_pts_drive: float,
    defense_pts_drive: float,
    rng: RandomFn = random.random,
) -> DriveOutcome:
    """Resolve one drive of *offense_pts_drive* against *defense_pts_drive*.

    Draws one value from *rng* for a non-scoring drive and two for a
    scoring drive (the second picks TD vs FG).
    """
    require_positive("offense_pts_drive", offense_pts_drive)
    require_positive("defense_pts_drive", defense_pts_drive)

    offense = _clamp(offense_pts_drive, MIN_POINTS_PER_DRIVE, MAX_POINTS_PER_DRIVE)
    defense = _clamp(defense_pts_drive, MIN_POINTS_PER_DRIVE, MAX_POINTS_PER_DRIVE)

    scoring_probability = _clamp(
        BASE_SCORING_MULTIPLIER * offense / defense,
        0.0,
        MAX_SCORING_PROBABILITY,
    )

    if rng() < scoring_probability:
        if rng() < TOUCHDOWN_SHARE:
            return DriveOutcome(DriveResult.TD, TOUCHDOWN_POINTS)
        return DriveOutcome(DriveResult.FG, FIELD_GOAL_POINTS)
    return DriveOutcome(DriveResult.NONE, 0)


def simulate_game(
    home: DriveTeamStats,
    away: DriveTeamStats,
    config: DriveGameConfig | None = None,
) -> DriveGameResult:
    """Simulate a full game as alternating home / away drives.

    Parameters
    ----------
    home, away : DriveTeamStats
        Points per drive scored (offense) and allowed (defense).
    config : DriveGameConfig | None
        ``drives_per_team`` (default 12), ``allow_ties`` (default True),
        ``overtime`` (used only when ties are disallowed; enabled with a
        6-round cap by default) and an optional ``seed``.

    Returns
    -------
    DriveGameResult
        Scores, every drive in order, TD/FG counters and overtime rounds.
    """
    config = config or DriveGameConfig()

    _validate_team(home, "home")
    _validate_team(away, "away")

    drives_per_team = require_positive_int(
        "drives_per_team",
        DEFAULT_DRIVES_PER_TEAM if config.drives_per_team is None else config.drives_per_team,
    )
    allow_ties = require_flag(
        "allow_ties",
        DEFAULT_DRIVE_ALLOW_TIES if config.allow_ties is None else config.allow_ties,
    )
    overtime = config.overtime or OvertimeConfig()
    overtime_enabled = not allow_ties and require_flag("overtime.enabled", overtime.enabled)
    max_rounds = _resolve_max_rounds(overtime, overtime_enabled)

    rng = create_rng(config.seed)

    result = DriveGameResult(drives_per_team=drives_per_team)
    summary = result.summary

    def _record(side: str, outcome: DriveOutcome) -> None:
        if side == "home":
            result.home_drives.append(outcome)
            result.home_score += outcome.points
            if outcome.result is DriveResult.TD:
                summary.home_tds += 1
            elif outcome.result is DriveResult.FG:
                summary.home_fgs += 1
        else:
            result.away_drives.append(outcome)
            result.away_score += outcome.points
            if outcome.result is DriveResult.TD:
                summary.away_tds += 1
            elif outcome.result is DriveResult.FG:
                summary.away_fgs += 1

    def _play_round() -> None:
        _record("home", simulate_drive(home.off_pts_drive, away.def_pts_drive, rng))
        _record("away", simulate_drive(away.off_pts_drive, home.def_pts_drive, rng))

    for _ in range(drives_per_team):
        _play_round()

    # Sudden death: stop as soon as the scores differ
    while overtime_enabled and result.home_score == result.away_score:
        if result.overtime_rounds >= max_rounds:
            break
        result.overtime_rounds += 1
        _play_round()

    return result
