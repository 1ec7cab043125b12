"""
Per-game projection engine.

Each team's score is a single Gaussian-noise projection around the average
of its own points per game and the opponent's points allowed per game, with
the noise widening with yards per play and a flat deduction for turnovers.

Ties are not allowed by default. A tied game goes to overtime rounds scored
with a scaled-down version of the same projection; if the round cap is
reached with the scores still level, the tiebreak policy awards one point.
"""
from __future__ import annotations

import math
import random

from models.constants import (
    MIN_STD_DEV,
    REGULATION_STD_DEV_PER_YPP,
    REGULATION_TURNOVER_COST,
    OVERTIME_STD_DEV_PER_YPP,
    OVERTIME_TURNOVER_COST,
    MAX_OVERTIME_EXPECTED_POINTS,
    DEFAULT_PROJECTION_ALLOW_TIES,
    DEFAULT_MAX_OT_ROUNDS,
    DEFAULT_OT_SCALE,
    DEFAULT_TIEBREAK_POLICY,
    TIEBREAK_BONUS_POINTS,
)
from models.game_config import ProjectionGameConfig, TiebreakPolicy
from models.game_result import TeamSimulationDetail, OvertimeResult, ProjectionGameResult
from models.team_stats import ProjectionTeamStats
from .rng import RandomFn, create_rng
from .validation import (
    InvalidInput,
    require_number,
    require_positive,
    require_non_negative,
    require_flag,
)


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def _validate_team(stats: ProjectionTeamStats, label: str) -> None:
    require_non_negative(f"{label}.points_per_game", stats.points_per_game)
    require_non_negative(f"{label}.points_allowed_per_game", stats.points_allowed_per_game)
    require_positive(f"{label}.yards_per_play", stats.yards_per_play)
    require_non_negative(f"{label}.turnover_rate", stats.turnover_rate)


def _nonzero_draw(rng: RandomFn) -> float:
    value = rng()
    while value == 0:
        value = rng()
    return value


def gaussian(rng: RandomFn, mean: float = 0.0, std_dev: float = 1.0) -> float:
    """Box-Muller sample. Draws exactly two non-zero uniforms (u, then v)."""
    u = _nonzero_draw(rng)
    v = _nonzero_draw(rng)
    magnitude = math.sqrt(-2.0 * math.log(u))
    angle = 2 * math.pi * v
    standard = magnitude * math.cos(angle)
    return mean + standard * max(std_dev, 0.0)


def calculate_team_detail(
    team: ProjectionTeamStats,
    opponent: ProjectionTeamStats,
    rng: RandomFn = random.random,
    *,
    team_label: str = "team",
    opponent_label: str = "opponent",
) -> TeamSimulationDetail:
    """Project *team*'s regulation score against *opponent*."""
    _validate_team(team, team_label)
    _validate_team(opponent, opponent_label)

    expected = (team.points_per_game + opponent.points_allowed_per_game) / 2
    variation = gaussian(rng, 0.0, max(MIN_STD_DEV, team.yards_per_play * REGULATION_STD_DEV_PER_YPP))
    turnover_penalty = team.turnover_rate * REGULATION_TURNOVER_COST
    raw_projection = expected + variation - turnover_penalty

    return TeamSimulationDetail(
        expected_points=expected,
        variation=variation,
        turnover_penalty=turnover_penalty,
        raw_projection=raw_projection,
        final_points=max(0, round(raw_projection)),
    )


def simulate_ot_points(
    expected_reg: float,
    yards_per_play: float,
    turnover_rate: float,
    scale: float,
    rng: RandomFn = random.random,
) -> int:
    """Points for one overtime round: the regulation projection shrunk by *scale*."""
    expected_ot = _clamp(expected_reg * _clamp(scale, 0.0, 1.0), 0.0, MAX_OVERTIME_EXPECTED_POINTS)
    variation = gaussian(rng, 0.0, max(MIN_STD_DEV, yards_per_play * OVERTIME_STD_DEV_PER_YPP))
    penalty = turnover_rate * OVERTIME_TURNOVER_COST
    return max(0, round(expected_ot + variation - penalty))


def _resolve_config(config: ProjectionGameConfig) -> tuple[bool, int, float, TiebreakPolicy]:
    allow_ties = require_flag(
        "allow_ties",
        DEFAULT_PROJECTION_ALLOW_TIES if config.allow_ties is None else config.allow_ties,
    )

    if config.max_ot_rounds is None:
        max_ot_rounds = DEFAULT_MAX_OT_ROUNDS
    else:
        max_ot_rounds = max(0, math.floor(require_number("max_ot_rounds", config.max_ot_rounds)))

    ot_scale = DEFAULT_OT_SCALE if config.ot_scale is None else require_number("ot_scale", config.ot_scale)

    policy = DEFAULT_TIEBREAK_POLICY if config.tiebreak_policy is None else config.tiebreak_policy
    try:
        tiebreak_policy = TiebreakPolicy(policy)
    except ValueError:
        choices = ", ".join(p.value for p in TiebreakPolicy)
        raise InvalidInput(
            "tiebreak_policy",
            f"tiebreak_policy must be one of {choices}, got {policy!r}",
        ) from None

    return allow_ties, max_ot_rounds, ot_scale, tiebreak_policy


def simulate_game(
    home: ProjectionTeamStats,
    away: ProjectionTeamStats,
    config: ProjectionGameConfig | None = None,
) -> ProjectionGameResult:
    """Simulate one game as a projection per team, plus overtime if tied.

    Parameters
    ----------
    home, away : ProjectionTeamStats
        Per-game averages for each side.
    config : ProjectionGameConfig | None
        ``allow_ties`` (default False), ``max_ot_rounds`` (default 3,
        floored and clamped at 0), ``ot_scale`` (default 0.25),
        ``tiebreak_policy`` (default ``"expected"``) and an optional ``seed``.

    Returns
    -------
    ProjectionGameResult
        Both teams' projection details and scores. ``overtime`` is set only
        when at least one round was played or the tiebreak was applied.
    """
    config = config or ProjectionGameConfig()

    _validate_team(home, "home")
    _validate_team(away, "away")
    allow_ties, max_ot_rounds, ot_scale, tiebreak_policy = _resolve_config(config)

    rng = create_rng(config.seed)

    # Home before away: the draw order is part of the reproducible stream
    home_detail = calculate_team_detail(home, away, rng, team_label="home", opponent_label="away")
    away_detail = calculate_team_detail(away, home, rng, team_label="away", opponent_label="home")

    home_score = home_detail.final_points
    away_score = away_detail.final_points
    overtime: OvertimeResult | None = None

    if not allow_ties and home_score == away_score:
        rounds_played = 0
        while rounds_played < max_ot_rounds:
            home_ot = simulate_ot_points(
                home_detail.expected_points, home.yards_per_play, home.turnover_rate, ot_scale, rng
            )
            away_ot = simulate_ot_points(
                away_detail.expected_points, away.yards_per_play, away.turnover_rate, ot_scale, rng
            )
            home_detail.overtime_points.append(home_ot)
            away_detail.overtime_points.append(away_ot)
            home_score += home_ot
            away_score += away_ot
            rounds_played += 1
            if home_score != away_score:
                break

        tiebreak_applied: TiebreakPolicy | None = None
        tiebreak_winner: str | None = None
        if home_score == away_score:
            tiebreak_applied = tiebreak_policy
            if (
                tiebreak_policy is TiebreakPolicy.EXPECTED
                and away_detail.expected_points > home_detail.expected_points
            ):
                tiebreak_winner = "away"
                away_score += TIEBREAK_BONUS_POINTS
            else:
                tiebreak_winner = "home"
                home_score += TIEBREAK_BONUS_POINTS

        if rounds_played > 0 or tiebreak_applied is not None:
            overtime = OvertimeResult(
                rounds=rounds_played,
                home_points=list(home_detail.overtime_points),
                away_points=list(away_detail.overtime_points),
                tiebreak_applied=tiebreak_applied,
                tiebreak_winner=tiebreak_winner,
            )

    return ProjectionGameResult(
        home_score=home_score,
        away_score=away_score,
        home_detail=home_detail,
        away_detail=away_detail,
        overtime=overtime,
    )
