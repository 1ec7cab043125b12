"""
Tests for the per-game projection engine.

Usage:
    pytest test_projection_engine.py
"""
import math

import pytest

from models import ProjectionTeamStats, ProjectionGameConfig, TiebreakPolicy
from simulation.projection_engine import (
    gaussian,
    calculate_team_detail,
    simulate_ot_points,
    simulate_game,
)
from simulation.validation import InvalidInput, PositiveViolation, NonNegativeViolation

HOME = ProjectionTeamStats(
    points_per_game=24.6, points_allowed_per_game=20.9, yards_per_play=5.9, turnover_rate=1.1
)
AWAY = ProjectionTeamStats(
    points_per_game=21.3, points_allowed_per_game=19.8, yards_per_play=5.4, turnover_rate=0.9
)


class ScriptedRandom:
    """Replays fixed draws and counts how many were taken."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def __call__(self):
        value = self.values[self.calls]
        self.calls += 1
        return value


# ---------------------------------------------------------------------------
# Building blocks
# ---------------------------------------------------------------------------

def test_gaussian_resamples_zero_draws():
    rng = ScriptedRandom([0.0, 0.5, 0.5])
    value = gaussian(rng, 10.0, 2.0)
    assert rng.calls == 3
    assert value == pytest.approx(10.0 - 2.0 * math.sqrt(2.0 * math.log(2.0)))


def test_gaussian_negative_std_dev_collapses_to_mean():
    assert gaussian(ScriptedRandom([0.3, 0.7]), 4.0, -1.0) == 4.0


def test_team_detail_breakdown():
    rng = ScriptedRandom([0.5, 0.25])  # cos(pi / 2): no variation
    detail = calculate_team_detail(HOME, AWAY, rng)
    assert rng.calls == 2
    assert detail.expected_points == pytest.approx(22.2)
    assert detail.variation == pytest.approx(0.0)
    assert detail.turnover_penalty == pytest.approx(2.2)
    assert detail.raw_projection == pytest.approx(20.0)
    assert detail.final_points == 20
    assert detail.overtime_points == []


def test_team_detail_never_negative():
    weak = ProjectionTeamStats(points_per_game=0, points_allowed_per_game=0, yards_per_play=1.0, turnover_rate=5)
    detail = calculate_team_detail(weak, weak, ScriptedRandom([0.5, 0.25]))
    assert detail.raw_projection < 0
    assert detail.final_points == 0


def test_team_detail_validates_before_drawing():
    rng = ScriptedRandom([0.5, 0.5])
    bad = ProjectionTeamStats(points_per_game=20, points_allowed_per_game=20, yards_per_play=0, turnover_rate=1)
    with pytest.raises(PositiveViolation) as exc:
        calculate_team_detail(bad, AWAY, rng)
    assert exc.value.field == "team.yards_per_play"
    assert rng.calls == 0


def test_ot_points_scale_and_cap():
    assert simulate_ot_points(60.0, 5.0, 0.0, 5.0, ScriptedRandom([0.5, 0.25])) == 12
    assert simulate_ot_points(20.0, 5.0, 0.0, 0.25, ScriptedRandom([0.5, 0.25])) == 5
    assert simulate_ot_points(20.0, 5.0, 0.0, -1.0, ScriptedRandom([0.5, 0.25])) == 0
    assert simulate_ot_points(20.0, 5.0, 10.0, 0.25, ScriptedRandom([0.5, 0.25])) == 0


# ---------------------------------------------------------------------------
# simulate_game
# ---------------------------------------------------------------------------

def test_reference_game_seed_7():
    config = ProjectionGameConfig(
        allow_ties=False, max_ot_rounds=3, ot_scale=0.25, tiebreak_policy="expected", seed=7
    )
    result = simulate_game(HOME, AWAY, config)
    assert result.home_score == 31
    assert result.away_score == 20
    assert result.home_detail.expected_points == pytest.approx(22.2)
    assert result.away_detail.expected_points == pytest.approx(21.1)
    assert result.overtime is None
    assert "overtime" not in result.to_dict()


def test_defaults_match_reference_config():
    explicit = ProjectionGameConfig(
        allow_ties=False, max_ot_rounds=3, ot_scale=0.25, tiebreak_policy=TiebreakPolicy.EXPECTED, seed=78
    )
    assert simulate_game(HOME, AWAY, ProjectionGameConfig(seed=78)).to_dict() == \
        simulate_game(HOME, AWAY, explicit).to_dict()


def test_overtime_rounds_break_tie():
    result = simulate_game(HOME, AWAY, ProjectionGameConfig(seed=78))
    assert (result.home_detail.final_points, result.away_detail.final_points) == (19, 19)
    assert (result.home_score, result.away_score) == (30, 29)
    assert result.overtime.rounds == 2
    assert result.overtime.home_points == [6, 5]
    assert result.overtime.away_points == [6, 4]
    assert result.overtime.tiebreak_applied is None
    assert result.to_dict()["overtime"]["tiebreak_applied"] == "none"
    assert result.home_detail.overtime_points == [6, 5]


def test_tiebreak_after_round_cap():
    result = simulate_game(HOME, AWAY, ProjectionGameConfig(max_ot_rounds=1, seed=78))
    assert (result.home_score, result.away_score) == (26, 25)
    assert result.overtime.rounds == 1
    assert result.overtime.tiebreak_applied is TiebreakPolicy.EXPECTED
    assert result.overtime.tiebreak_winner == "home"


def test_rounds_are_floored_and_clamped():
    floored = simulate_game(HOME, AWAY, ProjectionGameConfig(max_ot_rounds=1.9, seed=78))
    assert (floored.home_score, floored.away_score) == (26, 25)
    clamped = simulate_game(HOME, AWAY, ProjectionGameConfig(max_ot_rounds=-3, seed=78))
    assert (clamped.home_score, clamped.away_score) == (20, 19)


def test_zero_rounds_goes_straight_to_tiebreak():
    result = simulate_game(HOME, AWAY, ProjectionGameConfig(max_ot_rounds=0, seed=78))
    assert (result.home_score, result.away_score) == (20, 19)
    assert result.overtime is not None
    assert result.overtime.rounds == 0
    assert result.overtime.home_points == []


def test_expected_policy_favours_stronger_projection():
    # Swapped sides: the away team now has the higher expected points
    result = simulate_game(AWAY, HOME, ProjectionGameConfig(max_ot_rounds=0, seed=44))
    assert (result.home_score, result.away_score) == (22, 23)
    assert result.overtime.tiebreak_winner == "away"


def test_home_policy_always_favours_home():
    result = simulate_game(AWAY, HOME, ProjectionGameConfig(max_ot_rounds=0, tiebreak_policy="home", seed=44))
    assert (result.home_score, result.away_score) == (23, 22)
    assert result.overtime.tiebreak_applied is TiebreakPolicy.HOME
    assert result.to_dict()["overtime"]["tiebreak_applied"] == "home"


def test_expected_policy_equal_expectations_favours_home():
    result = simulate_game(HOME, HOME, ProjectionGameConfig(max_ot_rounds=0, seed=44))
    assert (result.home_score, result.away_score) == (24, 23)
    assert result.overtime.tiebreak_winner == "home"


def test_ties_allowed_skips_overtime():
    result = simulate_game(HOME, AWAY, ProjectionGameConfig(allow_ties=True, seed=78))
    assert (result.home_score, result.away_score) == (19, 19)
    assert result.overtime is None


def test_same_seed_reproducible():
    config = ProjectionGameConfig(seed=2718)
    assert simulate_game(HOME, AWAY, config).to_dict() == simulate_game(HOME, AWAY, config).to_dict()


def test_no_ties_when_disallowed():
    for seed in range(1, 300):
        result = simulate_game(HOME, AWAY, ProjectionGameConfig(max_ot_rounds=seed % 4, seed=seed))
        assert result.home_score != result.away_score
        overtime = result.overtime
        if overtime is None:
            assert result.home_detail.overtime_points == []
            continue
        assert overtime.rounds > 0 or overtime.tiebreak_applied is not None
        bonus_home = 1 if overtime.tiebreak_winner == "home" else 0
        bonus_away = 1 if overtime.tiebreak_winner == "away" else 0
        assert result.home_score == result.home_detail.final_points + sum(overtime.home_points) + bonus_home
        assert result.away_score == result.away_detail.final_points + sum(overtime.away_points) + bonus_away
        assert result.home_score >= 0 and result.away_score >= 0


@pytest.mark.parametrize(
    "home, error, field",
    [
        (ProjectionTeamStats(-1, 20, 5, 1), NonNegativeViolation, "home.points_per_game"),
        (ProjectionTeamStats(20, -0.5, 5, 1), NonNegativeViolation, "home.points_allowed_per_game"),
        (ProjectionTeamStats(20, 20, 0, 1), PositiveViolation, "home.yards_per_play"),
        (ProjectionTeamStats(20, 20, 5, -1), NonNegativeViolation, "home.turnover_rate"),
    ],
)
def test_invalid_stats_name_the_field(home, error, field):
    with pytest.raises(error) as exc:
        simulate_game(home, AWAY, ProjectionGameConfig(seed=1))
    assert exc.value.field == field


@pytest.mark.parametrize(
    "config, field",
    [
        (ProjectionGameConfig(ot_scale=math.nan), "ot_scale"),
        (ProjectionGameConfig(max_ot_rounds=math.inf), "max_ot_rounds"),
        (ProjectionGameConfig(tiebreak_policy="coin_flip"), "tiebreak_policy"),
        (ProjectionGameConfig(allow_ties="no"), "allow_ties"),
    ],
)
def test_invalid_config_rejected(config, field):
    with pytest.raises(InvalidInput) as exc:
        simulate_game(HOME, AWAY, config)
    assert exc.value.field == field
