"""
Engine tuning constants and defaults for the game score estimator.
Both engines read their thresholds from here; the form defaults mirror the
values the simulator form is pre-filled with.
"""
from typing import Dict, Any

# LCG (Park-Miller "minimal standard") parameters
LCG_MODULUS = 2147483647
LCG_MULTIPLIER = 16807

# --- Drive engine ---
MIN_POINTS_PER_DRIVE = 0.2
MAX_POINTS_PER_DRIVE = 4.0
MAX_SCORING_PROBABILITY = 0.85
BASE_SCORING_MULTIPLIER = 0.4
TOUCHDOWN_SHARE = 0.75  # share of scoring drives that end in a TD
TOUCHDOWN_POINTS = 7
FIELD_GOAL_POINTS = 3

DEFAULT_DRIVES_PER_TEAM = 12
DEFAULT_DRIVE_ALLOW_TIES = True
DEFAULT_DRIVE_OT_ROUNDS = 6

# --- Projection engine ---
MIN_STD_DEV = 0.1
REGULATION_STD_DEV_PER_YPP = 0.5
REGULATION_TURNOVER_COST = 2.0
OVERTIME_STD_DEV_PER_YPP = 0.25
OVERTIME_TURNOVER_COST = 0.8
MAX_OVERTIME_EXPECTED_POINTS = 12.0

DEFAULT_PROJECTION_ALLOW_TIES = False
DEFAULT_MAX_OT_ROUNDS = 3
DEFAULT_OT_SCALE = 0.25
DEFAULT_TIEBREAK_POLICY = "expected"
TIEBREAK_BONUS_POINTS = 1

# Pre-filled form values, as strings (the form parses them on submit)
DRIVE_FORM_DEFAULTS: Dict[str, Any] = {
    "home": {"off_pts_drive": "2.5", "def_pts_drive": "2.2"},
    "away": {"off_pts_drive": "2.3", "def_pts_drive": "2.4"},
    "drives_per_team": "12",
    "allow_ties": True,
    "overtime_enabled": True,
    "max_rounds": "3",
    "seed": "",
}

PROJECTION_FORM_DEFAULTS: Dict[str, Any] = {
    "home": {
        "points_per_game": "24.6",
        "points_allowed_per_game": "20.9",
        "yards_per_play": "5.9",
        "turnover_rate": "1.1",
    },
    "away": {
        "points_per_game": "21.3",
        "points_allowed_per_game": "19.8",
        "yards_per_play": "5.4",
        "turnover_rate": "0.9",
    },
    "allow_ties": False,
    "max_ot_rounds": "3",
    "ot_scale": "0.25",
    "tiebreak_policy": DEFAULT_TIEBREAK_POLICY,
    "seed": "",
}
