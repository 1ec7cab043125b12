"""
Game score estimator: Flask app.
JSON boundary for the simulator form: parses the submitted fields, runs the
selected engine and returns the score breakdown. Every validation failure is
answered with the id of the form input it belongs to.

Usage:
    python app.py
"""
import logging
import os
from typing import Any

from flask import Flask, jsonify, request

from models import (
    DriveTeamStats,
    ProjectionTeamStats,
    DriveGameConfig,
    ProjectionGameConfig,
    OvertimeConfig,
    DriveOutcome,
    DriveResult,
    DriveGameResult,
)
from models.constants import DRIVE_FORM_DEFAULTS, PROJECTION_FORM_DEFAULTS
from simulation import EngineKind, InvalidInput, simulate_game

logger = logging.getLogger(__name__)

LOG_LEVEL = os.environ.get("GAMESIM_LOG_LEVEL", "INFO").upper()
PORT = int(os.environ.get("GAMESIM_PORT", "5000"))
DEBUG = os.environ.get("GAMESIM_DEBUG", "").lower() in ("1", "true", "yes")

app = Flask(__name__)

# Engine / parser field name -> form input id
FORM_FIELDS: dict[str, str] = {
    "engine": "engine",
    "seed": "seed",
    "allow_ties": "allow-ties",
    # Drive engine
    "home.off_pts_drive": "home-off",
    "home.def_pts_drive": "home-def",
    "away.off_pts_drive": "away-off",
    "away.def_pts_drive": "away-def",
    "drives_per_team": "drives-per-team",
    "overtime.enabled": "overtime-enabled",
    "overtime.max_rounds": "max-rounds",
    # Projection engine
    "home.points_per_game": "home-ppg",
    "home.points_allowed_per_game": "home-papg",
    "home.yards_per_play": "home-ypp",
    "home.turnover_rate": "home-to",
    "away.points_per_game": "away-ppg",
    "away.points_allowed_per_game": "away-papg",
    "away.yards_per_play": "away-ypp",
    "away.turnover_rate": "away-to",
    "max_ot_rounds": "max-ot-rounds",
    "ot_scale": "ot-scale",
    "tiebreak_policy": "tiebreak-policy",
}

TEAM_LABELS = {"home": "home team", "away": "away team"}
TRUE_VALUES = ("1", "true", "on", "yes")


# ---------------------------------------------------------------------------
# Form parsing (strings in, numbers out)
# ---------------------------------------------------------------------------

def _payload() -> dict:
    """Submitted fields: JSON body if present, else the form."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def _team_inputs(payload: dict, side: str) -> dict:
    """Nested ``{"home": {...}}`` or flat ``home_<field>`` keys."""
    nested = payload.get(side)
    if isinstance(nested, dict):
        return nested
    prefix = f"{side}_"
    return {k[len(prefix):]: v for k, v in payload.items() if k.startswith(prefix)}


def _is_blank(raw: Any) -> bool:
    return raw is None or (isinstance(raw, str) and not raw.strip())


def _parse_float(raw: Any, field: str, message: str) -> float:
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return float(raw)
    try:
        return float(str(raw).strip())
    except (TypeError, ValueError):
        raise InvalidInput(field, message) from None


def _parse_int(raw: Any, field: str, message: str) -> int:
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    try:
        return int(str(raw).strip())
    except (TypeError, ValueError):
        raise InvalidInput(field, message) from None


def _parse_flag(raw: Any, default: bool) -> bool:
    if raw is None:
        return default
    if isinstance(raw, bool):
        return raw
    return str(raw).strip().lower() in TRUE_VALUES


def _parse_optional_int(
    payload: dict,
    key: str,
    message: str,
    *,
    positive: bool = False,
    field: str | None = None,
) -> int | None:
    raw = payload.get(key)
    if _is_blank(raw):
        return None
    field = field or key
    value = _parse_int(raw, field, message)
    if positive and value <= 0:
        raise InvalidInput(field, message)
    return value


def _parse_seed(payload: dict) -> int | None:
    return _parse_optional_int(payload, "seed", "The seed must be a whole number.")


def _parse_drive_team(payload: dict, side: str) -> DriveTeamStats:
    inputs = _team_inputs(payload, side)
    label = TEAM_LABELS[side]
    return DriveTeamStats(
        off_pts_drive=_parse_float(
            inputs.get("off_pts_drive"),
            f"{side}.off_pts_drive",
            f"Enter a valid number for the offensive average ({label}).",
        ),
        def_pts_drive=_parse_float(
            inputs.get("def_pts_drive"),
            f"{side}.def_pts_drive",
            f"Enter a valid number for the defensive average ({label}).",
        ),
    )


def _parse_drive_config(payload: dict) -> DriveGameConfig:
    drives = _parse_optional_int(
        payload,
        "drives_per_team",
        "Drives per team must be a positive integer.",
        positive=True,
    )
    allow_ties = _parse_flag(payload.get("allow_ties"), DRIVE_FORM_DEFAULTS["allow_ties"])
    max_rounds = _parse_optional_int(
        payload,
        "max_rounds",
        "Overtime rounds must be a positive integer.",
        positive=True,
        field="overtime.max_rounds",
    )
    overtime = None
    if not allow_ties:
        overtime = OvertimeConfig(
            enabled=_parse_flag(payload.get("overtime_enabled"), DRIVE_FORM_DEFAULTS["overtime_enabled"]),
            max_rounds=max_rounds,
        )
    return DriveGameConfig(
        drives_per_team=drives,
        allow_ties=allow_ties,
        overtime=overtime,
        seed=_parse_seed(payload),
    )


_PROJECTION_FIELD_NAMES = {
    "points_per_game": "points per game",
    "points_allowed_per_game": "points allowed per game",
    "yards_per_play": "yards per play",
    "turnover_rate": "turnover rate",
}


def _parse_projection_team(payload: dict, side: str) -> ProjectionTeamStats:
    inputs = _team_inputs(payload, side)
    label = TEAM_LABELS[side]
    values = {
        key: _parse_float(
            inputs.get(key),
            f"{side}.{key}",
            f"Enter a valid number for {name} ({label}).",
        )
        for key, name in _PROJECTION_FIELD_NAMES.items()
    }
    return ProjectionTeamStats(**values)


def _parse_projection_config(payload: dict) -> ProjectionGameConfig:
    ot_scale_raw = payload.get("ot_scale")
    ot_scale = None
    if not _is_blank(ot_scale_raw):
        ot_scale = _parse_float(ot_scale_raw, "ot_scale", "Overtime scale must be a number.")
    policy = payload.get("tiebreak_policy")
    return ProjectionGameConfig(
        seed=_parse_seed(payload),
        allow_ties=_parse_flag(payload.get("allow_ties"), PROJECTION_FORM_DEFAULTS["allow_ties"]),
        max_ot_rounds=_parse_optional_int(
            payload, "max_ot_rounds", "Overtime rounds must be a whole number."
        ),
        ot_scale=ot_scale,
        tiebreak_policy=None if _is_blank(policy) else str(policy).strip().lower(),
    )


# ---------------------------------------------------------------------------
# Result rendering helpers
# ---------------------------------------------------------------------------

def format_drive_label(drive: DriveOutcome, index: int) -> str:
    prefix = f"Drive {index + 1}"
    if drive.result is DriveResult.NONE:
        return f"{prefix}: no score"
    return f"{prefix}: {drive.result.value} ({drive.points} pts)"


def _drive_overtime_info(result: DriveGameResult, config: DriveGameConfig) -> dict:
    """Rounds played, and whether the round cap ended overtime still tied."""
    rounds = result.overtime_rounds
    overtime = config.overtime
    capped = (
        rounds > 0
        and overtime is not None
        and overtime.enabled
        and overtime.max_rounds is not None
        and rounds >= overtime.max_rounds
        and result.is_tie
    )
    return {"rounds": rounds, "applied": rounds > 0, "capped": capped}


def _error_response(exc: InvalidInput):
    return jsonify({"error": exc.message, "field": FORM_FIELDS.get(exc.field)}), 400


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@app.route("/api/defaults")
def api_defaults():
    """Pre-filled form values for both engines."""
    return jsonify({
        EngineKind.DRIVE.value: DRIVE_FORM_DEFAULTS,
        EngineKind.PROJECTION.value: PROJECTION_FORM_DEFAULTS,
    })


@app.route("/api/simulate/<engine>", methods=["POST"])
def api_simulate(engine: str):
    """Parse the submitted form, run the chosen engine, return the breakdown."""
    try:
        kind = EngineKind(engine)
    except ValueError:
        return jsonify({"error": f"Unknown engine: {engine}", "field": FORM_FIELDS["engine"]}), 404

    payload = _payload()
    try:
        if kind is EngineKind.DRIVE:
            home = _parse_drive_team(payload, "home")
            away = _parse_drive_team(payload, "away")
            config = _parse_drive_config(payload)
        else:
            home = _parse_projection_team(payload, "home")
            away = _parse_projection_team(payload, "away")
            config = _parse_projection_config(payload)
        result = simulate_game(kind, home, away, config)
    except InvalidInput as e:
        logger.warning("Rejected %s simulation: %s (%s)", kind.value, e.message, e.field)
        return _error_response(e)

    logger.info(
        "Simulated %s game seed=%s score=%d-%d",
        kind.value, config.seed, result.home_score, result.away_score,
    )
    body: dict[str, Any] = {
        "engine": kind.value,
        "seed": config.seed,
        "result": result.to_dict(),
    }
    if kind is EngineKind.DRIVE:
        body["home_labels"] = [format_drive_label(d, i) for i, d in enumerate(result.home_drives)]
        body["away_labels"] = [format_drive_label(d, i) for i, d in enumerate(result.away_drives)]
        body["overtime"] = _drive_overtime_info(result, config)
    return jsonify(body)


if __name__ == "__main__":
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app.run(debug=DEBUG, port=PORT)
