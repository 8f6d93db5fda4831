import logging
import math

from flask import Blueprint, jsonify, request

from backend.services.playback import ACTIONS, SessionLimitError, registry
from backend.services.visuals import animator_config_from, get_series
from carstats.visuals.anims.transitions import frame_at

logger = logging.getLogger(__name__)

bp = Blueprint("playback", __name__)


def _not_found(session_id: str):
    return jsonify({"error": f"Unknown playback session: {session_id}"}), 404


@bp.route("/playback", methods=["POST"])
def create_playback():
    """Open a playback session over the brand series and start it.

    Reads optional animator options from the JSON body (see
    ``/generate_animation``).

    Returns:
        flask.Response: 201 with the session state and first render plan.
        400 on bad options, 503 when too many sessions are open.
    """
    try:
        data = request.get_json(silent=True) or {}
        session = registry.create(get_series(), animator_config_from(data))
        return jsonify(session.to_dict()), 201
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except SessionLimitError:
        return jsonify(
            {
                "error": "Server is busy. Too many playback sessions are open. Please try again in a few minutes."
            }
        ), 503
    except Exception as e:
        logger.exception("playback creation failed")
        return jsonify({"error": f"Playback failed: {str(e)}"}), 500


@bp.route("/playback/<session_id>", methods=["GET"])
def get_playback(session_id):
    """Current state, controls and render plan of a session.

    Passing ``?progress=0.5`` also returns the interpolated ``frame``.
    """
    session = registry.get(session_id)
    if session is None:
        return _not_found(session_id)
    body = session.to_dict()
    progress = request.args.get("progress", type=float)
    if progress is not None and not math.isfinite(progress):
        return jsonify({"error": "progress must be a finite number"}), 400
    plan = session.animator.plan
    if progress is not None and plan is not None:
        body["frame"] = frame_at(plan, progress).to_dict()
    return jsonify(body), 200


@bp.route("/playback/<session_id>/<action>", methods=["POST"])
def control_playback(session_id, action):
    """Apply a playback control.

    ``action`` is one of start, pause, resume, step_forward, step_backward,
    rewind (JSON ``steps``, default 5). Illegal transitions are not errors:
    the response carries ``applied: false`` and the unchanged state.
    """
    if action not in ACTIONS:
        return jsonify({"error": f"Unknown action: {action}"}), 400
    data = request.get_json(silent=True) or {}
    try:
        steps = int(data.get("steps", 5))
    except (TypeError, ValueError):
        return jsonify({"error": "steps must be an integer"}), 400
    result = registry.control(session_id, action, steps)
    if result is None:
        return _not_found(session_id)
    session, applied = result
    return jsonify({**session.to_dict(), "applied": applied}), 200


@bp.route("/playback/<session_id>", methods=["DELETE"])
def delete_playback(session_id):
    """Tear a session down, cancelling its timer."""
    if not registry.close(session_id):
        return _not_found(session_id)
    return jsonify({"session_id": session_id, "closed": True}), 200
