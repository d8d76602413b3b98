from __future__ import annotations

import logging

from flask import Blueprint, current_app, jsonify, request

from csssync.errors import ConfigurationError
from csssync.model.result import FailureReason

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)

_CLIENT_ERRORS = {FailureReason.INVALID_EVENT, FailureReason.NOT_CONFIGURED}


@api_bp.before_request
def log_request():
    logger.info("%s %s", request.method, request.path)


@api_bp.after_request
def add_cors_headers(response):
    """Allow the browser extension to call the agent."""
    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Headers"] = "Content-Type"
    response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
    return response


def _service():
    return current_app.extensions["sync_service"]


def _queue():
    return current_app.extensions["change_queue"]


def _configure(path: str, mappings: dict):
    """Run configure on the change queue so it never overlaps a patch."""
    future = _queue().submit_task(_service().configure, path, mappings)
    try:
        count = future.result(timeout=current_app.config["APPLY_TIMEOUT"])
    except ConfigurationError as exc:
        return jsonify({"success": False, "error": str(exc)}), 400
    except TimeoutError:
        return jsonify({"success": False, "error": "Timed out while indexing"}), 504
    service = _service()
    return jsonify({
        "success": True,
        "path": service.root_path,
        "filesLoaded": count,
        "domainMappings": service.domain_mappings,
    })


@api_bp.route("/status")
def status():
    """Health check plus what the agent currently has indexed."""
    return jsonify({"status": "running", **_service().status(), "pending": _queue().pending})


@api_bp.route("/activity")
def activity():
    """Recent applied and failed changes, newest first."""
    limit = request.args.get("limit", type=int)
    if limit is not None and limit < 1:
        return jsonify({"success": False, "error": "limit must be a positive integer"}), 400
    return jsonify({"entries": current_app.extensions["activity_log"].entries(limit)})


@api_bp.route("/set-project-path", methods=["POST", "OPTIONS"])
def set_project_path():
    if request.method == "OPTIONS":
        return "", 204
    data = request.get_json(silent=True) or {}
    path = data.get("path")
    if not path:
        return jsonify({"success": False, "error": "Path is required"}), 400
    return _configure(path, {})


@api_bp.route("/set-project-configuration", methods=["POST", "OPTIONS"])
def set_project_configuration():
    if request.method == "OPTIONS":
        return "", 204
    data = request.get_json(silent=True) or {}
    path = data.get("projectPath") or data.get("rootPath")
    if not path:
        return jsonify({"success": False, "error": "Path is required"}), 400
    mappings = data.get("domainMappings") or {}
    if not isinstance(mappings, dict):
        return jsonify({"success": False, "error": "domainMappings must be an object"}), 400
    return _configure(path, mappings)


@api_bp.route("/apply-css-change", methods=["POST", "OPTIONS"])
def apply_css_change():
    """Apply one change event; the body is the browser's change JSON."""
    if request.method == "OPTIONS":
        return "", 204
    data = request.get_json(silent=True)
    try:
        result = _queue().apply(data, timeout=current_app.config["APPLY_TIMEOUT"])
    except TimeoutError:
        return jsonify({"success": False, "error": "Timed out waiting for queued change"}), 504
    status_code = 400 if result.reason in _CLIENT_ERRORS else 200
    return jsonify(result.to_dict()), status_code
