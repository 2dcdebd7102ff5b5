"""/send-*-dm webhook endpoints called by the applicant tracker."""

from __future__ import annotations

from typing import Awaitable, Callable

from flask import Blueprint, current_app, jsonify, request

from fxg_relay.services.relay_service import ApplicantRequest
from fxg_relay.utils.auth import get_relay, require_api_key, require_ready

bp = Blueprint("applicants", __name__)

Workflow = Callable[[ApplicantRequest], Awaitable[str]]


def _read_applicant() -> ApplicantRequest:
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        payload = {}
    return ApplicantRequest.from_payload(payload)


def _run_workflow(workflow: Workflow, applicant: ApplicantRequest):
    """Run one relay workflow on the bot loop and turn its outcome into JSON."""
    try:
        message = get_relay().dispatch(workflow(applicant))
    except Exception as exc:
        current_app.logger.exception("Error handling %s for %s", request.path, applicant.discord_id)
        return jsonify(success=False, error=str(exc)), 500

    return jsonify(success=True, message=message), 200


def _gate():
    error_response = require_api_key()
    if error_response is not None:
        return error_response
    return require_ready()


@bp.post("/send-interview-dm")
def send_interview_dm():
    """DM an interview invitation carrying the "Join Interview" button."""
    error_response = _gate()
    if error_response is not None:
        return error_response

    applicant = _read_applicant()
    missing = applicant.missing_fields()
    if missing:
        return jsonify(error=f"Missing required fields: {', '.join(missing)}", missingFields=missing), 400

    return _run_workflow(get_relay().send_interview_invite, applicant)


@bp.post("/send-approval-dm")
def send_approval_dm():
    """Grant roles, file the interview channel as approved and DM the applicant."""
    error_response = _gate()
    if error_response is not None:
        return error_response

    return _run_workflow(get_relay().approve, _read_applicant())


@bp.post("/send-denial-dm")
def send_denial_dm():
    """File the interview channel as denied, revoke access and DM the applicant."""
    error_response = _gate()
    if error_response is not None:
        return error_response

    return _run_workflow(get_relay().deny, _read_applicant())


@bp.post("/send-career-approval-dm")
def send_career_approval_dm():
    error_response = _gate()
    if error_response is not None:
        return error_response

    return _run_workflow(get_relay().approve_career, _read_applicant())


@bp.post("/send-career-denial-dm")
def send_career_denial_dm():
    error_response = _gate()
    if error_response is not None:
        return error_response

    return _run_workflow(get_relay().deny_career, _read_applicant())
