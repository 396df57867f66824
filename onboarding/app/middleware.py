"""Application middleware that records onboarding submissions in the log."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from flask import Flask, current_app, g, request


@dataclass(slots=True)
class _SubmissionConfig:
    action: str
    entity_type: str


SIGNIFICANT_ACTIONS: dict[tuple[str, str], _SubmissionConfig] = {
    ("POST", "/register"): _SubmissionConfig(
        action="user.registered",
        entity_type="user",
    ),
    ("POST", "/register/update-profile"): _SubmissionConfig(
        action="profile.updated",
        entity_type="profile",
    ),
}


def register_submission_logging(app: Flask) -> None:
    """Attach middleware that logs the outcome of significant form posts.

    Only the action, route and status are logged; form contents never are.
    """

    @app.before_request
    def _capture_submission_context() -> None:
        method = request.method.upper()
        normalized_path = _normalize_path(request.path)
        config = SIGNIFICANT_ACTIONS.get((method, normalized_path))
        if not config:
            g.submission_context = None
            return

        g.submission_context = {
            "config": config,
            "method": method,
            "path": normalized_path,
        }

    @app.after_request
    def _log_submission(response):
        context: dict[str, Any] | None = getattr(g, "submission_context", None)
        if not context:
            return response

        config: _SubmissionConfig = context["config"]
        outcome = _outcome(response.status_code)
        current_app.logger.info(
            "%s %s (%s %s -> %s)",
            config.action,
            outcome,
            context["method"],
            context["path"],
            response.status_code,
            extra={"entity_type": config.entity_type, "outcome": outcome},
        )
        return response


def _normalize_path(path: str) -> str:
    if path != "/" and path.endswith("/"):
        return path[:-1]
    return path


def _outcome(status_code: int) -> str:
    # Successful submissions redirect to the next page.
    if 300 <= status_code < 400:
        return "succeeded"
    return "failed"
