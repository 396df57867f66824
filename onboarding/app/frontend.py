"""Routes for the onboarding pages."""
from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, abort, current_app, redirect, render_template, request
from flask.typing import ResponseReturnValue
from flask_jwt_extended.exceptions import CSRFError

from onboarding.app.services.api_client import ApiClient
from onboarding.app.services.onboarding_service import (
    ProfileUpdateForm,
    RegistrationForm,
    Router,
    SubmissionResult,
)
from onboarding.app.session import load_session

frontend_bp = Blueprint("frontend", __name__)


def _render(template: str, form, result: SubmissionResult | None, **context) -> ResponseReturnValue:
    status = HTTPStatus.OK
    if result is not None and result.field_errors:
        status = HTTPStatus.UNPROCESSABLE_ENTITY
    html = render_template(
        template,
        form=form,
        alert=form.alert,
        locale=form.locale,
        **context,
    )
    return html, status


@frontend_bp.route("/register", methods=["GET", "POST"])
def register_page() -> ResponseReturnValue:
    """Render and handle the account registration form."""

    form = RegistrationForm(
        client=ApiClient.from_config(),
        router=Router(),
        locale=current_app.config["FORM_LOCALE"],
        username=request.args.get("username"),
        default_username=current_app.config["REGISTER_DEFAULT_USERNAME"],
    )

    result = None
    if request.method == "POST":
        result = form.register(
            {
                "username": request.form.get("username", ""),
                "name": request.form.get("name", ""),
            }
        )
        if result.ok:
            return redirect(result.location)

    return _render("register/index.html", form, result)


@frontend_bp.route("/register/update-profile", methods=["GET", "POST"])
def update_profile_page() -> ResponseReturnValue:
    """Render and handle the profile update form for the signed-in user."""

    try:
        session = load_session()
    except CSRFError:
        abort(HTTPStatus.FORBIDDEN)
    if session is None:
        abort(HTTPStatus.UNAUTHORIZED)

    form = ProfileUpdateForm(
        session=session,
        client=ApiClient.from_config(access_token=session.access_token),
        router=Router(),
        locale=current_app.config["FORM_LOCALE"],
    )

    result = None
    if request.method == "POST":
        result = form.update_profile({"bio": request.form.get("bio", "")})
        if result.ok:
            return redirect(result.location)

    return _render(
        "register/update_profile.html",
        form,
        result,
        user=session,
        csrf_field=current_app.config["JWT_ACCESS_CSRF_FIELD_NAME"],
    )
