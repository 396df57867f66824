"""Form controllers driving the registration and profile update pages."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Mapping
from urllib.parse import quote

from pydantic import BaseModel, ValidationError

from onboarding.app.forms import (
    DEFAULT_LOCALE,
    ProfileUpdateInput,
    RegistrationInput,
    field_errors,
    translate,
    validate,
)
from onboarding.app.services.api_client import ApiClient, ApiResponseError
from onboarding.app.session import UserSession

LOGGER = logging.getLogger(__name__)

REGISTER_NEXT_STEP = "/register/connect-calendar"


class FormState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILED = "failed"


class SubmissionInProgressError(RuntimeError):
    """Raised when a form is submitted again while a request is pending."""


class FormCompletedError(RuntimeError):
    """Raised when a form that already navigated away is submitted again."""


class StructuredSubmissionError(RuntimeError):
    """A failure whose message is meant to be shown to the user."""


@dataclass(slots=True)
class SubmissionResult:
    """Outcome of a single submit attempt."""

    state: FormState
    location: str | None = None
    field_errors: dict[str, str] = field(default_factory=dict)
    alert: str | None = None

    @property
    def ok(self) -> bool:
        return self.state is FormState.SUCCESS


class Router:
    """Records where a form asked to navigate."""

    def __init__(self) -> None:
        self.location: str | None = None
        self.history: list[str] = []

    def push(self, location: str) -> None:
        self.history.append(location)
        self.location = location


class OnboardingForm:
    """Shared validate-submit-navigate flow.

    Subclasses name their schema and implement :meth:`_send`, which performs
    the request for already validated input and returns the navigation target.
    """

    schema: type[BaseModel]
    action: str = "submission"

    def __init__(
        self,
        *,
        client: ApiClient,
        router: Router,
        locale: str = DEFAULT_LOCALE,
        initial: Mapping[str, Any] | None = None,
    ) -> None:
        self.client = client
        self.router = router
        self.locale = locale
        self.values: dict[str, Any] = dict(initial or {})
        self.errors: dict[str, str] = {}
        self.alert: str | None = None
        self.state = FormState.IDLE
        self.submitting = False

    @contextmanager
    def _submitting(self) -> Iterator[None]:
        self.submitting = True
        self.state = FormState.SUBMITTING
        try:
            yield
        finally:
            self.submitting = False

    def submit(self, data: Mapping[str, Any]) -> SubmissionResult:
        if self.state is FormState.SUCCESS:
            raise FormCompletedError("This form has already been submitted.")
        if self.submitting:
            raise SubmissionInProgressError("A submission is already in flight.")

        self.values.update(data)
        self.errors = {}
        self.alert = None
        self.state = FormState.VALIDATING
        try:
            cleaned = validate(self.schema, data, locale=self.locale)
        except ValidationError as exc:
            self.errors = field_errors(exc, self.locale)
            return self._fail()

        with self._submitting():
            try:
                location = self._send(cleaned)
            except StructuredSubmissionError as exc:
                self.alert = str(exc)
                LOGGER.info("%s rejected: %s", self.action, self.alert)
                return self._fail()
            except ApiResponseError as exc:
                if exc.message:
                    self.alert = exc.message
                    LOGGER.info("%s rejected by API (%s): %s", self.action, exc.status, exc.message)
                else:
                    LOGGER.exception("%s failed with status %s", self.action, exc.status)
                return self._fail()
            except Exception:
                LOGGER.exception("%s failed", self.action)
                return self._fail()

            self.router.push(location)
            self.state = FormState.SUCCESS

        return SubmissionResult(state=FormState.SUCCESS, location=location)

    def _fail(self) -> SubmissionResult:
        result = SubmissionResult(
            state=FormState.FAILED,
            field_errors=dict(self.errors),
            alert=self.alert,
        )
        self.state = FormState.IDLE
        return result

    def _send(self, cleaned: Any) -> str:  # pragma: no cover - abstract
        raise NotImplementedError


class RegistrationForm(OnboardingForm):
    """Creates the user account and moves on to calendar connection."""

    schema = RegistrationInput
    action = "registration"

    def __init__(
        self,
        *,
        client: ApiClient,
        router: Router,
        locale: str = DEFAULT_LOCALE,
        username: str | None = None,
        default_username: str = "",
    ) -> None:
        super().__init__(
            client=client,
            router=router,
            locale=locale,
            initial={"username": username or default_username, "name": ""},
        )

    def register(self, data: Mapping[str, Any]) -> SubmissionResult:
        return self.submit(data)

    def _send(self, cleaned: RegistrationInput) -> str:
        self.client.post("/users", {"name": cleaned.name, "username": cleaned.username})
        return REGISTER_NEXT_STEP


class ProfileUpdateForm(OnboardingForm):
    """Stores the bio and opens the user's public schedule page."""

    schema = ProfileUpdateInput
    action = "profile update"

    def __init__(
        self,
        *,
        session: UserSession,
        client: ApiClient,
        router: Router,
        locale: str = DEFAULT_LOCALE,
    ) -> None:
        super().__init__(client=client, router=router, locale=locale, initial={"bio": ""})
        self.session = session

    def update_profile(self, data: Mapping[str, Any]) -> SubmissionResult:
        return self.submit(data)

    def _send(self, cleaned: ProfileUpdateInput) -> str:
        username = self.session.username
        if not username:
            raise StructuredSubmissionError(translate("missing_username", self.locale))

        self.client.put("/users/profile", {"bio": cleaned.bio})
        return f"/schedule/{quote(username, safe='')}"
