"""Declarative schemas for the onboarding forms.

Each field lists its constraints in the order they are checked. The first
failing constraint stops the chain for that field, so the message shown next
to the input always describes the value the user typed. Normalization steps
sit at the end of the chain and only run once every constraint has passed.
"""
from __future__ import annotations

import re
from typing import Annotated, Any, Callable, Mapping

from pydantic import AfterValidator, BaseModel, ConfigDict, StrictStr, ValidationError, ValidationInfo
from pydantic_core import PydanticCustomError

DEFAULT_LOCALE = "en"

MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "username_min_length": "username must have at least 3 letters",
        "username_pattern": "username may contain only letters and hyphens",
        "name_min_length": "name must have at least 3 letters",
        "required": "this field is required",
        "not_text": "this field must be text",
        "missing_username": "your session has no username, please sign in again",
    },
    "pt-BR": {
        "username_min_length": "O usuário precisa ter pelo menos 3 letras.",
        "username_pattern": "O usuário pode ter apenas letras e hifens",
        "name_min_length": "O nome precisa ter pelo menos 3 letras.",
        "required": "Este campo é obrigatório.",
        "not_text": "Este campo precisa ser um texto.",
        "missing_username": "Sua sessão não possui um nome de usuário, entre novamente.",
    },
}

# Built-in pydantic error types that get a localized message instead of the
# library's English text.
_BUILTIN_MESSAGE_KEYS = {
    "missing": "required",
    "string_type": "not_text",
}

USERNAME_PATTERN = re.compile(r"[a-z-]+", re.IGNORECASE | re.ASCII)


def translate(key: str, locale: str | None = None) -> str:
    """Return the message for ``key`` in ``locale``, falling back to English."""

    catalog = MESSAGES.get(locale or DEFAULT_LOCALE, MESSAGES[DEFAULT_LOCALE])
    return catalog.get(key, MESSAGES[DEFAULT_LOCALE][key])


def _locale(info: ValidationInfo) -> str:
    context = info.context or {}
    return context.get("locale") or DEFAULT_LOCALE


def min_length(length: int, message_key: str) -> AfterValidator:
    def check(value: str, info: ValidationInfo) -> str:
        if len(value) < length:
            raise PydanticCustomError("min_length", translate(message_key, _locale(info)))
        return value

    return AfterValidator(check)


def matches(pattern: re.Pattern[str], message_key: str) -> AfterValidator:
    def check(value: str, info: ValidationInfo) -> str:
        if pattern.fullmatch(value) is None:
            raise PydanticCustomError("pattern", translate(message_key, _locale(info)))
        return value

    return AfterValidator(check)


def normalize(func: Callable[[str], str]) -> AfterValidator:
    """Wrap a pure transformation applied after the constraints."""

    return AfterValidator(func)


def _lowercase(value: str) -> str:
    return value.lower()


Username = Annotated[
    StrictStr,
    min_length(3, "username_min_length"),
    matches(USERNAME_PATTERN, "username_pattern"),
    normalize(_lowercase),
]

FullName = Annotated[StrictStr, min_length(3, "name_min_length")]


class RegistrationInput(BaseModel):
    """Fields collected by the registration page."""

    model_config = ConfigDict(frozen=True)

    username: Username
    name: FullName


class ProfileUpdateInput(BaseModel):
    """Fields collected by the profile update page."""

    model_config = ConfigDict(frozen=True)

    bio: StrictStr


def validate(schema: type[BaseModel], data: Mapping[str, Any], *, locale: str | None = None) -> Any:
    """Validate ``data`` against ``schema`` using messages for ``locale``."""

    return schema.model_validate(dict(data), context={"locale": locale or DEFAULT_LOCALE})


def field_errors(exc: ValidationError, locale: str | None = None) -> dict[str, str]:
    """Collapse a validation error into one message per field."""

    errors: dict[str, str] = {}
    for error in exc.errors():
        location = error.get("loc") or ("__root__",)
        field = str(location[0])
        if field in errors:
            continue
        message_key = _BUILTIN_MESSAGE_KEYS.get(error["type"])
        errors[field] = translate(message_key, locale) if message_key else error["msg"]
    return errors
