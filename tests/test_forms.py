"""Tests for the onboarding form schemas."""
from __future__ import annotations

import unittest

from pydantic import ValidationError

from onboarding.app.forms import (
    ProfileUpdateInput,
    RegistrationInput,
    field_errors,
    translate,
    validate,
)


class RegistrationSchemaTests(unittest.TestCase):
    """Constraint ordering, messages and normalization for registration."""

    def _errors(self, data: dict, locale: str = "en") -> dict[str, str]:
        with self.assertRaises(ValidationError) as ctx:
            validate(RegistrationInput, data, locale=locale)
        return field_errors(ctx.exception, locale)

    def test_short_usernames_fail_with_length_message(self) -> None:
        for username in ("", "a", "ab", "a!"):
            with self.subTest(username=username):
                errors = self._errors({"username": username, "name": "Alice Doe"})
                self.assertEqual(errors, {"username": "username must have at least 3 letters"})

    def test_usernames_with_other_characters_fail_with_pattern_message(self) -> None:
        for username in ("john doe", "john_doe", "joão", "abc1", "abc\n", "jo.hn"):
            with self.subTest(username=username):
                errors = self._errors({"username": username, "name": "Alice Doe"})
                self.assertEqual(
                    errors, {"username": "username may contain only letters and hyphens"}
                )

    def test_username_is_lowercased_after_validation(self) -> None:
        cleaned = validate(RegistrationInput, {"username": "JohnDoe", "name": "John Doe"})
        self.assertEqual(cleaned.username, "johndoe")
        self.assertEqual(cleaned.name, "John Doe")

    def test_hyphens_are_allowed(self) -> None:
        cleaned = validate(RegistrationInput, {"username": "Mary-Jane", "name": "Mary"})
        self.assertEqual(cleaned.username, "mary-jane")

    def test_name_length_boundary(self) -> None:
        errors = self._errors({"username": "alice", "name": "Al"})
        self.assertEqual(errors, {"name": "name must have at least 3 letters"})

        cleaned = validate(RegistrationInput, {"username": "alice", "name": "Ana"})
        self.assertEqual(cleaned.name, "Ana")

    def test_each_invalid_field_reports_one_message(self) -> None:
        errors = self._errors({"username": "x", "name": ""})
        self.assertEqual(set(errors), {"username", "name"})

    def test_missing_fields_are_required(self) -> None:
        errors = self._errors({})
        self.assertEqual(errors["username"], translate("required"))
        self.assertEqual(errors["name"], translate("required"))

    def test_messages_follow_locale(self) -> None:
        errors = self._errors({"username": "ab", "name": "Ana"}, locale="pt-BR")
        self.assertEqual(errors["username"], "O usuário precisa ter pelo menos 3 letras.")

    def test_unknown_locale_falls_back_to_english(self) -> None:
        errors = self._errors({"username": "ab", "name": "Ana"}, locale="xx")
        self.assertEqual(errors["username"], "username must have at least 3 letters")


class ProfileSchemaTests(unittest.TestCase):
    """The bio only needs to be text."""

    def test_empty_bio_is_valid(self) -> None:
        cleaned = validate(ProfileUpdateInput, {"bio": ""})
        self.assertEqual(cleaned.bio, "")

    def test_non_text_bio_is_rejected(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            validate(ProfileUpdateInput, {"bio": 42})
        self.assertEqual(field_errors(ctx.exception), {"bio": translate("not_text")})


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
