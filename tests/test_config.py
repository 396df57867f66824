"""Tests for configuration selection and the deployment entrypoint."""
from __future__ import annotations

import unittest

from flask import Flask

from onboarding.config import DevelopmentConfig, ProductionConfig, _split_list, get_config


class ConfigTests(unittest.TestCase):
    def test_get_config_defaults_to_development(self) -> None:
        self.assertIs(get_config(None), DevelopmentConfig)
        self.assertIs(get_config("staging"), DevelopmentConfig)
        self.assertIs(get_config("PRODUCTION"), ProductionConfig)

    def test_as_dict_exposes_settings(self) -> None:
        settings = ProductionConfig.as_dict()
        self.assertFalse(settings["DEBUG"])
        self.assertIn("API_BASE_URL", settings)
        self.assertIn("FORM_LOCALE", settings)

    def test_token_locations_are_trimmed(self) -> None:
        self.assertEqual(_split_list("cookies, headers"), ["cookies", "headers"])
        self.assertEqual(_split_list(" headers ,"), ["headers"])

    def test_cookie_sessions_require_csrf(self) -> None:
        settings = DevelopmentConfig.as_dict()
        self.assertTrue(settings["JWT_COOKIE_CSRF_PROTECT"])
        self.assertTrue(settings["JWT_CSRF_CHECK_FORM"])

    def test_serverless_entrypoint_builds_app(self) -> None:
        from onboarding.app import serverless

        self.assertIsInstance(serverless.app, Flask)
        self.assertIn("frontend", serverless.app.blueprints)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
