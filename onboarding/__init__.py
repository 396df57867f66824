"""Onboarding pages for the Ignite Call scheduling application."""
