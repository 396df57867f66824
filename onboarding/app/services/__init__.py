"""Collaborators used by the onboarding pages."""
