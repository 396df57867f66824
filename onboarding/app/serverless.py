"""Serverless entrypoint for deploying the onboarding pages on Vercel."""
from __future__ import annotations
import os

from onboarding.app import create_app

app = create_app(os.getenv("FLASK_ENV"))
