"""
EcoChallenge API package.

Provides the FastAPI application for challenges, activity logging and
real-time notifications.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
