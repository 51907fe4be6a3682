"""FastAPI REST API for cut optimization.

This module provides a REST API for optimizing cut lists onto sheets and
validating configurations.

Usage:
    uvicorn cutopt.web:app --reload
"""

from cutopt.web.app import app, create_app

__all__ = ["app", "create_app"]
