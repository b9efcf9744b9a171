"""HTTP adapter."""

from .app import create_app, REPORT_URL

__all__ = ["create_app", "REPORT_URL"]
