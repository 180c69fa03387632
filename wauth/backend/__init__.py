"""
Backend package: HTTP API (Flask) cho wauth.
"""

from .app import create_app

__all__ = ['create_app']
