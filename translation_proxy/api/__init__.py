"""
API package for the translation proxy.
"""

from .app import create_app

__all__ = [
    "create_app"
]
