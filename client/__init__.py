"""
Client session package.
"""

from .session_client import SessionClient

__all__ = ['SessionClient']
