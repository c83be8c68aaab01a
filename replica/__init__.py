"""
Replica package.
"""

from .server import Replica
from .storage import ReplicaStorage

__all__ = ['Replica', 'ReplicaStorage']
