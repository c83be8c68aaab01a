"""
Consistency layer package.
"""

from .version_vector import VersionVector, compare_versions
from .guarantees import Guarantee, GuaranteeViolation
from .session import SessionTracker

__all__ = ['VersionVector', 'compare_versions', 'Guarantee', 'GuaranteeViolation', 'SessionTracker']
