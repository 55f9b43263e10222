"""Bundle reader interfaces.

This package contains the base class every bundle reader implements.
Format-specific implementations live in the formats/ directory.
"""

from .base import BundleReader

__all__ = ["BundleReader"]
