"""
Core functionality package.

This package contains core application components including:
- Environment settings
- Logging
- Exceptions and HTTP error handlers
- Localization, object storage and mail transport collaborators
"""

from lad.core.settings import Settings

__all__ = [
    "Settings",
]
