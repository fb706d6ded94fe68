"""
Provider pipelines.

Importing this package registers every built-in provider.
"""

from .base import BaseProvider
from . import aws  # noqa: F401  (registers "elastic_beanstalk")

__all__ = ["BaseProvider"]
