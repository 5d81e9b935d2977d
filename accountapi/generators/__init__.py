"""Sample data generators."""

from accountapi.generators.account import AccountGenerator
from accountapi.generators.base import BaseGenerator

__all__ = ["AccountGenerator", "BaseGenerator"]
