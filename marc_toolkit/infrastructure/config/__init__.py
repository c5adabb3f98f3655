# marc_toolkit/infrastructure/config/__init__.py

"""Configuration infrastructure for the MARC toolkit.

This module manages configuration loading, validation, and models.
"""

# Local imports
from marc_toolkit.infrastructure.config._loader import ConfigLoader
from marc_toolkit.infrastructure.config._loader import get_config
from marc_toolkit.infrastructure.config._models import AppConfig
from marc_toolkit.infrastructure.config._models import GroupingConfig
from marc_toolkit.infrastructure.config._models import ReaderConfig
from marc_toolkit.infrastructure.config._models import ServiceConfig
from marc_toolkit.infrastructure.config._rules import RuleSet
from marc_toolkit.infrastructure.config._rules import RulesConfig

__all__ = [
    "AppConfig",
    "ConfigLoader",
    "GroupingConfig",
    "ReaderConfig",
    "RuleSet",
    "RulesConfig",
    "ServiceConfig",
    "get_config",
]
