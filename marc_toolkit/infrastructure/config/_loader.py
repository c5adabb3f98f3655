# marc_toolkit/infrastructure/config/_loader.py

"""Main configuration loader using Pydantic models"""

# Standard library imports
from functools import cached_property
from logging import getLogger
from pathlib import Path

# Local imports
from marc_toolkit.core.domain.enums import ReadMode
from marc_toolkit.core.types.aliases import Decoder
from marc_toolkit.core.types.json import JSONDict
from marc_toolkit.infrastructure.config._models import AppConfig
from marc_toolkit.infrastructure.config._models import DiagnosticsConfig
from marc_toolkit.infrastructure.config._models import GroupingConfig
from marc_toolkit.infrastructure.config._models import LoggingConfig
from marc_toolkit.infrastructure.config._models import OutputConfig
from marc_toolkit.infrastructure.config._models import ReaderConfig
from marc_toolkit.infrastructure.config._models import ServiceConfig
from marc_toolkit.infrastructure.config._models import SourcesConfig
from marc_toolkit.infrastructure.config._rules import RulesConfig

logger = getLogger(__name__)


class ConfigLoader:
    """Configuration loader providing the app config and the semantic rule table

    Everything a run depends on (sources, strict/lenient mode, service
    connection parameters, rules) is carried here and passed explicitly.
    """

    def __init__(self, config_path: str | None = None, rules_path: str | None = None):
        """Initialize configuration loader

        Args:
            config_path: Path to JSON configuration file, None for auto-detection
            rules_path: Path to rules.json, None to follow the config or auto-detect
        """
        self.config_path = config_path
        self._app_config = AppConfig.load(config_path)
        self.rules_path = self._find_rules_path(rules_path)
        self._rules = RulesConfig.load(self.rules_path)

    def _find_rules_path(self, rules_path: str | None) -> Path | None:
        """Find rules.json: explicit path, config setting, next to config, cwd"""
        if rules_path:
            return Path(rules_path)

        if self._app_config.diagnostics.rules_file:
            return Path(self._app_config.diagnostics.rules_file)

        if self.config_path:
            candidate = Path(self.config_path).parent / "rules.json"
            if candidate.exists():
                return candidate

        candidate = Path("rules.json")
        if candidate.exists():
            return candidate

        return None

    @property
    def config(self) -> JSONDict:
        """Full config as a JSON-compatible dict"""
        return self._app_config.to_dict()

    @property
    def app_config(self) -> AppConfig:
        return self._app_config

    @property
    def reader(self) -> ReaderConfig:
        return self._app_config.reader

    @property
    def sources(self) -> SourcesConfig:
        return self._app_config.sources

    @property
    def service(self) -> ServiceConfig:
        return self._app_config.service

    @property
    def grouping(self) -> GroupingConfig:
        return self._app_config.grouping

    @property
    def diagnostics(self) -> DiagnosticsConfig:
        return self._app_config.diagnostics

    @property
    def output(self) -> OutputConfig:
        return self._app_config.output

    @property
    def logging(self) -> LoggingConfig:
        return self._app_config.logging

    @property
    def rules(self) -> RulesConfig:
        return self._rules

    @property
    def read_mode(self) -> ReadMode:
        return self._app_config.reader.mode

    @cached_property
    def decoder(self) -> Decoder:
        """Field content decoder for the configured encoding"""
        encoding = self._app_config.reader.encoding

        def decode(data: bytes) -> str:
            return data.decode(encoding, errors="replace")

        return decode


# Global default instance
_default_config: ConfigLoader | None = None


def get_config(config_path: str | None = None) -> ConfigLoader:
    """Get configuration loader instance

    Args:
        config_path: Path to configuration file, None for default

    Returns:
        ConfigLoader instance
    """
    global _default_config

    if config_path:
        return ConfigLoader(config_path)

    if _default_config is None:
        _default_config = ConfigLoader(None)

    return _default_config
