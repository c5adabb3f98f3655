# marc_toolkit/infrastructure/config/_models.py

"""Pydantic models for configuration with validation"""

# Standard library imports
import codecs
import json
from logging import getLogger
from pathlib import Path
from typing import Literal

# Third party imports
from pydantic import BaseModel
from pydantic import Field
from pydantic import SecretStr
from pydantic import field_validator

# Local imports
from marc_toolkit.core.domain.enums import ReadMode
from marc_toolkit.core.types.json import JSONDict

logger = getLogger(__name__)


class ReaderConfig(BaseModel):
    """Record reader configuration"""

    mode: ReadMode = Field(ReadMode.LENIENT, description="strict or lenient parsing")
    length_tolerance: int = Field(
        3, ge=0, le=99, description="Bytes a field terminator may be off by in lenient mode"
    )
    chunk_size: int = Field(65536, gt=0, description="Bytes read from a source at a time")
    encoding: str = Field("utf-8", description="Encoding used to decode field content")

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Ensure the encoding is known to Python"""
        try:
            codecs.lookup(v)
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {v}") from e
        return v


class SourcesConfig(BaseModel):
    """Where records come from when no paths are given on the command line"""

    inputs: list[str] = Field(default_factory=list, description="Paths; empty or '-' is stdin")


class ServiceConfig(BaseModel):
    """Connection parameters for an external record-fetch service

    The toolkit only carries these values; fetching is done by an external
    collaborator which hands the resulting byte stream to the reader.
    """

    base_url: str | None = Field(None, description="Service endpoint")
    database: str | None = Field(None, description="Database or catalogue name")
    username: str | None = Field(None, description="Account name")
    password: SecretStr | None = Field(None, description="Account password")
    timeout: float = Field(30.0, gt=0, description="Request timeout in seconds")


class GroupingConfig(BaseModel):
    """How holdings records are recognised when grouping"""

    holdings_by: Literal["leader", "field"] = Field(
        "leader", description="Classify by leader/06 or by the presence of holdings_tag"
    )
    holdings_tag: str = Field("852", description="Field marking a holdings record")

    @field_validator("holdings_tag")
    @classmethod
    def validate_tag(cls, v: str) -> str:
        if len(v) != 3:
            raise ValueError(f"Tag must be 3 characters: {v!r}")
        return v


class DiagnosticsConfig(BaseModel):
    """Diagnostics configuration"""

    rules_file: str | None = Field(None, description="Path to a rules.json rule table")


class OutputConfig(BaseModel):
    """Report output configuration"""

    pretty_json: bool = Field(True, description="Indent JSON reports")
    compress: bool = Field(False, description="Gzip JSON reports")


class LoggingConfig(BaseModel):
    """Logging configuration"""

    debug: bool = Field(False, description="Enable debug logging")
    log_file: str | None = Field(None, description="Log file path")


class AppConfig(BaseModel):
    """Root application configuration model"""

    reader: ReaderConfig = Field(default_factory=ReaderConfig)
    sources: SourcesConfig = Field(default_factory=SourcesConfig)
    service: ServiceConfig = Field(default_factory=ServiceConfig)
    grouping: GroupingConfig = Field(default_factory=GroupingConfig)
    diagnostics: DiagnosticsConfig = Field(default_factory=DiagnosticsConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, config_path: Path | str | None = None) -> "AppConfig":
        """Load configuration from JSON file with defaults

        Args:
            config_path: Path to configuration JSON file

        Returns:
            Validated AppConfig instance
        """
        if isinstance(config_path, str):
            config_path = Path(config_path)

        # If no path provided, try to find config.json in current directory
        if config_path is None:
            config_path = Path("config.json")
            if not config_path.exists():
                return cls()

        if config_path.exists():
            try:
                with open(config_path, "r", encoding="utf-8") as f:
                    data = json.load(f)
                return cls.model_validate(data)
            except (OSError, ValueError) as e:
                logger.warning(f"Failed to load config from {config_path}: {e}. Using defaults.")
                return cls()

        logger.warning(f"Config file {config_path} not found. Using defaults.")
        return cls()

    def to_dict(self) -> JSONDict:
        return self.model_dump(mode="json")
