# marc_toolkit/infrastructure/config/_rules.py

"""Pydantic models for the semantic rule table

The rule table is external data: a rules.json document with one rule set per
record category. Categories missing from the document keep the defaults
below, which cover the common MARC21 cases.
"""

# Standard library imports
import json
from logging import getLogger
from pathlib import Path

# Third party imports
from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_validator

# Local imports
from marc_toolkit.core.domain.enums import RecordCategory

logger = getLogger(__name__)


class RuleSet(BaseModel):
    """Rules applied to every record of one category"""

    model_config = ConfigDict(extra="forbid")

    required: list[str] = Field(default_factory=list, description="Tags that must be present")
    non_repeatable: list[str] = Field(
        default_factory=list, description="Tags that may occur at most once"
    )
    required_subfields: dict[str, list[str]] = Field(
        default_factory=dict, description="Subfield codes each occurrence of a tag must carry"
    )
    leader_values: dict[int, str] = Field(
        default_factory=dict, description="Allowed characters per leader position"
    )

    @field_validator("required", "non_repeatable")
    @classmethod
    def validate_tags(cls, v: list[str]) -> list[str]:
        for tag in v:
            if len(tag) != 3:
                raise ValueError(f"Tag must be 3 characters: {tag!r}")
        return v

    @field_validator("required_subfields")
    @classmethod
    def validate_subfield_tags(cls, v: dict[str, list[str]]) -> dict[str, list[str]]:
        for tag in v:
            if len(tag) != 3:
                raise ValueError(f"Tag must be 3 characters: {tag!r}")
        return v

    @field_validator("leader_values")
    @classmethod
    def validate_positions(cls, v: dict[int, str]) -> dict[int, str]:
        for position in v:
            if not 0 <= position < 24:
                raise ValueError(f"Leader position {position} is outside 0-23")
        return v


def _bibliographic_defaults() -> RuleSet:
    return RuleSet(
        required=["245"],
        non_repeatable=[
            "001", "003", "005", "008", "010", "040",
            "100", "110", "111", "130", "240", "245", "254", "256", "263",
        ],
        required_subfields={"245": ["a"]},
        leader_values={
            5: "acdnp",
            6: "acdefgijkmoprt",
            7: "abcdims",
            9: " a",
            18: " acinu",
        },
    )  # fmt: skip


def _holdings_defaults() -> RuleSet:
    return RuleSet(
        required=["008"],
        non_repeatable=["001", "003", "004", "005", "008"],
        required_subfields={"852": ["b"]},
        leader_values={5: "cdn", 9: " a"},
    )


def _authority_defaults() -> RuleSet:
    return RuleSet(
        required=["008"],
        non_repeatable=["001", "003", "005", "008", "010", "040"],
        leader_values={5: "acdnosx", 9: " a"},
    )


class RulesConfig(BaseModel):
    """Root rule table model: one rule set per record category"""

    bibliographic: RuleSet = Field(default_factory=_bibliographic_defaults)
    holdings: RuleSet = Field(default_factory=_holdings_defaults)
    authority: RuleSet = Field(default_factory=_authority_defaults)
    classification: RuleSet = Field(default_factory=RuleSet)
    community: RuleSet = Field(default_factory=RuleSet)

    @classmethod
    def load(cls, rules_path: Path | str | None = None) -> "RulesConfig":
        """Load the rule table from a JSON file

        Args:
            rules_path: Path to rules.json, None for the defaults

        Returns:
            Validated RulesConfig instance
        """
        if rules_path is None:
            return cls()

        if isinstance(rules_path, str):
            rules_path = Path(rules_path)

        if rules_path.exists():
            try:
                with open(rules_path, "r", encoding="utf-8") as f:
                    data = json.load(f)
                return cls.model_validate(data)
            except (OSError, ValueError) as e:
                logger.warning(f"Failed to load rules from {rules_path}: {e}. Using defaults.")
        else:
            logger.warning(f"Rules file {rules_path} not found. Using defaults.")

        return cls()

    def for_category(self, category: RecordCategory) -> RuleSet:
        """Rule set for a record category; unknown categories get no rules"""
        if category is RecordCategory.UNKNOWN:
            return RuleSet()
        return getattr(self, category.value)
