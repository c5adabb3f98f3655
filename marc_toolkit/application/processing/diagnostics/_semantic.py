# marc_toolkit/application/processing/diagnostics/_semantic.py

"""Semantic pass: rule-table checks on well-formed records"""

# Standard library imports
from collections import Counter

# Local imports
from marc_toolkit.core.domain.enums import RecordCategory
from marc_toolkit.core.domain.enums import Severity
from marc_toolkit.core.domain.finding import Finding
from marc_toolkit.core.domain.record import DataField
from marc_toolkit.core.domain.record import Record
from marc_toolkit.infrastructure.config import RulesConfig

VALID_SUBFIELD_CODES = frozenset("abcdefghijklmnopqrstuvwxyz0123456789")

REQUIRED_FIELD = "required_field"
NON_REPEATABLE_FIELD = "non_repeatable_field"
REQUIRED_SUBFIELD = "required_subfield"
LEADER_VALUE = "leader_value"
EMPTY_FIELD = "empty_field"
INVALID_SUBFIELD_CODE = "invalid_subfield_code"


class SemanticChecker:
    """Apply the rule set for a record's category

    Missing required fields and repeated non-repeatable fields are errors;
    everything else is a warning.
    """

    def __init__(self, rules: RulesConfig | None = None) -> None:
        self.rules = rules if rules is not None else RulesConfig()

    def check(self, record: Record) -> list[Finding]:
        findings: list[Finding] = []
        category = record.category
        if category is RecordCategory.UNKNOWN:
            findings.append(
                Finding(
                    Severity.WARNING,
                    LEADER_VALUE,
                    f"leader/06 {record.leader.record_type!r} is not a MARC21 record type",
                )
            )
        rules = self.rules.for_category(category)
        counts = Counter(field.tag for field in record.fields)

        for tag in rules.required:
            if counts[tag] == 0:
                findings.append(
                    Finding(Severity.ERROR, REQUIRED_FIELD, f"required field {tag} is missing", tag)
                )

        for tag in rules.non_repeatable:
            if counts[tag] > 1:
                findings.append(
                    Finding(
                        Severity.ERROR,
                        NON_REPEATABLE_FIELD,
                        f"non-repeatable field {tag} occurs {counts[tag]} times",
                        tag,
                    )
                )

        for tag, codes in rules.required_subfields.items():
            for field in record.get_fields(tag):
                if not isinstance(field, DataField):
                    continue
                for code in codes:
                    if code not in field:
                        findings.append(
                            Finding(
                                Severity.WARNING,
                                REQUIRED_SUBFIELD,
                                f"field {tag} has no subfield ${code}",
                                tag,
                            )
                        )

        for position, allowed in sorted(rules.leader_values.items()):
            value = record.leader[position]
            if value not in allowed:
                findings.append(
                    Finding(
                        Severity.WARNING,
                        LEADER_VALUE,
                        f"leader/{position:02d} {value!r} is not one of {allowed!r}",
                    )
                )

        findings.extend(self._check_fields(record))
        return findings

    def _check_fields(self, record: Record) -> list[Finding]:
        findings = []
        for field in record.fields:
            if not isinstance(field, DataField):
                continue
            if not field.subfields:
                findings.append(
                    Finding(
                        Severity.WARNING, EMPTY_FIELD, f"field {field.tag} has no subfields", field.tag
                    )
                )
                continue
            bad_codes = sorted({sf.code for sf in field.subfields} - VALID_SUBFIELD_CODES)
            if bad_codes:
                findings.append(
                    Finding(
                        Severity.WARNING,
                        INVALID_SUBFIELD_CODE,
                        f"field {field.tag} has invalid subfield code(s) {', '.join(bad_codes)}",
                        field.tag,
                    )
                )
        return findings
