# marc_toolkit/application/processing/grouping.py

"""Group bibliographic records with the holdings records that follow them"""

# Standard library imports
from logging import getLogger
from typing import Iterable
from typing import Iterator

# Local imports
from marc_toolkit.core.domain.enums import RecordRole
from marc_toolkit.core.domain.group import RecordGroup
from marc_toolkit.core.domain.record import Record
from marc_toolkit.core.types.protocols import RecordClassifier
from marc_toolkit.core.types.protocols import RecordPredicate

logger = getLogger(__name__)

HOLDINGS_RECORD_TYPES = frozenset("uvxy")
DEFAULT_HOLDINGS_TAG = "852"


def classify_by_leader(record: Record) -> RecordRole:
    """Holdings record types (leader/06 u, v, x, y) trail; everything else leads"""
    if record.leader.record_type in HOLDINGS_RECORD_TYPES:
        return RecordRole.SECONDARY
    return RecordRole.PRIMARY


def classify_by_field(tag: str = DEFAULT_HOLDINGS_TAG) -> RecordClassifier:
    """Records carrying the given field (852 by default) trail"""

    def classify(record: Record) -> RecordRole:
        return RecordRole.SECONDARY if tag in record else RecordRole.PRIMARY

    return classify


def classify_by_query(predicate: RecordPredicate) -> RecordClassifier:
    """Records matching a compiled query trail"""

    def classify(record: Record) -> RecordRole:
        return RecordRole.SECONDARY if predicate(record) else RecordRole.PRIMARY

    return classify


def group_records(
    records: Iterable[Record], classifier: RecordClassifier = classify_by_leader
) -> Iterator[RecordGroup]:
    """Re-chunk a record stream into groups, preserving input order

    Each group is one primary record followed by the run of secondary records
    directly after it. Secondary records that appear before the first primary
    record are emitted as singleton orphan groups rather than dropped.
    """
    current: RecordGroup | None = None
    for record in records:
        role = classifier(record)
        if role is RecordRole.PRIMARY:
            if current is not None:
                yield current
            current = RecordGroup(record)
        elif current is None:
            logger.warning(
                f"Secondary record {record.control_number or record.position} "
                "has no preceding primary record"
            )
            yield RecordGroup(record, orphan=True)
        else:
            current.secondaries.append(record)

    if current is not None:
        yield current
