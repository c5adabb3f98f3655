# marc_toolkit/application/processing/reader.py

"""Streaming ISO 2709 (MARC21 binary) record reader

Records are split on the record terminator one chunk at a time, so memory use
is bounded by the largest record plus one read chunk. Each raw record is then
parsed against its leader and directory.

In strict mode any disagreement between the declared layout and the actual
bytes raises StructuralError. In lenient mode small disagreements are
tolerated and reported as warning findings; a record that still cannot be
parsed is skipped and reading resumes after its terminator.
"""

# Standard library imports
from logging import getLogger
from typing import Iterable
from typing import Iterator
from typing import NoReturn

# Local imports
from marc_toolkit.application.models.run_stats import ReadStatistics
from marc_toolkit.core.domain.enums import ReadMode
from marc_toolkit.core.domain.enums import Severity
from marc_toolkit.core.domain.enums import StructuralErrorKind
from marc_toolkit.core.domain.errors import StructuralError
from marc_toolkit.core.domain.finding import Finding
from marc_toolkit.core.domain.record import ControlField
from marc_toolkit.core.domain.record import DataField
from marc_toolkit.core.domain.record import FIELD_TERMINATOR
from marc_toolkit.core.domain.record import Field
from marc_toolkit.core.domain.record import LEADER_LENGTH
from marc_toolkit.core.domain.record import Leader
from marc_toolkit.core.domain.record import RECORD_TERMINATOR
from marc_toolkit.core.domain.record import Record
from marc_toolkit.core.domain.record import SUBFIELD_DELIMITER
from marc_toolkit.core.domain.record import Subfield
from marc_toolkit.core.domain.record import is_control_tag
from marc_toolkit.core.types.protocols import BinarySource

logger = getLogger(__name__)

DEFAULT_CHUNK_SIZE = 65536
DEFAULT_LENGTH_TOLERANCE = 3

# Smallest possible record: leader, directory terminator, record terminator
MINIMUM_RECORD_LENGTH = LEADER_LENGTH + 2


def iter_raw_records(
    stream: BinarySource, chunk_size: int = DEFAULT_CHUNK_SIZE
) -> Iterator[tuple[bytes, bool]]:
    """Split a byte stream into raw records

    Yields:
        (raw, terminated) pairs. raw includes the record terminator when
        terminated is True. Trailing bytes without a terminator are yielded
        once with terminated=False unless they are only whitespace.
    """
    buffer = bytearray()
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            break
        scan_from = len(buffer)
        buffer.extend(chunk)

        start = 0
        while True:
            end = buffer.find(RECORD_TERMINATOR, max(start, scan_from))
            if end == -1:
                break
            yield bytes(buffer[start : end + 1]), True
            start = end + 1
            scan_from = start
        if start:
            del buffer[:start]

    if buffer.strip():
        yield bytes(buffer), False


class RecordParser:
    """Parses one raw record against its leader and directory"""

    def __init__(
        self,
        mode: ReadMode = ReadMode.LENIENT,
        length_tolerance: int = DEFAULT_LENGTH_TOLERANCE,
    ) -> None:
        self.mode = mode
        self.length_tolerance = length_tolerance

    @property
    def strict(self) -> bool:
        return self.mode is ReadMode.STRICT

    def parse(
        self,
        raw: bytes,
        position: int | None = None,
        source: str | None = None,
        terminated: bool = True,
    ) -> tuple[Record, list[Finding]]:
        """Parse a raw record

        Args:
            raw: Record bytes, normally ending with the record terminator
            position: 1-based position of the record in its source
            source: Name of the source, for error messages
            terminated: False when raw was cut off at end of stream

        Returns:
            The parsed record and the deviations tolerated in lenient mode

        Raises:
            StructuralError: On any deviation in strict mode, or on damage
                lenient mode cannot recover from
        """
        findings: list[Finding] = []
        where = (position, source)

        if not terminated:
            self._deviate(
                findings,
                StructuralErrorKind.MISSING_TERMINATOR,
                "stream ends without a record terminator",
                where,
            )
            raw = raw + RECORD_TERMINATOR

        if not self.strict:
            stripped = raw.lstrip(b"\r\n")
            if len(stripped) != len(raw):
                self._deviate(
                    findings,
                    StructuralErrorKind.BAD_LEADER,
                    f"{len(raw) - len(stripped)} line break byte(s) before the leader",
                    where,
                )
                raw = stripped

        leader, entry_widths = self._parse_leader(raw, findings, where)

        if leader.record_length != len(raw):
            self._deviate(
                findings,
                StructuralErrorKind.LENGTH_MISMATCH,
                f"leader declares {leader.record_length} bytes, record has {len(raw)}",
                where,
            )

        entries, base = self._parse_directory(raw, leader, entry_widths, findings, where)

        # Index of the record terminator; field data must end before it
        body_end = len(raw) - 1
        fields: list[Field] = []
        for tag, length, start in entries:
            content = self._slice_field(raw, tag, base + start, length, body_end, findings, where)
            fields.append(self._build_field(tag, content, leader, findings, where))

        record = Record(leader, fields, source=source, position=position)
        return record, findings

    def _parse_leader(
        self, raw: bytes, findings: list[Finding], where: tuple[int | None, str | None]
    ) -> tuple[Leader, tuple[int, int, int]]:
        if len(raw) < MINIMUM_RECORD_LENGTH:
            self._fail(
                StructuralErrorKind.BAD_LEADER,
                f"record is only {len(raw)} bytes long",
                where,
            )
        try:
            text = raw[:LEADER_LENGTH].decode("ascii")
        except UnicodeDecodeError:
            self._fail(StructuralErrorKind.BAD_LEADER, "leader contains non-ASCII bytes", where)

        numeric = {
            "record length": text[0:5],
            "indicator count": text[10],
            "subfield code length": text[11],
            "base address": text[12:17],
        }
        for name, value in numeric.items():
            if not value.isdigit():
                self._fail(
                    StructuralErrorKind.BAD_LEADER, f"{name} {value!r} is not numeric", where
                )

        entry_map = text[20:23]
        if entry_map.isdigit():
            widths = (int(entry_map[0]), int(entry_map[1]), int(entry_map[2]))
        else:
            self._deviate(
                findings,
                StructuralErrorKind.BAD_LEADER,
                f"entry map {text[20:24]!r} is not numeric, assuming 4500",
                where,
            )
            widths = (4, 5, 0)

        if widths[0] == 0 or widths[1] == 0:
            self._fail(
                StructuralErrorKind.BAD_LEADER, f"entry map {text[20:24]!r} is unusable", where
            )

        return Leader(text), widths

    def _parse_directory(
        self,
        raw: bytes,
        leader: Leader,
        widths: tuple[int, int, int],
        findings: list[Finding],
        where: tuple[int | None, str | None],
    ) -> tuple[list[tuple[str, int, int]], int]:
        length_width, start_width, extra_width = widths
        entry_length = 3 + length_width + start_width + extra_width

        directory_end = raw.find(FIELD_TERMINATOR, LEADER_LENGTH)
        if directory_end == -1:
            self._fail(StructuralErrorKind.BAD_DIRECTORY, "directory is not terminated", where)

        directory = raw[LEADER_LENGTH:directory_end]
        if len(directory) % entry_length:
            self._fail(
                StructuralErrorKind.BAD_DIRECTORY,
                f"directory length {len(directory)} is not a multiple of {entry_length}",
                where,
            )

        base = directory_end + 1
        if leader.base_address != base:
            self._deviate(
                findings,
                StructuralErrorKind.BAD_DIRECTORY,
                f"base address {leader.base_address} does not follow the directory ({base})",
                where,
            )

        entries = []
        for offset in range(0, len(directory), entry_length):
            entry = directory[offset : offset + entry_length]
            length_text = entry[3 : 3 + length_width]
            start_text = entry[3 + length_width : 3 + length_width + start_width]
            try:
                tag = entry[:3].decode("ascii")
            except UnicodeDecodeError:
                self._fail(
                    StructuralErrorKind.BAD_DIRECTORY,
                    f"directory entry {offset // entry_length + 1} has a non-ASCII tag",
                    where,
                )
            if not (length_text.isdigit() and start_text.isdigit()):
                self._fail(
                    StructuralErrorKind.BAD_DIRECTORY,
                    f"directory entry for {tag} has non-numeric length or offset",
                    where,
                )
            entries.append((tag, int(length_text), int(start_text)))

        return entries, base

    def _slice_field(
        self,
        raw: bytes,
        tag: str,
        begin: int,
        length: int,
        body_end: int,
        findings: list[Finding],
        where: tuple[int | None, str | None],
    ) -> bytes:
        """Return field content without its terminator"""
        terminator_at = begin + length - 1
        if length > 0 and terminator_at < body_end and raw[terminator_at] == FIELD_TERMINATOR[0]:
            return raw[begin:terminator_at]

        message = f"field {tag} at offset {begin} with length {length} does not end in a field terminator"
        if self.strict or begin >= body_end:
            self._fail(StructuralErrorKind.LENGTH_MISMATCH, message, where)

        # Look for the nearest terminator within tolerance of the declared end
        deltas = sorted(range(-self.length_tolerance, self.length_tolerance + 1), key=abs)
        for delta in deltas:
            candidate = terminator_at + delta
            if begin <= candidate < body_end and raw[candidate] == FIELD_TERMINATOR[0]:
                self._deviate(
                    findings,
                    StructuralErrorKind.LENGTH_MISMATCH,
                    f"{message}; using terminator {delta:+d} bytes away",
                    where,
                )
                return raw[begin:candidate]

        self._fail(StructuralErrorKind.LENGTH_MISMATCH, message, where)

    def _build_field(
        self,
        tag: str,
        content: bytes,
        leader: Leader,
        findings: list[Finding],
        where: tuple[int | None, str | None],
    ) -> Field:
        if is_control_tag(tag):
            return ControlField(tag, content)

        indicator_count = leader.indicator_count
        code_length = leader.subfield_code_length - 1
        if code_length < 1:
            self._deviate(
                findings,
                StructuralErrorKind.BAD_LEADER,
                f"subfield code length {leader.subfield_code_length} is too small, assuming 2",
                where,
            )
            code_length = 1

        first_delimiter = content.find(SUBFIELD_DELIMITER)
        head = content if first_delimiter == -1 else content[:first_delimiter]
        if len(head) != indicator_count:
            self._deviate(
                findings,
                StructuralErrorKind.BAD_FIELD,
                f"field {tag} has {len(head)} indicator byte(s), expected {indicator_count}",
                where,
            )
            head = head[:indicator_count].ljust(indicator_count, b" ")
        indicators = head.decode("latin-1")

        subfields: list[Subfield] = []
        if first_delimiter != -1:
            for chunk in content[first_delimiter + 1 :].split(SUBFIELD_DELIMITER):
                if len(chunk) < code_length:
                    self._deviate(
                        findings,
                        StructuralErrorKind.BAD_FIELD,
                        f"field {tag} has an empty subfield",
                        where,
                    )
                    continue
                subfields.append(
                    Subfield(chunk[:code_length].decode("latin-1"), chunk[code_length:])
                )

        return DataField(tag, indicators, subfields)

    def _deviate(
        self,
        findings: list[Finding],
        kind: StructuralErrorKind,
        message: str,
        where: tuple[int | None, str | None],
    ) -> None:
        """Raise in strict mode, otherwise record a warning"""
        if self.strict:
            self._fail(kind, message, where)
        findings.append(Finding(Severity.WARNING, kind.value, message))

    def _fail(
        self, kind: StructuralErrorKind, message: str, where: tuple[int | None, str | None]
    ) -> NoReturn:
        position, source = where
        raise StructuralError(kind, message, position=position, source=source)


class MarcReader:
    """Iterate over the records of one binary MARC stream

    Example:
        with open("records.mrc", "rb") as f:
            for record in MarcReader(f, source="records.mrc"):
                print(record.control_number)
    """

    def __init__(
        self,
        stream: BinarySource,
        source: str = "<stdin>",
        mode: ReadMode = ReadMode.LENIENT,
        length_tolerance: int = DEFAULT_LENGTH_TOLERANCE,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        statistics: ReadStatistics | None = None,
    ) -> None:
        self.stream = stream
        self.source = source
        self.mode = mode
        self.chunk_size = chunk_size
        self.parser = RecordParser(mode, length_tolerance)
        self.statistics = statistics if statistics is not None else ReadStatistics()
        self.last_findings: list[Finding] = []

    def __iter__(self) -> Iterator[Record]:
        self.statistics.increment("sources")
        raw_records = iter_raw_records(self.stream, self.chunk_size)
        for position, (raw, terminated) in enumerate(raw_records, start=1):
            self.statistics.increment("bytes_read", len(raw))
            try:
                record, findings = self.parser.parse(raw, position, self.source, terminated)
            except StructuralError as e:
                self.statistics.increment("records_skipped")
                if self.parser.strict:
                    logger.error(f"Aborting on malformed record: {e}")
                    raise
                logger.warning(f"Skipping malformed record: {e}")
                continue

            for finding in findings:
                logger.warning(f"{self.source}:{position}: {finding.message}")
            self.statistics.increment("warnings", len(findings))
            self.statistics.increment("records_read")
            self.last_findings = findings
            yield record


def read_records(
    sources: Iterable[tuple[str, BinarySource]],
    mode: ReadMode = ReadMode.LENIENT,
    length_tolerance: int = DEFAULT_LENGTH_TOLERANCE,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    statistics: ReadStatistics | None = None,
) -> Iterator[Record]:
    """Read records from several named sources in order, sharing statistics"""
    if statistics is None:
        statistics = ReadStatistics()
    for name, stream in sources:
        logger.debug(f"Reading MARC records from {name}")
        yield from MarcReader(
            stream,
            source=name,
            mode=mode,
            length_tolerance=length_tolerance,
            chunk_size=chunk_size,
            statistics=statistics,
        )
