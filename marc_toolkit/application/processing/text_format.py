# marc_toolkit/application/processing/text_format.py

"""Plain line-oriented text form of a record

One line per field in the mnemonic style used by MARC editors:

    =LDR  00714cam a2200205 a 4500
    =001  12883376
    =245  10$aSummerland /$cMichael Chabon.

Blank indicators are written as backslashes. No colour or paging: highlighting
and pagers consume this output.
"""

# Local imports
from marc_toolkit.core.domain.record import ControlField
from marc_toolkit.core.domain.record import Field
from marc_toolkit.core.domain.record import Record
from marc_toolkit.core.domain.record import decode_utf8
from marc_toolkit.core.types.aliases import Decoder

BLANK_INDICATOR = "\\"


def format_field(field: Field, decoder: Decoder = decode_utf8) -> str:
    if isinstance(field, ControlField):
        return f"={field.tag}  {decoder(field.data).replace(' ', BLANK_INDICATOR)}"

    indicators = "".join(BLANK_INDICATOR if i == " " else i for i in field.indicators)
    subfields = "".join(f"${sf.code}{decoder(sf.data)}" for sf in field.subfields)
    return f"={field.tag}  {indicators}{subfields}"


def format_record(record: Record, decoder: Decoder = decode_utf8) -> str:
    lines = [f"=LDR  {record.leader}"]
    lines.extend(format_field(field, decoder) for field in record.fields)
    return "\n".join(lines) + "\n"
