"""Import/export codec for DayRank."""

from dayrank.transfer.codec import (
    EXPORT_VERSION,
    ImportFormatError,
    dumps_export,
    export_document,
    export_filename,
    parse_import,
)

__all__ = [
    "EXPORT_VERSION",
    "ImportFormatError",
    "dumps_export",
    "export_document",
    "export_filename",
    "parse_import",
]
