"""Writers that hand the entry list off to files."""

from doc_ingest.output.jsonl import JsonLinesOutput, read_entries
from doc_ingest.output.multi_file import MultiFileOutput

__all__ = [
    "JsonLinesOutput",
    "MultiFileOutput",
    "read_entries",
]
