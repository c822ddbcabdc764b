"""Bibliographic tag-file importing.

Supported formats:
- Biblioscape tag file (.txt) - ``--XX-- value`` fields, ``------`` delimiter

Main entry points:
- ingest_file: Import a single file
- ingest_folder: Import every supported file in a folder
- BiblioscapeImporter: Stream-level importer behind the format contract
"""

from bibimport.parse.base import ImportFormat
from bibimport.parse.biblioscape import BiblioscapeImporter
from bibimport.parse.ingestion import ingest_file, ingest_folder
from bibimport.parse.registry import FormatRegistry, default_format_registry
from bibimport.parse.tagfile import MalformedTagFileError, TagFileParser

__all__ = [
    "BiblioscapeImporter",
    "FormatRegistry",
    "ImportFormat",
    "MalformedTagFileError",
    "TagFileParser",
    "default_format_registry",
    "ingest_file",
    "ingest_folder",
]
