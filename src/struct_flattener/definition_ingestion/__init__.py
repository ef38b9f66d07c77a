"""Definition ingestion exports."""

from .definition_document_reader import (
    DefinitionDocumentError,
    parse_definition_document,
    read_definition_document,
)
from .definition_models import DefinitionDocument, DefinitionRejection
from .flatten_marker import FlattenMarkerDetection, detect_flatten_marker

__all__ = [
    "DefinitionDocument",
    "DefinitionDocumentError",
    "DefinitionRejection",
    "FlattenMarkerDetection",
    "detect_flatten_marker",
    "parse_definition_document",
    "read_definition_document",
]
