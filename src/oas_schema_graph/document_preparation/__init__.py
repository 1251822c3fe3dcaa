"""Document preparation exports."""

from .document_loader import DocumentLoadError, load_document
from .document_normalizer import DocumentPreparationError, prepare_document

__all__ = [
    "DocumentLoadError",
    "DocumentPreparationError",
    "load_document",
    "prepare_document",
]
