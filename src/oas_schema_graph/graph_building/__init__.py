"""Graph building exports."""

from .graph_builder import GraphBuilder
from .graph_models import SchemaClass, SchemaGraphContent, SchemaProperty, SchemaRelation
from .traversal_context import NO_UNDO, TraversalContext, UndoAction

__all__ = [
    "GraphBuilder",
    "SchemaClass",
    "SchemaGraphContent",
    "SchemaProperty",
    "SchemaRelation",
    "NO_UNDO",
    "TraversalContext",
    "UndoAction",
]
