"""Diagram transformation exports."""

from .diagram_transformer import DiagramHooks, transform, transform_document

__all__ = ["DiagramHooks", "transform", "transform_document"]
