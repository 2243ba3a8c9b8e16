"""Core document model."""

from .document import PropertiesDocument

__all__ = ["PropertiesDocument"]
