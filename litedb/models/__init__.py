"""Record and descriptor models."""

from .descriptor import EntityDescriptor, FieldDescriptor, describe, descriptor_for

__all__ = ["EntityDescriptor", "FieldDescriptor", "describe", "descriptor_for"]
