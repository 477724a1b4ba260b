"""Inkwell — versioned, publishable content services for user-declared schemas."""

from inkwell.core import Core, initialize
from inkwell.models.schema import ContentSchema

__all__ = ["ContentSchema", "Core", "initialize"]
