"""Data models for query template placeholders."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, model_validator


class PlaceholderType(str, Enum):
    """Type of placeholder."""

    POSITIONAL = "positional"  # ?0, ?1 - Index into the bound arguments
    NAMED = "named"  # :name - Declared parameter token


class Placeholder(BaseModel):
    """Represents one placeholder occurrence in a query template."""

    token: str  # Literal text in the template (e.g., "?0", ":lastname")
    type: PlaceholderType
    index: int  # Index of the bound argument
    name: Optional[str] = None  # Parameter name for named placeholders
    start_pos: int = 0  # Position in template where placeholder starts
    end_pos: int = 0  # Position in template where placeholder ends


class NamedParameter(BaseModel):
    """A named parameter declared by a parameter accessor."""

    name: str
    index: int = Field(ge=0)
    placeholder: str = ""  # Token in the template, defaults to ":" + name

    @model_validator(mode="after")
    def _default_placeholder(self) -> "NamedParameter":
        if not self.placeholder:
            self.placeholder = f":{self.name}"
        return self


class ResolvedQuery(BaseModel):
    """Result of resolving placeholders in a query template."""

    original: str  # Template with placeholders
    resolved: str  # Query with every placeholder substituted
    placeholders: list[Placeholder] = Field(default_factory=list)
    values: dict[str, str] = Field(default_factory=dict)  # token -> substituted text


class EsqueryError(Exception):
    """Base exception for query template errors."""

    pass


class MissingBindingError(EsqueryError, LookupError):
    """Exception raised when a placeholder references an index or name with no bound value."""

    def __init__(self, reference, message: Optional[str] = None):
        self.reference = reference
        super().__init__(message or f"No bound value for placeholder reference {reference!r}")


class UnconvertibleValueError(EsqueryError, TypeError):
    """Exception raised when a value has no string conversion and fallback is disabled."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"No string conversion registered for type '{type(value).__name__}'")
