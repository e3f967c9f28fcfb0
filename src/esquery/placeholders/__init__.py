"""Placeholder substitution for string query templates.

This module parses query templates with positional (``?0``) or named
(``:name``) placeholders and substitutes the converted values of the bound
call arguments, producing a query string ready to send to the search engine.
"""

from .models import (
    Placeholder,
    PlaceholderType,
    NamedParameter,
    ResolvedQuery,
    EsqueryError,
    MissingBindingError,
    UnconvertibleValueError,
)
from .accessor import ParameterAccessor, ArgumentAccessor
from .conversion import ConversionContext, DefaultConversionContext, ValueConverter
from .parser import PlaceholderParser
from .resolver import PlaceholderResolver

__all__ = [
    "Placeholder",
    "PlaceholderType",
    "NamedParameter",
    "ResolvedQuery",
    "EsqueryError",
    "MissingBindingError",
    "UnconvertibleValueError",
    "ParameterAccessor",
    "ArgumentAccessor",
    "ConversionContext",
    "DefaultConversionContext",
    "ValueConverter",
    "PlaceholderParser",
    "PlaceholderResolver",
]
