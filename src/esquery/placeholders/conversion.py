"""Value-to-string conversion for substituted placeholder values."""

import logging
import uuid
from abc import ABC, abstractmethod
from collections.abc import Collection, Mapping
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Optional

from .models import UnconvertibleValueError

logger = logging.getLogger(__name__)

NULL = "null"


class ConversionContext(ABC):
    """Pluggable strategy turning a typed value into its query text."""

    @abstractmethod
    def can_convert(self, value_type: type) -> bool:
        """Return True if values of ``value_type`` can be converted to a string."""
        pass

    @abstractmethod
    def convert_to_string(self, value: Any) -> Optional[str]:
        """Convert a value to a string; None is rendered as ``null``."""
        pass


def _format_bool(value: bool) -> str:
    return "true" if value else "false"


def _format_temporal(value) -> str:
    return value.isoformat()


class DefaultConversionContext(ConversionContext):
    """
    Conversion context for primitive numeric, text, boolean and date types.

    Converters are looked up along the value type's MRO, so a subclass of a
    registered type uses the closest registered converter. Register custom
    converters at setup time; lookups never mutate the registry.
    """

    def __init__(self):
        self._converters: dict[type, Callable[[Any], Optional[str]]] = {}
        self.register(str, str)
        # bool before int in the MRO, so True renders as "true" not "1"
        self.register(bool, _format_bool)
        self.register(int, int.__repr__)
        self.register(float, float.__repr__)
        self.register(Decimal, str)
        self.register(datetime, _format_temporal)
        self.register(date, _format_temporal)
        self.register(time, _format_temporal)
        self.register(uuid.UUID, str)
        self.register(Enum, lambda member: member.name)

    def register(self, value_type: type, converter: Callable[[Any], Optional[str]]) -> None:
        """
        Register a converter for a type.

        Args:
            value_type: The type handled by the converter
            converter: Callable taking a value and returning its text
        """
        self._converters[value_type] = converter

    def _find_converter(self, value_type: type) -> Optional[Callable[[Any], Optional[str]]]:
        for klass in value_type.__mro__:
            converter = self._converters.get(klass)
            if converter is not None:
                return converter
        return None

    def can_convert(self, value_type: type) -> bool:
        return self._find_converter(value_type) is not None

    def convert_to_string(self, value: Any) -> Optional[str]:
        converter = self._find_converter(type(value))
        if converter is None:
            raise UnconvertibleValueError(value)
        return converter(value)


def is_collection(value: Any) -> bool:
    """Check if a value is expanded as a bracketed list (text and mappings are not)."""
    if isinstance(value, (str, bytes, bytearray, Mapping)):
        return False
    return isinstance(value, Collection)


def escape_quotes(text: str) -> str:
    """Escape every double quote as ``\\"``."""
    return text.replace('"', '\\"')


class ValueConverter:
    """Turns bound values into the text substituted for a placeholder."""

    def __init__(
        self,
        conversion_context: Optional[ConversionContext] = None,
        allow_fallback: bool = True,
    ):
        """
        Initialize the converter.

        Args:
            conversion_context: Context used for leaf values (default context if not provided)
            allow_fallback: Use ``str(value)`` when the context cannot convert a value
        """
        self.conversion_context = conversion_context or DefaultConversionContext()
        self.allow_fallback = allow_fallback

    def convert(self, value: Any) -> str:
        """
        Convert a bound value to its query text.

        Args:
            value: The bound value, possibly None or a collection

        Returns:
            ``null`` for None, ``[v1,v2,...]`` for collections, else the
            escaped leaf text

        Raises:
            UnconvertibleValueError: If no conversion exists and fallback is disabled
        """
        if value is None:
            return NULL

        if is_collection(value):
            items = []
            for item in value:
                text = self.convert(item)
                if isinstance(item, str):
                    text = f'"{text}"'
                items.append(text)
            return "[" + ",".join(items) + "]"

        return escape_quotes(self._convert_leaf(value))

    def _convert_leaf(self, value: Any) -> str:
        if self.conversion_context.can_convert(type(value)):
            converted = self.conversion_context.convert_to_string(value)
            return NULL if converted is None else converted

        if not self.allow_fallback:
            raise UnconvertibleValueError(value)

        logger.debug(f"No converter for type '{type(value).__name__}', using str()")
        return str(value)
