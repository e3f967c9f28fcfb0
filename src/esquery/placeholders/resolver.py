"""Resolver substituting bound values into query templates."""

import logging
from typing import TYPE_CHECKING, Any, Optional

from .accessor import ParameterAccessor
from .conversion import ConversionContext, ValueConverter
from .models import MissingBindingError, Placeholder, ResolvedQuery
from .parser import PlaceholderParser

if TYPE_CHECKING:
    from ..config import Settings

logger = logging.getLogger(__name__)


class PlaceholderResolver:
    """
    Resolve placeholders in query templates to converted argument values.

    A resolver is bound to one conversion context and one substitution mode
    (positional ``?N`` or named ``:name``) at construction and holds no
    per-call state, so one instance can be shared between threads.
    """

    def __init__(
        self,
        conversion_context: Optional[ConversionContext] = None,
        use_named_parameters: bool = False,
        strict_named_parameters: bool = False,
        allow_fallback_conversion: bool = True,
        named_parameter_prefix: str = ":",
    ):
        """
        Initialize the resolver.

        Args:
            conversion_context: Context for leaf values (default context if not provided)
            use_named_parameters: Substitute ``:name`` tokens instead of ``?N``
            strict_named_parameters: Fail on prefixed names (``:name``) no parameter declares
            allow_fallback_conversion: Use ``str(value)`` for types the context can't convert
            named_parameter_prefix: Prefix of named tokens checked in strict mode
        """
        self.converter = ValueConverter(conversion_context, allow_fallback=allow_fallback_conversion)
        self.use_named_parameters = use_named_parameters
        self.strict_named_parameters = strict_named_parameters
        self.named_parameter_prefix = named_parameter_prefix
        self.parser = PlaceholderParser()

    @classmethod
    def from_settings(
        cls,
        settings: "Settings",
        conversion_context: Optional[ConversionContext] = None,
    ) -> "PlaceholderResolver":
        """Create a resolver configured from application settings."""
        return cls(
            conversion_context=conversion_context,
            use_named_parameters=settings.use_named_parameters,
            strict_named_parameters=settings.strict_named_parameters,
            allow_fallback_conversion=settings.allow_fallback_conversion,
            named_parameter_prefix=settings.named_parameter_prefix,
        )

    def convert(self, value: Any) -> str:
        """Convert a bound value to the text substituted for its placeholder."""
        return self.converter.convert(value)

    def resolve(self, template: str, accessor: ParameterAccessor) -> str:
        """
        Substitute every placeholder in a template.

        Args:
            template: The query template
            accessor: Bound values for this invocation

        Returns:
            The substituted query string

        Raises:
            MissingBindingError: If a placeholder has no bound value
        """
        return self.resolve_all(template, accessor).resolved

    def resolve_all(self, template: str, accessor: ParameterAccessor) -> ResolvedQuery:
        """
        Substitute every placeholder in a template and report what was substituted.

        Args:
            template: The query template
            accessor: Bound values for this invocation

        Returns:
            ResolvedQuery with the substituted query and per-token values

        Raises:
            MissingBindingError: If a placeholder has no bound value
        """
        placeholders = self._extract(template, accessor)

        if not placeholders:
            return ResolvedQuery(original=template, resolved=template)

        # Each token is converted once so repeated occurrences are identical
        values: dict[str, str] = {}
        for placeholder in placeholders:
            if placeholder.token not in values:
                values[placeholder.token] = self._value_for(placeholder, accessor)

        # Replace in reverse order to preserve positions
        resolved = template
        for placeholder in reversed(placeholders):
            resolved = (
                resolved[: placeholder.start_pos]
                + values[placeholder.token]
                + resolved[placeholder.end_pos :]
            )

        logger.debug(f"Resolved query template with {len(placeholders)} placeholder(s): {resolved}")

        return ResolvedQuery(
            original=template,
            resolved=resolved,
            placeholders=placeholders,
            values=values,
        )

    def _extract(self, template: str, accessor: ParameterAccessor) -> list[Placeholder]:
        if not self.use_named_parameters:
            return self.parser.extract_positional(template)

        placeholders = self.parser.extract_named(template, accessor.get_named_parameters())

        undeclared = self.parser.find_undeclared_names(
            template, placeholders, prefix=self.named_parameter_prefix
        )
        if undeclared:
            if self.strict_named_parameters:
                raise MissingBindingError(
                    undeclared[0],
                    f"Named parameter '{self.named_parameter_prefix}{undeclared[0]}' "
                    "is not declared by the accessor",
                )
            logger.debug(f"Leaving undeclared named tokens as literal text: {undeclared}")

        return placeholders

    def _value_for(self, placeholder: Placeholder, accessor: ParameterAccessor) -> str:
        try:
            value = accessor.get_bindable_value(placeholder.index)
        except MissingBindingError:
            raise
        except (IndexError, KeyError) as e:
            raise MissingBindingError(
                placeholder.token,
                f"No bound value for placeholder {placeholder.token}: {e}",
            ) from e

        return self.converter.convert(value)
