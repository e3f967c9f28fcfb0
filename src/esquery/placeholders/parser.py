"""Parser for locating placeholders in query templates."""

import logging
from typing import Iterable, Optional

from .models import NamedParameter, Placeholder, PlaceholderType
from .syntax import POSITIONAL_PATTERN, build_named_pattern, build_named_token_pattern

logger = logging.getLogger(__name__)


class PlaceholderParser:
    """Tokenize query templates into placeholder occurrences."""

    def extract_placeholders(
        self,
        template: str,
        named_parameters: Optional[Iterable[NamedParameter]] = None,
    ) -> list[Placeholder]:
        """
        Extract all placeholders from a template.

        Args:
            template: The query template to parse
            named_parameters: Declared named parameters; positional
                placeholders are extracted when None

        Returns:
            List of Placeholder objects in template order
        """
        if named_parameters is None:
            return self.extract_positional(template)
        return self.extract_named(template, named_parameters)

    def extract_positional(self, template: str) -> list[Placeholder]:
        """Extract ``?N`` placeholders; each match is independent of the others."""
        placeholders = []

        for match in POSITIONAL_PATTERN.finditer(template):
            placeholder = Placeholder(
                token=match.group(0),
                type=PlaceholderType.POSITIONAL,
                index=int(match.group(1)),
                start_pos=match.start(),
                end_pos=match.end(),
            )
            placeholders.append(placeholder)
            logger.debug(f"Found placeholder: {placeholder.token} at {placeholder.start_pos}")

        return placeholders

    def extract_named(
        self,
        template: str,
        named_parameters: Iterable[NamedParameter],
    ) -> list[Placeholder]:
        """
        Extract occurrences of the declared named placeholder tokens.

        Tokens are matched literally anywhere in the template, longest token
        first. When two parameters declare the same token, the first declared
        one wins.
        """
        by_token: dict[str, NamedParameter] = {}
        for parameter in named_parameters:
            by_token.setdefault(parameter.placeholder, parameter)

        pattern = build_named_pattern(by_token)
        if pattern is None:
            return []

        placeholders = []
        for match in pattern.finditer(template):
            parameter = by_token[match.group(0)]
            placeholder = Placeholder(
                token=match.group(0),
                type=PlaceholderType.NAMED,
                index=parameter.index,
                name=parameter.name,
                start_pos=match.start(),
                end_pos=match.end(),
            )
            placeholders.append(placeholder)
            logger.debug(f"Found placeholder: {placeholder.token} at {placeholder.start_pos}")

        return placeholders

    def find_undeclared_names(
        self,
        template: str,
        placeholders: list[Placeholder],
        prefix: str = ":",
    ) -> list[str]:
        """
        Find ``prefix + name`` tokens not covered by any extracted placeholder.

        Args:
            template: The query template
            placeholders: Named placeholders already extracted from it
            prefix: Prefix of named placeholder tokens

        Returns:
            Undeclared names in template order, without duplicates
        """
        covered = {p.start_pos for p in placeholders}
        undeclared = []
        for match in build_named_token_pattern(prefix).finditer(template):
            if match.start() in covered:
                continue
            name = match.group(1)
            if name not in undeclared:
                undeclared.append(name)
        return undeclared

    def get_referenced_indexes(self, template: str) -> list[int]:
        """Get the sorted distinct positional indexes a template references."""
        return sorted({p.index for p in self.extract_positional(template)})
