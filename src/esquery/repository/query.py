"""String query methods for repositories."""

import functools
import logging
import weakref
from typing import Any, Callable, Optional

from ..config import settings
from ..placeholders import ArgumentAccessor, PlaceholderResolver
from .base import SearchOperations

logger = logging.getLogger(__name__)


class Repository:
    """
    Base class for repositories whose methods declare string queries.

    Subclasses decorate methods with :func:`string_query`; calling such a
    method resolves its template against the call arguments and sends the
    result through ``operations``.
    """

    def __init__(
        self,
        operations: SearchOperations,
        resolver: Optional[PlaceholderResolver] = None,
        index: Optional[str] = None,
    ):
        """
        Initialize the repository.

        Args:
            operations: Search collaborator that executes resolved queries
            resolver: Resolver for every query method (configured from settings if not provided)
            index: Index name passed to every search
        """
        self.operations = operations
        self.resolver = resolver or PlaceholderResolver.from_settings(settings)
        self.index = index


class StringQueryMethod:
    """A repository method bound to a query template."""

    def __init__(
        self,
        func: Callable,
        template: str,
        named: Optional[bool] = None,
        prefix: Optional[str] = None,
    ):
        self.func = func
        self.template = template
        self.named = named
        self.prefix = prefix if prefix is not None else settings.named_parameter_prefix
        # repository resolver -> resolver with this method's mode and prefix
        self._resolvers = weakref.WeakKeyDictionary()

    def _resolver_for(self, repository: Repository) -> PlaceholderResolver:
        base = repository.resolver
        named = base.use_named_parameters if self.named is None else self.named
        if named == base.use_named_parameters and (
            not named or self.prefix == base.named_parameter_prefix
        ):
            return base

        resolver = self._resolvers.get(base)
        if resolver is None:
            # Same conversion context as the repository, this method's mode
            resolver = PlaceholderResolver(
                conversion_context=base.converter.conversion_context,
                use_named_parameters=named,
                strict_named_parameters=base.strict_named_parameters,
                allow_fallback_conversion=base.converter.allow_fallback,
                named_parameter_prefix=self.prefix,
            )
            self._resolvers[base] = resolver
        return resolver

    def build_query(self, repository: Repository, *args: Any, **kwargs: Any) -> str:
        """
        Resolve the template for one call.

        Raises:
            MissingBindingError: If the template references an unbound argument
            TypeError: If the arguments do not fit the method signature
        """
        accessor = ArgumentAccessor.from_call(
            self.func, (repository,) + args, kwargs, prefix=self.prefix
        )
        return self._resolver_for(repository).resolve(self.template, accessor)

    def execute(self, repository: Repository, *args: Any, **kwargs: Any) -> Any:
        """Resolve the template and send it through the repository's operations."""
        query = self.build_query(repository, *args, **kwargs)
        logger.debug(f"{self.func.__qualname__} -> {query}")
        return repository.operations.search(query, index=repository.index)


def string_query(
    template: str,
    named: Optional[bool] = None,
    prefix: Optional[str] = None,
) -> Callable[[Callable], Callable]:
    """
    Declare the query a repository method sends.

    The decorated method's body is never executed; its signature describes
    the bound arguments.

    Args:
        template: Query template with ``?N`` or ``:name`` placeholders
        named: Force named (True) or positional (False) substitution; None
            uses the repository resolver's mode
        prefix: Prefix of named tokens (``settings.named_parameter_prefix`` if not provided)

    Returns:
        Decorator producing the query method

    Example:
        class PersonRepository(Repository):
            @string_query('{"match": {"name": "?0"}}')
            def find_by_name(self, name): ...
    """

    def decorator(func: Callable) -> Callable:
        method = StringQueryMethod(func, template, named=named, prefix=prefix)

        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            return method.execute(self, *args, **kwargs)

        wrapper.string_query = method
        return wrapper

    return decorator
