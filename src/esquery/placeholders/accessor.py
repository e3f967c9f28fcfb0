"""Parameter accessors exposing bound call arguments to the resolver."""

import inspect
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, Optional, Sequence

from .models import MissingBindingError, NamedParameter
from .syntax import is_valid_parameter_name

logger = logging.getLogger(__name__)

_SKIPPED_NAMES = ("self", "cls")


class ParameterAccessor(ABC):
    """Bound argument values and named-parameter metadata for one query invocation."""

    @abstractmethod
    def get_bindable_value(self, index: int) -> Any:
        """
        Return the bound value at a positional index.

        Raises:
            MissingBindingError: If no value is bound at the index
        """
        pass

    @abstractmethod
    def get_named_parameters(self) -> Sequence[NamedParameter]:
        """Return the declared named parameters, in declaration order."""
        pass


class ArgumentAccessor(ParameterAccessor):
    """Accessor over an explicit list of values and named parameters."""

    def __init__(
        self,
        values: Iterable[Any],
        named_parameters: Iterable[NamedParameter] = (),
    ):
        self._values = list(values)
        self._named_parameters = list(named_parameters)

    def __len__(self) -> int:
        return len(self._values)

    def get_bindable_value(self, index: int) -> Any:
        if index < 0 or index >= len(self._values):
            raise MissingBindingError(
                index,
                f"Placeholder index {index} is out of range "
                f"({len(self._values)} bound value(s))",
            )
        return self._values[index]

    def get_named_parameters(self) -> list[NamedParameter]:
        return list(self._named_parameters)

    @classmethod
    def from_mapping(cls, params: dict[str, Any], prefix: str = ":") -> "ArgumentAccessor":
        """
        Build an accessor from a name -> value mapping.

        Each entry becomes a named parameter with placeholder ``prefix + name``,
        indexed in the mapping's iteration order.

        Raises:
            ValueError: If a key is not a valid parameter name
        """
        names = list(params)
        for name in names:
            if not is_valid_parameter_name(name):
                raise ValueError(f"Invalid parameter name '{name}'")
        named = [
            NamedParameter(name=name, index=i, placeholder=f"{prefix}{name}")
            for i, name in enumerate(names)
        ]
        return cls([params[name] for name in names], named)

    @classmethod
    def from_call(
        cls,
        func: Callable,
        args: Sequence[Any] = (),
        kwargs: Optional[dict[str, Any]] = None,
        prefix: str = ":",
    ) -> "ArgumentAccessor":
        """
        Bind a call against a function signature.

        ``self`` and ``cls`` are skipped, defaults are applied, and every
        remaining argument becomes a bindable value declared as a named
        parameter. Values collected by ``*args`` are flattened into
        consecutive positions; ``**kwargs`` are declared by their keys.

        Args:
            func: The function whose signature describes the parameters
            args: Positional call arguments (including ``self`` for methods)
            kwargs: Keyword call arguments
            prefix: Prefix of named placeholder tokens

        Returns:
            ArgumentAccessor over the bound arguments

        Raises:
            TypeError: If the arguments do not fit the signature
        """
        signature = inspect.signature(func)
        bound = signature.bind(*args, **(kwargs or {}))
        bound.apply_defaults()

        values: list[Any] = []
        named: list[NamedParameter] = []

        def declare(name: str, value: Any) -> None:
            named.append(NamedParameter(name=name, index=len(values), placeholder=f"{prefix}{name}"))
            values.append(value)

        for name, param in signature.parameters.items():
            if name in _SKIPPED_NAMES and param.kind in (
                param.POSITIONAL_ONLY,
                param.POSITIONAL_OR_KEYWORD,
            ):
                continue
            value = bound.arguments.get(name)
            if param.kind is param.VAR_POSITIONAL:
                values.extend(value or ())
            elif param.kind is param.VAR_KEYWORD:
                for key, item in (value or {}).items():
                    declare(key, item)
            else:
                declare(name, value)

        logger.debug(f"Bound {len(values)} value(s) for {getattr(func, '__qualname__', func)}")
        return cls(values, named)
