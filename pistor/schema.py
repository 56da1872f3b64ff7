# --------------------------------------------------------------------
# schema.py: Named-argument schemas for target recipes.
#
# Author: Lain Musgrove (lain.proliant@gmail.com)
# Date: Tuesday, March 9 2021
#
# Distributed under terms of the MIT license.
# --------------------------------------------------------------------
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from .errors import ConfigurationError, MissingParameterError, UnknownParameterError
from .util import is_iterable

# --------------------------------------------------------------------
Value = Union[None, str, Tuple[str, ...]]


# --------------------------------------------------------------------
class Arity(Enum):
    SINGLE = "single"
    MULTI = "multi"


# --------------------------------------------------------------------
@dataclass(frozen=True)
class Parameter:
    name: str
    arity: Arity
    required: bool = False

    @property
    def keyword(self) -> str:
        """The token that introduces this parameter in a flat token list."""
        return self.name.upper()

    @property
    def empty(self) -> Value:
        return () if self.arity == Arity.MULTI else None


# --------------------------------------------------------------------
class ParsedArguments(Mapping):
    """ An immutable mapping of declared parameter names to values. """

    def __init__(self, values: Dict[str, Value]):
        self._values = dict(values)

    def __getitem__(self, key: str) -> Value:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self):
        return f"<ParsedArguments {self._values!r}>"


# --------------------------------------------------------------------
class ParameterSchema:
    def __init__(self, *parameters: Parameter):
        self.parameters: Dict[str, Parameter] = {}
        for param in parameters:
            if param.name in self.parameters:
                raise ValueError(f"Duplicate parameter name: '{param.name}'")
            self.parameters[param.name] = param
        self._keywords = {p.keyword: p for p in parameters}

    @classmethod
    def of(
        cls,
        single: Iterable[str] = (),
        multi: Iterable[str] = (),
        required: Iterable[str] = (),
    ) -> "ParameterSchema":
        required = set(required)
        return ParameterSchema(
            *[Parameter(name, Arity.SINGLE, name in required) for name in single],
            *[Parameter(name, Arity.MULTI, name in required) for name in multi],
        )

    @property
    def required(self) -> List[str]:
        return [p.name for p in self.parameters.values() if p.required]

    def parse(
        self,
        recipe: str,
        tokens: Sequence[Any] = (),
        kwargs: Optional[Dict[str, Any]] = None,
    ) -> ParsedArguments:
        """Split the given tokens and keyword arguments into a
        ParsedArguments value.  Keyword values override single values and
        extend multi values found in the token list.

        Raises UnknownParameterError for undeclared keywords or unparsed
        tokens, and MissingParameterError for empty required parameters."""

        values: Dict[str, Any] = {
            name: p.empty for name, p in self.parameters.items()
        }
        unparsed = self._parse_tokens(tokens, values)
        unparsed.extend(self._bind_kwargs(recipe, kwargs or {}, values))

        if unparsed:
            raise UnknownParameterError(recipe, unparsed)

        missing = [name for name in self.required if not values[name]]
        if missing:
            raise MissingParameterError(recipe, missing)

        return ParsedArguments(values)

    def _parse_tokens(self, tokens: Sequence[Any], values: Dict[str, Any]) -> List[str]:
        unparsed: List[str] = []
        current: Optional[Parameter] = None
        taken = False

        for token in (str(t) for t in tokens):
            if token in self._keywords:
                current = self._keywords[token]
                taken = False
                if current.arity == Arity.SINGLE:
                    values[current.name] = None
            elif current is None or (current.arity == Arity.SINGLE and taken):
                unparsed.append(token)
            elif current.arity == Arity.SINGLE:
                values[current.name] = token
                taken = True
            else:
                values[current.name] = (*values[current.name], token)

        return unparsed

    def _bind_kwargs(
        self, recipe: str, kwargs: Dict[str, Any], values: Dict[str, Any]
    ) -> List[str]:
        unknown: List[str] = []

        for name, value in kwargs.items():
            param = self.parameters.get(name)
            if param is None:
                unknown.append(name)
            elif value is None:
                continue
            elif param.arity == Arity.SINGLE:
                if is_iterable(value):
                    raise ConfigurationError(
                        recipe, f"'{name}' accepts a single value, got {value!r}."
                    )
                values[name] = str(value)
            elif is_iterable(value):
                values[name] = (*values[name], *(str(v) for v in value))
            else:
                values[name] = (*values[name], str(value))

        return unknown
