"""
Per-call fetch options for the transport.

Options are either a fixed mapping or a zero-argument provider evaluated on
every request, which is how callers attach short-lived auth tokens.
"""

import inspect
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Union

OptionsProvider = Callable[[], Union[Mapping[str, Any], Awaitable[Mapping[str, Any]]]]


@dataclass(frozen=True)
class StaticFetchOptions:
    """Options that never change between calls."""
    config: Mapping[str, Any] = field(default_factory=dict)

    async def resolve(self) -> Dict[str, Any]:
        return dict(self.config)


@dataclass(frozen=True)
class DynamicFetchOptions:
    """Options produced fresh for every call."""
    provider: OptionsProvider

    async def resolve(self) -> Dict[str, Any]:
        options = self.provider()
        if inspect.isawaitable(options):
            options = await options
        if options is None:
            return {}
        if not isinstance(options, Mapping):
            raise TypeError(
                f"Fetch options provider must return a mapping, got {type(options).__name__}"
            )
        return dict(options)


FetchOptions = Union[StaticFetchOptions, DynamicFetchOptions]


def as_fetch_options(value: Optional[Union[FetchOptions, Mapping[str, Any], OptionsProvider]]) -> FetchOptions:
    """Coerce ``None``, a mapping, a provider or a variant into a variant."""
    if isinstance(value, (StaticFetchOptions, DynamicFetchOptions)):
        return value
    if value is None:
        return StaticFetchOptions()
    if isinstance(value, Mapping):
        return StaticFetchOptions(dict(value))
    if callable(value):
        return DynamicFetchOptions(value)
    raise TypeError(f"Unsupported fetch options type: {type(value).__name__}")
