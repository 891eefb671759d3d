"""Type vocabulary shared by routers and clients."""

from collections.abc import Callable, Mapping
from typing import Any, TypeAlias

from pydantic import JsonValue

# A procedure may be sync or async; its result is awaited when awaitable.
Procedure: TypeAlias = Callable[..., Any]

# Either a mapping of names to procedures or an object exposing them as
# public attributes.
Provider: TypeAlias = Mapping[str, Procedure] | object

ProviderTable: TypeAlias = Mapping[str, Provider]

__all__ = ["JsonValue", "Procedure", "Provider", "ProviderTable"]
