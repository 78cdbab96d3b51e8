"""
Primitive registry backing dyno blocks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

from .types import DynoError


class RegistrationError(DynoError, RuntimeError):
    """Raised when primitive registration or lookup fails."""


Kernel = Callable[..., Mapping[str, Any]]
Typer = Callable[..., Mapping[str, str]]


@dataclass(frozen=True)
class Primitive:
    """Descriptor of a block operation.

    ``typer`` receives the input type tags (and block params as keywords)
    and returns the output type mapping; ``kernel`` receives the evaluated
    inputs and returns one payload per output channel.
    """

    name: str
    inputs: Sequence[str]
    kernel: Kernel
    typer: Typer
    symbol: Optional[str] = None
    metadata: Mapping[str, Any] = field(default_factory=dict)

    @property
    def arity(self) -> int:
        return len(self.inputs)


class PrimitiveRegistry:
    """Registry mapping primitive names to their descriptors."""

    def __init__(self) -> None:
        self._entries: Dict[str, Primitive] = {}

    def register(self, primitive: Primitive) -> Primitive:
        if primitive.name in self._entries:
            raise RegistrationError(f"Primitive '{primitive.name}' already registered")
        self._entries[primitive.name] = primitive
        return primitive

    def primitive(
        self,
        name: str,
        *,
        inputs: Sequence[str],
        typer: Typer,
        symbol: Optional[str] = None,
        metadata: Optional[Mapping[str, Any]] = None,
    ):
        """Decorator registering ``kernel`` under ``name``."""

        def wrapper(kernel: Kernel) -> Kernel:
            self.register(
                Primitive(
                    name=name,
                    inputs=tuple(inputs),
                    kernel=kernel,
                    typer=typer,
                    symbol=symbol,
                    metadata=dict(metadata or {}),
                )
            )
            return kernel

        return wrapper

    def get(self, name: str) -> Primitive:
        try:
            return self._entries[name]
        except KeyError as exc:
            raise RegistrationError(f"Unknown primitive '{name}'") from exc

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def items(self):
        return self._entries.items()


primitives_default = PrimitiveRegistry()


__all__ = [
    "RegistrationError",
    "Primitive",
    "PrimitiveRegistry",
    "primitives_default",
]
