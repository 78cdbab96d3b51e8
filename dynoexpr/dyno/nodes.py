"""
Leaf and composite nodes of the dyno dataflow graph.
"""

from __future__ import annotations

import itertools
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from .types import DynoTypeError, Payload, coerce_value, ensure_type

_node_ids = itertools.count()


class DynoValue:
    """Common base of every node handle."""

    def __init__(self) -> None:
        self.id = next(_node_ids)

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return f"<{type(self).__name__} #{self.id}>"


class DynoConst(DynoValue):
    """Typed constant leaf."""

    def __init__(self, type: str, value: Any):
        super().__init__()
        self._type = ensure_type(type)
        self._value = coerce_value(self._type, value)

    @property
    def type(self) -> str:
        return self._type

    @property
    def value(self) -> Payload:
        return self._value

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return f"DynoConst({self._type!r}, {self._value!r})"


class DynoUniform(DynoConst):
    """Leaf whose value may be updated between evaluations."""

    def __init__(self, type: str, value: Any, *, name: Optional[str] = None):
        super().__init__(type, value)
        self.name = name

    @DynoConst.value.setter
    def value(self, new_value: Any) -> None:
        self._value = coerce_value(self._type, new_value)

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        label = f", name={self.name!r}" if self.name else ""
        return f"DynoUniform({self._type!r}, {self._value!r}{label})"


class DynoLiteral(DynoValue):
    """Named literal leaf, e.g. ``PI``."""

    def __init__(self, type: str, literal: str):
        super().__init__()
        self._type = ensure_type(type)
        if not isinstance(literal, str) or not literal:
            raise DynoTypeError(f"Literal name must be a non-empty string, got {literal!r}")
        self._literal = literal

    @property
    def type(self) -> str:
        return self._type

    @property
    def value(self) -> str:
        return self._literal

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return f"DynoLiteral({self._type!r}, {self._literal!r})"


class DynoBlock(DynoValue):
    """Application of a registered primitive to its input nodes."""

    def __init__(
        self,
        op: str,
        inputs: Mapping[str, DynoValue],
        out_types: Mapping[str, str],
        *,
        params: Optional[Mapping[str, Any]] = None,
    ):
        super().__init__()
        if not out_types:
            raise DynoTypeError(f"Block '{op}' must declare at least one output")
        self.op = op
        self.inputs: Mapping[str, DynoValue] = MappingProxyType(dict(inputs))
        self.params: Mapping[str, Any] = MappingProxyType(dict(params or {}))
        self._out_types = MappingProxyType(
            {key: ensure_type(type_tag) for key, type_tag in out_types.items()}
        )
        self._outputs: Dict[str, DynoOutput] = {}

    @property
    def out_types(self) -> Mapping[str, str]:
        return self._out_types

    @property
    def outputs(self) -> Mapping[str, "DynoOutput"]:
        if not self._outputs:
            self._outputs = {key: DynoOutput(self, key) for key in self._out_types}
        return MappingProxyType(self._outputs)

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return f"DynoBlock({self.op!r}, out_types={dict(self._out_types)!r})"


class DynoOutput(DynoValue):
    """A single named channel of a block."""

    def __init__(self, block: DynoBlock, key: str):
        super().__init__()
        if key not in block.out_types:
            raise DynoTypeError(f"Block '{block.op}' has no output '{key}'")
        self.block = block
        self.key = key

    @property
    def type(self) -> str:
        return self.block.out_types[self.key]

    @property
    def out_types(self) -> Mapping[str, str]:
        return MappingProxyType({self.key: self.type})

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return f"DynoOutput({self.block.op!r}.{self.key}, {self.type!r})"


__all__ = [
    "DynoValue",
    "DynoConst",
    "DynoUniform",
    "DynoLiteral",
    "DynoBlock",
    "DynoOutput",
]
