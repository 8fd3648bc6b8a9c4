# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Value boxes: the runtime adapters between command-line literals and typed values.

A value box owns the storage behind one flag. The argument matcher only ever
calls `set(literal)` on it, once per occurrence in command-line order, so the
same matching code drives every supported type:

- `ScalarValue` holds a single value of one `ValueKind`; each `set` overwrites it.
- `SliceValue` holds an ordered list; the first `set` of a run discards the
  default and every `set` appends.
- `FuncValue` hands each literal to a caller-supplied function.

Boxes remember the default they were created with. `reset()` restores it and is
called by the matcher before each parse, so one run never sees values left over
from another.
"""
from __future__ import annotations

from copy import deepcopy
from typing import Any, Callable

from flagtree.parser.utils import coerce_literal, render_literal
from flagtree.parser.value_kind import ValueKind
from flagtree.protocols import BoolValue, Value


def is_bool_value(value: Value) -> bool:
    """Return True if `value` may be set by a bare flag with no literal."""
    if isinstance(value, BoolValue):
        return value.is_bool_flag()
    return False


class ScalarValue:
    """
    Holds a single value of a fixed `ValueKind`.

    Attributes:
        kind (ValueKind): The kind of value stored.
        default (Any): The value restored by `reset()`.
    """

    def __init__(self, kind: ValueKind | str, default: Any = None) -> None:
        self.kind: ValueKind = ValueKind(kind)
        if default is None and self.kind is ValueKind.BOOL:
            default = False
        self.default: Any = default
        self._value: Any = deepcopy(default)

    def set(self, literal: str) -> None:
        self._value = coerce_literal(literal, self.kind)

    def get(self) -> Any:
        return self._value

    def reset(self) -> None:
        self._value = deepcopy(self.default)

    def is_bool_flag(self) -> bool:
        return self.kind is ValueKind.BOOL

    def __str__(self) -> str:
        return render_literal(self._value, self.kind)

    def __repr__(self) -> str:
        return f"ScalarValue(kind={self.kind}, value={self._value!r})"


class SliceValue:
    """
    Holds an ordered list of values of a fixed `ValueKind`.

    The default list is kept until the first `set` of a run, which replaces it
    with an empty list before appending. Later calls keep appending, so values
    end up in command-line order.
    """

    def __init__(self, kind: ValueKind | str, default: list[Any] | None = None) -> None:
        self.kind: ValueKind = ValueKind(kind)
        self.default: list[Any] = list(default) if default is not None else []
        self._values: list[Any] = deepcopy(self.default)
        self._touched: bool = False

    def set(self, literal: str) -> None:
        value = coerce_literal(literal, self.kind)
        if not self._touched:
            self._values = []
            self._touched = True
        self._values.append(value)

    def get(self) -> list[Any]:
        return self._values

    def reset(self) -> None:
        self._values = deepcopy(self.default)
        self._touched = False

    def is_bool_flag(self) -> bool:
        return False

    def __str__(self) -> str:
        rendered = " ".join(render_literal(value, self.kind) for value in self._values)
        return f"[{rendered}]"

    def __repr__(self) -> str:
        return f"SliceValue(kind={self.kind}, values={self._values!r})"


class FuncValue:
    """Passes every literal to `function`; whatever it raises rejects the literal."""

    def __init__(self, function: Callable[[str], Any]) -> None:
        if not callable(function):
            raise TypeError(f"{function!r} is not callable")
        self.function = function

    def set(self, literal: str) -> None:
        self.function(literal)

    def __str__(self) -> str:
        return ""

    def __repr__(self) -> str:
        name = getattr(self.function, "__name__", repr(self.function))
        return f"FuncValue(function={name})"
