"""
Persistent, typed variable environment for one shell session.

A binding keeps the type it was declared with for its whole life. Assignment
re-coerces new text through that type, so a variable can change value but
never type. Nothing is ever removed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from dumbjshell.core import types
from dumbjshell.core.errors import DuplicateNameError, UndefinedVariableError
from dumbjshell.core.types import TypeEntry, Value

logger = logging.getLogger("dumbjshell.core.store")


@dataclass
class Binding:
    """A named, typed storage slot. ``value`` is replaced on assignment."""

    name: str
    declared_type: TypeEntry
    value: Value


class VariableStore:
    """Insertion-ordered mapping of variable name to binding."""

    def __init__(self) -> None:
        self._bindings: dict[str, Binding] = {}

    def declare(self, name: str, type_name: str, text: str) -> Value:
        """Create a new binding holding ``text`` coerced to ``type_name``.

        Raises:
            DuplicateNameError: If ``name`` is already bound.
            UnknownTypeError: If ``type_name`` is not a supported type.
            CoercionError: If ``text`` does not parse as ``type_name``.
        """
        if name in self._bindings:
            raise DuplicateNameError(f"Variable {name} already exists")
        entry = types.lookup(type_name)
        value = entry.coerce(text)
        self._bindings[name] = Binding(name=name, declared_type=entry, value=value)
        logger.debug("declared %s %s = %s", type_name, name, value.display())
        return value

    def read(self, name: str) -> Value:
        """Current value of ``name``.

        Raises:
            UndefinedVariableError: If ``name`` was never declared.
        """
        return self.binding(name).value

    def assign(self, name: str, text: str) -> Value:
        """Replace the value of ``name`` with ``text`` coerced to its declared type.

        Raises:
            UndefinedVariableError: If ``name`` was never declared.
            CoercionError: If ``text`` does not parse as the declared type.
        """
        binding = self.binding(name)
        value = binding.declared_type.coerce(text)
        binding.value = value
        logger.debug("assigned %s = %s", name, value.display())
        return value

    def binding(self, name: str) -> Binding:
        try:
            return self._bindings[name]
        except KeyError:
            raise UndefinedVariableError(f"Variable {name} does not exist") from None

    def snapshot(self) -> dict[str, str]:
        """Display form of every binding, in declaration order."""
        return {name: b.value.display() for name, b in self._bindings.items()}

    def __contains__(self, name: object) -> bool:
        return name in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)

    def __iter__(self) -> Iterator[Binding]:
        return iter(self._bindings.values())
