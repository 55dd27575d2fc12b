# umldoc/uml/names.py

from __future__ import annotations

import functools
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, List, Optional, Tuple

from umldoc.config import ParamDisplay, TypeDisplay

if TYPE_CHECKING:
    from umldoc.uml.namespace import Namespace


def _split_arguments(text: str) -> List[str]:
    """
    Split generic arguments on top-level commas only:
      "K, java.util.List<V>" -> ["K", "java.util.List<V>"]
    """
    parts: List[str] = []
    depth = 0
    current: List[str] = []
    for ch in text:
        if ch == "<":
            depth += 1
        elif ch == ">":
            depth -= 1
            if depth < 0:
                raise ValueError(f"Unbalanced generics in: {text!r}")
        if ch == "," and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(ch)
    if depth != 0:
        raise ValueError(f"Unbalanced generics in: {text!r}")
    parts.append("".join(current).strip())
    return [p for p in parts if p]


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class TypeName:
    """
    Reference to a (possibly generic, possibly array) type.

    `wildcard` is "extends" or "super" for a bounded wildcard argument such as
    `? extends Shape`; the name is then the bound type's name.

    Identity is the qualified name alone: Box<T>, Box<String> and Box[] are the same
    TypeName for equality, hashing and ordering. Generic arguments and array
    dimensions only matter for rendering and substitution.
    """

    qualified: str
    generics: Tuple["TypeName", ...] = ()
    array_dimensions: int = 0
    simple: str = field(default="")
    wildcard: str = ""

    def __post_init__(self) -> None:
        if not self.qualified:
            raise ValueError("Qualified type name is <None>.")
        if self.array_dimensions < 0:
            raise ValueError("Array dimensions must not be negative.")
        if self.wildcard not in ("", "extends", "super"):
            raise ValueError(f"Unsupported wildcard bound: {self.wildcard!r}")
        object.__setattr__(self, "generics", tuple(self.generics))
        if not self.simple:
            object.__setattr__(self, "simple", self.qualified.rsplit(".", 1)[-1])

    @classmethod
    def parse(cls, text: str) -> "TypeName":
        """Parse Java-like type text, e.g. 'java.util.Map<K, java.util.List<V>>[]'."""
        text = (text or "").strip()
        if not text:
            raise ValueError("Cannot parse an empty type name.")

        for bound in ("extends", "super"):
            prefix = f"? {bound} "
            if text.startswith(prefix):
                return replace(cls.parse(text[len(prefix):]), wildcard=bound)

        dims = 0
        if text.endswith("..."):
            dims += 1
            text = text[:-3].rstrip()
        while text.endswith("[]"):
            dims += 1
            text = text[:-2].rstrip()

        lt = text.find("<")
        if lt < 0:
            if ">" in text:
                raise ValueError(f"Unbalanced generics in: {text!r}")
            return cls(text, array_dimensions=dims)
        if not text.endswith(">"):
            raise ValueError(f"Unbalanced generics in: {text!r}")

        base = text[:lt].strip()
        args = tuple(cls.parse(a) for a in _split_arguments(text[lt + 1:-1]))
        return cls(base, generics=args, array_dimensions=dims)

    # ---------------- Derived values ----------------

    def with_array_dimensions(self, dims: int) -> "TypeName":
        return replace(self, array_dimensions=dims)

    def substitute(self, old: "TypeName", new: "TypeName") -> "TypeName":
        """
        Replace every occurrence of `old` (matched by qualified name) with `new`,
        recursing into generic arguments. Array dimensions of a replaced
        occurrence are kept: T[] with T -> String becomes String[].
        """
        if old is None or new is None:
            return self
        if self.qualified == old.qualified:
            replaced = new
            if self.array_dimensions:
                replaced = new.with_array_dimensions(new.array_dimensions + self.array_dimensions)
            if self.wildcard:
                replaced = replace(replaced, wildcard=self.wildcard)
            return replaced
        if not self.generics:
            return self
        return replace(self, generics=tuple(g.substitute(old, new) for g in self.generics))

    # ---------------- Rendering ----------------

    def to_uml(self, display: TypeDisplay, namespace: Optional["Namespace"] = None) -> str:
        if display == TypeDisplay.NONE:
            return ""

        name = self.simple if display == TypeDisplay.SIMPLE else self.qualified
        if namespace is not None and name.startswith(namespace.name + "."):
            name = name[len(namespace.name) + 1:]

        if self.generics:
            generic_display = (
                TypeDisplay.QUALIFIED_GENERICS if display == TypeDisplay.QUALIFIED_GENERICS else TypeDisplay.SIMPLE
            )
            name += "<" + ", ".join(g.to_uml(generic_display, namespace) for g in self.generics) + ">"

        name += "[]" * self.array_dimensions
        return f"? {self.wildcard} {name}" if self.wildcard else name

    # ---------------- Identity ----------------

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, TypeName):
            return NotImplemented
        return self.qualified == other.qualified

    def __lt__(self, other: "TypeName") -> bool:
        if other is None:
            raise ValueError("Cannot compare TypeName to <None>.")
        if not isinstance(other, TypeName):
            return NotImplemented
        return self.qualified < other.qualified

    def __hash__(self) -> int:
        return hash(self.qualified)

    def __str__(self) -> str:
        return self.to_uml(TypeDisplay.QUALIFIED_GENERICS)


@dataclass(frozen=True)
class Parameter:
    """Method parameter; a varargs parameter renders its last dimension as '...'."""

    name: str
    type: TypeName
    varargs: bool = False

    def substitute(self, old: TypeName, new: TypeName) -> "Parameter":
        return replace(self, type=self.type.substitute(old, new))

    def to_uml(self, display: ParamDisplay, type_display: TypeDisplay) -> str:
        if display == ParamDisplay.NONE:
            return ""
        if display == ParamDisplay.NAMES_ONLY:
            return self.name

        type_text = self._type_to_uml(type_display)
        if display == ParamDisplay.TYPES_ONLY:
            return type_text
        return f"{self.name}: {type_text}" if type_text else self.name

    def _type_to_uml(self, type_display: TypeDisplay) -> str:
        if not self.varargs or not self.type.array_dimensions:
            return self.type.to_uml(type_display)
        element = self.type.with_array_dimensions(self.type.array_dimensions - 1)
        rendered = element.to_uml(type_display)
        return rendered + "..." if rendered else rendered
