# umldoc/uml/namespace.py

from __future__ import annotations

import functools
from typing import Optional

from umldoc.indent import IndentingWriter
from umldoc.uml.part import UMLPart


@functools.total_ordering
class Namespace(UMLPart):
    """
    Dotted namespace (a Java package) holding types and nested namespaces.

    The parent may be unknown at construction; a Type adopts its namespace into the
    diagram the first time the type itself is placed (see Type.set_parent).
    """

    def __init__(self, parent: Optional[UMLPart], name: str) -> None:
        super().__init__(parent)
        if name is None:
            raise ValueError("Namespace name is <None>.")
        self.name = name

    def write_to(self, output: IndentingWriter) -> IndentingWriter:
        output.append("namespace").whitespace().append(self.name).whitespace().append("{").newline()
        self.write_children_to(output)
        output.append("}").newline()
        return output

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Namespace):
            return NotImplemented
        return self.name == other.name

    def __lt__(self, other: "Namespace") -> bool:
        if other is None:
            raise ValueError("Cannot compare Namespace to <None>.")
        if not isinstance(other, Namespace):
            return NotImplemented
        return self.name < other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class Package(Namespace):
    """Package node of a package diagram; its types render package-relative names."""

    def write_to(self, output: IndentingWriter) -> IndentingWriter:
        if self.name:
            return super().write_to(output)
        # default package: no namespace block
        for child in self.children:
            child.write_to(output)
        return output
