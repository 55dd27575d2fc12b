# umldoc/uml/link.py

from __future__ import annotations

import posixpath
from typing import TYPE_CHECKING, Optional

from umldoc.indent import IndentingWriter
from umldoc.uml.part import UMLRoot

if TYPE_CHECKING:
    from umldoc.uml.type import Type


class Link:
    """
    Cross-reference from a rendered type to its documentation page, written as
    PlantUML's [[href]] decoration. An empty link writes nothing.
    """

    __slots__ = ("href",)

    def __init__(self, href: Optional[str] = None) -> None:
        self.href = href

    @classmethod
    def for_type(cls, type_: "Type") -> "Link":
        config = type_.config
        if not config.create_links:
            return cls(None)

        package = type_.namespace.name
        qualified = type_.name.qualified
        if package and qualified.startswith(package + "."):
            name_in_package = qualified[len(package) + 1:]
        else:
            name_in_package = qualified if not package else type_.name.simple

        target = posixpath.join(package.replace(".", "/"), name_in_package + config.link_suffix)

        root = type_.root_part()
        base_package = root.base_package if isinstance(root, UMLRoot) else package
        base_dir = base_package.replace(".", "/") or "."
        return cls(posixpath.relpath(target, base_dir))

    def write_to(self, output: IndentingWriter) -> IndentingWriter:
        if self.href:
            output.append("[[").append(self.href).append("]]")
        return output

    def __bool__(self) -> bool:
        return bool(self.href)

    def __repr__(self) -> str:
        return f"Link({self.href!r})"
