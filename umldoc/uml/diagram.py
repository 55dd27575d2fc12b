# umldoc/uml/diagram.py

from __future__ import annotations

import io
import logging
import posixpath
from typing import List, Optional, Tuple

from umldoc.config import RenderConfig
from umldoc.indent import IndentingWriter
from umldoc.uml.names import TypeName
from umldoc.uml.namespace import Package
from umldoc.uml.part import UMLPart, UMLRoot
from umldoc.uml.relationship import Relationship
from umldoc.uml.type import Type

logger = logging.getLogger(__name__)


class UMLDiagram(UMLRoot):
    """
    One PlantUML document.

    Containers are written first and relationships last, since PlantUML needs the
    types declared before edges can reference them. An added relationship that
    equals an existing one is merged into it.
    """

    directives: Tuple[str, ...] = ()

    def add_child(self, child: Optional[UMLPart]) -> bool:
        if isinstance(child, Relationship):
            for existing in self.children:
                if isinstance(existing, Relationship) and existing == child:
                    existing.merge(child)
                    return False
        return super().add_child(child)

    @property
    def relationships(self) -> List[Relationship]:
        return [c for c in self.children if isinstance(c, Relationship)]

    @property
    def file_path(self) -> str:
        raise NotImplementedError

    def write_to(self, output: IndentingWriter) -> IndentingWriter:
        output.append("@startuml").newline()
        body = output.indent()

        directives = list(self.config.custom_directives) + list(self.directives)
        for directive in directives:
            body.append(directive).newline()
        if directives:
            body.newline()

        containers = [c for c in self.children if not isinstance(c, Relationship)]
        relationships = self.relationships
        for child in containers:
            child.write_to(body)
        if containers and relationships:
            body.newline()
        for relationship in relationships:
            relationship.write_to(body)

        return output.append("@enduml").newline()

    def render(self) -> str:
        """Seal the model and return the diagram text."""
        self.seal()
        output = IndentingWriter(io.StringIO(), self.config.indentation)
        self.write_to(output)
        text = output.getvalue()
        logger.debug("Rendered %s (%d chars)", self.file_path, len(text))
        return text


class ClassDiagram(UMLDiagram):
    """Diagram of a single type and the relationships around it."""

    directives = (
        "set namespaceSeparator none",
        "hide empty fields",
        "hide empty methods",
    )

    def __init__(self, config: Optional[RenderConfig], type_name: TypeName, package: str = "") -> None:
        super().__init__(config, base_package=package)
        self.type_name = type_name

    @property
    def file_path(self) -> str:
        qualified = self.type_name.qualified
        name = qualified[len(self.base_package) + 1:] if self.base_package else qualified
        return posixpath.join(self.base_package.replace(".", "/"), name + ".puml")


class PackageDiagram(UMLDiagram):
    """Diagram of all types of one package, grouped in a namespace block."""

    def __init__(self, config: Optional[RenderConfig], package: str) -> None:
        super().__init__(config, base_package=package)
        self.package_node = Package(self, package)
        self.add_child(self.package_node)

    def add_type(self, type_: Type) -> bool:
        return self.package_node.add_child(type_)

    @property
    def types(self) -> List[Type]:
        return [c for c in self.package_node.children if isinstance(c, Type)]

    @property
    def file_path(self) -> str:
        return posixpath.join(self.base_package.replace(".", "/"), "package.puml")
