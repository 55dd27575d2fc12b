# umldoc/uml/type.py

from __future__ import annotations

import functools
import logging
from enum import Enum
from typing import Iterable, Optional

from umldoc.config import TypeDisplay
from umldoc.indent import IndentingWriter
from umldoc.uml.link import Link
from umldoc.uml.members import TypeMember
from umldoc.uml.names import TypeName
from umldoc.uml.namespace import Namespace, Package
from umldoc.uml.part import UMLPart

logger = logging.getLogger(__name__)


class Classification(Enum):
    ENUM = "enum"
    INTERFACE = "interface"
    ANNOTATION = "annotation"
    ABSTRACT_CLASS = "abstract_class"
    CLASS = "class"

    def to_uml(self) -> str:
        return self.name.lower().replace("_", " ")


@functools.total_ordering
class Type(UMLPart):
    """
    Class, interface, enum or annotation in the UML model.

    A Type compares, hashes and sorts by its TypeName only. The deprecation and
    package-in-name flags are copy-on-write: deprecated() and with_package_in_name()
    return a new Type that adopts this type's children, and callers replace their
    reference with the returned instance.
    """

    def __init__(
        self,
        namespace: Namespace,
        classification: Classification,
        name: TypeName,
        is_deprecated: bool = False,
        add_package_to_name: bool = False,
        children: Optional[Iterable[UMLPart]] = None,
    ) -> None:
        super().__init__(namespace)
        if namespace is None:
            raise ValueError("Containing package is <None>.")
        if classification is None:
            raise ValueError("Type classification is <None>.")
        if name is None:
            raise ValueError("Type name is <None>.")
        self._namespace = namespace
        self._classification = classification
        self._name = name
        self._is_deprecated = is_deprecated
        self._add_package_to_name = add_package_to_name
        self._link: Optional[Link] = None
        for child in children or ():
            self.add_child(child)

    @property
    def name(self) -> TypeName:
        return self._name

    @property
    def namespace(self) -> Namespace:
        return self._namespace

    @property
    def classification(self) -> Classification:
        return self._classification

    @property
    def is_deprecated(self) -> bool:
        return self._is_deprecated

    @property
    def add_package_to_name(self) -> bool:
        return self._add_package_to_name

    def update_generic_type_variables(self, name: Optional[TypeName]) -> None:
        """
        Refine the generic signature in place, e.g. Box<T> -> Box<String>.

        Applies only when `name` has the same qualified name and the same number of
        generic arguments; each member then has the old argument at position i
        replaced by the new argument at position i. Anything else is ignored.
        """
        if name is None or name.qualified != self._name.qualified:
            return
        old_generics = self._name.generics
        if len(old_generics) != len(name.generics):
            logger.debug(
                "Ignoring generic signature %s for %s: arity %d != %d",
                name, self._name, len(name.generics), len(old_generics),
            )
            return

        self._check_open()
        self._name = name
        for member in self.children:
            if not isinstance(member, TypeMember):
                continue
            for old, new in zip(old_generics, name.generics):
                member.replace_parameterized_type(old, new)

    def link(self) -> Link:
        if self._link is None:
            self._link = Link.for_type(self)
        return self._link

    def deprecated(self) -> "Type":
        return Type(
            self._namespace, self._classification, self._name,
            True, self._add_package_to_name, self.children,
        )

    def with_package_in_name(self) -> "Type":
        return Type(
            self._namespace, self._classification, self._name,
            self._is_deprecated, True, self.children,
        )

    def set_parent(self, parent: Optional[UMLPart]) -> None:
        super().set_parent(parent)
        if self._namespace.parent is None and self._namespace is not parent:
            self._namespace.set_parent(parent)

    # ---------------- Rendering ----------------

    def _write_name_to(self, output: IndentingWriter, namespace: Optional[Namespace]) -> IndentingWriter:
        # Syntactic prefix check: a type whose name merely starts with the package
        # name also gets the two-line label.
        package = self._namespace.name
        if self._add_package_to_name and self._name.qualified.startswith(package + "."):
            name_in_package = self._name.qualified[len(package) + 1:]
            output.append('"<size:14>').append(name_in_package) \
                .append("\\n<size:10>").append(package) \
                .append('" as ')
        output.append(self._name.to_uml(TypeDisplay.QUALIFIED, namespace))
        return output

    def _write_header_to(
        self, output: IndentingWriter, keyword: str, namespace: Optional[Namespace]
    ) -> IndentingWriter:
        output.append(keyword).whitespace()
        self._write_name_to(output, namespace).whitespace()
        if self._is_deprecated:
            output.append("<<deprecated>>").whitespace()
        self.link().write_to(output).whitespace()
        return self.write_children_to(output).newline()

    def write_to(self, output: IndentingWriter) -> IndentingWriter:
        # Types placed in a diagram package render package-relative names.
        namespace = None
        if isinstance(self.parent, Package):
            namespace = Namespace(self.root_part(), self.parent.name)

        if self._classification == Classification.ANNOTATION:
            # PlantUML cannot show annotation bodies: members go in an interface block,
            # then a separate annotation declaration gives the node its shape.
            self._write_header_to(output, Classification.INTERFACE.to_uml(), namespace)
            output.append(Classification.ANNOTATION.to_uml()).whitespace() \
                .append(self._name.to_uml(TypeDisplay.QUALIFIED, namespace)).newline()
        else:
            self._write_header_to(output, self._classification.to_uml(), namespace)
        return output

    def write_children_to(self, output: IndentingWriter) -> IndentingWriter:
        if self.children:
            super().write_children_to(output.append("{").newline()).append("}")
        return output

    # ---------------- Identity ----------------

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Type):
            return NotImplemented
        return self._name == other._name

    def __lt__(self, other: "Type") -> bool:
        if other is None:
            raise ValueError("Cannot compare Type to <None>.")
        if not isinstance(other, Type):
            return NotImplemented
        return self._name < other._name

    def __hash__(self) -> int:
        return hash(self._name)

    def __repr__(self) -> str:
        return f"Type({self._classification.name}, {self._name})"
