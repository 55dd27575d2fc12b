"""UML model of a program's types and its PlantUML rendering."""

from umldoc.uml.diagram import ClassDiagram, PackageDiagram, UMLDiagram
from umldoc.uml.link import Link
from umldoc.uml.members import Field, Literal, Method, TypeMember
from umldoc.uml.names import Parameter, TypeName
from umldoc.uml.namespace import Namespace, Package
from umldoc.uml.part import UMLPart, UMLRoot
from umldoc.uml.relationship import Relationship, RelationshipKind
from umldoc.uml.type import Classification, Type

__all__ = [
    "ClassDiagram",
    "Classification",
    "Field",
    "Link",
    "Literal",
    "Method",
    "Namespace",
    "Package",
    "PackageDiagram",
    "Parameter",
    "Relationship",
    "RelationshipKind",
    "Type",
    "TypeMember",
    "TypeName",
    "UMLDiagram",
    "UMLPart",
    "UMLRoot",
]
