# umldoc/builder.py

from __future__ import annotations

import logging
from typing import List, Optional

from umldoc.cir.graph import DeclarationGraph
from umldoc.cir.model import FieldDeclaration, MethodDeclaration, RelationshipDeclaration
from umldoc.config import DEFAULT_CONFIG, RenderConfig
from umldoc.uml.diagram import ClassDiagram, PackageDiagram, UMLDiagram
from umldoc.uml.members import Field, Literal, Method, TypeMember
from umldoc.uml.namespace import Namespace
from umldoc.uml.relationship import Relationship
from umldoc.uml.type import Type

logger = logging.getLogger(__name__)


class DiagramBuilder:
    """
    Assembles UML diagrams from a DeclarationGraph.

    All tree construction happens here (members, generic reconciliation,
    copy-on-write flags); the returned diagrams are ready for a single render.
    """

    def __init__(self, graph: DeclarationGraph, config: Optional[RenderConfig] = None) -> None:
        self.graph = graph
        self.config = config or DEFAULT_CONFIG

    # ---------------- Types ----------------

    def build_type(self, type_id: str, add_package_to_name: bool = False) -> Type:
        decl = self.graph.type_declaration(type_id)
        type_ = Type(Namespace(None, decl.package), decl.classification, decl.name)

        for literal in decl.literals:
            type_.add_child(Literal(type_, literal))
        for member in self.graph.members(type_id):
            if self.config.includes(member.visibility):
                type_.add_child(self._member(type_, member))

        for signature in self.graph.signatures(type_id)[1:]:
            type_.update_generic_type_variables(signature)

        if decl.is_deprecated:
            type_ = type_.deprecated()
        if add_package_to_name:
            type_ = type_.with_package_in_name()
        return type_

    def _member(self, type_: Type, member) -> TypeMember:
        if isinstance(member, FieldDeclaration):
            return Field(
                type_, member.visibility, member.name, member.type,
                is_static=member.is_static, is_deprecated=member.is_deprecated,
            )
        if isinstance(member, MethodDeclaration):
            return Method(
                type_, member.visibility, member.name, member.parameters, member.return_type,
                is_static=member.is_static, is_abstract=member.is_abstract,
                is_deprecated=member.is_deprecated,
            )
        raise TypeError(f"Unsupported member declaration: {member!r}")

    def _relationship(self, rel: RelationshipDeclaration) -> Optional[Relationship]:
        if self.config.is_excluded_reference(rel.target.qualified):
            return None
        return Relationship(rel.source, rel.target, rel.kind, rel.cardinality, rel.label)

    def _is_included(self, type_id: str) -> bool:
        return self.config.includes(self.graph.type_declaration(type_id).visibility)

    # ---------------- Diagrams ----------------

    def class_diagram(self, type_id: str) -> ClassDiagram:
        decl = self.graph.type_declaration(type_id)
        diagram = ClassDiagram(self.config, decl.name, decl.package)
        diagram.add_child(self.build_type(type_id, add_package_to_name=self.config.add_package_to_name))

        for rel in self.graph.relationships(type_id):
            diagram.add_child(self._relationship(rel))
        for rel in self.graph.relationships(type_id, incoming=True):
            diagram.add_child(self._relationship(rel))
        return diagram

    def package_diagram(self, package: str) -> PackageDiagram:
        diagram = PackageDiagram(self.config, package)
        type_ids = [
            t.id for t in self.graph.types_in_package(package)
            if self._is_included(t.id)
        ]
        for type_id in type_ids:
            diagram.add_type(self.build_type(type_id))
        for type_id in type_ids:
            for rel in self.graph.relationships(type_id):
                diagram.add_child(self._relationship(rel))
        return diagram

    def build_all(self) -> List[UMLDiagram]:
        diagrams: List[UMLDiagram] = [self.package_diagram(p) for p in self.graph.packages()]
        for decl in self.graph.types():
            if self._is_included(decl.id):
                diagrams.append(self.class_diagram(decl.id))
        logger.info("Built %d diagrams", len(diagrams))
        return diagrams
