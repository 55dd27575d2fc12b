import logging
from typing import Any, Dict, List, Union

import networkx as nx # type: ignore

from umldoc.cir.model import (
    FieldDeclaration,
    MethodDeclaration,
    RelationshipDeclaration,
    TypeDeclaration,
)
from umldoc.uml.names import TypeName

logger = logging.getLogger(__name__)

MemberDeclaration = Union[FieldDeclaration, MethodDeclaration]


class DeclarationGraph:
    """
    Typed multi-graph of declarations produced by a front-end.
    Nodes: TypeDecl, ExternalType, Field, Method
    Edges: HAS_FIELD, HAS_METHOD (carry 'order'), RELATES (carry a RelationshipDeclaration)
    """
    def __init__(self) -> None:
        self.g = nx.MultiDiGraph()
        self.parse_errors: List[Dict[str, str]] = []

    @staticmethod
    def type_id(qualified_name: str) -> str:
        return f"type:{qualified_name}"

    # ---------------- Building ----------------

    def add_type(self, decl: TypeDeclaration) -> str:
        """
        Add a type declaration. Declaring the same qualified type again keeps the first
        declaration and records the new signature for later generic reconciliation.
        """
        node_id = self.type_id(decl.name.qualified)
        data = self.g.nodes.get(node_id)
        if data is not None and data.get("kind") == "TypeDecl":
            data["signatures"].append(decl.name)
            logger.debug("Repeated declaration of %s recorded as signature", decl.name)
            return node_id
        self.g.add_node(node_id, kind="TypeDecl", payload=decl, signatures=[decl.name])
        return node_id

    def add_member(self, type_id: str, member: MemberDeclaration) -> None:
        if member.id in self.g:
            logger.debug("Skipping repeated member %s", member.id)
            return
        kind = "Field" if isinstance(member, FieldDeclaration) else "Method"
        order = self.g.out_degree(type_id) if type_id in self.g else 0
        self.g.add_node(member.id, kind=kind, payload=member)
        self.g.add_edge(type_id, member.id, etype=f"HAS_{kind.upper()}", order=order)

    def add_relationship(self, type_id: str, rel: RelationshipDeclaration) -> None:
        target_id = self.type_id(rel.target.qualified)
        if target_id not in self.g:
            self.g.add_node(target_id, kind="ExternalType", payload=rel.target)
        self.g.add_edge(type_id, target_id, etype="RELATES", payload=rel)

    # ---------------- Queries ----------------

    def _kind(self, node_id: str) -> Any:
        return self.g.nodes[node_id].get("kind") if node_id in self.g else None

    def has_type(self, type_id: str) -> bool:
        return self._kind(type_id) == "TypeDecl"

    def type_declaration(self, type_id: str) -> TypeDeclaration:
        if not self.has_type(type_id):
            raise KeyError(f"Unknown type: {type_id}")
        return self.g.nodes[type_id]["payload"]

    def signatures(self, type_id: str) -> List[TypeName]:
        return list(self.g.nodes[type_id]["signatures"]) if self.has_type(type_id) else []

    def types(self) -> List[TypeDeclaration]:
        decls = [d["payload"] for _, d in self.g.nodes(data=True) if d.get("kind") == "TypeDecl"]
        return sorted(decls, key=lambda t: t.name.qualified)

    def packages(self) -> List[str]:
        return sorted({t.package for t in self.types()})

    def types_in_package(self, package: str) -> List[TypeDeclaration]:
        return [t for t in self.types() if t.package == package]

    def members(self, type_id: str) -> List[MemberDeclaration]:
        edges = [
            (data.get("order", 0), dst)
            for _, dst, data in self.g.out_edges(type_id, data=True)
            if data.get("etype") in ("HAS_FIELD", "HAS_METHOD")
        ]
        return [self.g.nodes[dst]["payload"] for _, dst in sorted(edges)]

    def relationships(self, type_id: str, incoming: bool = False) -> List[RelationshipDeclaration]:
        if type_id not in self.g:
            return []
        edges = self.g.in_edges(type_id, data=True) if incoming else self.g.out_edges(type_id, data=True)
        return [data["payload"] for _, _, data in edges if data.get("etype") == "RELATES"]
