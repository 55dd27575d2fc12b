# umldoc/uml/relationship.py

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional, Tuple

from umldoc.indent import IndentingWriter
from umldoc.uml.names import TypeName
from umldoc.uml.part import UMLPart

logger = logging.getLogger(__name__)


class RelationshipKind(Enum):
    """Edge kinds, valued by their left-to-right PlantUML arrow."""

    INHERITANCE = "--|>"
    REALIZATION = "..|>"
    ASSOCIATION = "-->"
    DEPENDENCY = "..>"

    @property
    def arrow(self) -> str:
        return self.value

    @classmethod
    def from_arrow(cls, arrow: str) -> Tuple["RelationshipKind", bool]:
        """
        Map an arrow to its kind. The second value is True when the arrow points
        right-to-left (e.g. '<|--') and the sides must be swapped.
        """
        arrow = (arrow or "").strip()
        for kind in cls:
            if arrow == kind.value:
                return kind, False
            if arrow == _reversed(kind.value):
                return kind, True
        raise ValueError(f"Unsupported relationship arrow: {arrow!r}")


def _reversed(arrow: str) -> str:
    # '--|>' -> '<|--', '..>' -> '<..'
    return arrow[::-1].replace(">", "<")


class Relationship(UMLPart):
    """
    Directed edge between two types, always stored left-to-right.

    Equality is (source, kind, target); cardinality and labels are decoration that
    merge() folds together when duplicates meet.
    """

    def __init__(
        self,
        source: TypeName,
        target: TypeName,
        kind: RelationshipKind,
        cardinality: Optional[str] = None,
        label: Optional[str] = None,
    ) -> None:
        super().__init__(None)
        if source is None or target is None:
            raise ValueError("Relationship side is <None>.")
        if kind is None:
            raise ValueError("Relationship kind is <None>.")
        self.source = source
        self.target = target
        self.kind = kind
        self.cardinality = cardinality
        self.labels: List[str] = [label] if label else []

    @classmethod
    def of(
        cls,
        left: TypeName,
        arrow: str,
        right: TypeName,
        cardinality: Optional[str] = None,
        label: Optional[str] = None,
    ) -> "Relationship":
        kind, swap = RelationshipKind.from_arrow(arrow)
        if swap:
            left, right = right, left
        return cls(left, right, kind, cardinality, label)

    def merge(self, other: "Relationship") -> None:
        if other != self:
            raise ValueError(f"Cannot merge {other!r} into {self!r}.")
        self._check_open()
        if self.cardinality is None:
            self.cardinality = other.cardinality
        for label in other.labels:
            if label not in self.labels:
                self.labels.append(label)
        logger.debug("Merged duplicate relationship %r", self)

    def write_to(self, output: IndentingWriter) -> IndentingWriter:
        output.append(self.source.qualified).whitespace().append(self.kind.arrow).whitespace()
        if self.cardinality:
            output.append('"').append(self.cardinality).append('"').whitespace()
        output.append(self.target.qualified)
        if self.labels:
            output.whitespace().append(": ").append(", ".join(self.labels))
        return output.newline()

    def _identity(self) -> Tuple[str, RelationshipKind, str]:
        return self.source.qualified, self.kind, self.target.qualified

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Relationship):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        return hash(self._identity())

    def __repr__(self) -> str:
        return f"Relationship({self.source.qualified} {self.kind.arrow} {self.target.qualified})"
