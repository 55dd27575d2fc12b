# umldoc/uml/part.py

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from umldoc.config import DEFAULT_CONFIG, RenderConfig
from umldoc.indent import IndentingWriter

logger = logging.getLogger(__name__)


class UMLPart:
    """
    Node of the UML model.

    Children are owned and rendered in insertion order. The parent is a plain back
    reference used for upward queries (root, configuration); containers always own
    their children, never the other way around.
    """

    def __init__(self, parent: Optional["UMLPart"] = None) -> None:
        self._parent = parent
        self._children: List[UMLPart] = []

    @property
    def parent(self) -> Optional["UMLPart"]:
        return self._parent

    def set_parent(self, parent: Optional["UMLPart"]) -> None:
        self._check_open()
        self._parent = parent

    @property
    def children(self) -> Tuple["UMLPart", ...]:
        return tuple(self._children)

    def root_part(self) -> "UMLPart":
        part = self
        while part._parent is not None:
            part = part._parent
        return part

    @property
    def config(self) -> RenderConfig:
        root = self.root_part()
        return DEFAULT_CONFIG if root is self else root.config

    # ---------------- Tree assembly ----------------

    def add_child(self, child: Optional["UMLPart"]) -> bool:
        """
        Append `child` and adopt it. A child equal to one already present is skipped,
        so repeated introspection of the same declaration yields a single node.
        """
        if child is None:
            return False
        self._check_open()
        if child in self._children:
            logger.debug("Skipping duplicate %r in %r", child, self)
            return False
        self._children.append(child)
        child.set_parent(self)
        return True

    def replace_child(self, old: "UMLPart", new: "UMLPart") -> None:
        """Swap the reference to `old` (by identity) for `new`, e.g. after copy-on-write."""
        self._check_open()
        for i, child in enumerate(self._children):
            if child is old:
                self._children[i] = new
                new.set_parent(self)
                return
        raise ValueError(f"{old!r} is not a child of {self!r}.")

    def _check_open(self) -> None:
        root = self.root_part()
        if isinstance(root, UMLRoot) and root.sealed:
            raise RuntimeError("UML model is sealed: rendering has already started.")

    # ---------------- Rendering ----------------

    def write_to(self, output: IndentingWriter) -> IndentingWriter:
        return self.write_children_to(output)

    def write_children_to(self, output: IndentingWriter) -> IndentingWriter:
        indented = output.indent()
        for child in self._children:
            child.write_to(indented)
        return output


class UMLRoot(UMLPart):
    """
    Top of a model tree: owns the render configuration and the sealed flag.

    `base_package` is the package the rendered file lives in; cross-reference links
    are made relative to it.
    """

    def __init__(self, config: Optional[RenderConfig] = None, base_package: str = "") -> None:
        super().__init__(None)
        self._config = config or DEFAULT_CONFIG
        self.base_package = base_package
        self._sealed = False

    @property
    def config(self) -> RenderConfig:
        return self._config

    @property
    def sealed(self) -> bool:
        return self._sealed

    def seal(self) -> None:
        self._sealed = True
