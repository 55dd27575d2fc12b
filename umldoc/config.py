# umldoc/config.py

from __future__ import annotations

import os
from enum import Enum
from typing import FrozenSet, Tuple

from dotenv import load_dotenv  # type: ignore
from pydantic import BaseModel, ConfigDict, Field

load_dotenv()

PLANTUML_SERVER_URL = (os.getenv("PLANTUML_SERVER_URL") or "").strip() or "https://www.plantuml.com/plantuml"
RENDER_TIMEOUT_SECONDS = float(os.getenv("PLANTUML_RENDER_TIMEOUT") or 30)

MAX_PLANTUML_SIZE = 200_000


class TypeDisplay(str, Enum):
    """How a type name is written in the diagram."""

    NONE = "none"
    SIMPLE = "simple"
    QUALIFIED = "qualified"
    QUALIFIED_GENERICS = "qualified_generics"


class ParamDisplay(str, Enum):
    NONE = "none"
    NAMES_ONLY = "names_only"
    TYPES_ONLY = "types_only"
    NAMES_AND_TYPES = "names_and_types"


class Visibility(str, Enum):
    PUBLIC = "public"
    PROTECTED = "protected"
    PACKAGE = "package"
    PRIVATE = "private"

    def to_uml(self) -> str:
        return _VISIBILITY_MARKERS[self]


_VISIBILITY_MARKERS = {
    Visibility.PUBLIC: "+",
    Visibility.PROTECTED: "#",
    Visibility.PACKAGE: "~",
    Visibility.PRIVATE: "-",
}


class RenderConfig(BaseModel):
    """
    Read-only rendering options consumed by the UML model.

    The root diagram owns one instance; every part reaches it through its root.
    Parsing options from the outside world (HTTP body, files) is the caller's job;
    pydantic validates whatever dict it is given.
    """

    model_config = ConfigDict(frozen=True)

    field_type_display: TypeDisplay = TypeDisplay.SIMPLE
    method_return_type_display: TypeDisplay = TypeDisplay.SIMPLE
    method_parameter_display: ParamDisplay = ParamDisplay.NAMES_AND_TYPES
    method_parameter_type_display: TypeDisplay = TypeDisplay.SIMPLE
    visibilities: FrozenSet[Visibility] = Field(
        default_factory=lambda: frozenset({Visibility.PUBLIC, Visibility.PROTECTED})
    )

    add_package_to_name: bool = True
    create_links: bool = True
    link_suffix: str = ".html"
    indentation: int = Field(2, ge=0, le=8)

    custom_directives: Tuple[str, ...] = ()
    excluded_type_references: Tuple[str, ...] = (
        "java.lang.Object",
        "java.lang.Enum",
        "java.lang.annotation.Annotation",
    )

    def includes(self, visibility: Visibility) -> bool:
        return visibility in self.visibilities

    def is_excluded_reference(self, qualified_name: str) -> bool:
        return qualified_name in self.excluded_type_references


DEFAULT_CONFIG = RenderConfig()
