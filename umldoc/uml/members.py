# umldoc/uml/members.py

from __future__ import annotations

from typing import Iterable, Optional, Tuple

from umldoc.config import Visibility
from umldoc.indent import IndentingWriter
from umldoc.uml.names import Parameter, TypeName
from umldoc.uml.part import UMLPart


class TypeMember(UMLPart):
    """
    Field or method of a Type.

    `type_name` is the declared type of a field or the return type of a method.
    When the owning Type learns a more specific generic signature it rewrites its
    members through replace_parameterized_type().
    """

    def __init__(
        self,
        containing_type: Optional[UMLPart],
        visibility: Visibility,
        name: str,
        type_name: Optional[TypeName] = None,
        is_static: bool = False,
        is_abstract: bool = False,
        is_deprecated: bool = False,
    ) -> None:
        super().__init__(containing_type)
        if not name:
            raise ValueError("Member name is <None>.")
        self.visibility = visibility or Visibility.PACKAGE
        self.name = name
        self.type_name = type_name
        self.is_static = is_static
        self.is_abstract = is_abstract
        self.is_deprecated = is_deprecated

    def replace_parameterized_type(self, old: Optional[TypeName], new: Optional[TypeName]) -> None:
        if old is None or new is None:
            return
        self._check_open()
        if self.type_name is not None:
            self.type_name = self.type_name.substitute(old, new)

    def _write_modifiers_to(self, output: IndentingWriter) -> IndentingWriter:
        if self.is_static:
            output.append("{static}").whitespace()
        if self.is_abstract:
            output.append("{abstract}").whitespace()
        return output.append(self.visibility.to_uml())

    def _write_name_to(self, output: IndentingWriter) -> IndentingWriter:
        if self.is_deprecated:
            return output.append("--").append(self.name).append("--")
        return output.append(self.name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class Field(TypeMember):

    def write_to(self, output: IndentingWriter) -> IndentingWriter:
        self._write_modifiers_to(output)
        self._write_name_to(output)
        if self.type_name is not None:
            type_text = self.type_name.to_uml(self.config.field_type_display)
            if type_text:
                output.append(": ").append(type_text)
        return output.newline()

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Field):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(("field", self.name))


class Method(TypeMember):
    """Method or constructor; constructors have no return type."""

    def __init__(
        self,
        containing_type: Optional[UMLPart],
        visibility: Visibility,
        name: str,
        parameters: Iterable[Parameter] = (),
        return_type: Optional[TypeName] = None,
        is_static: bool = False,
        is_abstract: bool = False,
        is_deprecated: bool = False,
    ) -> None:
        super().__init__(
            containing_type,
            visibility,
            name,
            type_name=return_type,
            is_static=is_static,
            is_abstract=is_abstract,
            is_deprecated=is_deprecated,
        )
        self.parameters: Tuple[Parameter, ...] = tuple(parameters)

    @property
    def return_type(self) -> Optional[TypeName]:
        return self.type_name

    def replace_parameterized_type(self, old: Optional[TypeName], new: Optional[TypeName]) -> None:
        super().replace_parameterized_type(old, new)
        if old is not None and new is not None:
            self.parameters = tuple(p.substitute(old, new) for p in self.parameters)

    def write_to(self, output: IndentingWriter) -> IndentingWriter:
        config = self.config
        self._write_modifiers_to(output)
        self._write_name_to(output)

        params = [
            p.to_uml(config.method_parameter_display, config.method_parameter_type_display)
            for p in self.parameters
        ]
        output.append("(").append(", ".join(p for p in params if p)).append(")")

        if self.type_name is not None:
            return_text = self.type_name.to_uml(config.method_return_type_display)
            if return_text:
                output.append(": ").append(return_text)
        return output.newline()

    def _signature(self) -> Tuple[str, Tuple[str, ...]]:
        return self.name, tuple(p.type.qualified for p in self.parameters)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Method):
            return NotImplemented
        return self._signature() == other._signature()

    def __hash__(self) -> int:
        return hash(("method", self._signature()))


class Literal(UMLPart):
    """Enum constant."""

    def __init__(self, containing_type: Optional[UMLPart], name: str) -> None:
        super().__init__(containing_type)
        if not name:
            raise ValueError("Literal name is <None>.")
        self.name = name

    def write_to(self, output: IndentingWriter) -> IndentingWriter:
        return output.append(self.name).newline()

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Literal):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(("literal", self.name))

    def __repr__(self) -> str:
        return f"Literal({self.name!r})"
