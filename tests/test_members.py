import pytest

from umldoc.config import ParamDisplay, RenderConfig, TypeDisplay, Visibility
from umldoc.uml.diagram import ClassDiagram
from umldoc.uml.members import Field, Literal, Method
from umldoc.uml.names import Parameter, TypeName
from umldoc.uml.namespace import Namespace
from umldoc.uml.type import Classification, Type


def test_field_rendering(render):
    items = Field(
        None, Visibility.PRIVATE, "items",
        TypeName.parse("java.util.List<com.example.Item>"), is_static=True,
    )
    assert render(items) == "{static} -items: List<Item>\n"

    old = Field(None, Visibility.PUBLIC, "old", TypeName("int"), is_deprecated=True)
    assert render(old) == "+--old--: int\n"


def test_method_rendering(render):
    put = Method(
        None, Visibility.PUBLIC, "put",
        [
            Parameter("key", TypeName("K")),
            Parameter("values", TypeName("java.lang.String", array_dimensions=1), varargs=True),
        ],
        TypeName("void"),
    )
    assert render(put) == "+put(key: K, values: String...): void\n"

    ctor = Method(None, Visibility.PROTECTED, "Foo", [Parameter("name", TypeName("java.lang.String"))])
    assert render(ctor) == "#Foo(name: String)\n"

    run = Method(None, Visibility.PACKAGE, "run", return_type=TypeName("void"), is_abstract=True)
    assert render(run) == "{abstract} ~run(): void\n"


def test_members_follow_the_diagram_config(render):
    config = RenderConfig(
        method_parameter_display=ParamDisplay.TYPES_ONLY,
        method_return_type_display=TypeDisplay.QUALIFIED,
        field_type_display=TypeDisplay.NONE,
    )
    foo = Type(Namespace(None, "com.example"), Classification.CLASS, TypeName("com.example.Foo"))
    find = Method(foo, Visibility.PUBLIC, "find", [Parameter("id", TypeName("java.lang.Long"))],
                  TypeName("com.example.Item"))
    count = Field(foo, Visibility.PUBLIC, "count", TypeName("int"))
    foo.add_child(find)
    foo.add_child(count)

    diagram = ClassDiagram(config, foo.name, "com.example")
    diagram.add_child(foo)

    assert render(find) == "+find(Long): com.example.Item\n"
    assert render(count) == "+count\n"


def test_method_equality_uses_parameter_types():
    f_int = Method(None, Visibility.PUBLIC, "f", [Parameter("a", TypeName("int"))])
    f_int_renamed = Method(None, Visibility.PRIVATE, "f", [Parameter("b", TypeName("int"))])
    f_str = Method(None, Visibility.PUBLIC, "f", [Parameter("a", TypeName("java.lang.String"))])
    assert f_int == f_int_renamed
    assert f_int != f_str
    assert len({f_int, f_int_renamed, f_str}) == 2


def test_field_substitution():
    items = Field(None, Visibility.PUBLIC, "items", TypeName.parse("java.util.List<T>"))
    items.replace_parameterized_type(TypeName("T"), TypeName("java.lang.String"))
    assert items.type_name.to_uml(TypeDisplay.SIMPLE) == "List<String>"

    items.replace_parameterized_type(None, TypeName("java.lang.Integer"))
    assert items.type_name.to_uml(TypeDisplay.SIMPLE) == "List<String>"


def test_literal(render):
    assert render(Literal(None, "RED")) == "RED\n"
    assert Literal(None, "RED") == Literal(None, "RED")


def test_member_requires_a_name():
    with pytest.raises(ValueError):
        Field(None, Visibility.PUBLIC, "")
    with pytest.raises(ValueError):
        Literal(None, None)
