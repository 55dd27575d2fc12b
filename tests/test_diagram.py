import pytest

from umldoc.config import RenderConfig, Visibility
from umldoc.uml.diagram import ClassDiagram, PackageDiagram
from umldoc.uml.members import Field
from umldoc.uml.names import TypeName
from umldoc.uml.namespace import Namespace
from umldoc.uml.relationship import Relationship, RelationshipKind
from umldoc.uml.type import Classification, Type


def make_type(qualified, classification=Classification.CLASS):
    package = qualified.rsplit(".", 1)[0] if "." in qualified else ""
    return Type(Namespace(None, package), classification, TypeName(qualified))


def test_package_diagram_end_to_end():
    diagram = PackageDiagram(None, "com.example")
    diagram.add_type(make_type("com.example.Foo"))
    diagram.add_type(make_type("com.example.Bar", Classification.INTERFACE))

    assert diagram.render() == (
        "@startuml\n"
        "  namespace com.example {\n"
        "    class Foo [[Foo.html]]\n"
        "    interface Bar [[Bar.html]]\n"
        "  }\n"
        "@enduml\n"
    )
    assert diagram.file_path == "com/example/package.puml"
    assert [t.name.simple for t in diagram.types] == ["Foo", "Bar"]


def test_default_package_has_no_namespace_block():
    diagram = PackageDiagram(None, "")
    diagram.add_type(make_type("Foo"))
    assert diagram.render() == "@startuml\n  class Foo [[Foo.html]]\n@enduml\n"
    assert diagram.file_path == "package.puml"


def test_class_diagram_layout():
    config = RenderConfig(custom_directives=("skinparam shadowing false",))
    foo = make_type("com.example.Foo")
    foo.add_child(Field(foo, Visibility.PUBLIC, "name", TypeName("java.lang.String")))

    diagram = ClassDiagram(config, foo.name, "com.example")
    # relationships are written after the types regardless of insertion order
    diagram.add_child(Relationship(foo.name, TypeName("com.example.Base"), RelationshipKind.INHERITANCE))
    diagram.add_child(foo.with_package_in_name())
    diagram.add_child(Relationship(TypeName("com.example.Foo"), TypeName("com.example.Base"),
                                   RelationshipKind.INHERITANCE))

    assert len(diagram.relationships) == 1
    assert diagram.file_path == "com/example/Foo.puml"
    assert diagram.render() == (
        "@startuml\n"
        "  skinparam shadowing false\n"
        "  set namespaceSeparator none\n"
        "  hide empty fields\n"
        "  hide empty methods\n"
        "\n"
        '  class "<size:14>Foo\\n<size:10>com.example" as com.example.Foo [[Foo.html]] {\n'
        "    +name: String\n"
        "  }\n"
        "\n"
        "  com.example.Foo --|> com.example.Base\n"
        "@enduml\n"
    )


def test_duplicate_relationships_are_merged():
    diagram = ClassDiagram(None, TypeName("com.example.Order"), "com.example")
    order, item = TypeName("com.example.Order"), TypeName("com.example.Item")
    diagram.add_child(Relationship(order, item, RelationshipKind.ASSOCIATION, "*", "items"))
    diagram.add_child(Relationship(order, item, RelationshipKind.ASSOCIATION, None, "backup"))
    diagram.add_child(None)

    assert len(diagram.relationships) == 1
    assert diagram.relationships[0].labels == ["items", "backup"]


def test_render_seals_the_model():
    diagram = PackageDiagram(None, "com.example")
    foo = make_type("com.example.Foo")
    diagram.add_type(foo)

    first = diagram.render()
    with pytest.raises(RuntimeError):
        diagram.add_type(make_type("com.example.Bar"))
    with pytest.raises(RuntimeError):
        foo.add_child(Field(foo, Visibility.PUBLIC, "late"))
    with pytest.raises(RuntimeError):
        foo.update_generic_type_variables(TypeName("com.example.Foo"))
    assert diagram.render() == first


def test_links_are_relative_to_the_diagram_package():
    diagram = PackageDiagram(None, "com.example")
    nested = make_type("com.example.sub.Baz")
    diagram.add_type(nested)
    assert nested.link().href == "sub/Baz.html"

    other = ClassDiagram(None, TypeName("com.example.Foo"), "com.example")
    remote = make_type("org.other.Remote")
    other.add_child(remote)
    assert remote.link().href == "../../org/other/Remote.html"


def test_links_can_be_disabled_and_indentation_changed():
    diagram = PackageDiagram(RenderConfig(create_links=False, indentation=4), "com.example")
    diagram.add_type(make_type("com.example.Foo"))
    assert diagram.render() == (
        "@startuml\n"
        "    namespace com.example {\n"
        "        class Foo\n"
        "    }\n"
        "@enduml\n"
    )


def test_replace_child_after_copy_on_write():
    diagram = PackageDiagram(None, "com.example")
    foo = make_type("com.example.Foo")
    diagram.add_type(foo)

    old = foo.deprecated()
    diagram.package_node.replace_child(foo, old)
    assert diagram.types[0] is old
    assert old.parent is diagram.package_node
    assert "    class Foo <<deprecated>> [[Foo.html]]\n" in diagram.render()

    with pytest.raises(RuntimeError):
        diagram.package_node.replace_child(old, foo)
    with pytest.raises(ValueError):
        PackageDiagram(None, "x").package_node.replace_child(foo, old)


def test_directives_are_shared_read_only():
    assert PackageDiagram.directives == ()
    assert isinstance(ClassDiagram.directives, tuple)
    assert PackageDiagram(None, "a").render() == "@startuml\n  namespace a {\n  }\n@enduml\n"
