import pytest

from umldoc.uml.names import TypeName
from umldoc.uml.relationship import Relationship, RelationshipKind

FOO = TypeName("com.example.Foo")
BASE = TypeName("com.example.Base")


def test_from_arrow_accepts_both_directions():
    assert RelationshipKind.from_arrow("..>") == (RelationshipKind.DEPENDENCY, False)
    assert RelationshipKind.from_arrow("<..") == (RelationshipKind.DEPENDENCY, True)
    assert RelationshipKind.from_arrow(" <|-- ") == (RelationshipKind.INHERITANCE, True)
    with pytest.raises(ValueError):
        RelationshipKind.from_arrow("~~>")


def test_of_normalizes_direction():
    rel = Relationship.of(BASE, "<|--", FOO)
    assert rel.source == FOO
    assert rel.target == BASE
    assert rel.kind is RelationshipKind.INHERITANCE


def test_rendering(render):
    assert render(Relationship(FOO, BASE, RelationshipKind.INHERITANCE)) == \
        "com.example.Foo --|> com.example.Base\n"

    order = TypeName("com.example.Order")
    item = TypeName("com.example.Item")
    rel = Relationship(order, item, RelationshipKind.ASSOCIATION, "*", "items")
    assert render(rel) == 'com.example.Order --> "*" com.example.Item : items\n'


def test_equality_ignores_decoration_and_generics():
    a = Relationship(FOO, TypeName.parse("com.example.Box<java.lang.String>"),
                     RelationshipKind.DEPENDENCY, label="uses")
    b = Relationship(FOO, TypeName("com.example.Box"), RelationshipKind.DEPENDENCY)
    assert a == b
    assert a != Relationship(FOO, TypeName("com.example.Box"), RelationshipKind.ASSOCIATION)


def test_merge_folds_labels_and_cardinality():
    first = Relationship(FOO, BASE, RelationshipKind.ASSOCIATION, label="items")
    second = Relationship(FOO, BASE, RelationshipKind.ASSOCIATION, "*", "extra")
    first.merge(second)
    first.merge(Relationship(FOO, BASE, RelationshipKind.ASSOCIATION, "1", "items"))
    assert first.cardinality == "*"
    assert first.labels == ["items", "extra"]

    with pytest.raises(ValueError):
        first.merge(Relationship(BASE, FOO, RelationshipKind.ASSOCIATION))
