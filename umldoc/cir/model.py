from dataclasses import dataclass
from typing import Optional, Tuple

from umldoc.config import Visibility
from umldoc.uml.names import Parameter, TypeName
from umldoc.uml.relationship import RelationshipKind
from umldoc.uml.type import Classification


@dataclass
class TypeDeclaration:
    id: str
    name: TypeName                      # qualified name + declared type variables
    package: str                        # "" for the default package
    classification: Classification
    visibility: Visibility = Visibility.PUBLIC
    is_deprecated: bool = False
    literals: Tuple[str, ...] = ()      # enum constants, in declaration order
    source_file: Optional[str] = None

@dataclass
class FieldDeclaration:
    id: str
    name: str
    type: TypeName
    visibility: Visibility = Visibility.PACKAGE
    is_static: bool = False
    is_deprecated: bool = False

@dataclass
class MethodDeclaration:
    id: str
    name: str
    return_type: Optional[TypeName]     # None for constructors
    parameters: Tuple[Parameter, ...] = ()
    visibility: Visibility = Visibility.PACKAGE
    is_static: bool = False
    is_abstract: bool = False
    is_constructor: bool = False
    is_deprecated: bool = False

@dataclass
class RelationshipDeclaration:
    source: TypeName
    target: TypeName
    kind: RelationshipKind
    cardinality: Optional[str] = None   # e.g. "*" for collections and arrays
    label: Optional[str] = None         # e.g. the field name of an association
