import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set, Tuple

import javalang  # type: ignore

from umldoc.cir.graph import DeclarationGraph
from umldoc.cir.model import (
    FieldDeclaration,
    MethodDeclaration,
    RelationshipDeclaration,
    TypeDeclaration,
)
from umldoc.config import Visibility
from umldoc.uml.names import Parameter, TypeName
from umldoc.uml.relationship import RelationshipKind
from umldoc.uml.type import Classification

logger = logging.getLogger(__name__)

PRIMITIVES = {"boolean", "byte", "char", "short", "int", "long", "float", "double", "void"}

JAVA_LANG = {
    "Boolean", "Byte", "Character", "Class", "Comparable", "Deprecated", "Double",
    "Enum", "Exception", "Float", "Integer", "Iterable", "Long", "Number", "Object",
    "Override", "Runnable", "RuntimeException", "Short", "String", "StringBuilder",
    "Throwable", "Void", "Error", "AutoCloseable", "CharSequence", "Thread",
    "IllegalArgumentException", "IllegalStateException", "FunctionalInterface",
}

DEPRECATED_ANNOTATIONS = {"Deprecated", "java.lang.Deprecated"}


@dataclass
class _Unit:
    """One parsed compilation unit, kept between the collect and resolve passes."""

    tree: object
    package: str
    source_file: Optional[str]
    imports: Dict[str, str] = field(default_factory=dict)      # simple -> qualified
    wildcards: List[str] = field(default_factory=list)         # on-demand import packages
    local_types: Dict[str, str] = field(default_factory=dict)  # top-level simple -> qualified


class _Resolver:
    """
    Resolves names as written in one compilation unit to qualified names.
    Order: type variables / primitives, member types of the enclosing types (innermost
    first), unit-local types, single-type imports, same package, on-demand imports,
    unique project-wide simple name, java.lang.
    """

    def __init__(
        self,
        unit: _Unit,
        package_types: Dict[str, Dict[str, str]],
        short_to_qualified: Dict[str, List[str]],
        type_vars: Iterable[str] = (),
        enclosing: Tuple[str, ...] = (),
    ) -> None:
        self.unit = unit
        self.package_types = package_types
        self.short_to_qualified = short_to_qualified
        self.type_vars: Set[str] = set(type_vars)
        self.enclosing = enclosing  # qualified names, innermost first
        self.package_of: Dict[str, str] = {
            q: pkg for pkg, names in package_types.items() for q in names.values()
        }

    def with_type_vars(self, names: Iterable[str]) -> "_Resolver":
        return _Resolver(
            self.unit, self.package_types, self.short_to_qualified,
            self.type_vars | set(names), self.enclosing,
        )

    def with_enclosing(self, qualified: str) -> "_Resolver":
        return _Resolver(
            self.unit, self.package_types, self.short_to_qualified,
            self.type_vars, (qualified,) + self.enclosing,
        )

    def resolve(self, written: str) -> str:
        if written in self.type_vars or written in PRIMITIVES:
            return written
        head, _, rest = written.partition(".")
        resolved = self._resolve_simple(head)
        if resolved is None:
            return written
        return f"{resolved}.{rest}" if rest else resolved

    def _resolve_simple(self, simple: str) -> Optional[str]:
        unit = self.unit
        for outer in self.enclosing:
            if f"{outer}.{simple}" in self.package_of:
                return f"{outer}.{simple}"
        if simple in unit.local_types:
            return unit.local_types[simple]
        if simple in unit.imports:
            return unit.imports[simple]
        same_pkg = self.package_types.get(unit.package, {})
        if simple in same_pkg:
            return same_pkg[simple]
        for pkg in unit.wildcards:
            if simple in self.package_types.get(pkg, {}):
                return self.package_types[pkg][simple]
        candidates = self.short_to_qualified.get(simple, [])
        if len(candidates) == 1:
            return candidates[0]
        if simple in JAVA_LANG:
            return f"java.lang.{simple}"
        return None

    def simple_name(self, qualified: str) -> str:
        pkg = self.package_of.get(qualified)
        if pkg is None:
            return qualified.rsplit(".", 1)[-1]
        return qualified[len(pkg) + 1:] if pkg else qualified

    def is_project_type(self, qualified: str) -> bool:
        return qualified in self.package_of


class JavaAdapter:
    """
    Java sources -> DeclarationGraph.
    Parses one or more compilation units with javalang and records:
      - TypeDecl nodes (classes, abstract classes, interfaces, enums, annotations,
        nested types as Outer.Inner) with declared type variables
      - Field / Method nodes (constructors included) with resolved TypeNames
      - RELATES edges: INHERITANCE, REALIZATION, ASSOCIATION, DEPENDENCY

    Multi-file builds skip invalid Java files and collect their errors.
    """

    language = "java"

    # ---------------- Helpers ----------------

    COLLECTION_TYPES = {
        "java.util.List", "java.util.Set", "java.util.Collection", "java.util.Map",
        "java.util.Queue", "java.util.Deque", "java.lang.Iterable", "java.util.SortedSet",
        "List", "Set", "Collection", "Map", "Queue", "Deque", "Iterable",
    }

    def _visibility_from_mods(self, mods: Optional[Set[str]], default: Visibility = Visibility.PACKAGE) -> Visibility:
        mods = mods or set()
        if "public" in mods:
            return Visibility.PUBLIC
        if "private" in mods:
            return Visibility.PRIVATE
        if "protected" in mods:
            return Visibility.PROTECTED
        return default

    def _flags_from_mods(self, mods: Optional[Set[str]]) -> Tuple[bool, bool, bool]:
        """
        Returns (is_static, is_abstract, is_final)
        """
        mods = mods or set()
        return ("static" in mods, "abstract" in mods, "final" in mods)

    def _is_deprecated(self, node) -> bool:
        return any(getattr(a, "name", None) in DEPRECATED_ANNOTATIONS for a in getattr(node, "annotations", None) or [])

    def _classification(self, t) -> Classification:
        if isinstance(t, javalang.tree.InterfaceDeclaration):
            return Classification.INTERFACE
        if isinstance(t, javalang.tree.EnumDeclaration):
            return Classification.ENUM
        if isinstance(t, javalang.tree.AnnotationDeclaration):
            return Classification.ANNOTATION
        if "abstract" in (t.modifiers or set()):
            return Classification.ABSTRACT_CLASS
        return Classification.CLASS

    def _body_declarations(self, t) -> List[object]:
        body = getattr(t, "body", None)
        if body is None:
            return []
        if hasattr(body, "declarations"):  # EnumBody
            return list(body.declarations or [])
        return list(body)

    def _nested_types(self, t) -> List[object]:
        return [d for d in self._body_declarations(t) if isinstance(d, javalang.tree.TypeDeclaration)]

    def _type_name(self, t, resolver: _Resolver, extra_dims: int = 0) -> Optional[TypeName]:
        """
        From a javalang Type node, derive a resolved TypeName:
          List<Item>       -> java.util.List<com.example.Item>
          String[]         -> java.lang.String[]
          Map<K, ? extends V>
        """
        if t is None:
            return None

        dims = extra_dims
        if isinstance(t, javalang.tree.BasicType):
            dims += len(t.dimensions or [])
            return TypeName(t.name, array_dimensions=dims)

        parts: List[str] = []
        args = None
        node = t
        while node is not None:
            parts.append(node.name)
            dims += len(getattr(node, "dimensions", None) or [])
            if getattr(node, "arguments", None):
                args = node.arguments
            node = getattr(node, "sub_type", None)

        qualified = resolver.resolve(".".join(parts))
        generics = tuple(self._type_argument(a, resolver) for a in args or [])
        return TypeName(qualified, generics=generics, array_dimensions=dims, simple=resolver.simple_name(qualified))

    def _type_argument(self, arg, resolver: _Resolver) -> TypeName:
        inner = self._type_name(getattr(arg, "type", arg), resolver)
        if inner is None:
            return TypeName("?")
        pattern = getattr(arg, "pattern_type", None)
        if pattern in ("extends", "super"):
            return replace(inner, wildcard=pattern)
        return inner

    def _element_type_and_cardinality(self, t: TypeName) -> Tuple[TypeName, Optional[str]]:
        """
        Association target of a field type:
          Item        -> (Item, None)
          Item[]      -> (Item, "*")
          List<Item>  -> (Item, "*")
          List<? extends Item> -> (Item, "*")
          Map<K, V>   -> (V, "*")
        """
        if t.array_dimensions:
            return t.with_array_dimensions(0), "*"
        if t.generics and t.qualified in self.COLLECTION_TYPES:
            return replace(t.generics[-1], wildcard=""), "*"
        return t, None

    # ---------------- Parsing entry points ----------------

    def parse_to_ast(self, code: str):
        try:
            return javalang.parse.parse(code)
        except javalang.parser.JavaSyntaxError as e:
            raise ValueError(f"Java syntax error: {e}") from e
        except Exception as e:
            raise ValueError(f"Failed to parse Java code: {e}") from e

    def build_graph_for_code(self, code: str, filename: Optional[str] = None) -> DeclarationGraph:
        """
        Single-compilation-unit helper. Syntax errors raise ValueError.
        """
        units = [self._collect_unit(self.parse_to_ast(code), filename)]
        return self._build_graph(units)

    def build_graph_for_sources(self, sources: Dict[str, str]) -> DeclarationGraph:
        """
        Multi-file/project-level builder over {filename: code}.
        Skips invalid Java files but continues with the rest.
        """
        units: List[_Unit] = []
        errors: List[Dict[str, str]] = []

        for filename, code in sources.items():
            try:
                units.append(self._collect_unit(self.parse_to_ast(code), filename))
            except ValueError as e:
                logger.warning("Skipping %s: %s", filename, e)
                errors.append({"file": filename, "error": str(e)})

        graph = self._build_graph(units)
        graph.parse_errors.extend(errors)
        logger.info("Parsed %d of %d Java files", len(units), len(sources))
        return graph

    def build_graph_for_files(self, files: Iterable[str]) -> DeclarationGraph:
        sources: Dict[str, str] = {}
        for path in files:
            sources[str(path)] = Path(path).read_text(encoding="utf-8")
        return self.build_graph_for_sources(sources)

    # ---------------- Core processing ----------------

    def _collect_unit(self, tree, source_file: Optional[str]) -> _Unit:
        package = getattr(getattr(tree, "package", None), "name", None) or ""
        unit = _Unit(tree=tree, package=package, source_file=source_file)

        for imp in getattr(tree, "imports", None) or []:
            if imp.static:
                continue
            if imp.wildcard:
                unit.wildcards.append(imp.path)
            else:
                unit.imports[imp.path.rsplit(".", 1)[-1]] = imp.path

        for t in tree.types:
            unit.local_types[t.name] = f"{package}.{t.name}" if package else t.name
        return unit

    def _declared_names(self, t, prefix: str = "") -> List[str]:
        name = f"{prefix}.{t.name}" if prefix else t.name
        names = [name]
        for nested in self._nested_types(t):
            names.extend(self._declared_names(nested, name))
        return names

    def _build_graph(self, units: List[_Unit]) -> DeclarationGraph:
        # package -> name in package -> qualified
        package_types: Dict[str, Dict[str, str]] = {}
        short_to_qualified: Dict[str, List[str]] = {}
        for unit in units:
            names = package_types.setdefault(unit.package, {})
            for t in unit.tree.types:
                for name_in_pkg in self._declared_names(t):
                    qualified = f"{unit.package}.{name_in_pkg}" if unit.package else name_in_pkg
                    names[name_in_pkg] = qualified
                    short_to_qualified.setdefault(name_in_pkg.rsplit(".", 1)[-1], []).append(qualified)

        graph = DeclarationGraph()
        for unit in units:
            resolver = _Resolver(unit, package_types, short_to_qualified)
            for t in unit.tree.types:
                self._process_type(t, unit, resolver, graph, outer=None)
        return graph

    def _process_type(self, t, unit: _Unit, resolver: _Resolver, graph: DeclarationGraph, outer: Optional[TypeDeclaration]) -> None:
        if outer is None:
            qualified = f"{unit.package}.{t.name}" if unit.package else t.name
            default_vis = Visibility.PACKAGE
        else:
            qualified = f"{outer.name.qualified}.{t.name}"
            default_vis = (
                Visibility.PUBLIC
                if outer.classification in (Classification.INTERFACE, Classification.ANNOTATION)
                else Visibility.PACKAGE
            )

        type_vars = [tp.name for tp in getattr(t, "type_parameters", None) or []]
        resolver = resolver.with_type_vars(type_vars).with_enclosing(qualified)
        classification = self._classification(t)

        literals: Tuple[str, ...] = ()
        if classification == Classification.ENUM:
            literals = tuple(c.name for c in getattr(t.body, "constants", None) or [])

        decl = TypeDeclaration(
            id=DeclarationGraph.type_id(qualified),
            name=TypeName(
                qualified,
                generics=tuple(TypeName(v) for v in type_vars),
                simple=resolver.simple_name(qualified),
            ),
            package=unit.package,
            classification=classification,
            visibility=self._visibility_from_mods(t.modifiers, default_vis),
            is_deprecated=self._is_deprecated(t),
            literals=literals,
            source_file=unit.source_file,
        )
        graph.add_type(decl)

        self._add_supertypes(t, decl, resolver, graph)
        associated = self._add_fields(t, decl, resolver, graph)
        self._add_methods(t, decl, resolver, graph, associated)

        for nested in self._nested_types(t):
            self._process_type(nested, unit, resolver, graph, outer=decl)

        logger.debug("Declared %s (%s) from %s", qualified, classification.name, unit.source_file)

    def _add_supertypes(self, t, decl: TypeDeclaration, resolver: _Resolver, graph: DeclarationGraph) -> None:
        extends = getattr(t, "extends", None) or []
        if not isinstance(extends, list):
            extends = [extends]
        implements = getattr(t, "implements", None) or []

        for kind, refs in ((RelationshipKind.INHERITANCE, extends), (RelationshipKind.REALIZATION, implements)):
            for ref in refs:
                target = self._type_name(ref, resolver)
                if target is None or target == decl.name:
                    continue
                graph.add_relationship(decl.id, RelationshipDeclaration(decl.name, target, kind))

    def _add_fields(self, t, decl: TypeDeclaration, resolver: _Resolver, graph: DeclarationGraph) -> Set[str]:
        default_vis = (
            Visibility.PUBLIC
            if decl.classification in (Classification.INTERFACE, Classification.ANNOTATION)
            else Visibility.PACKAGE
        )
        associated: Set[str] = set()

        # ---------- fields ----------
        for fd in self._body_declarations(t):
            if not isinstance(fd, javalang.tree.FieldDeclaration):
                continue
            is_static, _, _ = self._flags_from_mods(fd.modifiers)
            for declarator in fd.declarators:
                ftype = self._type_name(fd.type, resolver, len(getattr(declarator, "dimensions", None) or []))
                graph.add_member(decl.id, FieldDeclaration(
                    id=f"field:{decl.name.qualified}:{declarator.name}",
                    name=declarator.name,
                    type=ftype,
                    visibility=self._visibility_from_mods(fd.modifiers, default_vis),
                    is_static=is_static,
                    is_deprecated=self._is_deprecated(fd),
                ))

                # ---------- ASSOCIATES ----------
                element, cardinality = self._element_type_and_cardinality(ftype)
                if resolver.is_project_type(element.qualified) and element != decl.name:
                    graph.add_relationship(decl.id, RelationshipDeclaration(
                        decl.name, element, RelationshipKind.ASSOCIATION,
                        cardinality=cardinality, label=declarator.name,
                    ))
                    associated.add(element.qualified)
        return associated

    def _add_methods(self, t, decl: TypeDeclaration, resolver: _Resolver, graph: DeclarationGraph, associated: Set[str]) -> None:
        is_interface = decl.classification in (Classification.INTERFACE, Classification.ANNOTATION)
        default_vis = Visibility.PUBLIC if is_interface else Visibility.PACKAGE
        if decl.classification == Classification.ENUM:
            ctor_default_vis = Visibility.PRIVATE
        else:
            ctor_default_vis = default_vis
        depends: List[TypeName] = []

        for md in self._body_declarations(t):
            if isinstance(md, javalang.tree.ConstructorDeclaration):
                params = self._parameters(md, resolver)
                graph.add_member(decl.id, MethodDeclaration(
                    id=f"ctor:{decl.name.qualified}({','.join(p.type.qualified for p in params)})",
                    name=md.name,
                    return_type=None,
                    parameters=params,
                    visibility=self._visibility_from_mods(md.modifiers, ctor_default_vis),
                    is_constructor=True,
                    is_deprecated=self._is_deprecated(md),
                ))
                depends.extend(p.type for p in params)

            elif isinstance(md, (javalang.tree.MethodDeclaration, javalang.tree.AnnotationMethod)):
                method_resolver = resolver.with_type_vars(
                    tp.name for tp in getattr(md, "type_parameters", None) or []
                )
                mods = md.modifiers or set()
                is_static, is_abs, _ = self._flags_from_mods(mods)
                if is_interface and not ({"default", "static", "private"} & set(mods)):
                    is_abs = True
                params = self._parameters(md, method_resolver)
                return_type = self._type_name(md.return_type, method_resolver) or TypeName("void")
                graph.add_member(decl.id, MethodDeclaration(
                    id=f"method:{decl.name.qualified}:{md.name}({','.join(p.type.qualified for p in params)})",
                    name=md.name,
                    return_type=return_type,
                    parameters=params,
                    visibility=self._visibility_from_mods(mods, default_vis),
                    is_static=is_static,
                    is_abstract=is_abs,
                    is_deprecated=self._is_deprecated(md),
                ))
                depends.append(return_type)
                depends.extend(p.type for p in params)

        # ---------- DEPENDS_ON ----------
        seen: Set[str] = set()
        for used in depends:
            for candidate in (used, *used.generics):
                target = replace(candidate, array_dimensions=0, wildcard="")
                q = target.qualified
                if q in seen or q in associated or target == decl.name or not resolver.is_project_type(q):
                    continue
                seen.add(q)
                graph.add_relationship(decl.id, RelationshipDeclaration(decl.name, target, RelationshipKind.DEPENDENCY))

    def _parameters(self, md, resolver: _Resolver) -> Tuple[Parameter, ...]:
        params: List[Parameter] = []
        for p in getattr(md, "parameters", None) or []:
            varargs = bool(getattr(p, "varargs", False))
            ptype = self._type_name(p.type, resolver, 1 if varargs else 0)
            params.append(Parameter(p.name, ptype, varargs))
        return tuple(params)
