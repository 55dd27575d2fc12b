# umldoc/validate.py

import re
from typing import List, Tuple

from umldoc.config import MAX_PLANTUML_SIZE
from umldoc.uml.relationship import RelationshipKind

START, END = "@startuml", "@enduml"

# preprocessor directives that pull content from outside the diagram
_EXTERNAL_DIRECTIVE = re.compile(r"^!(include\w*|import|pragma)\b", re.IGNORECASE)
_QUOTED = re.compile(r'"[^"]*"')
_ARROWS = {kind.arrow for kind in RelationshipKind}


def _is_relationship(line: str) -> bool:
    tokens = line.split()
    return len(tokens) >= 3 and tokens[1] in _ARROWS


def validate_plantuml(text: str) -> Tuple[bool, List[str]]:
    """
    Check diagram text before it leaves the process.

    Rendered diagrams are one @startuml/@enduml document with balanced blocks and
    relationships outside any block. Custom directives from the configuration may
    not reach outside the diagram (!include, !import, !pragma).
    """
    if not text or not text.strip():
        return False, ["Empty PlantUML text"]

    errors: List[str] = []
    if len(text) > MAX_PLANTUML_SIZE:
        errors.append("PlantUML text too large")

    lines = [(n, line.strip()) for n, line in enumerate(text.splitlines(), 1) if line.strip()]
    if lines[0][1] != START:
        errors.append(f"First line must be {START}")
    if lines[-1][1] != END:
        errors.append(f"Last line must be {END}")

    depth = 0
    for n, line in lines[1:-1]:
        if line in (START, END):
            errors.append(f"Line {n}: unexpected {line}")
        if _EXTERNAL_DIRECTIVE.match(line):
            errors.append(f"Line {n}: directive not allowed: {line}")
        if _is_relationship(line) and depth:
            errors.append(f"Line {n}: relationship inside a block")

        unquoted = _QUOTED.sub("", line)
        depth += unquoted.count("{") - unquoted.count("}")
        if depth < 0:
            errors.append(f"Line {n}: unmatched '}}'")
            depth = 0
    if depth:
        errors.append("Unclosed block")

    return (len(errors) == 0), errors
