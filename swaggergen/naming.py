"""Names and text fragments used by the TypeScript templates.

Examples:
  to_file_name("PetOwner")            -> "pet-owner"
  to_enum_name("inProgress")          -> "IN_PROGRESS"
  to_path_expression("/pets/{petId}") -> "/pets/${params.petId}"
  params_class_name("findPets")       -> "FindPetsParams"
"""

from __future__ import annotations

import re

_PATH_VARIABLE = re.compile(r"\{([^}]*)\}")
_NON_IDENTIFIER = re.compile(r"[^A-Z0-9_]")


def _split_on_case(name: str, separator: str) -> str:
    """Insert separator wherever a non-lowercase char follows a lowercase one."""
    result = []
    was_lower = False
    for char in name:
        is_lower = "a" <= char <= "z"
        if not is_lower and was_lower:
            result.append(separator)
        result.append(char)
        was_lower = is_lower
    return "".join(result)


def to_file_name(type_name: str) -> str:
    """Convert a type name into a TypeScript file name (without extension)."""
    return _split_on_case(type_name, "-").lower()


def to_enum_name(value: str) -> str:
    """Convert an enum literal into a constant name."""
    name = _NON_IDENTIFIER.sub("_", _split_on_case(value, "_").upper())
    return "_" + name if name[:1].isdigit() else name


def to_comments(text: str | None, level: int = 0) -> str:
    """Return a /** ... */ block for text, indented by level * 2 spaces.

    Empty lines are dropped.
    """
    indent = "  " * level
    lines = [f"{indent}/**"]
    for line in (text or "").split("\n"):
        if line:
            lines.append(f"{indent} * {line}")
    lines.append(f"{indent} */")
    return "\n".join(lines)


def to_path_expression(path: str | None) -> str:
    """Turn a path template into a template-literal expression over params."""
    return _PATH_VARIABLE.sub(r"${params.\1}", path or "")


def params_class_name(operation_id: str) -> str:
    return operation_id[:1].upper() + operation_id[1:] + "Params"


def service_class_name(tag: str) -> str:
    return tag + "Service"


def service_file_name(tag: str) -> str:
    return to_file_name(tag) + ".service"
