"""Cheap textual inspection of item declarations.

These helpers look at the header of an item (``fn``, ``impl``, ``mod`` ...)
without fully parsing it.
"""

from __future__ import annotations

import enum
from typing import Optional

from rsource.textutil import SearchType, trim_visibility, txt_matches


class BinOpKind(enum.Enum):
    """Binary operators of the language."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    REM = "%"
    AND = "&&"
    OR = "||"
    BIT_XOR = "^"
    BIT_AND = "&"
    BIT_OR = "|"
    SHL = "<<"
    SHR = ">>"
    EQ = "=="
    LT = "<"
    LE = "<="
    NE = "!="
    GE = ">="
    GT = ">"


_OPERATOR_TRAITS = {
    BinOpKind.ADD: "Add",
    BinOpKind.SUB: "Sub",
    BinOpKind.MUL: "Mul",
    BinOpKind.DIV: "Div",
    BinOpKind.REM: "Rem",
    BinOpKind.AND: "And",
    BinOpKind.OR: "Or",
    BinOpKind.BIT_XOR: "BitXor",
    BinOpKind.BIT_AND: "BitAnd",
    BinOpKind.BIT_OR: "BitOr",
    BinOpKind.SHL: "Shl",
    BinOpKind.SHR: "Shr",
}


def generate_skeleton_for_parsing(src: str) -> Optional[str]:
    """Keep the header of an item up to its opening brace, with an empty body."""
    n = src.find("{")
    if n == -1:
        return None
    return src[: n + 1] + "}"


def get_operator_trait(op: BinOpKind) -> str:
    """Name of the trait that overloads ``op``; ``bool`` for comparisons."""
    return _OPERATOR_TRAITS.get(op, "bool")


def _find_closing_paren(src: str, start: int) -> int:
    """Index of the ``)`` closing a paren opened just before ``start``."""
    level = 0
    for i, c in enumerate(src[start:], start):
        if c == "(":
            level += 1
        elif c == ")":
            if level == 0:
                return i
            level -= 1
    return len(src)


def _skip_generics(blob: str, generic_start: int) -> int:
    level = 0
    prev = " "
    for i, c in enumerate(blob[generic_start:]):
        if c == "<":
            level += 1
        elif c == ">" and prev != "-":
            level -= 1
        prev = c
        if level == 0:
            return i
    return 0


def first_param_is_self(blob: str) -> bool:
    """Whether the first parameter of a function declaration is ``self``."""
    blob = trim_visibility(blob)
    probable_param_start = blob.find("(")
    if probable_param_start == -1:
        return False
    generic_start = blob.find("<")
    skip_generic = 0
    if generic_start != -1 and generic_start < probable_param_start:
        skip_generic = _skip_generics(blob, generic_start)
    found = blob.find("(", skip_generic)
    if found == -1:
        return False
    start = found + 1
    end = _find_closing_paren(blob, start)
    return txt_matches(SearchType.EXACT_MATCH, "self", blob[start:end])