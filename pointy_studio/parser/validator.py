import typing

from pointy_studio.constants import CODE_COMMENT
from .diagnostics import Diagnostic

__all__ = ["lint_code", "validate_code"]

EXPECTED_INDENTATION = "Expected indentation"

SEMICOLON_USED = "Semicolons are not typically used in Python"


def lint_code(code: str) -> typing.List[Diagnostic]:
    """
    Scan event code for the usual copy-paste mistakes before it is stored.

    This is a single-pass heuristic, not a Python parser. Once a line ending
    with ``:`` has been seen, every following unindented statement is
    reported; the indentation level is never decremented.

    Args:
        code: The event code.

    Returns:
        Diagnostics in line order, possibly empty.
    """
    diagnostics = []
    indent_level = 0

    for lineno, line in enumerate(code.split("\n"), start=1):
        trimmed_line = line.strip()
        if not trimmed_line or trimmed_line.startswith(CODE_COMMENT):
            continue

        if trimmed_line.endswith(":"):
            indent_level += 1
        elif indent_level > 0 and not line.startswith((" ", "\t")):
            diagnostics.append(Diagnostic(EXPECTED_INDENTATION, line=lineno))

        if ";" in trimmed_line:
            diagnostics.append(Diagnostic(SEMICOLON_USED, line=lineno))

    return diagnostics


def validate_code(code: str) -> typing.List[str]:
    """Return the warnings for ``code`` as ``"Line {n}: {message}"`` strings."""
    return [str(diagnostic) for diagnostic in lint_code(code)]
