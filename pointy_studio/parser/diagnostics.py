import typing
from enum import StrEnum
from dataclasses import dataclass


class Severity(StrEnum):
    """Diagnostics are advisory only; nothing in pointy text is fatal."""

    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    message: str
    line: typing.Optional[int] = None
    severity: Severity = Severity.WARNING

    def __str__(self):
        if self.line is None:
            return self.message
        return f"Line {self.line}: {self.message}"
