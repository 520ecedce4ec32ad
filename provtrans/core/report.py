"""
Diagnostics report

An ordered, append-only list of severity-tagged messages, each bound to a
context path in the source document. Reports produced by nested
translations are re-rooted with prefixed() and merged upward so the caller
sees exact locations in the original document.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterator, List, Optional, Union

from .path import ContextPath, Segment


class Severity(str, Enum):
    """Diagnostic severity"""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    """
    One report entry

    Attributes:
        severity: error or warning
        path: Location the message refers to
        message: Human readable message
        fatal: Whether the entry aborts the translation run
    """

    severity: Severity
    path: ContextPath
    message: str
    fatal: bool = False

    def __str__(self) -> str:
        return f"{self.severity.value} at {self.path}: {self.message}"


class Report:
    """Diagnostics ledger for one translation run"""

    def __init__(self, entries: Optional[List[Diagnostic]] = None):
        self.entries: List[Diagnostic] = list(entries or [])

    def add_on_error(self, path: ContextPath, err: Union[Exception, str, None]) -> None:
        """Record an error; a None err is ignored"""
        if err is None:
            return
        self.entries.append(Diagnostic(Severity.ERROR, path, _message(err)))

    def add_on_warning(self, path: ContextPath, err: Union[Exception, str, None]) -> None:
        """Record a warning; a None err is ignored"""
        if err is None:
            return
        self.entries.append(Diagnostic(Severity.WARNING, path, _message(err)))

    def add_on_fatal(self, path: ContextPath, err: Union[Exception, str, None]) -> None:
        """Record an error that aborts the whole run"""
        if err is None:
            return
        self.entries.append(Diagnostic(Severity.ERROR, path, _message(err), fatal=True))

    def merge(self, other: "Report") -> "Report":
        """Append every entry of other, preserving order"""
        self.entries.extend(other.entries)
        return self

    def prefixed(self, *segments: Segment) -> "Report":
        """Return a copy with segments prepended to every entry path"""
        return Report(
            [replace(e, path=e.path.prepend(*segments)) for e in self.entries]
        )

    def is_fatal(self) -> bool:
        return any(e.fatal for e in self.entries)

    def has_errors(self) -> bool:
        return any(e.severity == Severity.ERROR for e in self.entries)

    def has_warnings(self) -> bool:
        return any(e.severity == Severity.WARNING for e in self.entries)

    def errors(self) -> List[Diagnostic]:
        return [e for e in self.entries if e.severity == Severity.ERROR]

    def warnings(self) -> List[Diagnostic]:
        return [e for e in self.entries if e.severity == Severity.WARNING]

    def is_empty(self) -> bool:
        return not self.entries

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __str__(self) -> str:
        return "\n".join(str(e) for e in self.entries)


def _message(err: Union[Exception, str]) -> str:
    if isinstance(err, Exception):
        return getattr(err, "message", None) or str(err)
    return err
