"""Error taxonomy and batch outcome tracking."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional


class I18nSweepError(Exception):
    """Base class for all i18n-sweep errors."""


class NotFoundError(I18nSweepError):
    """No locale store is configured or discoverable."""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = path
        super().__init__(message)


class MalformedInputError(I18nSweepError):
    """
    A locale file does not hold a nested string mapping.

    Collected rather than raised by the locale loader: the offending locale
    is treated as empty so the other locales remain usable.
    """

    def __init__(self, locale: str, path: Path, reason: str):
        self.locale = locale
        self.path = path
        self.reason = reason
        super().__init__(f"Malformed locale '{locale}' ({path}): {reason}")


class OverlappingEditError(I18nSweepError, ValueError):
    """Two edits passed to the span rewriter address overlapping ranges."""


@dataclass
class BatchResult:
    """Outcome of an operation applied to many items (locales, files)."""
    succeeded: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)  # item -> reason

    def add_success(self, item) -> None:
        self.succeeded.append(str(item))

    def add_failure(self, item, reason) -> None:
        self.failed[str(item)] = str(reason)

    @property
    def ok(self) -> bool:
        return not self.failed

    @property
    def success_count(self) -> int:
        return len(self.succeeded)

    @property
    def failure_count(self) -> int:
        return len(self.failed)

    def merge(self, other: 'BatchResult') -> 'BatchResult':
        """Return a new result holding the items of both."""
        merged = BatchResult(list(self.succeeded), dict(self.failed))
        merged.succeeded.extend(other.succeeded)
        merged.failed.update(other.failed)
        return merged
