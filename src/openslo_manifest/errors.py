"""Exceptions raised while decoding and validating manifests."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from openslo_manifest.v1.rules import Violation


class ManifestError(Exception):
    """Base class for manifest errors."""


class DecodeError(ManifestError):
    """The document is not well-formed or does not fit the manifest shape."""

    def __init__(self, message: str, details: Sequence[str] = ()) -> None:
        self.details = list(details)
        if self.details:
            message = message + "\n" + "\n".join(f"  - {d}" for d in self.details)
        super().__init__(message)


class ManifestValidationError(ManifestError):
    """The decoded manifest breaks one or more constraints.

    ``violations`` holds every broken rule, not only the first one found.
    """

    def __init__(self, violations: Sequence[Violation], name: str | None = None) -> None:
        self.violations = list(violations)
        self.name = name
        subject = f"SLO '{name}'" if name else "SLO"
        lines = [f"{subject} has {len(self.violations)} violation(s):"]
        lines.extend(f"  - {v}" for v in self.violations)
        super().__init__("\n".join(lines))
