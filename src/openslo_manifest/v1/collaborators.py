"""Types embedded in an SLO whose full schema lives with their own kinds.

Only the envelope of each is modelled; ``spec`` bodies are kept as plain
mappings.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from openslo_manifest.v1.header import Metadata


class SLIInline(BaseModel):
    """Indicator definition embedded directly in an SLO (``spec.indicator``)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    metadata: Metadata | None = None
    spec: dict[str, Any] | None = None


class AlertPolicy(BaseModel):
    """Alert policy entry of ``spec.alertPolicies``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: str | None = None
    metadata: Metadata | None = None
    spec: dict[str, Any] | None = None
