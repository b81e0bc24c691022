"""OpenSLO v1 ``SLO`` manifest: models, Target scalar and validation."""

from openslo_manifest.v1.collaborators import AlertPolicy, SLIInline
from openslo_manifest.v1.header import API_VERSION, Metadata, ObjectHeader
from openslo_manifest.v1.objective import (
    SLO,
    BudgetingMethod,
    Calendar,
    Objective,
    SLOSpec,
    TimeWindow,
)
from openslo_manifest.v1.rules import Violation
from openslo_manifest.v1.target import Target, encode_target, format_target
from openslo_manifest.v1.validator import ensure_valid, validate_slo

__all__ = [
    "API_VERSION",
    "AlertPolicy",
    "BudgetingMethod",
    "Calendar",
    "Metadata",
    "ObjectHeader",
    "Objective",
    "SLIInline",
    "SLO",
    "SLOSpec",
    "Target",
    "TimeWindow",
    "Violation",
    "encode_target",
    "ensure_valid",
    "format_target",
    "validate_slo",
]
