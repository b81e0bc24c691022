"""SLO manifest validation.

One validator per type. Each returns the full list of violations for its
value and recurses into nested values, so a caller gets a complete report
rather than the first failure. Field paths use wire names, e.g.
``spec.objectives[0].target``.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from openslo_manifest.errors import ManifestValidationError
from openslo_manifest.v1 import rules
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

logger = logging.getLogger(__name__)

MAX_DESCRIPTION_LENGTH = 1050
BUDGETING_METHODS = tuple(m.value for m in BudgetingMethod)


def _collect(*results: Violation | None) -> list[Violation]:
    return [r for r in results if r is not None]


def _dive(
    items: Sequence | None, path: str, validate_item
) -> Iterable[Violation]:
    for i, item in enumerate(items or ()):
        yield from validate_item(item, f"{path}[{i}]")


def validate_calendar(calendar: Calendar, path: str = "calendar") -> list[Violation]:
    return _collect(
        rules.required(calendar.start_time, f"{path}.startTime"),
        rules.date_with_time(calendar.start_time, f"{path}.startTime"),
        rules.required(calendar.time_zone, f"{path}.timeZone"),
        rules.time_zone(calendar.time_zone, f"{path}.timeZone"),
    )


def validate_time_window(window: TimeWindow, path: str = "timeWindow") -> list[Violation]:
    """Check a time window; a calendar is mandatory unless the window rolls."""
    errors = _collect(
        rules.required(window.duration, f"{path}.duration"),
        rules.duration(window.duration, f"{path}.duration"),
        rules.required_if(
            window.calendar,
            f"{path}.calendar",
            other="isRolling",
            other_value=window.is_rolling,
            expected=False,
        ),
    )
    if window.calendar is not None:
        errors.extend(validate_calendar(window.calendar, f"{path}.calendar"))
    return errors


def validate_objective(objective: Objective, path: str = "objective") -> list[Violation]:
    """Check target is in [0, 1) and timeSliceTarget, when set, in [0, 1]."""
    return _collect(
        rules.required(objective.target, f"{path}.target"),
        rules.gte(objective.target, f"{path}.target", 0),
        rules.lt(objective.target, f"{path}.target", 1),
        rules.gte(objective.time_slice_target, f"{path}.timeSliceTarget", 0),
        rules.lte(objective.time_slice_target, f"{path}.timeSliceTarget", 1),
    )


def validate_metadata(metadata: Metadata | None, path: str = "metadata") -> list[Violation]:
    if metadata is None:
        return _collect(rules.required(metadata, path))
    return _collect(rules.required(metadata.name, f"{path}.name"))


def validate_sli_inline(indicator: SLIInline, path: str = "indicator") -> list[Violation]:
    errors = validate_metadata(indicator.metadata, f"{path}.metadata")
    errors.extend(_collect(rules.required(indicator.spec, f"{path}.spec")))
    return errors


def validate_alert_policy(policy: AlertPolicy, path: str = "alertPolicy") -> list[Violation]:
    return validate_metadata(policy.metadata, f"{path}.metadata")


def validate_slo_spec(spec: SLOSpec, path: str = "spec") -> list[Violation]:
    """Check every SLOSpec rule and recurse into nested values.

    Rules are independent of each other; all of them run.
    """
    errors = _collect(
        rules.required(spec.service, f"{path}.service"),
        rules.max_length(spec.description, f"{path}.description", MAX_DESCRIPTION_LENGTH),
        rules.required_without(
            spec.indicator,
            f"{path}.indicator",
            other="indicatorRef",
            other_value=spec.indicator_ref,
        ),
        rules.excluded_with(
            spec.indicator_ref,
            f"{path}.indicatorRef",
            other="indicator",
            other_value=spec.indicator,
        ),
        rules.required(spec.budgeting_method, f"{path}.budgetingMethod"),
        rules.one_of(spec.budgeting_method, f"{path}.budgetingMethod", BUDGETING_METHODS),
        rules.required(spec.time_window, f"{path}.timeWindow"),
        rules.exact_length(spec.time_window, f"{path}.timeWindow", 1),
        # an empty list is legal, only a missing key is not
        rules.required(spec.objectives, f"{path}.objectives"),
    )
    if spec.indicator is not None:
        errors.extend(validate_sli_inline(spec.indicator, f"{path}.indicator"))
    errors.extend(_dive(spec.time_window, f"{path}.timeWindow", validate_time_window))
    errors.extend(_dive(spec.objectives, f"{path}.objectives", validate_objective))
    errors.extend(_dive(spec.alert_policies, f"{path}.alertPolicies", validate_alert_policy))
    return errors


def validate_header(header: ObjectHeader) -> list[Violation]:
    errors = _collect(
        rules.required(header.api_version, "apiVersion"),
        rules.equals(header.api_version, "apiVersion", API_VERSION),
        rules.required(header.kind, "kind"),
        rules.equals(header.kind, "kind", header.manifest_kind()),
    )
    errors.extend(validate_metadata(header.metadata))
    return errors


def validate_slo(slo: SLO) -> list[Violation]:
    """Validate a decoded SLO manifest and return every violation found."""
    errors = validate_header(slo)
    if slo.spec is None:
        errors.extend(_collect(rules.required(slo.spec, "spec")))
    else:
        errors.extend(validate_slo_spec(slo.spec))

    name = slo.metadata.name if slo.metadata else None
    if errors:
        logger.info("SLO %s failed validation with %d violation(s)", name, len(errors))
    else:
        logger.debug("SLO %s is valid", name)
    return errors


def ensure_valid(slo: SLO) -> SLO:
    """Return ``slo`` unchanged, or raise with all of its violations."""
    errors = validate_slo(slo)
    if errors:
        raise ManifestValidationError(
            errors, name=slo.metadata.name if slo.metadata else None
        )
    return slo
