"""SLO manifest models.

Field names on the wire are camelCase; attributes are snake_case with the
wire name as alias. Every field a manifest may omit decodes to ``None`` so
that missing values surface as validation violations instead of silently
taking a zero value.
"""

from __future__ import annotations

from enum import Enum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from openslo_manifest.v1.collaborators import AlertPolicy, SLIInline
from openslo_manifest.v1.header import ObjectHeader
from openslo_manifest.v1.target import Target


class BudgetingMethod(str, Enum):
    """How error budget consumption is counted."""

    OCCURRENCES = "Occurrences"
    TIMESLICES = "Timeslices"


class Calendar(BaseModel):
    """Calendar anchor of a non-rolling time window."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    start_time: str | None = Field(
        default=None, alias="startTime", examples=["2020-01-21 12:30:00"]
    )
    time_zone: str | None = Field(
        default=None, alias="timeZone", examples=["America/New_York"]
    )


class TimeWindow(BaseModel):
    """Period an SLO is evaluated over."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    duration: str | None = Field(default=None, examples=["1h"])
    is_rolling: bool = Field(default=False, alias="isRolling")
    calendar: Calendar | None = None

    @field_validator("is_rolling", mode="before")
    @classmethod
    def null_is_not_rolling(cls, value):
        # an explicit null reads as the zero value, like an omitted key
        return False if value is None else value


class Objective(BaseModel):
    """Single threshold of an SLO."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    TARGET_FIELDS: ClassVar[tuple[str, ...]] = ("value", "target", "timeSliceTarget")

    display_name: str | None = Field(default=None, alias="displayName")
    op: str | None = Field(default=None, examples=["lte"])
    value: Target | None = None
    target: Target | None = Field(default=None, examples=[0.9])
    time_slice_target: Target | None = Field(
        default=None, alias="timeSliceTarget", examples=[0.9]
    )
    time_slice_window: str | None = Field(
        default=None, alias="timeSliceWindow", examples=["5m"]
    )


class SLOSpec(BaseModel):
    """Body of a ``kind: SLO`` manifest."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    description: str | None = None
    service: str | None = Field(default=None, examples=["webapp-service"])
    indicator: SLIInline | None = None
    indicator_ref: str | None = Field(default=None, alias="indicatorRef")
    budgeting_method: str | None = Field(
        default=None, alias="budgetingMethod", examples=["Occurrences"]
    )
    time_window: tuple[TimeWindow, ...] | None = Field(default=None, alias="timeWindow")
    objectives: tuple[Objective, ...] | None = None
    alert_policies: tuple[AlertPolicy, ...] | None = Field(
        default=None, alias="alertPolicies"
    )


class SLO(ObjectHeader):
    """A complete SLO manifest: envelope plus spec."""

    KIND: ClassVar[str] = "SLO"

    spec: SLOSpec | None = None
