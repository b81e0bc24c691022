"""Shared fixtures for manifest tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from openslo_manifest.v1 import (
    SLO,
    Calendar,
    Metadata,
    Objective,
    SLOSpec,
    TimeWindow,
)

MANIFESTS_DIR = Path(__file__).resolve().parent.parent / "examples" / "manifests"


@pytest.fixture()
def manifests_dir() -> Path:
    return MANIFESTS_DIR


@pytest.fixture()
def rolling_window() -> TimeWindow:
    return TimeWindow(duration="30d", is_rolling=True)


@pytest.fixture()
def calendar_window() -> TimeWindow:
    return TimeWindow(
        duration="1M",
        is_rolling=False,
        calendar=Calendar(start_time="2020-01-21 12:30:00", time_zone="America/New_York"),
    )


@pytest.fixture()
def base_spec(rolling_window: TimeWindow) -> SLOSpec:
    return SLOSpec(
        service="webapp-service",
        indicator_ref="webapp-success-ratio",
        budgeting_method="Occurrences",
        time_window=(rolling_window,),
        objectives=(Objective(display_name="Good", target=0.9),),
    )


@pytest.fixture()
def base_slo(base_spec: SLOSpec) -> SLO:
    return SLO(
        api_version="openslo/v1",
        kind="SLO",
        metadata=Metadata(name="webapp-availability"),
        spec=base_spec,
    )


@pytest.fixture()
def valid_manifest() -> str:
    return """\
apiVersion: openslo/v1
kind: SLO
metadata:
  name: webapp-availability
spec:
  service: webapp-service
  indicatorRef: webapp-success-ratio
  budgetingMethod: Occurrences
  timeWindow:
    - duration: 30d
      isRolling: true
  objectives:
    - target: 0.9
"""
