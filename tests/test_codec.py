"""Tests for YAML decoding and canonical encoding."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from openslo_manifest.codec import (
    decode_slo,
    dump_slo,
    encode_slo,
    load_and_validate,
    load_slo,
    parse_slo,
    slo_to_document,
)
from openslo_manifest.config import CodecOptions
from openslo_manifest.errors import DecodeError, ManifestValidationError
from openslo_manifest.v1 import SLO, Objective, Target, validate_slo


# ---- Decoding ----


class TestDecode:
    def test_full_valid_example(self, valid_manifest: str) -> None:
        slo = decode_slo(valid_manifest)
        assert slo.manifest_kind() == "SLO"
        assert slo.spec is not None
        assert slo.spec.service == "webapp-service"
        assert slo.spec.budgeting_method == "Occurrences"
        assert slo.spec.time_window is not None
        assert slo.spec.time_window[0].duration == "30d"
        assert slo.spec.time_window[0].is_rolling is True
        assert slo.spec.objectives is not None
        assert slo.spec.objectives[0].target == 0.9
        assert validate_slo(slo) == []

    def test_timestamps_stay_strings(self, manifests_dir: Path) -> None:
        slo = load_slo(manifests_dir / "checkout-latency-calendar.yaml")
        calendar = slo.spec.time_window[0].calendar  # type: ignore[index, union-attr]
        assert calendar is not None
        assert calendar.start_time == "2020-01-21 12:30:00"
        assert calendar.time_zone == "America/New_York"

    def test_invalid_yaml(self) -> None:
        with pytest.raises(DecodeError, match="Invalid YAML"):
            decode_slo("spec: [unclosed")

    def test_empty_document(self) -> None:
        with pytest.raises(DecodeError, match="Empty document"):
            decode_slo("")

    def test_non_mapping_document(self) -> None:
        with pytest.raises(DecodeError, match="Expected a mapping"):
            decode_slo("- a\n- b\n")

    def test_other_kind_rejected(self, valid_manifest: str) -> None:
        with pytest.raises(DecodeError, match="Unsupported manifest kind"):
            decode_slo(valid_manifest.replace("kind: SLO", "kind: SLI"))

    def test_missing_kind_is_a_violation(self, valid_manifest: str) -> None:
        slo = decode_slo(valid_manifest.replace("kind: SLO\n", ""))
        assert [(v.field, v.rule) for v in validate_slo(slo)] == [("kind", "required")]

    def test_wrong_scalar_type(self, valid_manifest: str) -> None:
        with pytest.raises(DecodeError) as excinfo:
            decode_slo(valid_manifest.replace("target: 0.9", "target: high"))
        assert any(d.startswith("spec.objectives[0].target") for d in excinfo.value.details)

    def test_wrong_shape(self, valid_manifest: str) -> None:
        text = valid_manifest.replace(
            "  timeWindow:\n    - duration: 30d\n      isRolling: true\n",
            "  timeWindow: 30d\n",
        )
        with pytest.raises(DecodeError) as excinfo:
            decode_slo(text)
        assert any(d.startswith("spec.timeWindow") for d in excinfo.value.details)

    def test_missing_objectives_key(self, valid_manifest: str) -> None:
        text = valid_manifest.replace("  objectives:\n    - target: 0.9\n", "")
        slo = decode_slo(text)
        assert [(v.field, v.rule) for v in validate_slo(slo)] == [
            ("spec.objectives", "required")
        ]

    def test_empty_objectives_list(self, valid_manifest: str) -> None:
        text = valid_manifest.replace(
            "  objectives:\n    - target: 0.9\n", "  objectives: []\n"
        )
        assert validate_slo(decode_slo(text)) == []

    def test_null_is_rolling_reads_as_false(self, valid_manifest: str) -> None:
        slo = decode_slo(valid_manifest.replace("isRolling: true", "isRolling: null"))
        window = slo.spec.time_window[0]  # type: ignore[index, union-attr]
        assert window.is_rolling is False
        assert [(v.field, v.rule) for v in validate_slo(slo)] == [
            ("spec.timeWindow[0].calendar", "required_if")
        ]

    def test_missing_spec_decodes_then_fails_validation(self) -> None:
        text = "apiVersion: openslo/v1\nkind: SLO\nmetadata:\n  name: x\n"
        slo = decode_slo(text)
        assert slo.spec is None
        with pytest.raises(ManifestValidationError) as excinfo:
            parse_slo(text)
        assert [(v.field, v.rule) for v in excinfo.value.violations] == [("spec", "required")]

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(DecodeError, match="Cannot read SLO file"):
            load_slo(tmp_path / "missing.yaml")


# ---- Example manifests ----


class TestExamples:
    @pytest.mark.parametrize(
        "name", ["webapp-availability.yaml", "checkout-latency-calendar.yaml"]
    )
    def test_valid_examples(self, manifests_dir: Path, name: str) -> None:
        slo = load_and_validate(manifests_dir / name)
        assert isinstance(slo, SLO)

    def test_invalid_example_reports_everything(self, manifests_dir: Path) -> None:
        with pytest.raises(ManifestValidationError) as excinfo:
            load_and_validate(manifests_dir / "invalid-webapp.yaml")
        assert {(v.field, v.rule) for v in excinfo.value.violations} == {
            ("spec.indicator", "required_without"),
            ("spec.budgetingMethod", "oneof"),
            ("spec.timeWindow[0].calendar", "required_if"),
            ("spec.objectives[0].target", "lt"),
        }


# ---- Encoding ----


class TestEncode:
    def test_canonical_output(self, valid_manifest: str) -> None:
        assert encode_slo(decode_slo(valid_manifest)) == valid_manifest.replace(
            "    - duration", "  - duration"
        ).replace("      isRolling", "    isRolling").replace(
            "    - target", "  - target"
        )

    def test_targets_rendered_canonically(self, base_slo: SLO) -> None:
        spec = base_slo.spec.model_copy(  # type: ignore[union-attr]
            update={
                "objectives": (
                    Objective(target=0.333333333, value=1.0, time_slice_target=0.900000),
                )
            }
        )
        text = encode_slo(base_slo.model_copy(update={"spec": spec}))
        assert "value: 1\n" in text
        assert "target: 0.33333\n" in text
        assert "timeSliceTarget: 0.9\n" in text

    def test_zero_target_rendered(self, base_slo: SLO) -> None:
        spec = base_slo.spec.model_copy(  # type: ignore[union-attr]
            update={"objectives": (Objective(target=0.0),)}
        )
        text = encode_slo(base_slo.model_copy(update={"spec": spec}))
        assert "target: 0\n" in text
        assert yaml.safe_load(text)["spec"]["objectives"][0]["target"] == 0

    def test_document_targets_are_tagged(self, base_slo: SLO) -> None:
        document = slo_to_document(base_slo)
        target = document["spec"]["objectives"][0]["target"]
        assert isinstance(target, Target)
        assert "timeSliceTarget" not in document["spec"]["objectives"][0]

    def test_absent_fields_omitted(self, base_slo: SLO) -> None:
        document = slo_to_document(base_slo)
        assert "indicator" not in document["spec"]
        assert "description" not in document["spec"]
        assert list(document) == ["apiVersion", "kind", "metadata", "spec"]

    def test_reencode_is_stable(self, manifests_dir: Path) -> None:
        slo = load_slo(manifests_dir / "checkout-latency-calendar.yaml")
        first = encode_slo(slo)
        second = encode_slo(decode_slo(first))
        assert first == second
        assert "startTime: '2020-01-21 12:30:00'" in first

    def test_options(self, base_slo: SLO) -> None:
        text = encode_slo(base_slo, CodecOptions(indent=4, explicit_start=True))
        assert text.startswith("---\n")
        assert "\n    name: webapp-availability\n" in text

    def test_invalid_manifest_not_encoded(self, base_slo: SLO, tmp_path: Path) -> None:
        spec = base_slo.spec.model_copy(update={"budgeting_method": "Weighted"})  # type: ignore[union-attr]
        bad = base_slo.model_copy(update={"spec": spec})
        with pytest.raises(ManifestValidationError) as excinfo:
            encode_slo(bad)
        assert [(v.field, v.rule) for v in excinfo.value.violations] == [
            ("spec.budgetingMethod", "oneof")
        ]
        path = tmp_path / "bad.yaml"
        with pytest.raises(ManifestValidationError):
            dump_slo(bad, path)
        assert not path.exists()

    def test_encode_without_validation(self, base_slo: SLO) -> None:
        spec = base_slo.spec.model_copy(update={"budgeting_method": "Weighted"})  # type: ignore[union-attr]
        bad = base_slo.model_copy(update={"spec": spec})
        text = encode_slo(bad, CodecOptions(validate_on_encode=False))
        assert "budgetingMethod: Weighted\n" in text

    def test_options_defaults(self) -> None:
        options = CodecOptions()
        assert options.validate_on_encode is True
        assert options.indent == 2

    def test_dump_and_load(self, base_slo: SLO, tmp_path: Path) -> None:
        path = tmp_path / "slo.yaml"
        dump_slo(base_slo, path)
        loaded = load_and_validate(path)
        assert loaded == base_slo
