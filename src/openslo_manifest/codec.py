"""YAML decoding and canonical encoding of SLO manifests."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from openslo_manifest.config import DEFAULT_OPTIONS, CodecOptions
from openslo_manifest.errors import DecodeError
from openslo_manifest.v1.objective import SLO, Objective
from openslo_manifest.v1.target import Target, represent_target
from openslo_manifest.v1.validator import ensure_valid

logger = logging.getLogger(__name__)

TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class ManifestLoader(yaml.SafeLoader):
    """Safe loader that keeps timestamps as the literal string.

    ``calendar.startTime`` is a string field, and the stock resolver would
    otherwise turn ``2020-01-21 12:30:00`` into a ``datetime``.
    """


ManifestLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class ManifestDumper(yaml.SafeDumper):
    """Safe dumper that writes Target values through ``encode_target``."""


ManifestDumper.add_representer(Target, represent_target)


def _format_loc(loc: tuple[Any, ...]) -> str:
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path or "<root>"


def _load_document(text: str, source: str) -> dict[str, Any]:
    try:
        data = yaml.load(text, Loader=ManifestLoader)
    except yaml.YAMLError as exc:
        raise DecodeError(f"Invalid YAML in {source}: {exc}") from exc
    if data is None:
        raise DecodeError(f"Empty document in {source}")
    if not isinstance(data, dict):
        raise DecodeError(
            f"Expected a mapping at the top of {source}, got {type(data).__name__}"
        )
    return data


def decode_slo(text: str, source: str = "<string>") -> SLO:
    """Decode one YAML document into an :class:`SLO` without validating it.

    Raises:
        DecodeError: If the text is not YAML, is not a mapping, declares a
            kind other than ``SLO`` or has a value of the wrong shape or type.
    """
    data = _load_document(text, source)
    kind = data.get("kind")
    if kind is not None and kind != SLO.KIND:
        raise DecodeError(
            f"Unsupported manifest kind in {source}: {kind!r}, expected {SLO.KIND!r}"
        )
    try:
        slo = SLO.model_validate(data)
    except ValidationError as exc:
        details = [f"{_format_loc(e['loc'])}: {e['msg']}" for e in exc.errors()]
        raise DecodeError(f"Invalid SLO manifest in {source}", details) from exc
    logger.debug("Decoded SLO %s from %s", slo.metadata.name if slo.metadata else None, source)
    return slo


def parse_slo(text: str, source: str = "<string>") -> SLO:
    """Decode and validate; raises ManifestValidationError with all violations."""
    return ensure_valid(decode_slo(text, source))


def load_slo(path: str | Path) -> SLO:
    """Decode an SLO manifest file without validating it."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DecodeError(f"Cannot read SLO file {path}: {exc}") from exc
    return decode_slo(text, source=str(path))


def load_and_validate(path: str | Path) -> SLO:
    """Decode an SLO manifest file and validate it."""
    return ensure_valid(load_slo(path))


def slo_to_document(slo: SLO) -> dict[str, Any]:
    """Build the plain document tree written for ``slo``.

    Absent fields are left out and Target fields are tagged so the dumper
    renders them with :func:`~openslo_manifest.v1.target.encode_target`.
    """
    data = slo.model_dump(mode="json", by_alias=True, exclude_none=True)
    for objective in data.get("spec", {}).get("objectives", ()):
        for key in Objective.TARGET_FIELDS:
            if key in objective:
                objective[key] = Target(objective[key])
    return data


def encode_slo(slo: SLO, options: CodecOptions = DEFAULT_OPTIONS) -> str:
    """Encode ``slo`` as canonical YAML.

    Raises:
        ManifestValidationError: If ``options.validate_on_encode`` is set
            and ``slo`` breaks a rule.
    """
    if options.validate_on_encode:
        ensure_valid(slo)
    return yaml.dump(
        slo_to_document(slo),
        Dumper=ManifestDumper,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
        indent=options.indent,
        width=options.width,
        explicit_start=options.explicit_start,
    )


def dump_slo(slo: SLO, path: str | Path, options: CodecOptions = DEFAULT_OPTIONS) -> None:
    """Write ``slo`` to ``path`` as canonical YAML."""
    path = Path(path)
    text = encode_slo(slo, options)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
    logger.debug("Wrote SLO %s to %s", slo.metadata.name if slo.metadata else None, path)
