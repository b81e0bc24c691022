"""OpenSLO Manifest — typed, validated ``kind: SLO`` manifests.

openslo-manifest turns an OpenSLO ``SLO`` YAML document into an immutable
typed value, checks it against the manifest's constraints and writes it
back out in a canonical form.

Core concepts
-------------
* **Decode** — YAML text becomes an :class:`~openslo_manifest.v1.SLO`.
  Malformed input or values of the wrong type raise
  :class:`~openslo_manifest.errors.DecodeError`.

* **Validate** — every rule of the manifest (required fields, ranges,
  enumerations, cross-field requirements) is checked and *all* broken
  rules are reported together as
  :class:`~openslo_manifest.v1.Violation` objects.

* **Encode** — objective targets are written with at most five decimal
  places and no trailing zeros (``0.9``, ``1``, ``0.33333``).

Quick start::

    from openslo_manifest import load_and_validate, encode_slo

    slo = load_and_validate("slo.yaml")
    print(slo.spec.objectives[0].target)
    print(encode_slo(slo))
"""

from openslo_manifest.codec import (
    decode_slo,
    dump_slo,
    encode_slo,
    load_and_validate,
    load_slo,
    parse_slo,
)
from openslo_manifest.errors import DecodeError, ManifestError, ManifestValidationError
from openslo_manifest.v1 import SLO, SLOSpec, Target, Violation, validate_slo

__all__ = [
    "DecodeError",
    "ManifestError",
    "ManifestValidationError",
    "SLO",
    "SLOSpec",
    "Target",
    "Violation",
    "decode_slo",
    "dump_slo",
    "encode_slo",
    "load_and_validate",
    "load_slo",
    "parse_slo",
    "validate_slo",
]

__version__ = "0.1.0"
