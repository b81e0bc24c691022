"""Target scalar: a ratio that renders with at most five decimal places."""

from __future__ import annotations

from typing import Any

import yaml
from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

PRECISION = 5

INT_TAG = "tag:yaml.org,2002:int"
FLOAT_TAG = "tag:yaml.org,2002:float"


def _require_number(value: Any) -> Any:
    # bool is an int subclass and numeric strings would be coerced by lax mode
    if isinstance(value, (bool, str, bytes)):
        raise ValueError(f"expected a number, got {type(value).__name__}")
    return value


class Target(float):
    """Dimensionless ratio used for objective targets and values.

    The stored value is any finite float. Range rules (``0 <= target < 1``
    and friends) belong to the validator, not to this type.
    """

    def __repr__(self) -> str:
        return f"Target({format_target(self)})"

    def __str__(self) -> str:
        return format_target(self)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_after_validator_function(
            cls,
            core_schema.no_info_before_validator_function(
                _require_number,
                core_schema.float_schema(allow_inf_nan=False),
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(float),
        )


def format_target(value: float) -> str:
    """Render ``value`` with at most five fractional digits.

    Trailing zeros are dropped, and so is the decimal point when nothing is
    left after it::

        >>> format_target(0.9)
        '0.9'
        >>> format_target(1.0)
        '1'
        >>> format_target(0.333333333)
        '0.33333'
    """
    text = f"{value:.{PRECISION}f}".rstrip("0").rstrip(".")
    if text == "-0":
        return "0"
    return text


def encode_target(value: float) -> yaml.ScalarNode:
    """Build the plain YAML scalar node written for a Target field.

    The tag is the one a YAML reader resolves the text to, so the emitter
    writes the scalar untagged and unquoted and it reads back as a number.
    """
    text = format_target(value)
    tag = FLOAT_TAG if "." in text else INT_TAG
    return yaml.ScalarNode(tag=tag, value=text)


def represent_target(dumper: yaml.BaseDumper, data: Target) -> yaml.ScalarNode:
    """PyYAML representer hook delegating to :func:`encode_target`."""
    return encode_target(data)
