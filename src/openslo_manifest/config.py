"""Output settings for the YAML codec."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CodecOptions(BaseModel):
    """How encoded manifests are laid out."""

    model_config = ConfigDict(frozen=True)

    indent: int = Field(default=2, ge=2, le=9, description="Block indentation")
    width: int = Field(default=80, gt=20, description="Preferred line width")
    explicit_start: bool = Field(default=False, description="Emit a leading '---'")
    validate_on_encode: bool = Field(
        default=True, description="Refuse to encode manifests that break a rule"
    )


DEFAULT_OPTIONS = CodecOptions()
