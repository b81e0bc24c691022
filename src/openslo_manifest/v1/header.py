"""Generic manifest envelope shared by every OpenSLO kind."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

API_VERSION = "openslo/v1"


class Metadata(BaseModel):
    """Object metadata block (``metadata:``)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str | None = None
    display_name: str | None = Field(default=None, alias="displayName")
    labels: dict[str, Any] | None = None
    annotations: dict[str, str] | None = None


class ObjectHeader(BaseModel):
    """``apiVersion`` / ``kind`` / ``metadata`` fields inlined into a manifest.

    Subclasses set ``KIND`` to the discriminator they are decoded for.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    KIND: ClassVar[str] = ""

    api_version: str | None = Field(default=None, alias="apiVersion")
    kind: str | None = None
    metadata: Metadata | None = None

    @classmethod
    def manifest_kind(cls) -> str:
        """Return the manifest kind this type represents."""
        return cls.KIND
