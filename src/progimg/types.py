"""Shared Pydantic models for progimg."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# ── Inbound models ──


class ImageReference(BaseModel):
    """An image embedded in a document, as handed over by the host renderer."""

    model_config = ConfigDict(frozen=True)

    url: str
    alt: str = ""


class ParsedDescriptor(BaseModel):
    """Alt text split into a label and optional display-size overrides."""

    model_config = ConfigDict(frozen=True)

    label: str
    width: int | None = None
    height: int | None = None

    @property
    def has_overrides(self) -> bool:
        return self.width is not None or self.height is not None


# ── Metadata models ──


class Dimensions(BaseModel):
    width: int = Field(gt=0)
    height: int = Field(gt=0)


class ImageMetadata(BaseModel):
    """Original pixel size of a remote asset plus its placeholder data URI."""

    width: int = Field(gt=0)
    height: int = Field(gt=0)
    placeholder: str = ""

    @property
    def has_placeholder(self) -> bool:
        return bool(self.placeholder)
