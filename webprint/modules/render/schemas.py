"""Render module schemas."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from .types import Margins, PaperSize


class MarginsModel(BaseModel):
    """Page margins in points (1/72 inch)."""

    top: float = Field(default=0, ge=0)
    left: float = Field(default=0, ge=0)
    bottom: float = Field(default=0, ge=0)
    right: float = Field(default=0, ge=0)

    def to_margins(self) -> Margins:
        return Margins(top=self.top, left=self.left, bottom=self.bottom, right=self.right)


class RenderPdfRequest(BaseModel):
    """Request to render a URL to a PDF file."""

    source_url: str = Field(..., description="http(s) or file URL of the document to render")
    output_path: str = Field(..., description="Destination PDF path")
    paper_size: str = Field(
        default="letter",
        description="Paper size: a3, a4, a5, letter, legal, tabloid",
    )
    landscape: bool = Field(default=False, description="Swap paper width and height")
    margins: MarginsModel = Field(default_factory=MarginsModel)
    base_access_root: str | None = Field(
        default=None,
        description="Read-access root for file URLs (defaults to the configured storage root)",
    )
    strategy: Literal["polling", "signal"] | None = Field(
        default=None,
        description="Load-completion strategy (defaults to the configured one)",
    )
    timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Load timeout override",
    )

    @field_validator("source_url")
    @classmethod
    def _supported_scheme(cls, value: str) -> str:
        if not value.lower().startswith(("http://", "https://", "file:")):
            raise ValueError("source_url must be an http(s) or file URL")
        return value

    @field_validator("paper_size")
    @classmethod
    def _known_paper(cls, value: str) -> str:
        PaperSize.from_name(value)
        return value.lower()


class RenderPdfResponse(BaseModel):
    """Response describing the written PDF."""

    success: bool
    output_path: str | None = None
    size_bytes: int | None = None
