"""
Render value types: paper sizes, margins, page geometry, requests and results.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


# =============================================================================
# PAPER
# =============================================================================

class PaperSize(Enum):
    """
    Supported paper sizes in points (1/72 inch), portrait baseline.

    Extend by adding members.
    """

    A3 = (842.0, 1191.0)
    A4 = (595.0, 842.0)
    A5 = (420.0, 595.0)
    LETTER = (612.0, 792.0)
    LEGAL = (612.0, 1008.0)
    TABLOID = (792.0, 1224.0)

    @property
    def width(self) -> float:
        return self.value[0]

    @property
    def height(self) -> float:
        return self.value[1]

    @classmethod
    def from_name(cls, name: str) -> "PaperSize":
        """Look up a paper size by case-insensitive name ('a4', 'Letter')."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            choices = ", ".join(m.name.lower() for m in cls)
            raise ValueError(f"Unknown paper size '{name}' (expected one of: {choices})") from None


@dataclass(frozen=True)
class Margins:
    """Page insets in points."""

    top: float = 0.0
    left: float = 0.0
    bottom: float = 0.0
    right: float = 0.0

    def __post_init__(self) -> None:
        for name in ("top", "left", "bottom", "right"):
            if getattr(self, name) < 0:
                raise ValueError(f"Margin '{name}' must be non-negative")

    @classmethod
    def uniform(cls, value: float) -> "Margins":
        return cls(top=value, left=value, bottom=value, right=value)


# =============================================================================
# GEOMETRY
# =============================================================================

@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in points, origin at the top-left."""

    x: float
    y: float
    width: float
    height: float

    @property
    def is_degenerate(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def inset(self, margins: Margins) -> "Rect":
        return Rect(
            x=self.x + margins.left,
            y=self.y + margins.top,
            width=self.width - (margins.left + margins.right),
            height=self.height - (margins.top + margins.bottom),
        )

    def contains(self, other: "Rect") -> bool:
        return (
            other.x >= self.x
            and other.y >= self.y
            and other.x + other.width <= self.x + self.width
            and other.y + other.height <= self.y + self.height
        )


@dataclass(frozen=True)
class PageGeometry:
    """Full paper rectangle plus the margin-inset printable rectangle."""

    page_rect: Rect
    printable_rect: Rect

    @property
    def margins(self) -> Margins:
        """Recover the insets between page and printable rects."""
        page, printable = self.page_rect, self.printable_rect
        return Margins(
            top=printable.y - page.y,
            left=printable.x - page.x,
            bottom=(page.y + page.height) - (printable.y + printable.height),
            right=(page.x + page.width) - (printable.x + printable.width),
        )


# =============================================================================
# REQUEST / RESULT
# =============================================================================

@dataclass(frozen=True)
class RenderRequest:
    """Everything one render needs. Immutable for the duration of the render."""

    source: str
    output_path: Path
    paper_size: PaperSize = PaperSize.LETTER
    landscape: bool = False
    margins: Margins = field(default_factory=Margins)
    base_access_root: Path | None = None

    @property
    def is_file_source(self) -> bool:
        return self.source.lower().startswith("file:")


@dataclass(frozen=True)
class RenderResult:
    """Outcome of one render: exactly one of output_path or error is set."""

    output_path: Path | None = None
    error: Exception | None = None

    def __post_init__(self) -> None:
        if (self.output_path is None) == (self.error is None):
            raise ValueError("RenderResult needs exactly one of output_path or error")

    @classmethod
    def succeeded(cls, output_path: Path) -> "RenderResult":
        return cls(output_path=output_path)

    @classmethod
    def failed(cls, error: Exception) -> "RenderResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None
