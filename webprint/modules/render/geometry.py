"""Page geometry calculation."""

from .types import Margins, PageGeometry, PaperSize, Rect


def compute_geometry(
    paper_size: PaperSize,
    landscape: bool = False,
    margins: Margins | None = None,
) -> PageGeometry:
    """
    Compute the page and printable rectangles for a paper size.

    Landscape swaps width and height before anything else. Margins are not
    clamped: oversized margins yield a degenerate printable rect, which the
    export pipeline rejects.
    """
    margins = margins or Margins()

    if landscape:
        width, height = paper_size.height, paper_size.width
    else:
        width, height = paper_size.width, paper_size.height

    page_rect = Rect(x=0.0, y=0.0, width=width, height=height)
    return PageGeometry(page_rect=page_rect, printable_rect=page_rect.inset(margins))
