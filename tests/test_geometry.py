"""Tests for page geometry calculation."""

import pytest

from webprint.modules.render import Margins, PageGeometry, PaperSize, Rect, compute_geometry


class TestComputeGeometry:
    """compute_geometry() page and printable rects."""

    def test_a4_with_half_inch_margins(self) -> None:
        geometry = compute_geometry(PaperSize.A4, False, Margins.uniform(36))

        assert geometry.page_rect == Rect(0, 0, 595, 842)
        assert geometry.printable_rect == Rect(36, 36, 523, 770)

    def test_zero_margins_printable_equals_page(self) -> None:
        geometry = compute_geometry(PaperSize.LETTER, False, Margins())

        assert geometry.page_rect == Rect(0, 0, 612, 792)
        assert geometry.printable_rect == geometry.page_rect

    def test_margins_default_to_zero(self) -> None:
        geometry = compute_geometry(PaperSize.LEGAL)
        assert geometry.printable_rect == geometry.page_rect

    @pytest.mark.parametrize("paper", list(PaperSize))
    def test_landscape_swaps_dimensions(self, paper: PaperSize) -> None:
        portrait = compute_geometry(paper, False)
        landscape = compute_geometry(paper, True)

        assert landscape.page_rect.width == portrait.page_rect.height
        assert landscape.page_rect.height == portrait.page_rect.width

    def test_landscape_applies_margins_after_swap(self) -> None:
        margins = Margins(top=10, left=20, bottom=30, right=40)
        geometry = compute_geometry(PaperSize.LETTER, True, margins)

        assert geometry.page_rect == Rect(0, 0, 792, 612)
        assert geometry.printable_rect == Rect(20, 10, 792 - 60, 612 - 40)

    def test_asymmetric_margins_shift_origin(self) -> None:
        margins = Margins(top=72, left=18, bottom=36, right=54)
        geometry = compute_geometry(PaperSize.A5, False, margins)
        printable = geometry.printable_rect

        assert (printable.x, printable.y) == (18, 72)
        assert printable.width == 420 - 72
        assert printable.height == 595 - 108
        assert not printable.is_degenerate
        assert geometry.page_rect.contains(printable)

    def test_oversized_margins_are_not_clamped(self) -> None:
        geometry = compute_geometry(PaperSize.A5, False, Margins(left=300, right=300))

        assert geometry.printable_rect.width == 420 - 600
        assert geometry.printable_rect.is_degenerate

    def test_margins_recovered_from_geometry(self) -> None:
        margins = Margins(top=1, left=2, bottom=3, right=4)
        geometry = compute_geometry(PaperSize.TABLOID, False, margins)
        assert geometry.margins == margins


class TestValueTypes:
    """PaperSize, Margins and Rect behaviour."""

    def test_paper_from_name_is_case_insensitive(self) -> None:
        assert PaperSize.from_name("a4") is PaperSize.A4
        assert PaperSize.from_name(" Letter ") is PaperSize.LETTER

    def test_paper_from_unknown_name(self) -> None:
        with pytest.raises(ValueError, match="Unknown paper size"):
            PaperSize.from_name("b5")

    def test_negative_margin_rejected(self) -> None:
        with pytest.raises(ValueError, match="left"):
            Margins(left=-1)

    def test_rect_contains(self) -> None:
        outer = Rect(0, 0, 100, 100)
        assert outer.contains(Rect(10, 10, 80, 80))
        assert not outer.contains(Rect(50, 50, 80, 80))

    def test_geometry_is_immutable(self) -> None:
        geometry = PageGeometry(Rect(0, 0, 1, 1), Rect(0, 0, 1, 1))
        with pytest.raises(AttributeError):
            geometry.page_rect = Rect(0, 0, 2, 2)  # type: ignore[misc]
