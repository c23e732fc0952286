"""
Tests for reading-order text assembly.
"""
from core.assembler.reading_order_assembler import ReadingOrderAssembler

from conftest import makeRegion


class TestReadingOrderAssembler:
    """Test line grouping and ordering."""

    def test_reading_order_example(self):
        regions = [
            makeRegion(text="The", left=0.1, right=0.25, top=0.9, bottom=0.88),
            makeRegion(text="quick", left=0.3, right=0.5, top=0.9, bottom=0.88),
            makeRegion(text="fox", left=0.1, right=0.2, top=0.5, bottom=0.48),
        ]

        assert ReadingOrderAssembler().assemble(regions) == "The quick\nfox"

    def test_input_order_does_not_matter(self):
        regions = [
            makeRegion(text="fox", left=0.1, right=0.2, top=0.5, bottom=0.48),
            makeRegion(text="quick", left=0.3, right=0.5, top=0.9, bottom=0.88),
            makeRegion(text="The", left=0.1, right=0.25, top=0.9, bottom=0.88),
        ]

        assert ReadingOrderAssembler().assemble(regions) == "The quick\nfox"

    def test_small_top_difference_stays_on_one_line(self):
        regions = [
            makeRegion(text="left", left=0.1, right=0.3, top=0.600),
            makeRegion(text="right", left=0.4, right=0.6, top=0.590),
        ]

        assert ReadingOrderAssembler().assemble(regions) == "left right"

    def test_larger_top_difference_starts_new_line(self):
        regions = [
            makeRegion(text="upper", left=0.4, right=0.6, top=0.62),
            makeRegion(text="lower", left=0.1, right=0.3, top=0.60),
        ]

        assert ReadingOrderAssembler().assemble(regions) == "upper\nlower"

    def test_slanted_line_stays_together(self):
        regions = [
            makeRegion(text="a", left=0.1, right=0.2, top=0.900),
            makeRegion(text="b", left=0.3, right=0.4, top=0.890),
            makeRegion(text="c", left=0.5, right=0.6, top=0.880),
        ]

        assert ReadingOrderAssembler().assemble(regions) == "a b c"

    def test_empty_input(self):
        assert ReadingOrderAssembler().assemble([]) == ""

    def test_group_lines(self):
        regions = [
            makeRegion(text="b", left=0.5, top=0.8),
            makeRegion(text="a", left=0.1, top=0.805),
            makeRegion(text="c", left=0.1, top=0.7),
        ]

        lines = ReadingOrderAssembler().groupLines(regions)

        assert [[r.text for r in line] for line in lines] == [["a", "b"], ["c"]]
