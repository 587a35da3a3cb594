"""Tests for document classification and segmentation."""

from pathlib import Path

from i18n_sweep.core.regions import (
    DocumentKind,
    RegionKind,
    classify_document,
    is_component_expression_file,
    region_at,
    segment,
)


class TestClassifyDocument:
    """Test cases for classify_document."""

    def test_known_extensions(self):
        assert classify_document('App.vue') == DocumentKind.COMPOSITE
        assert classify_document('main.ts') == DocumentKind.SCRIPT
        assert classify_document('Button.jsx') == DocumentKind.SCRIPT
        assert classify_document('index.html') == DocumentKind.MARKUP
        assert classify_document('theme.scss') == DocumentKind.STYLE

    def test_bare_extension(self):
        assert classify_document('vue') == DocumentKind.COMPOSITE
        assert classify_document('TSX') == DocumentKind.SCRIPT

    def test_path_objects(self):
        assert classify_document(Path('src/components/Card.vue')) == DocumentKind.COMPOSITE

    def test_unknown_is_generic(self):
        assert classify_document('notes.md') == DocumentKind.GENERIC
        assert classify_document('Makefile') == DocumentKind.GENERIC

    def test_component_expression_files(self):
        assert is_component_expression_file('App.tsx')
        assert is_component_expression_file('App.jsx')
        assert not is_component_expression_file('App.ts')
        assert not is_component_expression_file('App.vue')


class TestSegment:
    """Test cases for segment."""

    def test_non_composite_is_one_region(self):
        text = 'const a = "b";'
        regions = segment(text, DocumentKind.SCRIPT)
        assert len(regions) == 1
        assert regions[0].kind == RegionKind.WHOLE
        assert regions[0].content == text
        assert regions[0].offset_in_parent == 0
        assert regions[0].syntax == DocumentKind.SCRIPT

    def test_composite_regions(self):
        text = (
            '<template><p>Hi there</p></template>\n'
            '<script>export default {}</script>\n'
            '<style>.a { color: red; }</style>\n'
            '<style scoped>.b {}</style>'
        )
        regions = segment(text, DocumentKind.COMPOSITE)

        assert [r.kind for r in regions] == [
            RegionKind.TEMPLATE, RegionKind.SCRIPT, RegionKind.STYLE, RegionKind.STYLE,
        ]
        assert regions[0].syntax == DocumentKind.MARKUP
        assert regions[1].syntax == DocumentKind.SCRIPT

    def test_offsets_map_into_parent(self):
        text = '<template><p>Hi there</p></template><script lang="ts">let x = 1</script>'
        for region in segment(text, DocumentKind.COMPOSITE):
            assert text[region.offset_in_parent:region.end_offset] == region.content

    def test_missing_blocks(self):
        regions = segment('<script>let a</script>', DocumentKind.COMPOSITE)
        assert [r.kind for r in regions] == [RegionKind.SCRIPT]

    def test_unterminated_block_yields_nothing(self):
        assert segment('<template><p>Hi</p>', DocumentKind.COMPOSITE) == []

    def test_region_at(self):
        text = '<template><p>Hi</p></template><script>let a</script>'
        regions = segment(text, DocumentKind.COMPOSITE)
        assert region_at(regions, text.index('<p>')).kind == RegionKind.TEMPLATE
        assert region_at(regions, text.index('let')).kind == RegionKind.SCRIPT
        assert region_at(regions, 0) is None
