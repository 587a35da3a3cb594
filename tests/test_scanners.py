"""Tests for the per-syntax scanners."""

import pytest

from i18n_sweep.core.regions import DocumentKind
from i18n_sweep.scanners.script import skip_balanced
from i18n_sweep.scanners import (
    GenericScanner,
    MarkupScanner,
    ScriptScanner,
    StyleScanner,
    TextKind,
    get_scanner,
    is_rejected_text,
    tokenize_strings,
)


class TestRejectedText:
    """Test cases for the shared text filters."""

    @pytest.mark.parametrize('text', [
        '', ' ', 'a', ' x ', '42', ' 007 ', 'true', 'false', 'null', 'undefined', ' null ',
    ])
    def test_rejected(self, text):
        assert is_rejected_text(text)

    @pytest.mark.parametrize('text', ['OK', 'Hello', '3 items', 'True', 'nullable'])
    def test_accepted(self, text):
        assert not is_rejected_text(text)

    def test_no_scanner_accepts_rejected_text(self):
        """Candidates are never reserved literals, blank or purely numeric."""
        markup = '<p>true</p><p> </p><p>123</p><p>null</p><span title="false">x</span>'
        script = 'const a = "undefined"; const b = "  "; const c = "2024";'
        generic = '"true" \'null\' "99"'

        found = (
            MarkupScanner(['title']).scan(markup)
            + ScriptScanner().scan(script)
            + GenericScanner().scan(generic)
        )
        for candidate in found:
            trimmed = candidate.text.strip()
            assert trimmed
            assert not trimmed.isdigit()
            assert trimmed not in {'true', 'false', 'null', 'undefined'}


class TestMarkupScanner:
    """Test cases for MarkupScanner."""

    def test_plain_text(self):
        """<div>Hello World</div> yields one plain markup text candidate."""
        content = '<div>Hello World</div>'
        candidates = MarkupScanner().scan(content)

        assert len(candidates) == 1
        candidate = candidates[0]
        assert candidate.kind == TextKind.PLAIN_MARKUP_TEXT
        assert candidate.text == 'Hello World'
        assert content[candidate.start:candidate.end] == 'Hello World'
        assert (candidate.token_start, candidate.token_end) == (candidate.start, candidate.end)

    def test_allowed_attribute(self):
        """title="Save file" yields one attribute value candidate."""
        content = '<button title="Save file"></button>'
        candidates = MarkupScanner(['title']).scan(content)

        assert len(candidates) == 1
        candidate = candidates[0]
        assert candidate.kind == TextKind.MARKUP_ATTRIBUTE_VALUE
        assert candidate.text == 'Save file'
        assert candidate.attribute_name == 'title'
        assert content[candidate.token_start:candidate.token_end] == 'title="Save file"'

    def test_attribute_not_in_allow_list(self):
        assert MarkupScanner(['alt']).scan('<button title="Save file"></button>') == []

    def test_bound_and_prefixed_attributes_are_ignored(self):
        content = (
            '<a :title="label"></a>'
            '<a v-bind:title="other"></a>'
            '<a data-title="Data text"></a>'
            '<a title="{{ name }}"></a>'
            '<a title="$t(\'k\')"></a>'
        )
        assert MarkupScanner(['title']).scan(content) == []

    def test_interpolated_text_nodes_are_skipped(self):
        content = '<p>Hello {{ name }}</p><p>{{ $t("a") }}</p>'
        assert MarkupScanner().scan(content) == []

    def test_text_is_trimmed(self):
        content = '<p>\n    Welcome back\n  </p>'
        candidates = MarkupScanner().scan(content)
        assert candidates[0].text == 'Welcome back'
        assert content[candidates[0].start:candidates[0].end] == 'Welcome back'

    def test_first_occurrence_only(self):
        content = '<p>Close</p><span>Close</span>'
        candidates = MarkupScanner().scan(content)
        assert len(candidates) == 1
        assert candidates[0].start == content.index('Close')

    def test_same_text_in_text_and_attribute_reported_once(self):
        content = '<p>Save file</p><button title="Save file"></button>'
        candidates = MarkupScanner(['title']).scan(content)
        assert [c.kind for c in candidates] == [TextKind.PLAIN_MARKUP_TEXT]

    def test_comments_and_embedded_blocks_are_skipped(self):
        content = '<!-- <p>Old text</p> --><script>var a = 1 > 0 ? 2 : 3;</script><p>Kept text</p>'
        candidates = MarkupScanner().scan(content)
        assert [c.text for c in candidates] == ['Kept text']


class TestTokenizeStrings:
    """Test cases for tokenize_strings."""

    def test_quote_kinds(self):
        literals = list(tokenize_strings('a("one"); b(\'two\'); c(`three`)'))
        assert [(lit.quote, lit.value) for lit in literals] == [
            ('"', 'one'), ("'", 'two'), ('`', 'three'),
        ]

    def test_escaped_quotes(self):
        literals = list(tokenize_strings(r'x = "say \"hi\" now"'))
        assert literals[0].value == r'say \"hi\" now'

    def test_comments_are_skipped(self):
        content = '// "line comment"\n/* "block comment" */\nx = "real"'
        assert [lit.value for lit in tokenize_strings(content)] == ['real']

    def test_template_interpolation(self):
        literals = list(tokenize_strings('x = `Hello ${user.name + "!"} there`'))
        assert len(literals) == 1
        assert literals[0].has_interpolation

    def test_multiline_template(self):
        literals = list(tokenize_strings('x = `first\nsecond`'))
        assert literals[0].value == 'first\nsecond'

    def test_single_quote_broken_by_newline(self):
        literals = list(tokenize_strings("x = 'broken\ny = \"fine text\""))
        assert [lit.value for lit in literals] == ['fine text']

    def test_skip_balanced(self):
        content = "t('k', fmt(x), ')') + 1"
        assert skip_balanced(content, 2, '(', ')') == content.index(' + 1')
        assert skip_balanced('{ a: `}${b}` }', 1, '{', '}') == 14
        assert skip_balanced("t('k', (x)", 2, '(', ')') is None


class TestScriptScanner:
    """Test cases for ScriptScanner."""

    def test_translation_argument_excluded(self):
        """Only the raw literal is reported, not the t(...) argument."""
        content = 'const x = t(\'greeting.hello\'); const y = "Raw Text";'
        candidates = ScriptScanner().scan(content)

        assert len(candidates) == 1
        candidate = candidates[0]
        assert candidate.text == 'Raw Text'
        assert candidate.kind == TextKind.SCRIPT_STRING_LITERAL
        assert candidate.quote == '"'
        assert content[candidate.token_start:candidate.token_end] == '"Raw Text"'
        assert content[candidate.start:candidate.end] == 'Raw Text'

    def test_translation_call_variants(self):
        content = (
            "this.$t('Some key text'); i18n.t(\"Other key text\"); "
            "i18n.global.t('Third key text')"
        )
        assert ScriptScanner().scan(content) == []

    def test_module_specifiers(self):
        content = (
            "import Foo from 'some module';\n"
            "import 'side effect module';\n"
            "const x = require('required module');\n"
            "const y = import('lazy module');\n"
        )
        assert ScriptScanner().scan(content) == []

    def test_identifiers_paths_and_urls(self):
        content = (
            "a = 'primary'; b = '/api/users'; c = './styles.css'; "
            "d = 'https://example.com/x y'; e = 'logo.png'"
        )
        assert ScriptScanner().scan(content) == []

    def test_interpolated_template_skipped(self):
        assert ScriptScanner().scan('msg = `Hello ${name} there`') == []

    def test_plain_template_literal(self):
        candidates = ScriptScanner().scan('msg = `Welcome aboard`')
        assert [c.quote for c in candidates] == ['`']

    def test_first_occurrence_only(self):
        content = 'a = "Try again"; b = "Try again";'
        candidates = ScriptScanner().scan(content)
        assert len(candidates) == 1
        assert candidates[0].start == content.index('Try again')


class TestGenericScanner:
    """Test cases for GenericScanner."""

    def test_quoted_strings(self):
        content = 'label: "Sign in" hint: \'Forgot password\''
        candidates = GenericScanner().scan(content)
        assert [c.text for c in candidates] == ['Sign in', 'Forgot password']
        assert [c.quote for c in candidates] == ['"', "'"]

    def test_translation_calls_skipped(self):
        assert GenericScanner().scan('"{{ $t(\'x\') }}"') == []

    def test_sorted_by_start(self):
        content = '\'First one\' "Second one"'
        candidates = GenericScanner().scan(content)
        assert [c.text for c in candidates] == ['First one', 'Second one']


class TestStyleAndRegistry:
    """Test cases for StyleScanner and get_scanner."""

    def test_style_reports_nothing(self):
        assert StyleScanner().scan('a::after { content: "Read more"; }') == []

    def test_registry(self):
        assert isinstance(get_scanner(DocumentKind.MARKUP, ['title']), MarkupScanner)
        assert isinstance(get_scanner(DocumentKind.SCRIPT), ScriptScanner)
        assert isinstance(get_scanner(DocumentKind.STYLE), StyleScanner)
        assert isinstance(get_scanner(DocumentKind.GENERIC), GenericScanner)
        assert isinstance(get_scanner(DocumentKind.COMPOSITE), GenericScanner)

    def test_attribute_names_are_passed(self):
        assert get_scanner(DocumentKind.MARKUP, ['alt']).attribute_names == ['alt']
