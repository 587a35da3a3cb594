"""Tests for UsageAnalyzer and the key-usage helpers."""

import random
import tempfile
from pathlib import Path

from i18n_sweep.core.analyzer import (
    UsageAnalyzer,
    UsageLocation,
    extract_keys,
    find_source_files,
    keys_used_in_content,
)
from i18n_sweep.core.key_store import LocaleStore
from i18n_sweep.utils.config import Config


def make_project(tmpdir, files):
    root = Path(tmpdir)
    for name, content in files.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding='utf-8')
    return root


class TestExtractKeys:
    """Test cases for translation call extraction."""

    def test_call_variants(self):
        text = (
            "$t('a.one'); t(\"a.two\"); i18n.t(`a.three`); "
            "i18n.global.t('a.four', { n: 1 }); useTranslation().t('a.five')"
        )
        assert extract_keys(text) == ['a.one', 'a.two', 'a.three', 'a.four', 'a.five']

    def test_dynamic_keys_skipped(self):
        assert extract_keys("t(`items.${kind}`)") == []

    def test_other_functions_ignored(self):
        assert extract_keys("format('x'); list.at('y'); st('z')") == []

    def test_first_occurrence_order(self):
        assert extract_keys("t('b'); t('a'); t('b')") == ['b', 'a']

    def test_i18n_blocks(self):
        text = (
            '<template><p>{{ $t("hello") }}</p></template>\n'
            '<i18n>{"en": {"local": {"key": "Local"}}, "tr": {"other": "Diğer"}}</i18n>'
        )
        assert keys_used_in_content(text, is_composite=True) == ['hello', 'local.key', 'other']
        assert keys_used_in_content(text) == ['hello']

    def test_broken_i18n_block(self):
        assert keys_used_in_content('<i18n>not json</i18n>', is_composite=True) == []


class TestFindSourceFiles:
    """Test cases for find_source_files."""

    def test_extensions_and_excludes(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = make_project(tmpdir, {
                'src/App.vue': '',
                'src/main.ts': '',
                'src/readme.md': '',
                'node_modules/lib/index.js': '',
                'i18n_backup_20240101_000000/src/App.vue': '',
            })
            files = find_source_files(root, ['.vue', '.ts', '.js'], ['node_modules'])
            assert [f.relative_to(root).as_posix() for f in files] == ['src/App.vue', 'src/main.ts']


class TestAnalyzeDocument:
    """Test cases for UsageAnalyzer.analyze_document."""

    def test_missing_and_unused(self):
        store = LocaleStore({'en': {'a': 'x', 'b': 'y'}, 'tr': {'c': 'z'}})
        text = "t('a'); t('d')"
        usage = UsageAnalyzer().analyze_document(text, 'main.js', store)

        assert usage.used_keys == ['a', 'd']
        assert usage.missing_keys == ['d']
        assert usage.unused_keys == ['b', 'c']

    def test_set_difference_laws(self):
        """missing = used - defined and unused = defined - used, for random inputs."""
        rng = random.Random(11)
        names = [f"k{i}" for i in range(12)]

        for _ in range(30):
            defined = rng.sample(names, rng.randint(0, 8))
            used = rng.sample(names, rng.randint(0, 8))
            half = len(defined) // 2
            store = LocaleStore({
                'en': {key: 'v' for key in defined[:half]},
                'de': {key: 'v' for key in defined[half:]},
            })
            text = ' '.join(f"t('{key}')" for key in used)

            usage = UsageAnalyzer().analyze_document(text, 'x.ts', store)

            assert set(usage.missing_keys) == set(used) - set(defined)
            assert set(usage.unused_keys) == set(defined) - set(used)

    def test_hardcoded_included(self):
        store = LocaleStore({'en': {}})
        usage = UsageAnalyzer().analyze_document('x = "Plain old text"', 'a.js', store)
        assert [span.text for span in usage.hardcoded] == ['Plain old text']


class TestAnalyzeCorpus:
    """Test cases for UsageAnalyzer.analyze_corpus."""

    def test_unused_key(self):
        """Only 'a' is used, so 'b' (defined in zh only) is unused."""
        store = LocaleStore({'en': {'a': 'x'}, 'zh': {'a': 'y', 'b': 'z'}})
        with tempfile.TemporaryDirectory() as tmpdir:
            root = make_project(tmpdir, {'src/main.js': "console.log(t('a'))"})
            usage = UsageAnalyzer(project_dir=root).analyze_corpus(store)

        assert usage.unused == ['b']
        assert usage.used_keys == ['a']
        assert usage.used[0].locales == ['en', 'zh']

    def test_locations(self):
        store = LocaleStore({'en': {'a': 'x'}})
        with tempfile.TemporaryDirectory() as tmpdir:
            root = make_project(tmpdir, {
                'src/A.vue': "<template>\n  <p>{{ $t('a') }}</p>\n</template>",
                'src/b.ts': "t('a')",
            })
            usage = UsageAnalyzer(project_dir=root).analyze_corpus(store)

        assert usage.used[0].used_by == [
            UsageLocation('src/A.vue', 1, 8),
            UsageLocation('src/b.ts', 0, 0),
        ]
        assert usage.files_scanned == 2
        assert usage.translation_calls == 2

    def test_undefined_keys_reported_separately(self):
        store = LocaleStore({'en': {'a': 'x'}})
        with tempfile.TemporaryDirectory() as tmpdir:
            root = make_project(tmpdir, {'main.js': "t('a'); t('ghost'); t('ghost')"})
            usage = UsageAnalyzer(project_dir=root).analyze_corpus(store)

        assert usage.used_keys == ['a']
        assert usage.undefined == {'ghost': ['main.js']}

    def test_explicit_file_list(self):
        store = LocaleStore({'en': {'a': 'x', 'b': 'y'}})
        with tempfile.TemporaryDirectory() as tmpdir:
            root = make_project(tmpdir, {'one.js': "t('a')", 'two.js': "t('b')"})
            usage = UsageAnalyzer(project_dir=root).analyze_corpus(store, [root / 'one.js'])

        assert usage.used_keys == ['a']
        assert usage.unused == ['b']

    def test_configured_extensions(self):
        config = Config()
        config.usage.extensions = ['.vue']
        store = LocaleStore({'en': {'a': 'x'}})
        with tempfile.TemporaryDirectory() as tmpdir:
            root = make_project(tmpdir, {'main.js': "t('a')"})
            usage = UsageAnalyzer(config, project_dir=root).analyze_corpus(store)

        assert usage.unused == ['a']


class TestAnalyzeProject:
    """Test cases for UsageAnalyzer.analyze_project."""

    def test_full_analysis(self):
        store = LocaleStore({'en': {'title': 'Title', 'old': 'Old'}})
        with tempfile.TemporaryDirectory() as tmpdir:
            root = make_project(tmpdir, {
                'A.vue': "<template><h1>{{ $t('title') }}</h1><p>Contact us</p></template>",
                'B.vue': "<template><p>Contact us</p><p>{{ $t('missing') }}</p></template>",
            })
            analysis = UsageAnalyzer(project_dir=root).analyze_project(store)

        assert analysis.hardcoded_count == 2
        assert analysis.repeated_texts == {'Contact us': ['A.vue', 'B.vue']}
        assert analysis.missing_keys == {'missing': ['B.vue']}
        assert analysis.usage.unused == ['old']
        assert analysis.health.translation_calls == 2
        assert analysis.health.hardcoded_count == 2


class TestReferences:
    """Test cases for reference search and rewriting."""

    def test_find_key_references(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = make_project(tmpdir, {
                'a.js': "t('home.title')",
                'b.vue': '<i18n>{"en": {"home": {"title": "x"}}}</i18n>',
                'c.js': "t('home.other')",
            })
            refs = UsageAnalyzer(project_dir=root).find_key_references('home.title')
            assert [p.name for p in refs] == ['a.js', 'b.vue']

    def test_rename_references_in_two_files(self):
        """Renaming a.b to a.c updates both referencing files."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = make_project(tmpdir, {
                'one.js': "const x = t('a.b');",
                'two.vue': '<template><p>{{ $t("a.b") }}</p></template>',
                'three.js': "t('a.bc')",
            })
            result = UsageAnalyzer(project_dir=root).rename_references('a.b', 'a.c')

            assert result.success_count == 2
            assert sorted(result.succeeded) == ['one.js', 'two.vue']
            assert (root / 'one.js').read_text() == "const x = t('a.c');"
            assert (root / 'two.vue').read_text() == '<template><p>{{ $t("a.c") }}</p></template>'
            assert (root / 'three.js').read_text() == "t('a.bc')"

    def test_inline_in_template_interpolation(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = make_project(tmpdir, {
                'A.vue': "<template><p>{{ $t('hi') }}</p><a :title=\"$t('hi')\"></a></template>\n"
                         "<script>const m = this.$t('hi')</script>",
            })
            UsageAnalyzer(project_dir=root).replace_references_with_literal('hi', "It's here")
            assert (root / 'A.vue').read_text() == (
                "<template><p>{{ \"It's here\" }}</p><a :title=\"'It\\'s here'\"></a></template>\n"
                "<script>const m = \"It's here\"</script>"
            )

    def test_inline_in_jsx(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = make_project(tmpdir, {
                'App.tsx': "const a = <p>{t('hi')}</p>; const b = t('hi', { n: 1 });",
            })
            UsageAnalyzer(project_dir=root).replace_references_with_literal('hi', 'Hello')
            assert (root / 'App.tsx').read_text() == (
                'const a = <p>{"Hello"}</p>; const b = "Hello";'
            )

    def test_inline_call_with_nested_arguments(self):
        """Extra arguments containing calls are replaced along with the call."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = make_project(tmpdir, {
                'a.js': "const m = t('hi', fmt(x)); const n = t('hi', ')');",
                'B.vue': "<template><p>{{ $t('hi', { n: count(1) }) }}</p></template>",
            })
            UsageAnalyzer(project_dir=root).replace_references_with_literal('hi', 'Hello')
            assert (root / 'a.js').read_text() == 'const m = "Hello"; const n = "Hello";'
            assert (root / 'B.vue').read_text() == '<template><p>{{ "Hello" }}</p></template>'

    def test_inline_skips_calls_inside_an_inlined_call(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = make_project(tmpdir, {'a.js': "t('hi', { other: t('hi') })"})
            UsageAnalyzer(project_dir=root).replace_references_with_literal('hi', 'Hello')
            assert (root / 'a.js').read_text() == '"Hello"'

    def test_unchanged_files_not_counted(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = make_project(tmpdir, {'a.js': "t('other')"})
            result = UsageAnalyzer(project_dir=root).rename_references(
                'a.b', 'a.c', files=[root / 'a.js']
            )
            assert result.success_count == 0
            assert result.ok
