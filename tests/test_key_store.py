"""Tests for the in-memory locale store."""

from i18n_sweep.core.key_store import (
    LocaleStore,
    delete_key,
    get_value,
    has_node,
    holds_value,
    iter_leaf_keys,
    set_value,
)


def make_store():
    return LocaleStore({
        'en': {'home': {'title': 'Home', 'subtitle': 'Welcome'}, 'save': 'Save'},
        'tr': {'home': {'title': 'Ana Sayfa', 'subtitle': ''}},
    })


class TestMappingHelpers:
    """Test cases for the nested mapping helpers."""

    def test_iter_leaf_keys(self):
        mapping = {'a': {'b': 'x', 'c': {'d': 'y'}}, 'e': 'z', 'n': 3, 'l': ['q']}
        assert list(iter_leaf_keys(mapping)) == [('a.b', 'x'), ('a.c.d', 'y'), ('e', 'z')]

    def test_get_value(self):
        mapping = {'a': {'b': 'x'}, 'c': 'y'}
        assert get_value(mapping, 'a.b') == 'x'
        assert get_value(mapping, 'a') is None
        assert get_value(mapping, 'c.d') is None
        assert get_value(mapping, 'missing') is None

    def test_has_node(self):
        mapping = {'a': {'b': 'x'}, 'c': 'y'}
        assert has_node(mapping, 'a')
        assert has_node(mapping, 'a.b')
        assert has_node(mapping, 'c.d')
        assert not has_node(mapping, 'a.z')

    def test_holds_value(self):
        mapping = {'a': {'b': 'x'}, 'c': 'y', 'n': None, 'l': [1]}
        assert holds_value(mapping, 'c')
        assert holds_value(mapping, 'a.b')
        assert holds_value(mapping, 'n')
        assert holds_value(mapping, 'l')
        assert not holds_value(mapping, 'a')
        assert not holds_value(mapping, 'c.d')
        assert not holds_value(mapping, 'missing')

    def test_set_value_creates_parents(self):
        mapping = {}
        set_value(mapping, 'a.b.c', 'x')
        assert mapping == {'a': {'b': {'c': 'x'}}}

    def test_set_value_replaces_leaf_parent(self):
        mapping = {'a': 'leaf'}
        set_value(mapping, 'a.b', 'x')
        assert mapping == {'a': {'b': 'x'}}

    def test_delete_prunes_empty_parents(self):
        mapping = {'a': {'b': {'c': 'x'}}, 'd': 'y'}
        assert delete_key(mapping, 'a.b.c')
        assert mapping == {'d': 'y'}

    def test_delete_keeps_non_empty_parents(self):
        mapping = {'a': {'b': 'x', 'c': 'y'}}
        assert delete_key(mapping, 'a.b')
        assert mapping == {'a': {'c': 'y'}}

    def test_delete_missing(self):
        mapping = {'a': {'b': 'x'}}
        assert not delete_key(mapping, 'a.z')
        assert not delete_key(mapping, 'q.r')
        assert mapping == {'a': {'b': 'x'}}


class TestLocaleStore:
    """Test cases for LocaleStore."""

    def test_locales_and_default(self):
        store = make_store()
        assert store.locales == ['en', 'tr']
        assert store.default_locale == 'en'
        assert LocaleStore().default_locale is None

    def test_all_defined_keys(self):
        store = make_store()
        assert store.all_defined_keys() == ['home.title', 'home.subtitle', 'save']

    def test_locale_map(self):
        store = make_store()
        assert store.locale_map() == {
            'home.title': ['en', 'tr'],
            'home.subtitle': ['en', 'tr'],
            'save': ['en'],
        }

    def test_is_defined(self):
        store = make_store()
        assert store.is_defined('save')
        assert not store.is_defined('save', 'tr')
        assert store.is_defined('home.subtitle', 'tr')
        assert not store.is_defined('home')

    def test_translations_for(self):
        store = make_store()
        assert store.translations_for('save') == {'en': 'Save', 'tr': ''}

    def test_value_for(self):
        store = make_store()
        assert store.value_for('home.title') == 'Home'
        assert store.value_for('home.title', 'tr') == 'Ana Sayfa'
        assert store.value_for('save', 'tr') is None

    def test_rename_key(self):
        store = make_store()
        changed = store.rename_key('home.title', 'page.heading')
        assert changed == ['en', 'tr']
        assert store.get_value('en', 'page.heading') == 'Home'
        assert store.get_value('tr', 'page.heading') == 'Ana Sayfa'
        assert not store.is_defined('home.title')

    def test_rename_only_touches_defining_locales(self):
        store = make_store()
        assert store.rename_key('save', 'actions.save') == ['en']
        assert store.mapping('tr') == {'home': {'title': 'Ana Sayfa', 'subtitle': ''}}

    def test_copy_is_deep(self):
        store = make_store()
        clone = store.copy()
        clone.set_value('en', 'home.title', 'Changed')
        assert store.get_value('en', 'home.title') == 'Home'
