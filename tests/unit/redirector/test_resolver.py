"""(host, path) → Entry resolution tests.

Tests:
  - Exact match beats root, root beats wildcard
  - Root fallback and wildcard fallback scenarios
  - Unknown hosts and hosts with no usable entry resolve to None
  - Port stripping and case-insensitive hosts
  - Entries with an empty redirect are skipped
  - Idempotence
"""

from __future__ import annotations

import pytest

from simple_redirector.mapping import Entry, HostMap, MappingTable, parse, resolve

EXACT = Entry('https://exact.example')
ROOT = Entry('https://root.example')
WILD = Entry('https://wild.example')


def _table(**host_maps: dict[str, Entry]) -> MappingTable:
    return MappingTable({host: HostMap(entries) for host, entries in host_maps.items()})


@pytest.fixture
def full_table():
    return _table(testhost={'/exact': EXACT, '/': ROOT, '*': WILD})


# =====================================================================
# Precedence
# =====================================================================


class TestPrecedence:
    def test_exact_beats_root_and_wildcard(self, full_table):
        result = resolve(full_table, 'testhost', '/exact')
        assert result.entry == EXACT
        assert result.source == 'exact'

    def test_root_beats_wildcard(self, full_table):
        result = resolve(full_table, 'testhost', '/other')
        assert result.entry == ROOT
        assert result.source == 'root'

    def test_wildcard_when_no_root(self):
        table = _table(testhost={'/exact': EXACT, '*': WILD})
        result = resolve(table, 'testhost', '/other')
        assert result.entry == WILD
        assert result.source == 'wildcard'

    def test_none_when_no_fallback(self):
        table = _table(testhost={'/exact': EXACT})
        assert resolve(table, 'testhost', '/other') is None

    def test_root_path_request_is_exact(self, full_table):
        result = resolve(full_table, 'testhost', '/')
        assert result.entry == ROOT
        assert result.source == 'exact'

    def test_empty_redirect_is_skipped(self):
        table = _table(testhost={'/exact': Entry(''), '/': Entry(''), '*': WILD})
        result = resolve(table, 'testhost', '/exact')
        assert result.entry == WILD


# =====================================================================
# Scenarios
# =====================================================================


class TestScenarios:
    def test_root_fallback(self):
        table = parse(
            'mapping:\n'
            '  testhost:\n'
            '    "/my-path": {redirect: "https://localhost:8081"}\n'
            '    "/": {redirect: "https://localhost:8082"}\n'
        )
        assert resolve(table, 'testhost', '/my-path').entry.redirect == 'https://localhost:8081'
        assert resolve(table, 'testhost', '/anything-else').entry.redirect == 'https://localhost:8082'

    def test_wildcard_only(self):
        table = parse(
            'mapping:\n'
            '  testhost:\n'
            '    "*": {redirect: "https://localhost:8082"}\n'
        )
        result = resolve(table, 'testhost', '/whatever')
        assert result.entry.redirect == 'https://localhost:8082'
        assert result.source == 'wildcard'


# =====================================================================
# Host handling
# =====================================================================


class TestHostHandling:
    def test_unknown_host(self, full_table):
        assert resolve(full_table, 'n/a', '') is None
        assert resolve(full_table, 'other.example', '/exact') is None

    @pytest.mark.parametrize('host', ['testhost:8080', 'TestHost', 'TESTHOST:443', ' testhost '])
    def test_port_and_case_ignored(self, full_table, host):
        assert resolve(full_table, host, '/exact').entry == EXACT

    def test_ipv6_host(self):
        table = _table(**{'::1': {'/': ROOT}})
        assert resolve(table, '[::1]:8080', '/').entry == ROOT


class TestIdempotence:
    @pytest.mark.parametrize('path', ['/exact', '/other', '/'])
    def test_repeat_resolution_is_identical(self, full_table, path):
        first = resolve(full_table, 'testhost', path)
        second = resolve(full_table, 'testhost', path)
        assert first == second
        assert first.entry is second.entry


# =====================================================================
# Matched rule key
# =====================================================================


class TestMatchedKey:
    @pytest.mark.parametrize('path,key', [
        ('/exact', '/exact'),
        ('/other', '/'),
        ('/', '/'),
    ])
    def test_key_names_matched_rule(self, full_table, path, key):
        assert resolve(full_table, 'testhost', path).key == key

    def test_wildcard_key(self):
        table = _table(testhost={'*': WILD})
        assert resolve(table, 'testhost', '/deep/path').key == '*'
