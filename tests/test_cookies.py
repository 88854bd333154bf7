"""Tests for Set-Cookie parsing and cookie installation."""

from unittest.mock import AsyncMock

import pytest
from docproxy.cookies import (
    CookieRecord,
    SameSite,
    install_cookies,
    map_set_cookie,
    parse_set_cookie_line,
)


class TestMapSetCookie:
    """Tests for map_set_cookie input normalization."""

    def test_absent_header_yields_nothing(self):
        """Test that a missing header produces no records."""
        assert map_set_cookie(None, "https", "example.com") == []

    def test_empty_string_yields_nothing(self):
        """Test that an empty header produces no records."""
        assert map_set_cookie("", "https", "example.com") == []
        assert map_set_cookie(" ; ;", "https", "example.com") == []

    def test_single_string_treated_as_one_line(self):
        """Test that a plain string is one Set-Cookie line."""
        records = map_set_cookie("sid=abc; Path=/app", "https", "example.com")

        assert len(records) == 1
        assert records[0].name == "sid"
        assert records[0].value == "abc"
        assert records[0].path == "/app"

    def test_multiple_lines_keep_order(self):
        """Test that each line becomes a record in order."""
        records = map_set_cookie(["a=1", "b=2", "c=3"], "https", "example.com")

        assert [r.name for r in records] == ["a", "b", "c"]

    def test_malformed_lines_are_skipped(self):
        """Test that bad lines do not stop later lines."""
        records = map_set_cookie(
            ["", "novalue", "=orphan", "good=yes"],
            "https",
            "example.com",
        )

        assert len(records) == 1
        assert records[0].name == "good"

    def test_non_string_entries_are_skipped(self):
        """Test that non-string entries are ignored."""
        records = map_set_cookie([None, 42, "ok=1"], "https", "example.com")  # type: ignore[list-item]

        assert [r.name for r in records] == ["ok"]


class TestParseSetCookieLine:
    """Tests for per-line parsing rules."""

    def test_value_may_contain_equals(self):
        """Test that only the first '=' splits name from value."""
        record = parse_set_cookie_line("token=a=b==; Path=/", "https", "example.com")

        assert record is not None
        assert record.value == "a=b=="

    def test_double_quotes_stripped_once(self):
        """Test that one layer of double quotes is removed."""
        record = parse_set_cookie_line('q=""quoted""', "https", "example.com")

        assert record is not None
        assert record.value == '"quoted"'

    def test_single_quotes_stripped(self):
        """Test that single quotes are removed."""
        record = parse_set_cookie_line("q='v'", "https", "example.com")

        assert record is not None
        assert record.value == "v"

    def test_mismatched_quotes_kept(self):
        """Test that mismatched quotes are left alone."""
        record = parse_set_cookie_line("q=\"v'", "https", "example.com")

        assert record is not None
        assert record.value == "\"v'"

    def test_lone_quote_kept(self):
        """Test that a single quote character is not treated as a pair."""
        record = parse_set_cookie_line('q="', "https", "example.com")

        assert record is not None
        assert record.value == '"'

    def test_empty_value_allowed(self):
        """Test that an empty value still produces a record."""
        record = parse_set_cookie_line("flag=", "https", "example.com")

        assert record is not None
        assert record.value == ""

    def test_name_and_value_trimmed(self):
        """Test whitespace around name and value is removed."""
        record = parse_set_cookie_line("  sid =  abc  ; Secure", "https", "example.com")

        assert record is not None
        assert record.name == "sid"
        assert record.value == "abc"

    def test_flags_case_insensitive(self):
        """Test Secure and HttpOnly flags in any case."""
        record = parse_set_cookie_line("a=1; SECURE; httpOnly", "https", "example.com")

        assert record is not None
        assert record.secure is True
        assert record.http_only is True

    def test_flags_default_false(self):
        """Test flags default to off."""
        record = parse_set_cookie_line("a=1", "https", "example.com")

        assert record is not None
        assert record.secure is False
        assert record.http_only is False
        assert record.same_site is None

    def test_same_site_canonicalized(self):
        """Test SameSite values map to canonical case."""
        for raw, expected in [("lax", SameSite.LAX), ("STRICT", SameSite.STRICT), ("None", SameSite.NONE)]:
            record = parse_set_cookie_line(f"a=1; SameSite={raw}", "https", "example.com")
            assert record is not None
            assert record.same_site is expected

    def test_unknown_same_site_left_unset(self):
        """Test unrecognized SameSite values are ignored."""
        record = parse_set_cookie_line("a=1; SameSite=sometimes", "https", "example.com")

        assert record is not None
        assert record.same_site is None

    def test_unknown_attributes_ignored(self):
        """Test Expires, Max-Age and others do not break parsing."""
        record = parse_set_cookie_line(
            "a=1; Expires=Wed, 21 Oct 2026 07:28:00 GMT; Max-Age=3600; Priority=High",
            "https",
            "example.com",
        )

        assert record is not None
        assert record.name == "a"
        assert record.path == "/"

    def test_path_defaults_to_root(self):
        """Test a missing Path attribute defaults to '/'."""
        record = parse_set_cookie_line("a=1", "https", "example.com")

        assert record is not None
        assert record.path == "/"

    def test_empty_path_becomes_root(self):
        """Test an explicit empty Path never leaves the path empty."""
        record = parse_set_cookie_line("a=1; Path=", "https", "example.com")

        assert record is not None
        assert record.path == "/"


class TestDomainAndHostOnly:
    """Tests for domain versus host-only cookies."""

    def test_no_domain_is_host_only(self):
        """Test cookies without Domain get a url and no domain."""
        record = parse_set_cookie_line("a=1; Path=/docs", "https", "example.com")

        assert record is not None
        assert record.domain is None
        assert record.url == "https://example.com/docs"
        assert record.host_only is True

    def test_domain_normalized(self):
        """Test Domain is lower-cased with its leading dot removed."""
        record = parse_set_cookie_line("a=1; Domain=.Example.COM", "https", "www.example.com")

        assert record is not None
        assert record.domain == "example.com"
        assert record.url is None

    def test_only_one_leading_dot_removed(self):
        """Test that exactly one leading dot is stripped."""
        record = parse_set_cookie_line("a=1; Domain=..example.com", "https", "example.com")

        assert record is not None
        assert record.domain == ".example.com"

    def test_empty_domain_is_host_only(self):
        """Test an empty Domain attribute falls back to host-only."""
        record = parse_set_cookie_line("a=1; Domain=", "https", "example.com")

        assert record is not None
        assert record.domain is None
        assert record.url == "https://example.com/"

    def test_scheme_trailing_colon_stripped(self):
        """Test schemes given as 'http:' build a valid origin."""
        record = parse_set_cookie_line("a=1", "http:", "example.com")

        assert record is not None
        assert record.url == "http://example.com/"

    def test_exactly_one_of_domain_or_url(self):
        """Test every finalized record has a domain or a url, never both."""
        lines = [
            "a=1",
            "b=2; Domain=example.com",
            "__Host-c=3; Domain=example.com",
            "d=4; Domain=",
            "__Secure-e=5; Domain=.example.com; SameSite=None",
        ]
        for record in map_set_cookie(lines, "https", "example.com"):
            assert (record.domain is None) != (record.url is None)


class TestPrefixRules:
    """Tests for __Secure- and __Host- prefixes and SameSite=None."""

    def test_secure_prefix_forces_secure(self):
        """Test __Secure- cookies are always secure."""
        record = parse_set_cookie_line("__Secure-foo=bar", "https", "example.com")

        assert record is not None
        assert record.secure is True

    def test_host_prefix_overrides_domain_and_path(self):
        """Test __Host- cookies become secure, host-only and root-scoped."""
        record = parse_set_cookie_line(
            "__Host-foo=bar; Domain=example.com; Path=/deep",
            "https",
            "example.com",
        )

        assert record is not None
        assert record.secure is True
        assert record.path == "/"
        assert record.domain is None
        assert record.url == "https://example.com/"

    def test_prefix_is_case_sensitive(self):
        """Test lower-case prefixes are ordinary names."""
        record = parse_set_cookie_line("__secure-foo=bar", "https", "example.com")

        assert record is not None
        assert record.secure is False

    def test_same_site_none_forces_secure(self):
        """Test SameSite=None without Secure becomes secure."""
        record = parse_set_cookie_line("a=1; SameSite=None", "https", "example.com")

        assert record is not None
        assert record.secure is True
        assert record.same_site is SameSite.NONE


class TestCookieRecord:
    """Tests for CookieRecord browser serialization."""

    def test_host_only_cookie_uses_url_without_path(self):
        """Test host-only cookies emit url and omit path."""
        record = CookieRecord(name="a", value="1", path="/x", url="https://example.com/x")

        cookie = record.to_browser_cookie()

        assert cookie["url"] == "https://example.com/x"
        assert "path" not in cookie
        assert "domain" not in cookie

    def test_domain_cookie_uses_domain_and_path(self):
        """Test domain cookies emit domain and path."""
        record = CookieRecord(name="a", value="1", domain="example.com", path="/x", http_only=True)

        cookie = record.to_browser_cookie()

        assert cookie == {
            "name": "a",
            "value": "1",
            "domain": "example.com",
            "path": "/x",
            "secure": False,
            "httpOnly": True,
        }

    def test_same_site_emitted_when_set(self):
        """Test sameSite is only present when set."""
        record = CookieRecord(name="a", value="1", url="https://e.com/", same_site=SameSite.LAX)

        assert record.to_browser_cookie()["sameSite"] == "Lax"


class TestInstallCookies:
    """Tests for bulk-then-individual cookie installation."""

    @pytest.fixture
    def records(self):
        """Two host-only records."""
        return map_set_cookie(["a=1", "b=2"], "https", "example.com")

    @pytest.mark.asyncio
    async def test_bulk_install(self, records):
        """Test that a successful bulk call installs everything at once."""
        store = AsyncMock()

        installed = await install_cookies(store, records)

        assert installed == 2
        store.add_cookies.assert_awaited_once()
        sent = store.add_cookies.await_args.args[0]
        assert [c["name"] for c in sent] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_falls_back_to_individual_install(self, records):
        """Test that a rejected batch is retried one cookie at a time."""
        store = AsyncMock()
        store.add_cookies.side_effect = [Exception("batch rejected"), None, None]

        installed = await install_cookies(store, records)

        assert installed == 2
        assert store.add_cookies.await_count == 3

    @pytest.mark.asyncio
    async def test_individual_failures_are_not_fatal(self, records):
        """Test that a failing cookie does not stop the others."""
        store = AsyncMock()
        store.add_cookies.side_effect = [Exception("batch rejected"), Exception("bad cookie"), None]

        installed = await install_cookies(store, records)

        assert installed == 1

    @pytest.mark.asyncio
    async def test_no_records_no_calls(self):
        """Test that nothing is sent for an empty batch."""
        store = AsyncMock()

        assert await install_cookies(store, []) == 0
        store.add_cookies.assert_not_awaited()
