"""Tests for the domain list contract and loader."""

from pathlib import Path

import pytest

from core.domain.domain_list import domain_sort_key, parse_domain_list, sort_domains
from core.resources_loader import DEFAULT_DOMAINS_FILE, load_domain_list


class TestParseDomainList:
    def test_trims_and_drops_empty_lines(self):
        text = "  b.example.com  \n\n\t\na.example.com\n"
        assert parse_domain_list(text) == ["a.example.com", "b.example.com"]

    def test_skips_comment_lines(self):
        text = "# header\nexample.com\n  # indented comment\n"
        assert parse_domain_list(text) == ["example.com"]

    def test_deduplicates(self):
        text = "example.com\nexample.com\n example.com \n"
        assert parse_domain_list(text) == ["example.com"]

    def test_empty_text(self):
        assert parse_domain_list("") == []

    def test_case_is_preserved(self):
        assert parse_domain_list("OneDrive.Live.com\n") == ["OneDrive.Live.com"]


class TestReverseLabelOrdering:
    def test_sort_key_reverses_labels(self):
        assert domain_sort_key("a.b.example.com") == ("com", "example", "b", "a")

    def test_subdomains_group_under_parent(self):
        domains = ["c.example.com", "b.example.org", "a.b.example.com", "example.com", "aa.example.net"]
        assert sort_domains(domains) == [
            "example.com",
            "a.b.example.com",
            "c.example.com",
            "aa.example.net",
            "b.example.org",
        ]

    def test_orders_by_suffix_not_full_string(self):
        # Alphabetically "a.zzz.com" < "b.aaa.com"; by reversed labels the
        # registrable domain decides.
        assert sort_domains(["a.zzz.com", "b.aaa.com"]) == ["b.aaa.com", "a.zzz.com"]

    def test_sorting_is_idempotent(self):
        once = sort_domains(["x.example.com", "example.org", "a.example.com", "example.com"])
        assert sort_domains(once) == once
        assert parse_domain_list("\n".join(once)) == once


class TestLoadDomainList:
    def test_bundled_list_is_sorted_and_unique(self):
        domains = load_domain_list()
        assert domains
        assert len(domains) == len(set(domains))
        assert domains == sort_domains(domains)
        assert "onedrive.live.com" in domains

    def test_bundled_file_ships_with_package(self):
        assert DEFAULT_DOMAINS_FILE.is_file()

    def test_custom_path(self, tmp_path: Path):
        path = tmp_path / "domains.txt"
        path.write_text("b.test\na.test\nb.test\n", encoding="utf-8")
        assert load_domain_list(path) == ["a.test", "b.test"]

    def test_missing_path_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_domain_list(tmp_path / "nope.txt")
