"""
Tests for DepotGate output parsing and argument builders.
"""

from p4bridge.DepotGate import commands
from p4bridge.DepotGate.parsing import count_lines, extract_change_ids, parse_info


INFO_OUTPUT = """User name: super
Client name: p4bridge-client
Client root: /workspace
Server address: perforce:1666
Server date: 2024/05/01 10:00:00 +0000 UTC
Server version: P4D/LINUX26X86_64/2023.1/2468153 (2023/05/09)
Server uptime: 12:34:56
Case Handling: sensitive"""

CHANGES_OUTPUT = """Change 12 on 2024/05/01 by alice@ws 'Rotate password for db'
Change 11 on 2024/04/30 by bob@ws 'Fix typo'

Change 10 on 2024/04/29 by carol@ws *pending* 'Draft'"""


class TestParseInfo:
    """Tests for p4 info parsing."""

    def test_parses_key_value_lines(self):
        info = parse_info(INFO_OUTPUT)

        assert info["User name"] == "super"
        assert info["Server address"] == "perforce:1666"
        assert info["Case Handling"] == "sensitive"
        assert len(info) == 8

    def test_splits_on_first_separator_only(self):
        info = parse_info("Server date: 2024/05/01 10:00:00: extra")

        assert info == {"Server date": "2024/05/01 10:00:00: extra"}

    def test_skips_lines_without_separator(self):
        info = parse_info("Server license: none\nno separator here\nTime:12:00\n")

        assert info == {"Server license": "none"}

    def test_strips_both_sides(self):
        assert parse_info("  Client root :   /ws  ") == {"Client root": "/ws"}

    def test_empty(self):
        assert parse_info("") == {}
        assert parse_info(None) == {}


class TestCountLines:
    def test_counts_non_blank_lines(self):
        assert count_lines(CHANGES_OUTPUT) == 3

    def test_whitespace_only_is_zero(self):
        assert count_lines("  \n\t\n") == 0
        assert count_lines(None) == 0


class TestExtractChangeIds:
    def test_extracts_in_order(self):
        assert extract_change_ids(CHANGES_OUTPUT) == [12, 11, 10]

    def test_only_line_starts_match(self):
        text = "Change 5 on 2024/01/01 by a@w 'x'\n  Change 6 indented\nSee Change 7"

        assert extract_change_ids(text) == [5]

    def test_no_changes(self):
        assert extract_change_ids("") == []


class TestCommandBuilders:
    """Argument vectors for each operation."""

    def test_files(self):
        assert commands.files_args("//depot/...", 5) == ["files", "-m", "5", "//depot/..."]

    def test_print_with_and_without_revision(self):
        assert commands.print_args("//depot/a.txt") == ["print", "-q", "//depot/a.txt"]
        assert commands.print_args("//depot/a.txt", 3) == ["print", "-q", "//depot/a.txt#3"]

    def test_filelog(self):
        assert commands.filelog_args("//depot/a.txt", 10) == ["filelog", "-m", "10", "//depot/a.txt"]

    def test_changes_optional_filters(self):
        assert commands.changes_args(20) == ["changes", "-m", "20"]
        assert commands.changes_args(5, status="pending", user="alice") == [
            "changes", "-m", "5", "-s", "pending", "-u", "alice",
        ]

    def test_describe(self):
        assert commands.describe_args(42) == ["describe", "-s", "42"]

    def test_sync(self):
        assert commands.sync_args("//depot/...") == ["sync", "//depot/..."]
        assert commands.sync_args("//depot/...", force=True) == ["sync", "-f", "//depot/..."]

    def test_revision_suffix(self):
        assert commands.revision_suffix(None) == ""
        assert commands.revision_suffix(7) == "#7"
        assert commands.revision_suffix(0) == "#0"
