"""Tests for reading entries back and the inspector CLI."""

import pytest

from odebug.cli import main
from odebug.formatter import SEPARATOR_LINE, format_entry
from odebug.inspector import (
    StoredEntry,
    filter_by_header,
    list_log_files,
    parse_entries,
    read_entries,
    search_entries,
)
from odebug.models import Location, LogEntry
from odebug.sink import FileSink


def _write(path, *entries):
    sink = FileSink()
    for message, headers, line in entries:
        entry = LogEntry(message, headers, path.name, Location("app/main.py", line))
        sink.append(path, format_entry(entry))


@pytest.fixture
def log_dir(tmp_path):
    d = tmp_path / "logs"
    d.mkdir()
    _write(
        d / "debug.log",
        ("hello", (), 1),
        ("two\nlines", ("startup",), 2),
    )
    _write(
        d / "net.log",
        ("sent payload", ("net", "send"), 10),
        ("retrying", ("net", "retry"), 11),
    )
    (d / "nested").mkdir()
    return d


class TestParseEntries:
    def test_round_trips_sink_output(self, log_dir):
        entries = read_entries(str(log_dir), "debug.log")
        assert entries == [
            StoredEntry("app/main.py:1", (), "hello"),
            StoredEntry("app/main.py:2", ("startup",), "two\nlines"),
        ]

    def test_skips_foreign_lines(self):
        text = (
            "written by something else\n"
            f"{SEPARATOR_LINE}\n[at x.py:3]\n> a > b\n{SEPARATOR_LINE}\nbody\n\n"
        )
        assert parse_entries(text) == [StoredEntry("x.py:3", ("a", "b"), "body")]

    def test_separator_inside_message_kept(self):
        text = f"{SEPARATOR_LINE}\n[at x.py:3]\n{SEPARATOR_LINE}\nabove\n{SEPARATOR_LINE}\nbelow\n\n"
        entries = parse_entries(text)
        assert len(entries) == 1
        assert entries[0].message == f"above\n{SEPARATOR_LINE}\nbelow"

    def test_empty(self):
        assert parse_entries("") == []

    def test_render_matches_written_block(self, log_dir):
        entry = read_entries(str(log_dir), "net.log")[0]
        assert entry.render() == "\n".join([
            SEPARATOR_LINE,
            "[at app/main.py:10]",
            "> net > send",
            SEPARATOR_LINE,
            "sent payload",
        ])


class TestQueries:
    def test_list_files_only(self, log_dir):
        assert list_log_files(str(log_dir)) == ["debug.log", "net.log"]

    def test_list_missing_directory(self, tmp_path):
        assert list_log_files(str(tmp_path / "nope")) == []

    def test_read_missing(self, log_dir):
        with pytest.raises(FileNotFoundError):
            read_entries(str(log_dir), "absent.log")

    def test_filter_by_header(self, log_dir):
        entries = read_entries(str(log_dir), "net.log")
        assert [e.message for e in filter_by_header(entries, "retry")] == ["retrying"]
        assert len(filter_by_header(entries, "net")) == 2

    def test_search_message(self, log_dir):
        results = search_entries(str(log_dir), "payload")
        assert results == [("net.log", StoredEntry("app/main.py:10", ("net", "send"), "sent payload"))]

    def test_search_header(self, log_dir):
        results = search_entries(str(log_dir), "startup")
        assert [(f, e.location) for f, e in results] == [("debug.log", "app/main.py:2")]

    def test_search_no_matches(self, log_dir):
        assert search_entries(str(log_dir), "zzz") == []


class TestCli:
    def test_list(self, log_dir, capsys):
        assert main(["--dir", str(log_dir), "--list"]) == 0
        out = capsys.readouterr().out
        assert "debug.log  (2 entries)" in out
        assert "net.log  (2 entries)" in out

    def test_list_empty(self, tmp_path, capsys):
        assert main(["--dir", str(tmp_path), "--list"]) == 0
        assert "No log files found." in capsys.readouterr().out

    def test_read(self, log_dir, capsys):
        assert main(["--dir", str(log_dir), "--read", "net.log"]) == 0
        out = capsys.readouterr().out
        assert "sent payload" in out
        assert "retrying" in out

    def test_read_with_header(self, log_dir, capsys):
        assert main(["--dir", str(log_dir), "--read", "net.log", "--header", "retry"]) == 0
        out = capsys.readouterr().out
        assert "retrying" in out
        assert "sent payload" not in out

    def test_read_missing(self, log_dir, capsys):
        assert main(["--dir", str(log_dir), "--read", "absent.log"]) == 1
        assert "File not found" in capsys.readouterr().err

    def test_search_reports_location_and_headers(self, log_dir, capsys):
        assert main(["--dir", str(log_dir), "--search", "payload"]) == 0
        out = capsys.readouterr().out
        assert "[net.log] app/main.py:10  > net > send  sent payload" in out

    def test_search_no_matches(self, log_dir, capsys):
        assert main(["--dir", str(log_dir), "--search", "zzz"]) == 0
        assert "No matches found" in capsys.readouterr().out

    def test_where_uses_config(self, tmp_path, monkeypatch, capsys):
        config = tmp_path / "odebug.yaml"
        config.write_text(f"output_to_build_dir: true\ntarget_dir: {tmp_path / 'art'}\n")
        for key in ("ODEBUG_OUTPUT_TO_BUILD_DIR", "ODEBUG_TARGET_DIR"):
            monkeypatch.delenv(key, raising=False)
        assert main(["--config", str(config), "--where"]) == 0
        assert capsys.readouterr().out.strip() == str(tmp_path / "art" / "odebug")
        assert (tmp_path / "art" / "odebug").is_dir()

    def test_requires_an_action(self):
        with pytest.raises(SystemExit):
            main(["--dir", "."])
