import pytest

from ftptube.services.utils.ftp_client import parse_list_line
from ftptube.services.utils.ftp_helpers import (
    is_text_file,
    join_remote_path,
    resolve_folder,
    session_base,
    validate_file_name,
)


class TestValidateFileName:
    @pytest.mark.parametrize("name", ["notes.txt", "archive.tar.gz", "my file.bin", ".hidden"])
    def test_accepts_plain_names(self, name):
        assert validate_file_name(name) == name

    @pytest.mark.parametrize("name", ["../etc/passwd", "..", "a..b", "dir/file.txt", "/abs", "win\\path"])
    def test_rejects_traversal_and_separators(self, name):
        with pytest.raises(ValueError, match="Invalid file name"):
            validate_file_name(name)

    @pytest.mark.parametrize("name", ["", "   "])
    def test_rejects_empty(self, name):
        with pytest.raises(ValueError, match="Missing file name"):
            validate_file_name(name)


class TestRemotePaths:
    def test_root_session_base_is_empty(self):
        assert session_base("/") == ""
        assert session_base("") == ""
        assert session_base("/docs") == "/docs"

    def test_join_at_root(self):
        assert join_remote_path("/", "a.txt") == "/a.txt"

    def test_join_in_subfolder_collapses_slashes(self):
        assert join_remote_path("/docs/", "a.txt") == "/docs/a.txt"
        assert join_remote_path("//docs", "a.txt") == "/docs/a.txt"

    def test_resolve_relative_folder(self):
        assert resolve_folder("/docs", "reports") == "/docs/reports"
        assert resolve_folder("/", "reports") == "/reports"

    def test_resolve_absolute_folder_used_as_is(self):
        assert resolve_folder("/docs", "/srv/data") == "/srv/data"


class TestIsTextFile:
    @pytest.mark.parametrize("name", ["notes.txt", "README.MD", "app.js", "types.ts", "index.html", "site.css", "data.json"])
    def test_text_extensions(self, name):
        assert is_text_file(name) is True

    @pytest.mark.parametrize("name", ["photo.png", "archive.zip", "Makefile", "notes.txt.gz", "json"])
    def test_binary_or_unknown(self, name):
        assert is_text_file(name) is False


class TestParseListLine:
    def test_unix_file(self):
        line = "-rw-r--r--    1 ftp      ftp          1024 Jan 10 12:30 notes.txt"
        assert parse_list_line(line) == {"name": "notes.txt", "size": 1024, "type": 1}

    def test_unix_directory_has_zero_size(self):
        line = "drwxr-xr-x    2 ftp      ftp          4096 Jan 10 12:30 reports"
        assert parse_list_line(line) == {"name": "reports", "size": 0, "type": 2}

    def test_unix_name_with_spaces(self):
        line = "-rw-r--r--    1 ftp      ftp            10 Mar  3  2023 my summer notes.txt"
        assert parse_list_line(line)["name"] == "my summer notes.txt"

    def test_symlink_is_not_a_plain_file(self):
        line = "lrwxrwxrwx    1 ftp      ftp             7 Jan 10 12:30 latest -> v2.0.1"
        assert parse_list_line(line) == {"name": "latest", "size": 0, "type": 2}

    @pytest.mark.parametrize(
        "line,expected",
        [
            ("drwxr-xr-x   2 owner     4096 Jan 10 12:30 sub", {"name": "sub", "size": 0, "type": 2}),
            ("-rw-r--r--   1 owner     1234 Jan 10 12:30 a.txt", {"name": "a.txt", "size": 1234, "type": 1}),
            ("-rw-r--r--   1 root      88 Dec 31  2022 old log.txt", {"name": "old log.txt", "size": 88, "type": 1}),
        ],
    )
    def test_unix_without_group_column(self, line, expected):
        assert parse_list_line(line) == expected

    def test_numeric_owner_and_group(self):
        line = "-rw-r--r--    1 1000     50           2048 Feb  2 09:05 data.bin"
        assert parse_list_line(line) == {"name": "data.bin", "size": 2048, "type": 1}

    def test_acl_marker_on_permissions(self):
        line = "drwxr-xr-x+   3 ftp      ftp          4096 Jan 10 12:30 shared"
        assert parse_list_line(line) == {"name": "shared", "size": 0, "type": 2}

    def test_dos_file_and_directory(self):
        assert parse_list_line("01-15-24  09:12AM             2,048 report.pdf") == {
            "name": "report.pdf",
            "size": 2048,
            "type": 1,
        }
        assert parse_list_line("01-15-24  09:12AM       <DIR>          archive") == {
            "name": "archive",
            "size": 0,
            "type": 2,
        }

    @pytest.mark.parametrize(
        "line",
        [
            "",
            "total 12",
            "drwxr-xr-x    2 ftp      ftp          4096 Jan 10 12:30 .",
            "drwxr-xr-x    2 ftp      ftp          4096 Jan 10 12:30 ..",
        ],
    )
    def test_skips_noise(self, line):
        assert parse_list_line(line) is None
