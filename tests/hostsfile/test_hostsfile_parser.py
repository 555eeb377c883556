"""
Tests for hostsfile/parser.py: line classification and splitting.
"""
from hostsdoc.core import LineType
from hostsdoc.hostsfile import parse, parse_line
from hostsdoc.hostsfile.parser import split_lines


# ===========================================================
# split_lines
# ===========================================================

class TestSplitLines:

    def test_trailing_newline_is_dropped(self):
        assert split_lines("a\nb\n") == ["a", "b"]
        assert split_lines("a\nb") == ["a", "b"]

    def test_crlf_normalised(self):
        assert split_lines("a\r\nb\r\n") == ["a", "b"]

    def test_empty_text(self):
        assert split_lines("") == []

    def test_blank_lines_kept(self):
        assert split_lines("a\n\n\nb\n") == ["a", "", "", "b"]

    def test_only_one_trailing_empty_dropped(self):
        assert split_lines("a\n\n") == ["a", ""]


# ===========================================================
# parse_line
# ===========================================================

class TestParseLine:

    def test_comment(self):
        line = parse_line("# a comment")
        assert line.line_type is LineType.COMMENT
        assert line.raw == "# a comment"
        assert line.hostnames == []

    def test_indented_comment(self):
        assert parse_line("   #indented").line_type is LineType.COMMENT

    def test_empty(self):
        assert parse_line("").line_type is LineType.EMPTY
        assert parse_line(" \t ").line_type is LineType.EMPTY

    def test_whitespace_raw_is_kept(self):
        assert parse_line(" \t ").raw == " \t "

    def test_address_line(self):
        line = parse_line("127.0.0.1 localhost localhost.localdomain", 4)
        assert line.line_type is LineType.ADDRESS
        assert line.original_index == 4
        assert line.address == "127.0.0.1"
        assert line.hostnames == ["localhost", "localhost.localdomain"]
        assert line.comment == ""

    def test_tabs_and_runs_of_spaces(self):
        line = parse_line("10.0.0.1\t\tapp    db")
        assert line.hostnames == ["app", "db"]

    def test_lowercased(self):
        line = parse_line("FE80::1 MyHost")
        assert line.address == "fe80::1"
        assert line.hostnames == ["myhost"]

    def test_inline_comment(self):
        line = parse_line("10.0.0.1 app #  dev box  ")
        assert line.hostnames == ["app"]
        assert line.comment == "dev box"

    def test_inline_comment_without_space(self):
        line = parse_line("10.0.0.1 app#tagged")
        assert line.hostnames == ["app"]
        assert line.comment == "tagged"

    def test_empty_comment(self):
        line = parse_line("10.0.0.1 app #")
        assert line.line_type is LineType.ADDRESS
        assert line.comment == ""

    def test_escaped_hash_is_not_a_comment(self):
        line = parse_line(r"10.0.0.1 a\#b # real")
        assert line.hostnames == [r"a\#b"]
        assert line.comment == "real"

    def test_malformed_address_is_still_address(self):
        line = parse_line("not-an-ip somehost")
        assert line.line_type is LineType.ADDRESS
        assert line.address == "not-an-ip"

    def test_single_token_is_unknown(self):
        line = parse_line("lonely")
        assert line.line_type is LineType.UNKNOWN
        assert line.raw == "lonely"

    def test_single_token_with_comment_is_unknown(self):
        assert parse_line("10.0.0.1 # no hosts").line_type is LineType.UNKNOWN


# ===========================================================
# parse
# ===========================================================

class TestParse:

    def test_mixed_document(self):
        text = "# header\n\n127.0.0.1 localhost\nbogus\n::1 localhost ip6-localhost\n"
        lines = parse(text)
        assert [l.line_type for l in lines] == [
            LineType.COMMENT,
            LineType.EMPTY,
            LineType.ADDRESS,
            LineType.UNKNOWN,
            LineType.ADDRESS,
        ]
        assert [l.original_index for l in lines] == [0, 1, 2, 3, 4]

    def test_never_raises(self):
        assert len(parse("\x00\x01 \x02\n###\n\t\n")) == 3

    def test_same_lines_with_or_without_final_newline(self):
        assert len(parse("127.0.0.1 a\n")) == len(parse("127.0.0.1 a"))
