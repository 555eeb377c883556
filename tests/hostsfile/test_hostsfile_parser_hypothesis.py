"""
Hypothesis property-based tests for hosts parse ↔ render round-trip.

The core property: for any text, parsing the rendered form of a parsed
document yields the same line model (type, address, hostnames, comment).
"""
from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from hostsdoc.core import LineType
from hostsdoc.hostsfile import parse, render


# ------------------------------------------------------------------
# Strategies
# ------------------------------------------------------------------

# Characters that exercise every classification branch: separators,
# comment markers, escapes and address-ish tokens.
_LINE_CHARS = st.sampled_from("abcXYZ019.:-_#\\ \t")
_raw_line = st.text(_LINE_CHARS, max_size=40)

_octet = st.integers(min_value=0, max_value=255)
_hostname = st.from_regex(r"[a-z0-9][a-z0-9-]{0,10}(\.[a-z]{2,5}){0,2}", fullmatch=True)


@st.composite
def address_line(draw: st.DrawFn) -> str:
    """A well-formed ``address host... [# comment]`` line."""
    address = ".".join(str(draw(_octet)) for _ in range(4))
    hostnames = draw(st.lists(_hostname, min_size=1, max_size=5))
    sep = draw(st.sampled_from([" ", "\t", "   ", " \t "]))
    line = address + sep + sep.join(hostnames)
    comment = draw(st.one_of(st.none(), st.text(st.sampled_from("abc xyz-_"), max_size=15)))
    if comment is not None:
        line += " #" + comment
    return line


@st.composite
def hosts_text(draw: st.DrawFn) -> str:
    lines = draw(st.lists(st.one_of(_raw_line, address_line()), max_size=15))
    newline = draw(st.sampled_from(["\n", "\r\n"]))
    trailing = draw(st.booleans())
    return newline.join(lines) + (newline if trailing and lines else "")


def _model(lines):
    return [(l.line_type, l.address, l.hostnames, l.comment) for l in lines]


# ------------------------------------------------------------------
# Properties
# ------------------------------------------------------------------


class TestHostsRoundTrip:

    @given(text=hosts_text())
    @settings(max_examples=300)
    def test_parse_of_render_is_identity(self, text: str):
        """parse(render(parse(t))) == parse(t) for all text."""
        first = parse(text)
        assert _model(parse(render(first))) == _model(first)

    @given(text=hosts_text())
    @settings(max_examples=200)
    def test_render_is_stable(self, text: str):
        """Rendering a re-parsed rendering changes nothing."""
        once = render(parse(text))
        assert render(parse(once)) == once

    @given(text=hosts_text())
    def test_non_address_lines_keep_raw_text(self, text: str):
        rendered = render(parse(text)).split("\n")
        for i, line in enumerate(parse(text)):
            if line.line_type is not LineType.ADDRESS:
                assert rendered[i] == line.raw

    @given(line=address_line())
    def test_generated_address_lines_are_addresses(self, line: str):
        parsed = parse(line)
        assert len(parsed) == 1
        assert parsed[0].line_type is LineType.ADDRESS
        assert parsed[0].hostnames
