"""
Hypothesis property-based tests for the Hosts mutation engine.

Properties:
- packing never exceeds the cap and loses no hostname
- add is idempotent
- add then remove leaves no trace of the hostname at that address
- an invalid IP never changes the rendered document
"""
from __future__ import annotations

from hypothesis import given, settings, assume
from hypothesis import strategies as st

from hostsdoc import Hosts
from hostsdoc.core import is_localhost


# ------------------------------------------------------------------
# Strategies
# ------------------------------------------------------------------

_hostname = st.from_regex(r"[a-z][a-z0-9-]{0,8}(\.[a-z]{2,4})?", fullmatch=True)

_ipv4 = st.tuples(*[st.integers(0, 255)] * 4).map(lambda t: ".".join(map(str, t)))
_ipv6 = st.integers(1, 0xffff).map(lambda n: f"fd00::{n:x}")
_address = st.one_of(_ipv4, _ipv6)

_comment = st.sampled_from(["", "grp", "dev box", "tool-managed"])

_existing_line = st.builds(
    lambda a, hs, c: f"{a} {' '.join(hs)}" + (f" # {c}" if c else ""),
    _address, st.lists(_hostname, min_size=1, max_size=4), _comment,
)
_document = st.lists(
    st.one_of(_existing_line, st.just("# comment"), st.just("")), max_size=8,
).map(lambda lines: "".join(l + "\n" for l in lines))


# ------------------------------------------------------------------
# Properties
# ------------------------------------------------------------------


class TestPackingBound:

    @given(
        cap=st.integers(min_value=1, max_value=5),
        address=_address,
        comment=_comment,
        names=st.lists(_hostname, max_size=25),
    )
    @settings(max_examples=200)
    def test_no_line_exceeds_cap(self, cap, address, comment, names):
        hosts = Hosts.from_text("", max_hosts_per_line=cap)
        hosts.add_hosts(address, names, comment)
        group = [l for l in hosts.lines() if l.is_address]
        assert all(len(l.hostnames) <= cap for l in group)
        assert sum(len(l.hostnames) for l in group) == len(set(names))


class TestIdempotentAdd:

    @given(text=_document, address=_address, name=_hostname, comment=_comment)
    def test_second_add_changes_nothing(self, text, address, name, comment):
        hosts = Hosts.from_text(text)
        hosts.add_host(address, name, comment)
        once = hosts.render()
        count = hosts.list_hosts_by_address(address).count(name)
        assert not hosts.add_host(address, name, comment)
        assert hosts.render() == once
        assert hosts.list_hosts_by_address(address).count(name) == count >= 1

    @given(address=_address, name=_hostname)
    def test_exactly_one_occurrence_in_fresh_document(self, address, name):
        hosts = Hosts.from_text("")
        hosts.add_host(address, name)
        hosts.add_host(address, name)
        assert hosts.list_hosts_by_address(address) == [name]


class TestAddRemoveSymmetry:

    @given(text=_document, address=_address, name=_hostname)
    def test_remove_after_add(self, text, address, name):
        hosts = Hosts.from_text(text)
        hosts.add_host(address, name)
        hosts.remove_host(name)
        assert name not in hosts.list_hosts_by_address(address)
        assert all(name not in l.hostnames for l in hosts.lines())


class TestUniquePerFamily:

    @given(text=_document, address=_address, name=_hostname)
    def test_at_most_one_non_loopback_address(self, text, address, name):
        assume(not is_localhost(address))
        hosts = Hosts.from_text(text)
        hosts.add_host(address, name)
        family_sep = ":" in address
        others = [a for a, _ in hosts.list_addresses_by_host(name, exact=True)
                  if (":" in a) == family_sep and a != address and not is_localhost(a)]
        assert others == []


class TestInvalidIpNoop:

    @given(text=_document, name=_hostname, bogus=st.sampled_from(["not-an-ip", "10.0.0", "", "::g", "1.2.3.4/8"]))
    def test_render_unchanged(self, text, name, bogus):
        hosts = Hosts.from_text(text)
        before = hosts.render()
        assert not hosts.add_host(bogus, name)
        assert hosts.render() == before
