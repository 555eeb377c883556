"""
Tests for HostsService: summaries, listings, mutations and the
commit (dry-run / save / flush) policy.
"""
from __future__ import annotations

import pytest

from hostsdoc import Hosts, RawTextModeError
from hostsdoc.infrastructure.flush import DnsFlusher
from hostsdoc.services import HostsService, SaveResult
from tests.fake_runner import FakeRunner, which_all, which_none


HOSTS_TEXT = """\
# managed
127.0.0.1 localhost
10.0.0.1 app api # dev

bogus
"""


@pytest.fixture()
def svc(write_hosts) -> HostsService:
    return HostsService(Hosts.from_file(write_hosts(HOSTS_TEXT)))


# ==================================================================
# Read access
# ==================================================================

class TestRead:

    def test_summary(self, svc):
        s = svc.summary()
        assert s["total_lines"] == 5
        assert s["type_counts"] == {"comment": 1, "address": 2, "empty": 1, "unknown": 1}
        assert s["raw_text"] is False
        assert s["read_file_path"] == s["write_file_path"]

    def test_get_lines_window(self, svc):
        lines = svc.get_lines(offset=1, limit=2)
        assert [l["position"] for l in lines] == [1, 2]
        assert lines[1]["hostnames"] == ["app", "api"]
        assert lines[1]["comment"] == "dev"

    def test_get_lines_all(self, svc):
        assert len(svc.get_lines()) == 5

    def test_listings(self, svc):
        assert svc.list_by_addresses(["10.0.0.1"]) == [("10.0.0.1", "app"), ("10.0.0.1", "api")]
        assert svc.list_by_hostnames(["local"]) == [("127.0.0.1", "localhost")]
        assert svc.list_by_hostnames(["local"], exact=True) == []
        assert svc.list_by_cidrs(["10.0.0.0/8", "bad"]) == [
            ("10.0.0.0/8", "10.0.0.1", "app"),
            ("10.0.0.0/8", "10.0.0.1", "api"),
        ]
        assert svc.list_by_comment("dev") == ["app", "api"]


# ==================================================================
# Mutations
# ==================================================================

class TestMutations:

    def test_add(self, svc):
        result = svc.add("10.0.0.2", ["web"], "")
        assert result["changed"] is True
        assert result["total_lines"] == 6

    def test_add_noop(self, svc):
        assert svc.add("10.0.0.1", ["app"])["changed"] is False

    def test_update(self, svc):
        assert svc.update("10.0.0.1", "10.0.0.9", ["api"])["changed"] is True
        assert svc.list_by_addresses(["10.0.0.9"]) == [("10.0.0.9", "api")]

    def test_removals(self, svc):
        assert svc.remove_hosts(["api"])["changed"] is True
        assert svc.remove_addresses(["127.0.0.1"])["changed"] is True
        assert svc.remove_by_comments(["dev"])["changed"] is True
        assert svc.remove_cidrs(["10.0.0.0/8"])["changed"] is False
        assert svc.summary()["type_counts"].get("address", 0) == 0

    def test_reload(self, svc):
        svc.remove_hosts(["app", "api"])
        assert svc.reload()["type_counts"]["address"] == 2


# ==================================================================
# Commit
# ==================================================================

class TestCommit:

    def test_dry_run_does_not_write(self, svc):
        svc.add("10.0.0.2", ["web"])
        result = svc.commit(dry_run=True)
        assert result == SaveResult(saved=False, rendered=svc.render())
        with open(svc.hosts.read_file_path, encoding="utf-8") as f:
            assert f.read() == HOSTS_TEXT

    def test_save(self, svc):
        svc.add("10.0.0.2", ["web"])
        result = svc.commit()
        assert result.saved
        assert result.target == svc.hosts.write_file_path
        assert not result.flushed
        with open(result.target, encoding="utf-8") as f:
            assert f.read().endswith("10.0.0.2        web\n")

    def test_save_to_other_path(self, svc, tmp_path):
        out = str(tmp_path / "copy")
        assert svc.commit(file_path=out).target == out

    def test_flush_success(self, write_hosts):
        runner = FakeRunner()
        hosts = Hosts.from_file(
            write_hosts(HOSTS_TEXT),
            auto_flush=True,
            flusher=DnsFlusher(runner=runner, platform="linux", which=which_all),
        )
        result = HostsService(hosts).commit()
        assert result.flushed
        assert result.flush_error is None
        assert runner.calls == [["resolvectl", "flush-caches"]]

    def test_flush_failure_is_reported_not_raised(self, write_hosts):
        hosts = Hosts.from_file(
            write_hosts(HOSTS_TEXT),
            auto_flush=True,
            flusher=DnsFlusher(runner=FakeRunner(), platform="linux", which=which_none),
        )
        result = HostsService(hosts).commit()
        assert result.saved
        assert not result.flushed
        assert result.flush_error.startswith("flush DNS cache on linux ():")
        assert result.to_dict()["flush_error"] == result.flush_error

    def test_raw_text_commit_raises(self):
        with pytest.raises(RawTextModeError):
            HostsService(Hosts.from_text("10.0.0.1 a\n")).commit()
