import logging

import pytest
from click.testing import CliRunner
from nproc_cli.cli import build_cli
from nproc_cli.constants import PACKAGE_ROOT
from nproc_cli.exceptions import CpuQueryError
from nproc_cli.utils.system import CpuQuerySource


class FakeCpuQuerySource(CpuQuerySource):
    """An in-memory CPU query source that records which queries were made."""

    def __init__(self, usable=4, configured=8, online=6, failing=None):
        self.counts = {"usable": usable, "configured": configured, "online": online}
        self.failing = failing
        self.calls = []

    def _query(self, kind):
        self.calls.append(kind)
        if kind == self.failing:
            raise CpuQueryError("sysconf()", "Invalid argument")
        return self.counts[kind]

    def usable(self):
        return self._query("usable")

    def configured(self):
        return self._query("configured")

    def online(self):
        return self._query("online")


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep the user's nproc config files and environment out of the tests."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_CONFIG_DIRS", str(tmp_path / "site"))
    monkeypatch.delenv("NPROC_LOG_LEVEL", raising=False)
    monkeypatch.delenv("NPROC_LOG_FILE", raising=False)
    yield tmp_path

    # drop handlers bound to the streams of a finished CliRunner invocation
    package_logger = logging.getLogger(PACKAGE_ROOT)
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def fake_source():
    return FakeCpuQuerySource()


@pytest.fixture
def invoke(fake_source):
    """Run the nproc command against the fake CPU query source."""
    runner = CliRunner()

    def _invoke(*args, source=None):
        cli = build_cli(source=source or fake_source)
        return runner.invoke(cli, list(args))

    return _invoke


@pytest.fixture
def source_factory():
    """Build fake CPU query sources with custom counts."""
    return FakeCpuQuerySource
