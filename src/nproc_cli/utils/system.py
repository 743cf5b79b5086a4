"""
Queries for the number of CPUs known to, online on, and usable by the current process.

Each platform family gets its own :class:`CpuQuerySource`; :func:`get_cpu_query_source`
picks the one matching the running interpreter.
"""

import logging
import os
import shutil
import subprocess
import sys
from abc import ABC, abstractmethod

import psutil

from ..exceptions import CpuQueryError

log = logging.getLogger(__name__)


class CpuQuerySource(ABC):
    """The three CPU counts the operating system can report."""

    @abstractmethod
    def usable(self) -> int:
        """Number of CPUs the calling process may currently run on."""

    @abstractmethod
    def configured(self) -> int:
        """Number of CPUs known to the system, online or not."""

    @abstractmethod
    def online(self) -> int:
        """Number of CPUs that are currently online."""


def _sysconf(name: str) -> int:
    try:
        value = os.sysconf(name)
    except (ValueError, OSError) as e:
        raise CpuQueryError("sysconf()", e) from e
    if value == -1:
        raise CpuQueryError("sysconf()", f"{name} is not supported")
    return value


class SysconfCpuQuerySource(CpuQuerySource):
    """
    POSIX systems without a way to read the CPU affinity of a process.

    The usable count falls back to the number of online CPUs.
    """

    def usable(self) -> int:
        return self.online()

    def configured(self) -> int:
        return _sysconf("SC_NPROCESSORS_CONF")

    def online(self) -> int:
        return _sysconf("SC_NPROCESSORS_ONLN")


class AffinityCpuQuerySource(SysconfCpuQuerySource):
    """Systems exposing the affinity mask through ``os.sched_getaffinity`` (e.g. Linux)."""

    def usable(self) -> int:
        try:
            return len(os.sched_getaffinity(0))
        except OSError as e:
            raise CpuQueryError("sched_getaffinity()", e) from e


class CpusetCpuQuerySource(SysconfCpuQuerySource):
    """
    FreeBSD and DragonFly, where the affinity mask comes from cpuset_getaffinity.

    CPython only exposes ``os.sched_getaffinity`` on Linux, so the mask is read through psutil.
    """

    def usable(self) -> int:
        try:
            return len(psutil.Process().cpu_affinity())
        except (psutil.Error, OSError) as e:
            raise CpuQueryError("cpuset_getaffinity()", e) from e


class SysctlCpuQuerySource(SysconfCpuQuerySource):
    """
    OpenBSD, where the sysconf counts do not tell how many cores are present.

    The counts are read from the ``hw.ncpufound`` and ``hw.ncpuonline`` sysctl nodes.
    There is no way to query CPU affinity, so the usable count is the online count.
    """

    def configured(self) -> int:
        return self._read_sysctl("hw.ncpufound")

    def online(self) -> int:
        return self._read_sysctl("hw.ncpuonline")

    @staticmethod
    def _read_sysctl(node: str) -> int:
        sysctl = shutil.which("sysctl") or "/sbin/sysctl"
        try:
            result = subprocess.run([sysctl, "-n", node], capture_output=True, text=True, check=True)
            return int(result.stdout.strip())
        except (OSError, subprocess.CalledProcessError, ValueError) as e:
            raise CpuQueryError("sysctl()", e) from e


class PortableCpuQuerySource(CpuQuerySource):
    """
    Anything without sysconf, such as Windows.

    Python only reports logical processors there, so the configured and online counts are the same.
    """

    def usable(self) -> int:
        # os.process_cpu_count honours the affinity mask (Python 3.13+)
        process_cpu_count = getattr(os, "process_cpu_count", None)
        if process_cpu_count is None:
            return self.online()
        return self._checked("os.process_cpu_count()", process_cpu_count())

    def configured(self) -> int:
        return self._checked("os.cpu_count()", os.cpu_count())

    def online(self) -> int:
        return self._checked("os.cpu_count()", os.cpu_count())

    @staticmethod
    def _checked(operation: str, value: int | None) -> int:
        if value is None:
            raise CpuQueryError(operation, "number of CPUs is undetermined")
        return value


def _has_sysconf_counts() -> bool:
    names = getattr(os, "sysconf_names", {})
    return "SC_NPROCESSORS_CONF" in names and "SC_NPROCESSORS_ONLN" in names


def get_cpu_query_source(platform: str | None = None) -> CpuQuerySource:
    """
    Return the CPU query source suited to the given platform.

    :param platform: A ``sys.platform`` value; defaults to the running interpreter's.
    """
    platform = sys.platform if platform is None else platform

    if platform.startswith("openbsd"):
        source: CpuQuerySource = SysctlCpuQuerySource()
    elif platform.startswith(("freebsd", "dragonfly")):
        source = CpusetCpuQuerySource()
    elif hasattr(os, "sched_getaffinity") and _has_sysconf_counts():
        source = AffinityCpuQuerySource()
    elif _has_sysconf_counts():
        source = SysconfCpuQuerySource()
    else:
        source = PortableCpuQuerySource()

    log.debug(f"Using {type(source).__name__} for platform '{platform}'.")
    return source
