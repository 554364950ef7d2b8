"""
Snapshot of the processes running on this host.

Two strategies exist:
1. Linux reads the process table through psutil and fetches each command
   line separately; unreadable command lines become empty lists.
2. macOS reads each process's raw KERN_PROCARGS2 argument block with sysctl
   and parses name and argv out of it; unreadable blocks skip the process.

Both satisfy ``ProcessLister`` and are chosen from ``sys.platform``.
"""

from __future__ import annotations

import sys
from typing import List, Optional, Protocol

from .exceptions import UnsupportedPlatformError
from .process_models import ProcessRecord


class ProcessLister(Protocol):
    """Capability to list the processes currently visible to this user."""

    def list_processes(self) -> List[ProcessRecord]: ...


def create_process_lister(platform: Optional[str] = None) -> ProcessLister:
    """Return the lister for ``platform`` (defaults to the running platform)."""
    from .process_lister_helpers import ProcfsProcessLister, SysctlProcessLister

    target = platform if platform is not None else sys.platform
    if target.startswith("linux"):
        return ProcfsProcessLister()
    if target == "darwin":
        return SysctlProcessLister()
    raise UnsupportedPlatformError(f"Process argument inspection is not supported on {target!r}", platform=target)


def get_procs(lister: Optional[ProcessLister] = None) -> List[ProcessRecord]:
    """Take one snapshot of running processes."""
    if lister is None:
        lister = create_process_lister()
    return lister.list_processes()


__all__ = ["ProcessLister", "create_process_lister", "get_procs"]
