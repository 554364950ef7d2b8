"""macOS process lister built on ``sysctl(KERN_PROCARGS2)``."""

from __future__ import annotations

import ctypes
import ctypes.util
import logging
from typing import Any, List, Optional

import psutil

from ..exceptions import ProcessEnumerationError
from ..process_models import ProcessRecord
from .proc_args_parser import parse_proc_args

logger = logging.getLogger(__name__)

CTL_KERN = 1
KERN_ARGMAX = 8
KERN_PROCARGS2 = 49


def load_libc() -> Any:
    """Load the C library exposing ``sysctl``."""
    library_path = ctypes.util.find_library("c")
    if library_path is None:
        raise ProcessEnumerationError("Unable to locate the C library for sysctl")
    libc = ctypes.CDLL(library_path, use_errno=True)
    libc.sysctl.argtypes = [
        ctypes.POINTER(ctypes.c_int),
        ctypes.c_uint,
        ctypes.c_void_p,
        ctypes.POINTER(ctypes.c_size_t),
        ctypes.c_void_p,
        ctypes.c_size_t,
    ]
    libc.sysctl.restype = ctypes.c_int
    return libc


class SysctlProcessLister:
    """Lists processes by reading each pid's kernel argument block."""

    def __init__(self, libc: Any = None):
        self._libc = libc
        self._arg_max: Optional[int] = None

    @property
    def libc(self) -> Any:
        if self._libc is None:
            self._libc = load_libc()
        return self._libc

    def get_arg_max(self) -> int:
        """Return ``kern.argmax``, queried once per lister."""
        if self._arg_max is not None:
            return self._arg_max

        mib = (ctypes.c_int * 2)(CTL_KERN, KERN_ARGMAX)
        arg_max = ctypes.c_int(0)
        size = ctypes.c_size_t(ctypes.sizeof(ctypes.c_int))
        ret = self.libc.sysctl(mib, 2, ctypes.byref(arg_max), ctypes.byref(size), None, 0)
        if ret == -1:
            errno = ctypes.get_errno()
            raise ProcessEnumerationError(f"sysctl(KERN_ARGMAX) failed with errno {errno}", errno=errno)

        self._arg_max = arg_max.value
        return self._arg_max

    def read_proc_args(self, pid: int, arg_max: int) -> Optional[bytes]:
        """Copy the raw argument block for ``pid``, or ``None`` if the kernel refuses."""
        mib = (ctypes.c_int * 3)(CTL_KERN, KERN_PROCARGS2, pid)
        buffer = ctypes.create_string_buffer(arg_max)
        size = ctypes.c_size_t(arg_max)
        ret = self.libc.sysctl(mib, 3, buffer, ctypes.byref(size), None, 0)
        if ret == -1:
            logger.debug("sysctl(KERN_PROCARGS2) failed for pid %s (errno %s)", pid, ctypes.get_errno())
            return None
        return buffer.raw[: min(size.value, arg_max)]

    def list_processes(self) -> List[ProcessRecord]:
        try:
            pids = psutil.pids()
        except (psutil.Error, OSError) as exc:
            raise ProcessEnumerationError(f"Unable to list process ids: {exc}") from exc

        arg_max = self.get_arg_max()
        records: List[ProcessRecord] = []
        for pid in pids:
            block = self.read_proc_args(pid, arg_max)
            if block is None:
                continue
            info = parse_proc_args(block)
            if info is None:
                continue
            records.append(ProcessRecord(pid=pid, program=info.name, cmdline=info.cmd))

        logger.debug("Read argument blocks for %d of %d processes", len(records), len(pids))
        return records


__all__ = ["SysctlProcessLister", "load_libc"]
