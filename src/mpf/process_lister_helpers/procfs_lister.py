"""Linux process lister backed by psutil's /proc reader."""

from __future__ import annotations

import logging
import time
from typing import List

import psutil

from ..exceptions import ProcessEnumerationError
from ..process_models import ProcessRecord

logger = logging.getLogger(__name__)


class ProcfsProcessLister:
    """Walks the process table and reads each command line individually."""

    def list_processes(self) -> List[ProcessRecord]:
        logger.debug("Performing full process scan...")
        start_time = time.time()

        try:
            processes = list(psutil.process_iter(["pid", "name"]))
        except (psutil.Error, OSError) as exc:
            raise ProcessEnumerationError(f"Unable to read the process table: {exc}") from exc

        records: List[ProcessRecord] = []
        for proc in processes:
            pid = proc.info["pid"]
            name = proc.info.get("name")
            if name is None:
                # Process exited before its stat entry could be read.
                continue
            records.append(ProcessRecord(pid=pid, program=str(name), cmdline=_read_cmdline(proc)))

        scan_time = time.time() - start_time
        logger.debug(f"Full process scan completed in {scan_time:.3f}s, found {len(records)} processes")
        return records


def _read_cmdline(proc) -> List[str]:
    try:
        return [str(arg) for arg in proc.cmdline()]
    except (  # policy_guard: allow-silent-handler
        psutil.NoSuchProcess,
        psutil.AccessDenied,
        psutil.ZombieProcess,
    ):
        logger.debug("Command line unavailable for pid %s", proc.pid)
        return []


__all__ = ["ProcfsProcessLister"]
