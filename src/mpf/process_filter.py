"""Select process ids from classified MongoDB processes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .exceptions import UsageError
from .process_models import ClassifiedProcesses, MongoDType, MongoProcess


@dataclass(frozen=True)
class FilterCriteria:
    process_type: Optional[MongoProcess] = None
    server_type: Optional[MongoDType] = None
    port: Optional[int] = None


def validate_criteria(criteria: FilterCriteria) -> None:
    """Reject option combinations that can never match."""
    if criteria.process_type is MongoProcess.LEGACYSHELL and criteria.port is not None:
        raise UsageError("Cannot use port with legacy shell")


def select_pids(classified: ClassifiedProcesses, criteria: FilterCriteria) -> Optional[List[int]]:
    """Return matching pids, or ``None`` when no filter was requested.

    Only one criterion applies, in order: port, server type, process type.
    """
    if criteria.port is not None:
        pids = [d.pid for d in classified.mongod if d.port == criteria.port]
        pids.extend(s.pid for s in classified.mongos if s.port == criteria.port)
        return pids

    if criteria.server_type is not None:
        return [d.pid for d in classified.mongod if d.server_type is criteria.server_type]

    if criteria.process_type is MongoProcess.LEGACYSHELL:
        return list(classified.shell)
    if criteria.process_type is MongoProcess.MONGOD:
        return [d.pid for d in classified.mongod]
    if criteria.process_type is MongoProcess.MONGOS:
        return [s.pid for s in classified.mongos]

    return None


__all__ = ["FilterCriteria", "select_pids", "validate_criteria"]
