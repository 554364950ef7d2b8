"""Recognise MongoDB processes and derive their role, port and server type."""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional

from .config import get_finder_settings
from .exceptions import ConfigurationError
from .process_models import (
    ClassifiedProcesses,
    MongoDServerInfo,
    MongoDType,
    MongoProcess,
    MongoSServerInfo,
    ProcessRecord,
)

logger = logging.getLogger(__name__)

_PORT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1

_PROGRAM_ROLES = {
    "mongod": MongoProcess.MONGOD,
    "mongos": MongoProcess.MONGOS,
    "mongo": MongoProcess.LEGACYSHELL,
}


def is_mongo_process(proc: ProcessRecord) -> Optional[MongoProcess]:
    """Return the role of ``proc`` or ``None`` when it is not a MongoDB process."""
    if not proc.program.startswith(get_finder_settings().process_prefix):
        return None

    role = _PROGRAM_ROLES.get(proc.program)
    if role is None:
        logger.warning("Unexpected mongo like process found: %r", proc)
    return role


def get_cmd_line_option(option: str, options: List[str]) -> Optional[str]:
    """Return the value of ``option`` from ``--opt value`` or ``--opt=value`` forms.

    First match wins. A trailing ``option`` with no value counts as absent.
    """
    for i, opt in enumerate(options):
        if opt == option:
            if i + 1 < len(options):
                return options[i + 1]
            return None
        if opt.startswith(option):
            splits = opt.split("=")
            if len(splits) == 2 and splits[0] == option:
                return splits[1]
    return None


def parse_port(proc: ProcessRecord) -> int:
    port_str = get_cmd_line_option("--port", proc.cmdline)
    if port_str is None:
        return get_finder_settings().default_port
    if _PORT_PATTERN.fullmatch(port_str) is None:
        raise ConfigurationError.bad_port(proc.pid, port_str)
    port = int(port_str, 10)
    if not _INT32_MIN <= port <= _INT32_MAX:
        raise ConfigurationError.bad_port(proc.pid, port_str)
    return port


def get_mongod_info(proc: ProcessRecord) -> MongoDServerInfo:
    if is_mongo_process(proc) is not MongoProcess.MONGOD:
        raise ValueError(f"Process {proc.pid} ({proc.program}) is not a mongod")

    cmdline = proc.cmdline
    port = parse_port(proc)

    shardsvr = get_cmd_line_option("--shardsvr", cmdline)
    configsvr = get_cmd_line_option("--configsvr", cmdline)
    repl_set = get_cmd_line_option("--replSet", cmdline)

    server_type = MongoDType.STANDALONE
    if configsvr is not None:
        server_type = MongoDType.CONFIG
    elif shardsvr is not None:
        server_type = MongoDType.SHARD
    elif repl_set is not None:
        server_type = MongoDType.REPLICA_SET

    return MongoDServerInfo(
        pid=proc.pid,
        port=port,
        server_type=server_type,
        replica_set_name=repl_set,
    )


def get_mongos_info(proc: ProcessRecord) -> MongoSServerInfo:
    if is_mongo_process(proc) is not MongoProcess.MONGOS:
        raise ValueError(f"Process {proc.pid} ({proc.program}) is not a mongos")

    return MongoSServerInfo(pid=proc.pid, port=parse_port(proc))


def classify_processes(procs: Iterable[ProcessRecord], *, verbose: bool = False) -> ClassifiedProcesses:
    """Sort MongoDB processes into mongod, mongos and shell collections, keeping discovery order."""
    classified = ClassifiedProcesses()

    for proc in procs:
        role = is_mongo_process(proc)
        if role is None:
            continue
        if verbose:
            logger.info("%s - %s - %s - %s", proc.pid, role.value, proc.program, proc.cmdline)

        if role is MongoProcess.LEGACYSHELL:
            classified.shell.append(proc.pid)
        elif role is MongoProcess.MONGOD:
            classified.mongod.append(get_mongod_info(proc))
        else:
            classified.mongos.append(get_mongos_info(proc))

    if verbose:
        _log_classified(classified)
    return classified


def _log_classified(classified: ClassifiedProcesses) -> None:
    for pid in classified.shell:
        logger.info("Shell: %s", pid)
    for mongod in classified.mongod:
        logger.info("%s", mongod)
    for mongos in classified.mongos:
        logger.info("%s", mongos)


__all__ = [
    "classify_processes",
    "get_cmd_line_option",
    "get_mongod_info",
    "get_mongos_info",
    "is_mongo_process",
    "parse_port",
]
