from __future__ import annotations

"""Process records and MongoDB role types shared by every stage of the finder."""


from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class MongoProcess(Enum):
    """Closed set of MongoDB process roles, valued by their CLI spelling."""

    LEGACYSHELL = "legacyshell"
    MONGOD = "mongod"
    MONGOS = "mongos"


class MongoDType(Enum):
    """How a mongod participates in a deployment."""

    STANDALONE = "Standalone"
    REPLICA_SET = "ReplicaSet"
    CONFIG = "Config"
    SHARD = "Shard"

    @property
    def cli_name(self) -> str:
        return {
            MongoDType.STANDALONE: "standalone",
            MongoDType.REPLICA_SET: "replica-set",
            MongoDType.CONFIG: "config",
            MongoDType.SHARD: "shard",
        }[self]

    @classmethod
    def from_cli_name(cls, name: str) -> "MongoDType":
        for member in cls:
            if member.cli_name == name:
                return member
        raise ValueError(f"Unknown server type: {name!r}")


@dataclass(frozen=True)
class ProcessRecord:
    """One operating system process observed during enumeration."""

    pid: int
    program: str
    cmdline: List[str] = field(default_factory=list)


@dataclass
class MongoSServerInfo:
    pid: int
    port: int


@dataclass
class MongoDServerInfo:
    pid: int
    port: int
    server_type: MongoDType
    replica_set_name: Optional[str] = None


@dataclass
class ClassifiedProcesses:
    """Classified MongoDB processes in discovery order."""

    mongod: List[MongoDServerInfo] = field(default_factory=list)
    mongos: List[MongoSServerInfo] = field(default_factory=list)
    shell: List[int] = field(default_factory=list)


@dataclass
class MongoPSInfo:
    """Summary printed when no filter is requested."""

    mongod: List[MongoDServerInfo]
    mongos: List[MongoSServerInfo]
    shell: List[int]


__all__ = [
    "ClassifiedProcesses",
    "MongoDServerInfo",
    "MongoDType",
    "MongoPSInfo",
    "MongoProcess",
    "MongoSServerInfo",
    "ProcessRecord",
]
