"""Render finder results for stdout."""

from typing import Iterable

import orjson

from .process_models import ClassifiedProcesses, MongoPSInfo


def format_pid_list(pids: Iterable[int]) -> str:
    """One decimal pid per line, each newline-terminated."""
    return "".join(f"{pid}\n" for pid in pids)


def build_summary(classified: ClassifiedProcesses) -> MongoPSInfo:
    return MongoPSInfo(
        mongod=list(classified.mongod),
        mongos=list(classified.mongos),
        shell=list(classified.shell),
    )


def format_summary(summary: MongoPSInfo) -> str:
    """Pretty-printed JSON with ``mongod``, ``mongos`` and ``shell`` keys."""
    return orjson.dumps(summary, option=orjson.OPT_INDENT_2).decode("utf-8")


__all__ = ["build_summary", "format_pid_list", "format_summary"]
