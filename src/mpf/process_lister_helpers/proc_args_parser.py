"""Parser for the KERN_PROCARGS2 argument block returned by macOS sysctl.

Block layout::

    int argc | exec path \\0 | \\0 padding | argv[0] \\0 ... argv[argc-1] \\0 | env \\0 ... | \\0

The parser works on an immutable ``bytes`` copy of the block and an integer
cursor. ``size`` is the byte count reported by the kernel; nothing at or past
it is read even when the buffer is larger.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import List, Optional

_ARGC = struct.Struct("=i")
_PATH_ENV_PREFIX = "PATH="


@dataclass
class ProcArgsInfo:
    name: str
    exe: PurePosixPath
    root: Optional[PurePosixPath]
    cmd: List[str] = field(default_factory=list)
    env: List[str] = field(default_factory=list)


def _decode(raw: bytes) -> str:
    # Arguments are whatever bytes the process was launched with; keep them round-trippable.
    return raw.decode("utf-8", "surrogateescape")


def _find_nul(block: bytes, start: int, end: int) -> int:
    """Return the index of the next NUL in ``block[start:end]``, or ``end``."""
    index = block.find(b"\0", start, end)
    return end if index == -1 else index


def parse_proc_args(block: bytes, size: Optional[int] = None) -> Optional[ProcArgsInfo]:
    """Parse a raw argument block into name, executable, root, argv and environment.

    Returns ``None`` when the block is too short to contain an argument count
    followed by an executable path.
    """
    end = len(block) if size is None else min(size, len(block))
    if end < _ARGC.size:
        return None

    (n_args,) = _ARGC.unpack_from(block, 0)
    cursor = _ARGC.size
    if cursor >= end:
        return None

    exe_end = _find_nul(block, cursor, end)
    exe = PurePosixPath(_decode(block[cursor:exe_end]))
    name = exe.name
    root = exe.parent if exe.is_absolute() else None
    cursor = exe_end

    while cursor < end and block[cursor] == 0:
        cursor += 1

    cmd: List[str] = []
    while len(cmd) < n_args and cursor < end:
        arg_end = _find_nul(block, cursor, end)
        if arg_end == end:
            # Unterminated trailing field is not an argument.
            cursor = end
            break
        cmd.append(_decode(block[cursor:arg_end]))
        cursor = arg_end + 1

    env: List[str] = []
    while cursor < end:
        env_end = _find_nul(block, cursor, end)
        if env_end == end or env_end == cursor:
            break
        env.append(_decode(block[cursor:env_end]))
        cursor = env_end + 1

    if root is None:
        root = _root_from_env(env)

    return ProcArgsInfo(name=name, exe=exe, root=root, cmd=cmd, env=env)


def _root_from_env(env: List[str]) -> Optional[PurePosixPath]:
    for entry in env:
        if entry.startswith(_PATH_ENV_PREFIX):
            return PurePosixPath(entry[len(_PATH_ENV_PREFIX):])
    return None


__all__ = ["ProcArgsInfo", "parse_proc_args"]
