"""Root pytest configuration and shared fixtures."""

from __future__ import annotations

import struct
from typing import Iterable, List

import pytest

from mpf.config import settings
from mpf.process_models import ProcessRecord

_FINDER_ENV_VARS = ("MPF_DEFAULT_PORT", "MPF_PROCESS_PREFIX", "MPF_LOG_LEVEL", "MPF_VERBOSE")


@pytest.fixture(autouse=True)
def clean_finder_settings(monkeypatch):
    """Each test starts from default settings."""
    for name in _FINDER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    settings.get_finder_settings.cache_clear()
    yield
    settings.get_finder_settings.cache_clear()


def make_record(pid: int, program: str, *args: str) -> ProcessRecord:
    return ProcessRecord(pid=pid, program=program, cmdline=[program, *args])


def build_proc_args_block(exe: str, args: Iterable[str], env: Iterable[str] = (), padding: int = 3) -> bytes:
    """Assemble a KERN_PROCARGS2 style block the way the kernel lays it out."""
    arg_list: List[str] = list(args)
    parts = [struct.pack("=i", len(arg_list)), exe.encode(), b"\0" * (1 + padding)]
    parts.extend(arg.encode() + b"\0" for arg in arg_list)
    parts.extend(entry.encode() + b"\0" for entry in env)
    parts.append(b"\0")
    return b"".join(parts)


@pytest.fixture
def record_factory():
    return make_record


@pytest.fixture
def proc_args_block():
    return build_proc_args_block
