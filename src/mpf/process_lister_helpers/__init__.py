"""Platform-specific process listers."""

from .proc_args_parser import ProcArgsInfo, parse_proc_args
from .procfs_lister import ProcfsProcessLister
from .sysctl_lister import SysctlProcessLister

__all__ = [
    "ProcArgsInfo",
    "ProcfsProcessLister",
    "SysctlProcessLister",
    "parse_proc_args",
]
