"""
DepotGate argument builders.

Each function returns the argument vector (after the ``p4`` binary) for one
operation. Values are single opaque tokens; nothing is quoted or split.
"""

from typing import List, Optional


def info_args() -> List[str]:
    return ["info"]


def files_args(path: str, max_results: int) -> List[str]:
    return ["files", "-m", str(max_results), path]


def print_args(path: str, revision: Optional[int] = None) -> List[str]:
    return ["print", "-q", f"{path}{revision_suffix(revision)}"]


def filelog_args(path: str, max_results: int) -> List[str]:
    return ["filelog", "-m", str(max_results), path]


def changes_args(
    max_results: int,
    status: Optional[str] = None,
    user: Optional[str] = None,
) -> List[str]:
    args = ["changes", "-m", str(max_results)]
    if status:
        args += ["-s", status]
    if user:
        args += ["-u", user]
    return args


def describe_args(change_id: int) -> List[str]:
    return ["describe", "-s", str(change_id)]


def users_args() -> List[str]:
    return ["users"]


def sync_args(path: str, force: bool = False) -> List[str]:
    args = ["sync"]
    if force:
        args.append("-f")
    args.append(path)
    return args


def revision_suffix(revision: Optional[int]) -> str:
    """``#N`` file revision specifier, or empty for the head revision."""
    return f"#{revision}" if revision is not None else ""
