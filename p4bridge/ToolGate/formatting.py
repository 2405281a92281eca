"""
ToolGate text renderers.

Turn gateway payloads into the text blocks handed back to agents.
"""

import json
from typing import Any, Dict, Optional

from p4bridge.DepotGate.commands import revision_suffix


def server_info(data: Dict[str, Any]) -> str:
    return f"Perforce Server Information:\n{json.dumps(data, indent=2)}"


def file_list(path: str, data: Dict[str, Any]) -> str:
    return f"Files in {path} (showing {data.get('count', 0)} files):\n\n{data.get('rawOutput', '')}"


def file_content(path: str, revision: Optional[int], data: Dict[str, Any]) -> str:
    return f"Content of {path}{revision_suffix(revision)}:\n\n{data.get('content', '')}"


def file_history(path: str, data: Dict[str, Any]) -> str:
    return f"History for {path}:\n\n{data.get('history', '')}"


def change_list(data: Dict[str, Any]) -> str:
    return f"Recent Changes ({data.get('count', 0)} entries):\n\n{data.get('rawOutput', '')}"


def change_detail(change_id: int, data: Dict[str, Any]) -> str:
    return f"Details for Change {change_id}:\n\n{data.get('rawOutput', '')}"


def user_list(data: Dict[str, Any]) -> str:
    return f"Perforce Users ({data.get('count', 0)} users):\n\n{data.get('rawOutput', '')}"


def sync_result(path: str, forced: bool, data: Dict[str, Any]) -> str:
    suffix = " (forced)" if forced else ""
    return f"Sync Results for {path}{suffix}:\n\n{data.get('rawOutput', '')}"
