"""
ToolGate sensitive change scan.

Fetches recent changes through the gateway and flags those whose details
mention any of a set of keywords. Read-only; one failed change detail is
reported inline without stopping the scan.
"""

from typing import List, Optional, Sequence

from p4bridge.DepotGate.parsing import extract_change_ids
from p4bridge.shared.gate import GateLogger
from p4bridge.ToolGate.client import GatewayClient, GatewayError
from p4bridge.ToolGate.registry import DEFAULT_SENSITIVE_KEYWORDS

_log = GateLogger.get("ToolGate.Scanner")

RULE = "=" * 60


def find_keywords(text: str, keywords: Sequence[str]) -> List[str]:
    """Keywords present in text, case-insensitive, in the order given."""
    lowered = text.lower()
    return [kw for kw in keywords if kw.lower() in lowered]


async def analyze_sensitive_changes(
    client: GatewayClient,
    max_changes: int = 10,
    keywords: Optional[Sequence[str]] = None,
) -> str:
    """
    Build the sensitive change analysis report.

    Raises:
        GatewayError: When the change listing itself cannot be fetched
    """
    keywords = list(keywords or DEFAULT_SENSITIVE_KEYWORDS)

    try:
        listing = await client.get("/changes", params={"max": max_changes})
    except GatewayError as e:
        raise GatewayError(f"Failed to analyze sensitive changes: {e}", e.status_code) from e

    change_ids = extract_change_ids(listing.get("data", {}).get("rawOutput", ""))
    _log.info(f"Scanning {len(change_ids)} changes for {len(keywords)} keywords")

    lines = [
        "Sensitive Change Analysis Report",
        "=====================================",
        f"Analyzed {len(change_ids)} recent changes",
        f"Keywords searched: {', '.join(keywords)}",
        "",
    ]

    flagged = 0
    for change_id in change_ids:
        try:
            detail = await client.get(f"/changes/{change_id}")
        except GatewayError as e:
            lines.append(f"⚠️  Could not analyze change {change_id}: {e}")
            lines.append("")
            continue

        details = detail.get("data", {}).get("rawOutput", "")
        found = find_keywords(details, keywords)
        if found:
            flagged += 1
            lines.append(f"🚨 POTENTIALLY SENSITIVE CHANGE {change_id}")
            lines.append(f"Keywords found: {', '.join(found)}")
            lines.append(f"Details:\n{details}")
            lines.append(RULE)
            lines.append("")

    if flagged == 0:
        lines.append(f"✅ No potentially sensitive changes found in the last {max_changes} changes.")
    else:
        lines.append("")
        lines.append(
            f"🔍 SUMMARY: Found {flagged} potentially sensitive changes "
            f"out of {len(change_ids)} analyzed."
        )
        lines.append("Please review these changes carefully for actual sensitive content.")

    return "\n".join(lines) + "\n"


__all__ = [
    "analyze_sensitive_changes",
    "find_keywords",
]
