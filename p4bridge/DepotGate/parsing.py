"""
DepotGate output parsing.

The only place that interprets p4 text output. If the client's output format
changes, this module is what needs touching.
"""

import re
from typing import Dict, List, Optional

CHANGE_LINE = re.compile(r"^Change (\d+)", re.MULTILINE)


def parse_info(output: Optional[str]) -> Dict[str, str]:
    """
    Parse ``p4 info`` output into a mapping.

    Each line is split on the first ``": "``; lines without one are skipped.
    """
    info: Dict[str, str] = {}
    for line in (output or "").splitlines():
        key, sep, value = line.partition(": ")
        if sep:
            info[key.strip()] = value.strip()
    return info


def count_lines(output: Optional[str]) -> int:
    """Number of non-blank lines."""
    return sum(1 for line in (output or "").splitlines() if line.strip())


def extract_change_ids(output: Optional[str]) -> List[int]:
    """Change numbers from ``p4 changes`` output, in listing order."""
    return [int(match) for match in CHANGE_LINE.findall(output or "")]
