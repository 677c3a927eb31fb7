"""
Simulation Log Parsing

The program reports treasury state and its version only as log lines
emitted during a simulated GetTreasuryInfo / GetVersion call. These helpers
rebuild structured records from those lines.

Rules:
- Numeric labels take the first run of digits after the label
- Text labels take the trimmed remainder of the line
- The first line carrying a label wins; later duplicates are ignored
- A label with no parsable value is skipped; missing fields keep defaults
"""

import logging
import re
from typing import Dict, Iterable, Optional, Pattern, Tuple

from ..types.result import TreasuryInfo, VersionInfo

logger = logging.getLogger(__name__)


def _numeric_pattern(label: str) -> Pattern:
    return re.compile(re.escape(label) + r"\s*(\d+)")


# (dataclass field, log label)
TREASURY_LABELS: Tuple[Tuple[str, str], ...] = (
    ("total_balance", "Total Balance:"),
    ("total_fees_collected", "Total Fees Collected:"),
    ("last_withdrawal_time", "Last Withdrawal:"),
    ("withdrawal_count", "Withdrawal Count:"),
    ("donation_count", "Donation Count:"),
    ("total_donations", "Total Donations:"),
)

VERSION_LABELS: Tuple[Tuple[str, str], ...] = (
    ("name", "Contract Name:"),
    ("version", "Contract Version:"),
    ("build_date", "Build Date:"),
    ("rust_version", "Rust Version:"),
)

_TREASURY_PATTERNS = {name: _numeric_pattern(label) for name, label in TREASURY_LABELS}


def _parse_numeric(line: str, pattern: Pattern) -> Optional[int]:
    match = pattern.search(line)
    if match:
        return int(match.group(1))
    return None


def _parse_text(line: str, label: str) -> Optional[str]:
    _, found, remainder = line.partition(label)
    if not found:
        return None
    value = remainder.strip()
    return value or None


def parse_treasury_info_from_logs(logs: Optional[Iterable[str]]) -> TreasuryInfo:
    """
    Rebuild treasury state from GetTreasuryInfo logs

    Args:
        logs: Simulation log lines (None is treated as empty)

    Returns:
        TreasuryInfo (fields not found are 0)
    """
    found: Dict[str, int] = {}

    for line in logs or []:
        for name, label in TREASURY_LABELS:
            if name in found or label not in line:
                continue
            value = _parse_numeric(line, _TREASURY_PATTERNS[name])
            if value is not None:
                found[name] = value

    if len(found) < len(TREASURY_LABELS):
        missing = [name for name, _ in TREASURY_LABELS if name not in found]
        logger.debug(f"Treasury logs missing fields, defaulting to 0: {missing}")

    return TreasuryInfo(**found)


def parse_version_from_logs(logs: Optional[Iterable[str]]) -> VersionInfo:
    """
    Rebuild contract version details from GetVersion logs

    Args:
        logs: Simulation log lines (None is treated as empty)

    Returns:
        VersionInfo (fields not found are "")
    """
    found: Dict[str, str] = {}

    for line in logs or []:
        for name, label in VERSION_LABELS:
            if name in found:
                continue
            value = _parse_text(line, label)
            if value is not None:
                found[name] = value

    if not found:
        logger.debug("No version labels found in logs")

    return VersionInfo(**found)
