"""
On-chain program error codes and log helpers

The deployed program reports failures as custom error codes in the
transaction logs ("Custom program error: 0x1776"). These helpers turn such
logs into a readable message after a rejected submission.
"""

import re
from enum import IntEnum
from typing import Dict, Iterable, Optional


class ProgramError(IntEnum):
    """Custom error codes returned by the Fixed Ratio Trading program"""
    SYSTEM_PAUSED = 6006
    POOL_PAUSED = 6007
    SLIPPAGE_EXCEEDED = 6008
    INSUFFICIENT_BALANCE = 6009
    INVALID_AMOUNT = 6010
    INVALID_RATIO = 6011
    POOL_ALREADY_EXISTS = 6012
    POOL_NOT_FOUND = 6013
    UNAUTHORIZED = 6014
    INVALID_TOKEN_MINT = 6015
    INVALID_ACCOUNT = 6016


PROGRAM_ERROR_MESSAGES: Dict[int, str] = {
    ProgramError.SYSTEM_PAUSED: "System is paused",
    ProgramError.POOL_PAUSED: "Pool is paused",
    ProgramError.SLIPPAGE_EXCEEDED: "Slippage tolerance exceeded",
    ProgramError.INSUFFICIENT_BALANCE: "Insufficient balance",
    ProgramError.INVALID_AMOUNT: "Invalid amount",
    ProgramError.INVALID_RATIO: "Invalid ratio",
    ProgramError.POOL_ALREADY_EXISTS: "Pool already exists",
    ProgramError.POOL_NOT_FOUND: "Pool not found",
    ProgramError.UNAUTHORIZED: "Unauthorized",
    ProgramError.INVALID_TOKEN_MINT: "Invalid token mint",
    ProgramError.INVALID_ACCOUNT: "Invalid account",
}

_CUSTOM_ERROR_RE = re.compile(r"Custom program error: 0x([0-9a-fA-F]+)")


def format_error(error_code: int) -> str:
    """
    Format a program error code as a human-readable message

    Args:
        error_code: Numeric error code from the program

    Returns:
        Fixed message for known codes, "Unknown error code: N" otherwise
    """
    return PROGRAM_ERROR_MESSAGES.get(error_code, f"Unknown error code: {error_code}")


def parse_error_code(logs: Iterable[str]) -> Optional[int]:
    """
    Extract the first custom program error code from transaction logs

    Args:
        logs: Transaction log lines

    Returns:
        Error code, or None if no custom error is present
    """
    for line in logs:
        match = _CUSTOM_ERROR_RE.search(line)
        if match:
            return int(match.group(1), 16)
    return None
