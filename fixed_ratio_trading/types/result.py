"""
Result type definitions for validation, quotes and reconstructed state
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, List, Optional


@dataclass
class ValidationResult:
    """
    Outcome of a parameter check

    Attributes:
        is_valid: True when no violation was found
        errors: Every violation found, in check order
    """
    is_valid: bool
    errors: List[str] = field(default_factory=list)

    @classmethod
    def from_errors(cls, errors: List[str]) -> "ValidationResult":
        return cls(is_valid=not errors, errors=list(errors))

    def __bool__(self) -> bool:
        return self.is_valid

    def __str__(self) -> str:
        if self.is_valid:
            return "ValidationResult(valid)"
        return f"ValidationResult(invalid: {'; '.join(self.errors)})"


@dataclass(frozen=True)
class SwapResult:
    """
    Swap quote

    Attributes:
        amount_in: Input amount (raw)
        amount_out: Output amount (raw)
        price_impact: Display-only percentage (1 = 1%)
        fees: Flat protocol fee in lamports
    """
    amount_in: int
    amount_out: int
    price_impact: Decimal
    fees: int

    def __str__(self) -> str:
        return f"Swap({self.amount_in} -> {self.amount_out}, impact={self.price_impact:.4f}%)"


@dataclass(frozen=True)
class DepositAmounts:
    """Token amounts needed to keep the pool ratio for a deposit"""
    token_a_amount: int
    token_b_amount: int
    is_depositing_token_a: bool


@dataclass(frozen=True)
class DonationCost:
    """Lamport cost breakdown of a donation transaction"""
    donation: int
    transaction_fee: int
    priority_fee: int

    @property
    def total(self) -> int:
        return self.donation + self.transaction_fee + self.priority_fee


@dataclass
class TreasuryInfo:
    """
    Treasury state reconstructed from GetTreasuryInfo simulation logs

    Fields missing from the logs default to zero.
    """
    total_balance: int = 0
    total_fees_collected: int = 0
    last_withdrawal_time: int = 0
    withdrawal_count: int = 0
    donation_count: int = 0
    total_donations: int = 0


VERSION_UNAVAILABLE = "Version information not available in logs"


@dataclass
class VersionInfo:
    """Contract version reconstructed from GetVersion simulation logs"""
    name: str = ""
    version: str = ""
    build_date: str = ""
    rust_version: str = ""

    @property
    def is_available(self) -> bool:
        return any((self.name, self.version, self.build_date, self.rust_version))

    def __str__(self) -> str:
        if not self.is_available:
            return VERSION_UNAVAILABLE
        parts = []
        if self.name:
            parts.append(f"Name: {self.name}")
        if self.version:
            parts.append(f"Version: {self.version}")
        if self.build_date:
            parts.append(f"Build: {self.build_date}")
        if self.rust_version:
            parts.append(f"Rust: {self.rust_version}")
        return " | ".join(parts)


@dataclass
class SimulationResult:
    """
    Outcome of a transaction simulation

    Attributes:
        err: Error object reported by the runtime (None on success)
        logs: Program log lines
        units_consumed: Compute units used, when reported
        raw_response: Raw RPC value for debugging
    """
    err: Any = None
    logs: List[str] = field(default_factory=list)
    units_consumed: Optional[int] = None
    raw_response: Optional[dict] = None

    @property
    def is_success(self) -> bool:
        return self.err is None
