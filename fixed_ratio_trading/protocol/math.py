"""
Fixed Ratio Trading Math Utilities

Integer ratio arithmetic for liquidity, swap, slippage and LP share
estimates, plus the display conversions and cost estimates built on them.

All on-chain amounts are unsigned integers in the token's smallest unit.
Display values are Decimal; floats are never used.
"""

from decimal import Decimal, ROUND_FLOOR, localcontext
from typing import Union

from .constants import (
    FEES,
    LAMPORTS_PER_SOL,
    NATIVE_DECIMALS,
    MIN_SLIPPAGE_PERCENT,
    MAX_SLIPPAGE_PERCENT,
    ESTIMATED_POOL_RENT,
    BASE_TRANSACTION_FEE,
)
from ..errors import RatioMathError, ParameterError
from ..types.common import PubkeyLike, to_pubkey
from ..types.pool import PoolCreationCosts
from ..types.result import SwapResult, DepositAmounts, DonationCost

DisplayAmount = Union[Decimal, int, str]

# Slippage is applied in basis points of the expected amount
BPS_DENOMINATOR = 10_000


def _floor_div(numerator: int, divisor: int, operation: str, divisor_name: str) -> int:
    if divisor == 0:
        raise RatioMathError.division_by_zero(operation, divisor_name)
    return numerator // divisor


def _to_decimal(value: DisplayAmount, name: str) -> Decimal:
    if isinstance(value, float):
        # repr keeps the shortest round-tripping form (0.1 -> "0.1")
        value = repr(value)
    try:
        return Decimal(value)
    except ArithmeticError as e:
        raise ParameterError.invalid(name, f"not a number: {value!r}") from e


# =============================================================================
# Unit conversion
# =============================================================================

def to_basis_points(amount: DisplayAmount, decimals: int) -> int:
    """
    Convert a display amount to the token's smallest unit

    Args:
        amount: Display amount (e.g. Decimal("1.5") for 1.5 SOL)
        decimals: Token decimals

    Returns:
        Smallest-unit amount, floored
    """
    value = _to_decimal(amount, "amount")
    if not value.is_finite():
        raise ParameterError.invalid("amount", f"must be finite, got {value}")
    if value < 0:
        raise ParameterError.invalid("amount", f"must not be negative, got {value}")
    # Enough precision that scaleb never rounds before the floor
    with localcontext() as ctx:
        ctx.prec = len(value.as_tuple().digits) + max(decimals, 0) + 1
        return int(value.scaleb(decimals).to_integral_value(rounding=ROUND_FLOOR))


def from_basis_points(units: int, decimals: int) -> Decimal:
    """
    Convert a smallest-unit amount to a display amount

    Exact: to_basis_points(from_basis_points(n, d), d) == n.
    """
    return Decimal(units).scaleb(-decimals)


# =============================================================================
# Ratio arithmetic
# =============================================================================

def calculate_required_liquidity(
    deposit_amount: int,
    deposit_token_ratio: int,
    other_token_ratio: int,
) -> int:
    """
    Amount of the other token matching a deposit at the pool ratio

    Args:
        deposit_amount: Amount of the deposit token
        deposit_token_ratio: Pool ratio of the deposit token
        other_token_ratio: Pool ratio of the other token

    Returns:
        floor(deposit_amount * other_token_ratio / deposit_token_ratio)
    """
    return _floor_div(
        deposit_amount * other_token_ratio,
        deposit_token_ratio,
        "calculate_required_liquidity",
        "deposit_token_ratio",
    )


def calculate_swap_output(amount_in: int, ratio_in: int, ratio_out: int) -> int:
    """
    Output of a fixed-ratio swap

    The protocol charges a flat fee per swap, not a percentage, so the
    output is the pure ratio conversion.

    Returns:
        floor(amount_in * ratio_out / ratio_in)
    """
    return _floor_div(amount_in * ratio_out, ratio_in, "calculate_swap_output", "ratio_in")


def apply_slippage(expected_amount: int, slippage_tolerance: int) -> int:
    """
    Minimum acceptable output for a slippage tolerance

    Args:
        expected_amount: Quoted output
        slippage_tolerance: Integer percent in [0, 50] (1 = 1%)

    Returns:
        floor(expected * (10000 - tolerance * 100) / 10000)

    Raises:
        ParameterError: Tolerance is not an integer or is outside [0, 50]
    """
    if isinstance(slippage_tolerance, bool) or not isinstance(slippage_tolerance, int):
        raise ParameterError.invalid(
            "slippage_tolerance",
            f"must be an integer percent, got {slippage_tolerance!r}",
        )
    if not MIN_SLIPPAGE_PERCENT <= slippage_tolerance <= MAX_SLIPPAGE_PERCENT:
        raise ParameterError.out_of_range(
            "slippage_tolerance", slippage_tolerance, MIN_SLIPPAGE_PERCENT, MAX_SLIPPAGE_PERCENT
        )
    keep_bps = BPS_DENOMINATOR - slippage_tolerance * 100
    return expected_amount * keep_bps // BPS_DENOMINATOR


def calculate_price_impact(
    amount_in: int,
    amount_out: int,
    balance_in: int,
    balance_out: int,
) -> Decimal:
    """
    Deviation of the executed price from the pool price, in percent

    Display only; never fed back into on-chain amounts.

    Returns:
        |actual / ideal - 1| * 100
    """
    if amount_in == 0:
        raise RatioMathError.division_by_zero("calculate_price_impact", "amount_in")
    if balance_in == 0:
        raise RatioMathError.division_by_zero("calculate_price_impact", "balance_in")
    if balance_out == 0:
        raise RatioMathError.division_by_zero("calculate_price_impact", "balance_out")

    ideal = Decimal(balance_out) / Decimal(balance_in)
    actual = Decimal(amount_out) / Decimal(amount_in)
    return abs(actual / ideal - 1) * 100


def estimate_lp_tokens_from_deposit(
    deposit_amount: int,
    pool_balance: int,
    lp_supply: int,
) -> int:
    """
    Approximate LP tokens minted for a deposit

    The first deposit (empty pool or no LP supply) mints one LP token per
    deposited unit.
    """
    if lp_supply == 0 or pool_balance == 0:
        return deposit_amount
    return deposit_amount * lp_supply // pool_balance


def estimate_tokens_from_withdraw(lp_amount: int, pool_balance: int, lp_supply: int) -> int:
    """Approximate tokens returned for burning LP tokens (0 with no LP supply)"""
    if lp_supply == 0:
        return 0
    return lp_amount * pool_balance // lp_supply


# =============================================================================
# Pool-aware helpers
# =============================================================================

def _is_token_a(mint: PubkeyLike, token_a_mint: PubkeyLike) -> bool:
    return to_pubkey(mint, "mint") == to_pubkey(token_a_mint, "token_a_mint")


def calculate_deposit_amounts(
    deposit_amount: int,
    deposit_token_mint: PubkeyLike,
    pool_ratio_a: int,
    pool_ratio_b: int,
    token_a_mint: PubkeyLike,
) -> DepositAmounts:
    """
    Both sides of a deposit at the pool ratio

    Args:
        deposit_amount: Amount of the deposit token
        deposit_token_mint: Mint being deposited
        pool_ratio_a: Pool ratio of token A
        pool_ratio_b: Pool ratio of token B
        token_a_mint: The pool's token A mint

    Returns:
        DepositAmounts
    """
    if _is_token_a(deposit_token_mint, token_a_mint):
        return DepositAmounts(
            token_a_amount=deposit_amount,
            token_b_amount=calculate_required_liquidity(deposit_amount, pool_ratio_a, pool_ratio_b),
            is_depositing_token_a=True,
        )
    return DepositAmounts(
        token_a_amount=calculate_required_liquidity(deposit_amount, pool_ratio_b, pool_ratio_a),
        token_b_amount=deposit_amount,
        is_depositing_token_a=False,
    )


def calculate_expected_swap_output(
    amount_in: int,
    input_token_mint: PubkeyLike,
    pool_ratio_a: int,
    pool_ratio_b: int,
    token_a_mint: PubkeyLike,
) -> int:
    """Expected swap output in the direction given by the input mint"""
    if _is_token_a(input_token_mint, token_a_mint):
        return calculate_swap_output(amount_in, pool_ratio_a, pool_ratio_b)
    return calculate_swap_output(amount_in, pool_ratio_b, pool_ratio_a)


def calculate_swap_with_price_impact(
    amount_in: int,
    input_token_mint: PubkeyLike,
    pool_balance_a: int,
    pool_balance_b: int,
    token_a_mint: PubkeyLike,
) -> SwapResult:
    """
    Quote a swap against current pool balances

    Args:
        amount_in: Input amount
        input_token_mint: Mint being sold
        pool_balance_a: Pool balance of token A
        pool_balance_b: Pool balance of token B
        token_a_mint: The pool's token A mint

    Returns:
        SwapResult with the flat swap fee
    """
    if _is_token_a(input_token_mint, token_a_mint):
        balance_in, balance_out = pool_balance_a, pool_balance_b
    else:
        balance_in, balance_out = pool_balance_b, pool_balance_a

    amount_out = _floor_div(
        amount_in * balance_out, balance_in, "calculate_swap_with_price_impact", "balance_in"
    )
    price_impact = calculate_price_impact(amount_in, amount_out, balance_in, balance_out)

    return SwapResult(
        amount_in=amount_in,
        amount_out=amount_out,
        price_impact=price_impact,
        fees=get_swap_fee(),
    )


# =============================================================================
# Fees and cost estimates
# =============================================================================

def get_deposit_fee() -> int:
    return FEES["DEPOSIT_WITHDRAWAL_FEE"]


def get_withdrawal_fee() -> int:
    return FEES["DEPOSIT_WITHDRAWAL_FEE"]


def get_swap_fee() -> int:
    return FEES["SWAP_CONTRACT_FEE"]


def get_min_donation_sol() -> Decimal:
    return from_basis_points(FEES["MIN_DONATION_AMOUNT"], NATIVE_DECIMALS)


def format_donation_amount(lamports: int) -> str:
    """Format lamports as 'N.NNNNNNNNN SOL'"""
    sol = from_basis_points(lamports, NATIVE_DECIMALS)
    return f"{sol:.9f} SOL"


def calculate_donation_compute_units(donation_amount: int) -> int:
    """
    Compute units to request for a donation

    Larger donations take more units to process.
    """
    if donation_amount >= 100 * LAMPORTS_PER_SOL:
        return 120_000
    if donation_amount >= 10 * LAMPORTS_PER_SOL:
        return 80_000
    if donation_amount >= LAMPORTS_PER_SOL:
        return 40_000
    return 5_000


def calculate_consolidation_compute_units(pool_count: int) -> int:
    """Compute units for consolidating fees from pool_count pools"""
    return 4_000 + pool_count * 5_000


def estimate_donation_cost(donation_amount: int, priority_fee: int = 0) -> DonationCost:
    """Donation plus base transaction fee plus optional priority fee"""
    return DonationCost(
        donation=donation_amount,
        transaction_fee=BASE_TRANSACTION_FEE,
        priority_fee=priority_fee,
    )


def estimate_pool_creation_costs() -> PoolCreationCosts:
    """Registration fee plus estimated rent for the pool accounts"""
    return PoolCreationCosts(
        registration_fee=FEES["REGISTRATION_FEE"],
        rent_exemption=ESTIMATED_POOL_RENT,
    )

