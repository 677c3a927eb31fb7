"""
Fixed Ratio Trading protocol layer

Pure, offline building blocks: address derivation, ratio math, instruction
encoding, simulation log parsing and parameter validation.
"""

from .constants import (
    PROGRAM_ID,
    PROGRAM_VERSION,
    PoolInstruction,
    FEES,
    COMPUTE_UNITS,
    SEEDS,
)
from .pda import (
    find_program_address,
    normalize_token_order,
    derive_system_state_pda,
    derive_main_treasury_pda,
    derive_pool_state_pda,
    derive_token_vault_pdas,
    derive_lp_token_mint_pdas,
    get_pool_pdas,
)
from .math import (
    to_basis_points,
    from_basis_points,
    calculate_required_liquidity,
    calculate_swap_output,
    apply_slippage,
    calculate_price_impact,
    estimate_lp_tokens_from_deposit,
    estimate_tokens_from_withdraw,
    calculate_deposit_amounts,
    calculate_expected_swap_output,
    calculate_swap_with_price_impact,
    calculate_donation_compute_units,
    calculate_consolidation_compute_units,
    estimate_donation_cost,
    estimate_pool_creation_costs,
)
from .instructions import (
    encode_message,
    create_initialize_pool_instruction,
    create_pool_with_display_amounts,
    create_deposit_instruction,
    create_deposit_instruction_with_display_amount,
    create_withdraw_instruction,
    create_swap_instruction,
    create_swap_instruction_with_display_amounts,
    estimate_swap_output_display,
    create_donate_sol_instruction,
    create_donation_instruction_with_display_amount,
    create_consolidate_pool_fees_instruction,
    create_get_version_instruction,
    create_get_treasury_info_instruction,
)
from .log_parser import parse_treasury_info_from_logs, parse_version_from_logs
from .validation import (
    validate_pool_creation_params,
    validate_deposit_params,
    validate_withdraw_params,
    validate_swap_params,
    validate_donation_params,
    validate_consolidation_params,
    validate_token_amount,
)

__all__ = [
    # Constants
    "PROGRAM_ID",
    "PROGRAM_VERSION",
    "PoolInstruction",
    "FEES",
    "COMPUTE_UNITS",
    "SEEDS",
    # Address derivation
    "find_program_address",
    "normalize_token_order",
    "derive_system_state_pda",
    "derive_main_treasury_pda",
    "derive_pool_state_pda",
    "derive_token_vault_pdas",
    "derive_lp_token_mint_pdas",
    "get_pool_pdas",
    # Math
    "to_basis_points",
    "from_basis_points",
    "calculate_required_liquidity",
    "calculate_swap_output",
    "apply_slippage",
    "calculate_price_impact",
    "estimate_lp_tokens_from_deposit",
    "estimate_tokens_from_withdraw",
    "calculate_deposit_amounts",
    "calculate_expected_swap_output",
    "calculate_swap_with_price_impact",
    "calculate_donation_compute_units",
    "calculate_consolidation_compute_units",
    "estimate_donation_cost",
    "estimate_pool_creation_costs",
    # Instructions
    "encode_message",
    "create_initialize_pool_instruction",
    "create_pool_with_display_amounts",
    "create_deposit_instruction",
    "create_deposit_instruction_with_display_amount",
    "create_withdraw_instruction",
    "create_swap_instruction",
    "create_swap_instruction_with_display_amounts",
    "estimate_swap_output_display",
    "create_donate_sol_instruction",
    "create_donation_instruction_with_display_amount",
    "create_consolidate_pool_fees_instruction",
    "create_get_version_instruction",
    "create_get_treasury_info_instruction",
    # Log parsing
    "parse_treasury_info_from_logs",
    "parse_version_from_logs",
    # Validation
    "validate_pool_creation_params",
    "validate_deposit_params",
    "validate_withdraw_params",
    "validate_swap_params",
    "validate_donation_params",
    "validate_consolidation_params",
    "validate_token_amount",
]
