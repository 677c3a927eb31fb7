"""
Test Address Derivation

Tests for fixed_ratio_trading.protocol.pda.
"""

import sys
import struct
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))


def _key(n: int):
    from solders.pubkey import Pubkey
    return Pubkey.from_bytes(bytes([n]) * 32)


def test_find_program_address_matches_solders():
    """Test bump search agrees with solders for the fixed seed tags"""
    from solders.pubkey import Pubkey
    from fixed_ratio_trading.protocol.pda import find_program_address
    from fixed_ratio_trading.protocol.constants import PROGRAM_ID, SEEDS

    print("Testing find_program_address...")

    program_id = Pubkey.from_string(PROGRAM_ID)
    for tag in SEEDS.values():
        derived = find_program_address([tag], program_id)
        expected, bump = Pubkey.find_program_address([tag], program_id)
        assert derived.address == expected, f"Address mismatch for {tag!r}"
        assert derived.bump == bump, f"Bump mismatch for {tag!r}"
        assert not derived.address.is_on_curve()

    print("  find_program_address: PASSED")


def test_system_and_treasury_pdas():
    """Test system state and main treasury derivations"""
    from solders.pubkey import Pubkey
    from fixed_ratio_trading.protocol.pda import derive_system_state_pda, derive_main_treasury_pda
    from fixed_ratio_trading.protocol.constants import PROGRAM_ID

    print("Testing system state / main treasury PDAs...")

    program_id = Pubkey.from_string(PROGRAM_ID)
    system_state = derive_system_state_pda()
    treasury = derive_main_treasury_pda()

    assert system_state.address == Pubkey.find_program_address([b"system_state"], program_id)[0]
    assert treasury.address == Pubkey.find_program_address([b"main_treasury"], program_id)[0]
    assert system_state.address != treasury.address

    # Deterministic
    assert derive_system_state_pda() == system_state

    print("  System/treasury PDAs: PASSED")


def test_pool_state_pda_seeds():
    """Test pool state seeds are normalized mints plus both ratios"""
    from solders.pubkey import Pubkey
    from fixed_ratio_trading.protocol.pda import derive_pool_state_pda
    from fixed_ratio_trading.protocol.constants import PROGRAM_ID

    print("Testing pool state PDA seeds...")

    low, high = _key(1), _key(2)
    program_id = Pubkey.from_string(PROGRAM_ID)

    derived = derive_pool_state_pda(low, high, 1_000_000_000, 160_000_000)
    expected, bump = Pubkey.find_program_address(
        [
            b"pool_state_v2",
            bytes(low),
            bytes(high),
            struct.pack("<Q", 1_000_000_000),
            struct.pack("<Q", 160_000_000),
        ],
        program_id,
    )
    assert derived.address == expected
    assert derived.bump == bump

    print("  Pool state PDA seeds: PASSED")


def test_pool_state_pda_order_independent():
    """Test swapping the mint arguments gives the same pool"""
    from fixed_ratio_trading.protocol.pda import derive_pool_state_pda

    print("Testing pool state PDA mint order...")

    a, b = _key(7), _key(3)
    forward = derive_pool_state_pda(a, b, 5, 9)
    backward = derive_pool_state_pda(b, a, 5, 9)
    assert forward == backward, "Mint order must not change the pool address"

    # Base58 strings are accepted too
    assert derive_pool_state_pda(str(a), str(b), 5, 9) == forward

    # Different ratios are different pools
    assert derive_pool_state_pda(a, b, 9, 5).address != forward.address
    assert derive_pool_state_pda(a, b, 5, 10).address != forward.address

    print("  Pool state PDA mint order: PASSED")


def test_vault_and_lp_mint_pdas():
    """Test vault and LP mint derivations from a pool address"""
    from solders.pubkey import Pubkey
    from fixed_ratio_trading.protocol.pda import derive_token_vault_pdas, derive_lp_token_mint_pdas
    from fixed_ratio_trading.protocol.constants import PROGRAM_ID

    print("Testing vault / LP mint PDAs...")

    program_id = Pubkey.from_string(PROGRAM_ID)
    pool = _key(9)

    vault_a, vault_b = derive_token_vault_pdas(pool)
    lp_a, lp_b = derive_lp_token_mint_pdas(pool)

    assert vault_a.address == Pubkey.find_program_address([b"token_a_vault", bytes(pool)], program_id)[0]
    assert vault_b.address == Pubkey.find_program_address([b"token_b_vault", bytes(pool)], program_id)[0]
    assert lp_a.address == Pubkey.find_program_address([b"lp_token_a_mint", bytes(pool)], program_id)[0]
    assert lp_b.address == Pubkey.find_program_address([b"lp_token_b_mint", bytes(pool)], program_id)[0]

    assert len({vault_a.address, vault_b.address, lp_a.address, lp_b.address}) == 4

    print("  Vault/LP mint PDAs: PASSED")


def test_get_pool_pdas_reports_swap():
    """Test get_pool_pdas tells the caller which mint became token A"""
    from fixed_ratio_trading.protocol.pda import get_pool_pdas, derive_token_vault_pdas

    print("Testing get_pool_pdas...")

    low, high = _key(1), _key(200)

    in_order = get_pool_pdas(low, high, 2, 3)
    assert in_order.tokens_swapped is False
    assert in_order.normalized_token_a == low
    assert in_order.normalized_token_b == high

    reversed_order = get_pool_pdas(high, low, 2, 3)
    assert reversed_order.tokens_swapped is True
    assert reversed_order.normalized_token_a == low
    assert reversed_order.normalized_token_b == high
    assert reversed_order.pool_state == in_order.pool_state

    vault_a, vault_b = derive_token_vault_pdas(in_order.pool_state.address)
    assert in_order.token_a_vault == vault_a
    assert in_order.token_b_vault == vault_b

    print("  get_pool_pdas: PASSED")


def test_normalize_token_order():
    """Test canonical ordering by raw bytes"""
    from fixed_ratio_trading.protocol.pda import normalize_token_order

    print("Testing normalize_token_order...")

    low, high = _key(1), _key(2)
    assert normalize_token_order(low, high) == (low, high)
    assert normalize_token_order(high, low) == (low, high)
    assert normalize_token_order(str(high), str(low)) == (low, high)

    print("  normalize_token_order: PASSED")


def test_program_id_override():
    """Test derivations follow a non-default program id"""
    from fixed_ratio_trading.protocol.pda import derive_system_state_pda, get_pool_pdas

    print("Testing program id override...")

    other_program = _key(42)
    default = derive_system_state_pda()
    custom = derive_system_state_pda(other_program)
    assert default.address != custom.address

    pdas = get_pool_pdas(_key(1), _key(2), 1, 1, program_id=other_program)
    assert pdas.pool_state != get_pool_pdas(_key(1), _key(2), 1, 1).pool_state

    print("  Program id override: PASSED")


def test_invalid_seeds():
    """Test seed limits raise DerivationFailure"""
    from fixed_ratio_trading.protocol.pda import find_program_address
    from fixed_ratio_trading.errors import DerivationFailure, ErrorCode

    print("Testing invalid seeds...")

    try:
        find_program_address([b"x" * 33])
        assert False, "Should raise for a seed longer than 32 bytes"
    except DerivationFailure as e:
        assert e.code == ErrorCode.DERIVATION_INVALID_SEEDS

    try:
        find_program_address([b"s"] * 16)
        assert False, "Should raise when seeds leave no room for the bump"
    except DerivationFailure as e:
        assert e.code == ErrorCode.DERIVATION_INVALID_SEEDS

    # 32-byte seeds are fine
    find_program_address([b"x" * 32])

    print("  Invalid seeds: PASSED")


def test_create_program_address():
    """Test a single bump attempt and the skipped-bump case"""
    from solders.pubkey import Pubkey
    from fixed_ratio_trading.protocol.pda import create_program_address
    from fixed_ratio_trading.protocol.constants import PROGRAM_ID, SEEDS

    print("Testing create_program_address...")

    program_id = Pubkey.from_string(PROGRAM_ID)
    expected, bump = Pubkey.find_program_address([SEEDS["SYSTEM_STATE"]], program_id)
    assert create_program_address([SEEDS["SYSTEM_STATE"], bytes([bump])], program_id) == expected

    # Seeds solders refuses yield None instead of raising
    assert create_program_address([b"x" * 33, bytes([255])], program_id) is None

    print("  create_program_address: PASSED")


def test_derivation_exhausted():
    """Test DerivationFailure when no bump gives an off-curve address"""
    from unittest.mock import patch
    from fixed_ratio_trading.protocol import pda as pda_module
    from fixed_ratio_trading.errors import DerivationFailure, ErrorCode

    print("Testing derivation exhausted...")

    with patch.object(pda_module, "create_program_address", return_value=None) as attempt:
        try:
            pda_module.find_program_address([b"pool"])
            assert False, "Should raise DerivationFailure"
        except DerivationFailure as e:
            assert e.code == ErrorCode.DERIVATION_EXHAUSTED
            assert e.recoverable is False

    # Every bump from 255 down to 0 was tried
    assert attempt.call_count == 256
    assert attempt.call_args_list[0][0][0][-1] == bytes([255])
    assert attempt.call_args_list[-1][0][0][-1] == bytes([0])

    print("  Derivation exhausted: PASSED")


def test_ratio_out_of_range():
    """Test ratios that do not fit in u64 are rejected"""
    from fixed_ratio_trading.protocol.pda import derive_pool_state_pda
    from fixed_ratio_trading.errors import ParameterError

    print("Testing ratio range...")

    for bad in (-1, 2 ** 64):
        try:
            derive_pool_state_pda(_key(1), _key(2), bad, 1)
            assert False, f"Should raise for ratio {bad}"
        except ParameterError as e:
            assert e.param == "ratio_a"

    print("  Ratio range: PASSED")


def main():
    """Run all tests"""
    print("=" * 60)
    print("Address Derivation Tests")
    print("=" * 60)

    tests = [
        test_find_program_address_matches_solders,
        test_system_and_treasury_pdas,
        test_pool_state_pda_seeds,
        test_pool_state_pda_order_independent,
        test_vault_and_lp_mint_pdas,
        test_get_pool_pdas_reports_swap,
        test_normalize_token_order,
        test_program_id_override,
        test_invalid_seeds,
        test_create_program_address,
        test_derivation_exhausted,
        test_ratio_out_of_range,
    ]

    passed = 0
    failed = 0

    for test in tests:
        try:
            test()
            passed += 1
        except Exception as e:
            print(f"  FAILED: {e}")
            import traceback
            traceback.print_exc()
            failed += 1

    print("=" * 60)
    print(f"Results: {passed} passed, {failed} failed")
    print("=" * 60)

    return failed == 0


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
