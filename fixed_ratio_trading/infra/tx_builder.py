"""
Transaction builder for read-only simulations

Provides utilities for:
- Building unsigned versioned (v0) transactions
- Adding compute budget instructions
- Simulating transactions and collecting their logs

Nothing here signs or sends a transaction. Simulations skip signature
verification, so transactions carry placeholder signatures.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from solders.compute_budget import set_compute_unit_limit, set_compute_unit_price
from solders.hash import Hash
from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.message import MessageV0
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction import VersionedTransaction

from ..config import get_config
from ..errors import RpcError
from ..types.common import PubkeyLike, to_pubkey
from ..types.result import SimulationResult

logger = logging.getLogger(__name__)


class TxBuilder:
    """
    Versioned transaction builder

    Usage:
        builder = TxBuilder(rpc)

        # Simulate a read-only instruction
        result = builder.simulate([create_get_version_instruction()])
        print(result.logs)

        # Or step by step
        tx_bytes = builder.build(instructions)
        raw = rpc.simulate_transaction(tx_bytes)
    """

    def __init__(self, rpc, payer: Optional[PubkeyLike] = None):
        """
        Initialize transaction builder

        Args:
            rpc: Transport exposing get_latest_blockhash and simulate_transaction
            payer: Default fee payer for simulations; when unset, the
                configured FRT_SIMULATION_PAYER or a throw-away keypair is used
        """
        self._rpc = rpc
        self._payer = to_pubkey(payer, "payer") if payer is not None else None

    def _resolve_payer(self, payer: Optional[PubkeyLike]) -> Pubkey:
        if payer is not None:
            return to_pubkey(payer, "payer")
        if self._payer is not None:
            return self._payer
        configured = get_config().program.simulation_payer
        if configured:
            return to_pubkey(configured, "FRT_SIMULATION_PAYER")
        # Never signs; only fills the fee payer slot
        return Keypair().pubkey()

    def build(
        self,
        instructions: List[Instruction],
        payer: Optional[PubkeyLike] = None,
        compute_units: Optional[int] = None,
        compute_unit_price: Optional[int] = None,
        recent_blockhash: Optional[str] = None,
    ) -> bytes:
        """
        Build unsigned versioned transaction

        Args:
            instructions: List of instructions
            payer: Fee payer pubkey
            compute_units: Compute unit limit (omitted when unset)
            compute_unit_price: Priority fee in microlamports per CU (omitted when unset)
            recent_blockhash: Optional blockhash (fetched if not provided)

        Returns:
            Unsigned transaction bytes
        """
        all_instructions = []

        if compute_units:
            all_instructions.append(set_compute_unit_limit(compute_units))

        if compute_unit_price:
            all_instructions.append(set_compute_unit_price(compute_unit_price))

        all_instructions.extend(instructions)

        # Get blockhash if not provided
        if recent_blockhash is None:
            blockhash_info = self._rpc.get_latest_blockhash() or {}
            recent_blockhash = blockhash_info.get("blockhash")

        if not recent_blockhash:
            raise RpcError("Failed to get recent blockhash")

        payer_pubkey = self._resolve_payer(payer)
        message = MessageV0.try_compile(
            payer_pubkey,
            all_instructions,
            [],  # Address lookup tables
            Hash.from_string(recent_blockhash),
        )

        # Placeholder signatures; the signature count must match the header
        num_signers = message.header.num_required_signatures
        null_signatures = [Signature.default()] * num_signers
        tx = VersionedTransaction.populate(message, null_signatures)

        return bytes(tx)

    def simulate(
        self,
        instructions: List[Instruction],
        payer: Optional[PubkeyLike] = None,
        compute_units: Optional[int] = None,
    ) -> SimulationResult:
        """
        Build and simulate a transaction

        A failed simulation is returned as data (SimulationResult.err); only
        transport failures raise.

        Args:
            instructions: List of instructions
            payer: Fee payer pubkey
            compute_units: Compute unit limit

        Returns:
            SimulationResult

        Raises:
            RpcError: On transport failure
        """
        tx_bytes = self.build(instructions, payer=payer, compute_units=compute_units)
        raw = self._rpc.simulate_transaction(tx_bytes) or {}
        value = raw.get("value") or {}

        result = SimulationResult(
            err=value.get("err"),
            logs=list(value.get("logs") or []),
            units_consumed=value.get("unitsConsumed"),
            raw_response=value,
        )
        if result.err is not None:
            logger.debug(f"Simulation reported error: {result.err}")
        return result
