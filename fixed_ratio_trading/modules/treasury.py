"""
Treasury Module

Treasury state query (network), SOL donations and pool fee consolidation.
"""

import logging
from decimal import Decimal
from typing import Sequence, TYPE_CHECKING

from solders.instruction import Instruction

if TYPE_CHECKING:
    from ..client import FixedRatioClient

from ..errors import SimulationFailed
from ..protocol import instructions, math, validation
from ..protocol.log_parser import parse_treasury_info_from_logs
from ..types import DonationCost, DonationParams, TreasuryInfo, ValidationResult
from ..types.common import PubkeyLike

logger = logging.getLogger(__name__)


class TreasuryModule:
    """
    Treasury operations

    Provides:
    - info(): Treasury balance and counters (network, simulated)
    - create_donation_instruction(params): DonateSol instruction
    - create_consolidation_instruction(pools): ConsolidatePoolFees instruction

    Usage:
        client = FixedRatioClient(rpc_url)

        info = client.treasury.info()
        print(client.treasury.format_donation_amount(info.total_balance))
    """

    def __init__(self, client: "FixedRatioClient"):
        """
        Initialize treasury module

        Args:
            client: FixedRatioClient instance
        """
        self._client = client

    def info(self) -> TreasuryInfo:
        """
        Read treasury state by simulating GetTreasuryInfo

        Returns:
            TreasuryInfo parsed from the simulation logs

        Raises:
            SimulationFailed: If the simulation reports an error
            RpcError: On transport failure
            ConfigurationError: If no RPC endpoint is configured
        """
        logger.info("Querying treasury info")
        ix = instructions.create_get_treasury_info_instruction(self._client.program_id)
        result = self._client.tx_builder.simulate([ix])

        if result.err is not None:
            logger.warning(f"Treasury info simulation failed: {result.err}")
            raise SimulationFailed.from_result("GetTreasuryInfo", result.err, result.logs)

        info = parse_treasury_info_from_logs(result.logs)
        logger.debug(f"Treasury info: {info}")
        return info

    def create_donation_instruction(self, params: DonationParams) -> Instruction:
        """Build DonateSol for the client's program"""
        return instructions.create_donate_sol_instruction(params, self._client.program_id)

    def create_donation_with_display_amount(
        self,
        donor: PubkeyLike,
        amount_sol: Decimal,
        message: str = "",
    ) -> Instruction:
        """Build DonateSol from an amount in SOL"""
        return instructions.create_donation_instruction_with_display_amount(
            donor, amount_sol, message, self._client.program_id
        )

    def create_consolidation_instruction(self, pool_state_pdas: Sequence[PubkeyLike]) -> Instruction:
        """Build ConsolidatePoolFees (first 20 pools only)"""
        return instructions.create_consolidate_pool_fees_instruction(
            pool_state_pdas, self._client.program_id
        )

    def validate_donation(self, params: DonationParams) -> ValidationResult:
        return validation.validate_donation_params(params)

    def validate_consolidation(self, pool_state_pdas: Sequence[PubkeyLike]) -> ValidationResult:
        return validation.validate_consolidation_params(pool_state_pdas)

    def donation_compute_units(self, donation_amount: int) -> int:
        return math.calculate_donation_compute_units(donation_amount)

    def consolidation_compute_units(self, pool_count: int) -> int:
        return math.calculate_consolidation_compute_units(pool_count)

    def estimate_donation_cost(self, donation_amount: int, priority_fee: int = 0) -> DonationCost:
        return math.estimate_donation_cost(donation_amount, priority_fee)

    def min_donation_sol(self) -> Decimal:
        return math.get_min_donation_sol()

    def format_donation_amount(self, lamports: int) -> str:
        return math.format_donation_amount(lamports)
