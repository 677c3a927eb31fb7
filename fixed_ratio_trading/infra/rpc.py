"""
RPC Client for Solana

Minimal JSON-RPC transport used by the three network operations of the
client (version query, treasury query, pool existence check):
- Single endpoint, one attempt per call
- HTTP, timeout, connection and JSON-RPC errors raise RpcError immediately
- Retry policy is left to the caller
"""

from __future__ import annotations

import base64
import logging
import threading
from typing import Any, Dict, List, Optional
from dataclasses import dataclass

import httpx

from ..errors import RpcError, ConfigurationError
from ..config import get_config

logger = logging.getLogger(__name__)


@dataclass
class RpcClientConfig:
    """
    RPC client runtime configuration

    Per-client overrides; unset values come from the global config
    (fixed_ratio_trading.config.RpcConfig).

    Usage:
        # Use all defaults from environment
        client = RpcClient(endpoint)

        # Override specific settings
        config = RpcClientConfig(timeout_seconds=60, commitment="finalized")
        client = RpcClient(endpoint, config=config)
    """
    timeout_seconds: float = None
    commitment: str = None

    def __post_init__(self):
        """Apply defaults from global config for any unset values"""
        global_config = get_config()
        if self.timeout_seconds is None:
            self.timeout_seconds = global_config.rpc.timeout_seconds
        if self.commitment is None:
            self.commitment = global_config.rpc.commitment


class RpcClient:
    """
    Solana JSON-RPC client

    Usage:
        rpc = RpcClient("https://api.mainnet-beta.solana.com")

        # Get account info
        data = rpc.get_account_info("AccountAddress...")

        # Custom RPC call
        result = rpc.call("getSlot", [])

    Any object exposing get_account_info, get_latest_blockhash and
    simulate_transaction with the same shapes can be used in its place.
    """

    def __init__(
        self,
        endpoint: str,
        config: Optional[RpcClientConfig] = None,
    ):
        """
        Initialize RPC client

        Args:
            endpoint: RPC endpoint URL
            config: RPC configuration options
        """
        if not endpoint:
            raise ConfigurationError.missing("SOLANA_RPC_URL")

        self._endpoint = endpoint
        self._config = config or RpcClientConfig()
        self._client: Optional[httpx.Client] = None
        self._client_lock = threading.Lock()
        self._request_id = 0

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def commitment(self) -> str:
        """Default commitment level"""
        return self._config.commitment

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client (thread-safe)"""
        if self._client is None:
            with self._client_lock:
                # Double-check after acquiring lock
                if self._client is None:
                    self._client = httpx.Client(
                        timeout=self._config.timeout_seconds,
                        headers={"Content-Type": "application/json"},
                    )
        return self._client

    def _next_id(self) -> int:
        with self._client_lock:
            self._request_id += 1
            return self._request_id

    def call(
        self,
        method: str,
        params: List[Any],
        timeout: Optional[float] = None,
    ) -> Any:
        """
        Make JSON-RPC call

        Args:
            method: RPC method name
            params: RPC parameters
            timeout: Optional timeout override

        Returns:
            RPC result

        Raises:
            RpcError: On any transport or RPC failure
        """
        client = self._get_client()
        body = {
            "jsonrpc": "2.0",
            "id": self._next_id(),
            "method": method,
            "params": params,
        }
        timeout_val = timeout or self._config.timeout_seconds

        logger.debug(f"RPC {method} -> {self._endpoint}")
        try:
            response = client.post(self._endpoint, json=body, timeout=timeout_val)

            if response.status_code == 429:
                logger.warning(f"Rate limited by {self._endpoint}")
                raise RpcError.rate_limited(self._endpoint)

            response.raise_for_status()
            result = response.json()

        except httpx.TimeoutException as e:
            logger.warning(f"RPC timeout: {method} {self._endpoint}")
            raise RpcError.timeout(self._endpoint, timeout_val) from e

        except httpx.HTTPStatusError as e:
            logger.warning(f"RPC HTTP error: {e}")
            raise RpcError.http_status(self._endpoint, e.response.status_code, e) from e

        except httpx.RequestError as e:
            logger.warning(f"RPC connection error: {e}")
            raise RpcError.connection_failed(self._endpoint, e) from e

        except ValueError as e:
            raise RpcError(
                f"Invalid JSON in RPC response: {e}",
                endpoint=self._endpoint,
                original_error=e,
            ) from e

        if "error" in result:
            raise RpcError.rpc_error(self._endpoint, result["error"])

        return result.get("result")

    def get_account_info(
        self,
        address: str,
        encoding: str = "base64",
        commitment: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Get account information

        Args:
            address: Account address (base58)
            encoding: Data encoding ("base64", "jsonParsed", etc.)
            commitment: Commitment level

        Returns:
            Account info or None if not found
        """
        params = [
            str(address),
            {
                "encoding": encoding,
                "commitment": commitment or self.commitment,
            },
        ]
        result = self.call("getAccountInfo", params)
        return result.get("value") if result else None

    def get_latest_blockhash(
        self,
        commitment: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Get latest blockhash

        Returns:
            Dict with blockhash and lastValidBlockHeight
        """
        params = [{"commitment": commitment or self.commitment}]
        result = self.call("getLatestBlockhash", params)
        return result.get("value", {}) if result else {}

    def simulate_transaction(
        self,
        transaction: bytes,
        commitment: Optional[str] = None,
        replace_recent_blockhash: bool = True,
    ) -> Dict[str, Any]:
        """
        Simulate transaction execution

        Signatures are not verified, so the transaction may carry
        placeholder signatures.

        Args:
            transaction: Serialized transaction bytes
            commitment: Commitment level
            replace_recent_blockhash: Let the node substitute a fresh blockhash

        Returns:
            Simulation result ({"context": ..., "value": {"err", "logs", ...}})
        """
        tx_data = base64.b64encode(transaction).decode("ascii")

        params = [
            tx_data,
            {
                "commitment": commitment or self.commitment,
                "encoding": "base64",
                "sigVerify": False,
                "replaceRecentBlockhash": replace_recent_blockhash,
            },
        ]
        return self.call("simulateTransaction", params)

    def close(self):
        """Close HTTP client"""
        if self._client:
            self._client.close()
            self._client = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
