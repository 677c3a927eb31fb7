"""
Infrastructure layer: RPC transport and transaction building
"""

from .rpc import RpcClient, RpcClientConfig
from .tx_builder import TxBuilder

__all__ = [
    "RpcClient",
    "RpcClientConfig",
    "TxBuilder",
]
