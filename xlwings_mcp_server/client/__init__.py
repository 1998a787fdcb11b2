"""
Client for the xlwings-rpc JSON-RPC server
"""

from .rpc_client import XlwingsRpcClient, build_request

__all__ = ["XlwingsRpcClient", "build_request"]
