"""
Web3 setup helper - provides web3 instances per RPC endpoint.

Public API
----------
get_web3_instance(rpc_url)
    Return a Web3 instance connected to the given RPC URL.
"""
from __future__ import annotations

from web3 import Web3

__all__ = ["get_web3_instance"]

DEFAULT_REQUEST_TIMEOUT = 60  # seconds

# Cached web3 instances keyed by RPC URL
_w3_instances: dict[str, Web3] = {}


def get_web3_instance(rpc_url: str) -> Web3:
    """
    Get a Web3 instance connected to the specified RPC URL.

    Args:
        rpc_url: HTTP(S) RPC endpoint of the selected network.

    Returns:
        Web3 instance (cached per URL for the lifetime of the process)
    """
    w3 = _w3_instances.get(rpc_url)
    if w3 is None:
        w3 = Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": DEFAULT_REQUEST_TIMEOUT}))
        _w3_instances[rpc_url] = w3
    return w3


def clear_web3_cache() -> None:
    """Forget cached instances (test helper, not part of the public API)."""
    _w3_instances.clear()
