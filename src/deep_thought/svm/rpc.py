"""Solana RPC client construction."""

from typing import Optional

from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment, Confirmed

from ..constants import DEFAULT_RPC_URL


def get_rpc_url(custom_url: Optional[str] = None) -> str:
    """
    Get the RPC URL to use.

    Args:
        custom_url: Optional custom RPC URL to use instead of mainnet

    Returns:
        RPC URL string
    """
    return custom_url or DEFAULT_RPC_URL


def get_rpc_client(
    custom_url: Optional[str] = None, commitment: Commitment = Confirmed
) -> AsyncClient:
    """
    Create an async Solana RPC client.

    Args:
        custom_url: Optional custom RPC URL to use instead of mainnet
        commitment: Default commitment for queries

    Returns:
        Solana AsyncClient instance

    Example:
        >>> async with get_rpc_client() as rpc:
        ...     balance = await get_wsol_balance(rpc, owner)
    """
    return AsyncClient(get_rpc_url(custom_url), commitment=commitment)
