"""WSOL balance lookup."""

import logging
from decimal import Decimal
from typing import Union

from solana.rpc.async_api import AsyncClient
from solders.pubkey import Pubkey

from ..constants import WSOL_DECIMALS, WSOL_MINT
from .transaction import get_associated_token_address_for_owner

logger = logging.getLogger(__name__)


async def get_token_balance(
    rpc: AsyncClient, owner: Pubkey, mint: Union[Pubkey, str] = WSOL_MINT
) -> int:
    """
    Get the token balance held in the owner's associated token account.

    Any failure (missing account, RPC error, unexpected response shape)
    is reported as a zero balance.

    Args:
        rpc: Solana async RPC client
        owner: Owner's public key
        mint: Token mint address (default: wrapped SOL)

    Returns:
        Balance in base units
    """
    if isinstance(mint, str):
        mint = Pubkey.from_string(mint)
    ata = get_associated_token_address_for_owner(mint, owner)

    try:
        response = await rpc.get_account_info_json_parsed(ata)
        if response.value is None:
            logger.debug("Token account %s does not exist", ata)
            return 0
        parsed = response.value.data.parsed
        return int(parsed["info"]["tokenAmount"]["amount"])
    except Exception as e:
        logger.debug("Balance lookup for %s failed, assuming zero: %s", ata, e)
        return 0


async def get_wsol_balance(rpc: AsyncClient, owner: Pubkey) -> int:
    """Get the wrapped SOL balance of an owner in lamports."""
    return await get_token_balance(rpc, owner, WSOL_MINT)


def format_sol(lamports: int) -> str:
    """Render lamports as a SOL amount, e.g. 4200000 -> '0.0042'."""
    value = Decimal(lamports).scaleb(-WSOL_DECIMALS)
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
