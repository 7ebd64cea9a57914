"""Wrapping SOL into WSOL: build, sign, submit and confirm."""

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, List, Optional, Union

from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Confirmed
from solana.rpc.models import TxOpts
from solders.hash import Hash
from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.message import MessageV0
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.system_program import TransferParams, transfer
from solders.transaction import VersionedTransaction
from solders.transaction_status import TransactionConfirmationStatus
from spl.token.constants import TOKEN_PROGRAM_ID
from spl.token.instructions import (
    create_idempotent_associated_token_account,
    get_associated_token_address,
    sync_native,
)
from spl.token.models import SyncNativeParams

from ..constants import WSOL_MINT
from ..errors import ConfirmationTimeoutError
from .polling import PollPolicy

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


class ConfirmationStatus(str, Enum):
    """Confirmation level of a submitted transaction."""

    UNKNOWN = "unknown"
    PROCESSED = "processed"
    CONFIRMED = "confirmed"
    FINALIZED = "finalized"

    @property
    def is_confirmed(self) -> bool:
        return self in (ConfirmationStatus.CONFIRMED, ConfirmationStatus.FINALIZED)

    @classmethod
    def from_rpc(
        cls, status: Optional[TransactionConfirmationStatus]
    ) -> "ConfirmationStatus":
        if status == TransactionConfirmationStatus.Finalized:
            return cls.FINALIZED
        if status == TransactionConfirmationStatus.Confirmed:
            return cls.CONFIRMED
        if status == TransactionConfirmationStatus.Processed:
            return cls.PROCESSED
        return cls.UNKNOWN


def get_associated_token_address_for_owner(
    mint: Pubkey, owner: Pubkey, token_program_id: Pubkey = TOKEN_PROGRAM_ID
) -> Pubkey:
    """
    Get the associated token account address for an owner and mint.

    Args:
        mint: Token mint address
        owner: Owner's public key
        token_program_id: Token program ID (default: TOKEN_PROGRAM_ID)

    Returns:
        Associated token account address
    """
    return get_associated_token_address(owner, mint, token_program_id)


def build_wrap_instructions(
    owner: Pubkey, amount: int, mint: Union[Pubkey, str] = WSOL_MINT
) -> List[Instruction]:
    """
    Build the instructions that move native SOL into the owner's WSOL account.

    The order is fixed: create the associated token account if absent,
    transfer lamports into it, then sync so the lamports become spendable
    token units.

    Args:
        owner: Wallet that pays, owns the token account and funds the transfer
        amount: Lamports to wrap
        mint: Wrapped SOL mint

    Returns:
        List of three instructions
    """
    if amount <= 0:
        raise ValueError(f"Wrap amount must be positive, got {amount}")
    if isinstance(mint, str):
        mint = Pubkey.from_string(mint)

    ata = get_associated_token_address_for_owner(mint, owner)

    return [
        create_idempotent_associated_token_account(
            payer=owner,
            owner=owner,
            mint=mint,
        ),
        transfer(
            TransferParams(
                from_pubkey=owner,
                to_pubkey=ata,
                lamports=amount,
            )
        ),
        sync_native(SyncNativeParams(program_id=TOKEN_PROGRAM_ID, account=ata)),
    ]


def build_signed_transaction(
    keypair: Keypair, instructions: List[Instruction], blockhash: Hash
) -> VersionedTransaction:
    """
    Compile a v0 transaction paid for and signed by a single keypair.

    Args:
        keypair: Fee payer and only signer
        instructions: Instructions in execution order
        blockhash: Recent blockhash bounding the transaction lifetime

    Returns:
        Signed transaction
    """
    message = MessageV0.try_compile(
        payer=keypair.pubkey(),
        instructions=instructions,
        address_lookup_table_accounts=[],
        recent_blockhash=blockhash,
    )
    return VersionedTransaction(message, [keypair])


async def send_transaction(
    rpc: AsyncClient,
    transaction: VersionedTransaction,
    skip_preflight: bool = False,
) -> str:
    """
    Submit a signed transaction once.

    Args:
        rpc: Solana async RPC client
        transaction: Signed transaction
        skip_preflight: Whether to skip preflight simulation

    Returns:
        Transaction signature (base58)
    """
    opts = TxOpts(
        skip_preflight=skip_preflight,
        preflight_commitment=Confirmed,
        max_retries=0,
    )
    response = await rpc.send_transaction(transaction, opts=opts)
    return str(response.value)


async def get_confirmation_status(rpc: AsyncClient, signature: str) -> ConfirmationStatus:
    """Fetch the current confirmation status of a signature."""
    response = await rpc.get_signature_statuses([Signature.from_string(signature)])
    status = response.value[0] if response.value else None
    if status is None:
        return ConfirmationStatus.UNKNOWN
    return ConfirmationStatus.from_rpc(status.confirmation_status)


async def wait_for_confirmation(
    rpc: AsyncClient,
    signature: str,
    policy: PollPolicy = PollPolicy(),
    sleep: SleepFunc = asyncio.sleep,
) -> str:
    """
    Poll until a signature is confirmed or finalized.

    Args:
        rpc: Solana async RPC client
        signature: Transaction signature to watch
        policy: Attempt budget and spacing
        sleep: Awaitable sleep, replaceable in tests

    Returns:
        The signature, once confirmed

    Raises:
        ConfirmationTimeoutError: If no confirmation within policy.max_attempts polls
    """
    for attempt in range(1, policy.max_attempts + 1):
        status = await get_confirmation_status(rpc, signature)
        logger.debug(
            "Signature %s status %s (attempt %d/%d)",
            signature,
            status.value,
            attempt,
            policy.max_attempts,
        )
        if status.is_confirmed:
            return signature
        if attempt < policy.max_attempts:
            await sleep(policy.delay())

    raise ConfirmationTimeoutError(signature, policy.max_attempts)


async def wrap_sol(
    rpc: AsyncClient,
    keypair: Keypair,
    amount: int,
    policy: PollPolicy = PollPolicy(),
    sleep: SleepFunc = asyncio.sleep,
) -> str:
    """
    Wrap native SOL into the keypair's WSOL account and wait for confirmation.

    The transaction is submitted at most once. On timeout the caller decides
    whether to try again.

    Args:
        rpc: Solana async RPC client
        keypair: Wallet that funds, pays for and signs the transaction
        amount: Lamports to wrap
        policy: Confirmation poll policy
        sleep: Awaitable sleep, replaceable in tests

    Returns:
        Confirmed transaction signature

    Raises:
        ConfirmationTimeoutError: If the transaction is not confirmed in time
    """
    instructions = build_wrap_instructions(keypair.pubkey(), amount)

    # Fetch the blockhash as late as possible to keep the expiry window wide
    latest = await rpc.get_latest_blockhash()
    transaction = build_signed_transaction(keypair, instructions, latest.value.blockhash)

    signature = await send_transaction(rpc, transaction)
    logger.info("Submitted wrap transaction %s for %d lamports", signature, amount)

    return await wait_for_confirmation(rpc, signature, policy, sleep)
