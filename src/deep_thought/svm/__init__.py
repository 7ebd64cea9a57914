"""Solana (SVM) helpers: wallet, RPC, WSOL balance and wrapping."""

from .balance import format_sol, get_token_balance, get_wsol_balance
from .polling import PollPolicy
from .rpc import get_rpc_client, get_rpc_url
from .transaction import (
    ConfirmationStatus,
    build_signed_transaction,
    build_wrap_instructions,
    get_associated_token_address_for_owner,
    get_confirmation_status,
    send_transaction,
    wait_for_confirmation,
    wrap_sol,
)
from .wallet import keypair_from_json, load_keypair

__all__ = [
    "load_keypair",
    "keypair_from_json",
    "get_rpc_client",
    "get_rpc_url",
    "get_token_balance",
    "get_wsol_balance",
    "format_sol",
    "PollPolicy",
    "ConfirmationStatus",
    "get_associated_token_address_for_owner",
    "build_wrap_instructions",
    "build_signed_transaction",
    "send_transaction",
    "get_confirmation_status",
    "wait_for_confirmation",
    "wrap_sol",
]
