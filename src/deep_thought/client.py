"""Deep Thought CLI client: top up WSOL if needed, then pay for the answer."""

import asyncio
import json
import logging
import sys
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

import httpx
from dotenv import load_dotenv
from solana.rpc.async_api import AsyncClient
from solders.keypair import Keypair
from x402 import SettleResponse, x402Client
from x402.http.clients import x402AsyncTransport
from x402.http.x402_http_client import x402HTTPClient

from .clients import create_payment_client, get_response_settlement
from .config import ClientConfig, configure_logging
from .constants import DEEP_THOUGHT_HEADERS, REQUIRED_WSOL, SOLSCAN_TX_URL, WRAP_AMOUNT
from .errors import PaidRequestError
from .svm import PollPolicy, format_sol, get_rpc_client, get_wsol_balance, load_keypair, wrap_sol
from .svm.transaction import SleepFunc

logger = logging.getLogger(__name__)

RULE = "=" * 60


@dataclass
class DeepThoughtAnswer:
    """Result of a paid call to /meaning-of-life."""

    data: Dict[str, Any]
    headers: Dict[str, Optional[str]]
    settlement: Optional[SettleResponse] = None


async def ensure_wsol_balance(
    rpc: AsyncClient,
    keypair: Keypair,
    required: int = REQUIRED_WSOL,
    wrap_amount: int = WRAP_AMOUNT,
    policy: PollPolicy = PollPolicy(),
    sleep: SleepFunc = asyncio.sleep,
) -> Optional[str]:
    """Wrap SOL when the WSOL balance is below what the payment needs.

    Returns:
        Signature of the wrap transaction, or None if the balance sufficed.
    """
    balance = await get_wsol_balance(rpc, keypair.pubkey())
    print(f"WSOL Balance: {format_sol(balance)} SOL")

    if balance >= required:
        return None

    print(f"Insufficient WSOL. Need {format_sol(required)}, have {format_sol(balance)}")
    print(f"\nWrapping {format_sol(wrap_amount)} SOL to WSOL...")
    signature = await wrap_sol(rpc, keypair, wrap_amount, policy, sleep)
    print(f"Wrap tx: {signature}")
    print("Wrap confirmed!")
    return signature


async def query_meaning_of_life(
    endpoint: str,
    payment_client: Union[x402Client, x402HTTPClient],
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> DeepThoughtAnswer:
    """Call the paid endpoint, paying transparently on 402.

    Args:
        endpoint: Full URL of /meaning-of-life.
        payment_client: x402 client that builds payments.
        transport: Optional base transport (defaults to real HTTP).

    Raises:
        PaidRequestError: If the final response is not a success.
    """
    print(f"\nQuerying Deep Thought at {endpoint}...")
    print("(This may take 7.5 million years... or about 4 seconds)\n")

    if isinstance(payment_client, x402HTTPClient):
        http_client = payment_client
    else:
        http_client = x402HTTPClient(payment_client)

    payment_transport = x402AsyncTransport(payment_client, transport)
    async with httpx.AsyncClient(transport=payment_transport, timeout=None) as http:
        response = await http.get(endpoint)
        await response.aread()

    if not response.is_success:
        raise PaidRequestError(response.status_code, response.text)

    return DeepThoughtAnswer(
        data=response.json(),
        headers={name: response.headers.get(name) for name in DEEP_THOUGHT_HEADERS},
        settlement=get_response_settlement(http_client, response),
    )


def print_answer(answer: DeepThoughtAnswer) -> None:
    print(RULE)
    print("DEEP THOUGHT RESPONSE:")
    print(RULE)
    print(json.dumps(answer.data, indent=2))
    print(RULE)

    print("\nResponse Headers:")
    for name, value in answer.headers.items():
        print(f"  {name}: {value}")

    if answer.settlement is not None:
        print("\nPayment Settlement:")
        print(f"  Success: {answer.settlement.success}")
        if answer.settlement.transaction:
            tx_url = SOLSCAN_TX_URL.format(signature=answer.settlement.transaction)
            print(f"  Transaction: {tx_url}")


async def run(
    config: ClientConfig,
    rpc: Optional[AsyncClient] = None,
    payment_client: Optional[Union[x402Client, x402HTTPClient]] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    policy: PollPolicy = PollPolicy(),
    sleep: SleepFunc = asyncio.sleep,
) -> DeepThoughtAnswer:
    """Balance check, optional wrap, then the paid request.

    Collaborators default to real ones built from config; tests inject fakes.
    """
    print(RULE)
    print("x402 CLI Client - The Meaning of Life")
    print(RULE)

    keypair = load_keypair(config.keypair_path)
    print(f"Wallet: {keypair.pubkey()}")

    if rpc is None:
        async with get_rpc_client(config.rpc_url) as owned_rpc:
            await ensure_wsol_balance(owned_rpc, keypair, policy=policy, sleep=sleep)
    else:
        await ensure_wsol_balance(rpc, keypair, policy=policy, sleep=sleep)

    if payment_client is None:
        payment_client = create_payment_client(keypair, config.rpc_url)

    answer = await query_meaning_of_life(config.endpoint, payment_client, transport)
    print_answer(answer)
    return answer


def main() -> None:
    """CLI entry point."""
    load_dotenv()
    config = ClientConfig.from_env()
    configure_logging(config.log_level)

    try:
        asyncio.run(run(config))
    except Exception as e:
        logger.debug("Client run failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
