"""x402 client construction and settlement receipt decoding."""

from typing import Callable, Optional

import httpx
from solders.keypair import Keypair
from x402 import SettleResponse, x402Client
from x402.http.x402_http_client import x402HTTPClient
from x402.mechanisms.svm.exact.register import register_exact_svm_client
from x402.mechanisms.svm.signers import KeypairSigner


def create_payment_client(keypair: Keypair, rpc_url: Optional[str] = None) -> x402Client:
    """Create an x402Client that pays with the exact SVM scheme.

    Scheme selection and payment proof construction stay inside the x402
    SDK; this only registers which keypair signs for the scheme.

    Args:
        keypair: Solana keypair backing the payment signer
        rpc_url: Optional RPC URL the scheme uses to build transfers

    Returns:
        Configured x402Client
    """
    client = x402Client()
    register_exact_svm_client(client, KeypairSigner(keypair), rpc_url=rpc_url)
    return client


def get_settlement(
    http_client: x402HTTPClient,
    get_header: Callable[[str], Optional[str]],
) -> Optional[SettleResponse]:
    """Decode the settlement receipt from response headers.

    A missing or malformed PAYMENT-RESPONSE header is not an error: the
    receipt is simply absent.

    Args:
        http_client: x402 HTTP client used for header decoding
        get_header: Header lookup function

    Returns:
        The SettleResponse, or None if there is none
    """
    try:
        return http_client.get_payment_settle_response(get_header)
    except ValueError:
        return None


def get_response_settlement(
    http_client: x402HTTPClient, response: httpx.Response
) -> Optional[SettleResponse]:
    """Decode the settlement receipt from an httpx response."""
    return get_settlement(http_client, lambda name: response.headers.get(name))
