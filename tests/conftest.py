"""Shared test fixtures for Deep Thought."""

import base64
import json
from typing import Any, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import Request
from fastapi.responses import JSONResponse
from solders.hash import Hash
from solders.keypair import Keypair
from solders.signature import Signature
from solders.transaction_status import TransactionConfirmationStatus
from x402.http.utils import encode_payment_required_header
from x402.http.x402_http_client import x402HTTPClient
from x402.schemas import (
    PaymentPayload,
    PaymentRequired,
    PaymentRequirements,
    SettleResponse,
)

from deep_thought.config import ClientConfig, ServerConfig
from deep_thought.constants import PRICE_AMOUNT, SVM_NETWORK, WSOL_MINT

PAYEE_ADDRESS = "FSTt5YsTt2dur7ZEqcqQHL4FTR56efDhwgJdEKvYQQea"
SETTLEMENT_TX = "5VERv8NMvzbJMEkV8xnrLkEaWRtSz9CosKDYjCJjBRnbJLgp8uirBgmQpjKhoR4tjF3ZpRzrFmBV6UjKdiSZkQUW"


def make_payment_requirements() -> PaymentRequirements:
    """Payment requirements matching the /meaning-of-life price."""
    return PaymentRequirements(
        scheme="exact",
        network=SVM_NETWORK,
        asset=WSOL_MINT,
        amount=PRICE_AMOUNT,
        pay_to=PAYEE_ADDRESS,
        max_timeout_seconds=60,
        extra={"feePayer": PAYEE_ADDRESS},
    )


def make_payment_payload(signature: str = "mock-svm-transaction") -> PaymentPayload:
    return PaymentPayload(
        x402_version=2,
        payload={"transaction": signature},
        accepted=make_payment_requirements(),
    )


class MockX402Client:
    """Stands in for x402Client; records every payment it is asked for."""

    def __init__(self, payload: Optional[PaymentPayload] = None):
        self.payload = payload or make_payment_payload()
        self.create_calls: list = []

    async def create_payment_payload(self, payment_required):
        self.create_calls.append(payment_required)
        return self.payload


def encode_settlement(settle: SettleResponse) -> str:
    return base64.b64encode(settle.model_dump_json(by_alias=True).encode("utf-8")).decode(
        "utf-8"
    )


def make_payment_gate(valid_header: str, settle: bool = True):
    """Fake x402 middleware: 402 unless PAYMENT-SIGNATURE matches valid_header."""
    challenge = encode_payment_required_header(
        PaymentRequired(x402_version=2, accepts=[make_payment_requirements()])
    )
    calls: list[str] = []

    async def gate(request: Request, call_next):
        calls.append(request.url.path)
        if request.url.path != "/meaning-of-life":
            return await call_next(request)

        if request.headers.get("PAYMENT-SIGNATURE") != valid_header:
            return JSONResponse(
                content={"x402Version": 2, "error": "Payment required"},
                status_code=402,
                headers={"PAYMENT-REQUIRED": challenge},
            )

        response = await call_next(request)
        if settle:
            response.headers["PAYMENT-RESPONSE"] = encode_settlement(
                SettleResponse(
                    success=True,
                    transaction=SETTLEMENT_TX,
                    network=SVM_NETWORK,
                    payer=PAYEE_ADDRESS,
                )
            )
        return response

    gate.calls = calls  # type: ignore[attr-defined]
    return gate


def valid_payment_header(client: MockX402Client) -> str:
    return x402HTTPClient(client).encode_payment_signature_header(client.payload)[
        "PAYMENT-SIGNATURE"
    ]


def make_status(status: Optional[TransactionConfirmationStatus]) -> MagicMock:
    """RPC get_signature_statuses response with a single entry."""
    if status is None:
        return MagicMock(value=[None])
    return MagicMock(value=[MagicMock(confirmation_status=status)])


def make_account_response(amount: Optional[int]) -> MagicMock:
    """RPC get_account_info_json_parsed response; None means no account."""
    if amount is None:
        return MagicMock(value=None)
    account = MagicMock()
    account.data.parsed = {
        "info": {"tokenAmount": {"amount": str(amount), "decimals": 9}},
        "type": "account",
    }
    return MagicMock(value=account)


def make_mock_rpc(
    balance: Optional[int] = None,
    statuses: Optional[list[Any]] = None,
    signature: Optional[Signature] = None,
) -> AsyncMock:
    """Mock solana AsyncClient covering the calls the client makes."""
    rpc = AsyncMock()
    rpc.get_account_info_json_parsed.return_value = make_account_response(balance)
    rpc.get_latest_blockhash.return_value = MagicMock(value=MagicMock(blockhash=Hash.default()))
    rpc.send_transaction.return_value = MagicMock(value=signature or Signature.default())
    rpc.get_signature_statuses.side_effect = [make_status(s) for s in (statuses or [])]
    return rpc


def keypair_to_json(keypair: Keypair) -> str:
    """Serialize a Keypair in the Solana CLI file format."""
    return json.dumps(list(bytes(keypair)))


class FakeSleep:
    """Records requested delays instead of sleeping."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def keypair() -> Keypair:
    return Keypair()


@pytest.fixture
def keypair_file(tmp_path, keypair: Keypair):
    path = tmp_path / "id.json"
    path.write_text(keypair_to_json(keypair))
    return path


@pytest.fixture
def server_config() -> ServerConfig:
    return ServerConfig(payee_address=PAYEE_ADDRESS)


@pytest.fixture
def client_config(keypair_file) -> ClientConfig:
    return ClientConfig(server_url="http://testserver", keypair_path=str(keypair_file))


@pytest.fixture
def fake_sleep() -> FakeSleep:
    return FakeSleep()


@pytest.fixture
def mock_x402_client() -> MockX402Client:
    return MockX402Client()
