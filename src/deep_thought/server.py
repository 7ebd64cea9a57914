"""Deep Thought x402 FastAPI server.

Sells the answer to the meaning of life for 0.0042 WSOL on Solana mainnet.
Payment is verified through a facilitator by the x402 payment middleware
before the route handler runs.
"""

import asyncio
import logging
import sys
from typing import Any, Awaitable, Callable, Dict, Optional

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from x402 import AssetAmount, x402ResourceServer
from x402.http import FacilitatorConfig, HTTPFacilitatorClient
from x402.http.middleware.fastapi import payment_middleware
from x402.mechanisms.svm.exact.register import register_exact_svm_server

from .config import ServerConfig, configure_logging
from .constants import (
    COMPUTE_DELAY_SECONDS,
    DEEP_THOUGHT_HEADERS,
    EXPOSED_HEADERS,
    PRICE_AMOUNT,
    PRICE_LABEL,
    WSOL_MINT,
)
from .errors import ConfigError

logger = logging.getLogger(__name__)

PaymentGate = Callable[[Request, Callable[[Request], Awaitable[Response]]], Awaitable[Response]]

MEANING_OF_LIFE_PATH = "/meaning-of-life"

MEANING_OF_LIFE = {
    "answer": 42,
    "question": "Unknown",
    "computeTime": "7.5 million years",
    "note": (
        "The supercomputer Deep Thought originally took 7.5 million years to "
        "compute this. Your payment expedited the process significantly."
    ),
    "disclaimer": (
        "Unfortunately, no one actually knew what the Question was. Perhaps "
        "you need an even bigger computer for that."
    ),
}


def build_routes(config: ServerConfig) -> Dict[str, Any]:
    """Build the x402 route table for the paid endpoint."""
    return {
        f"GET {MEANING_OF_LIFE_PATH}": {
            "accepts": {
                "scheme": "exact",
                "network": config.network,
                "payTo": config.payee_address,
                "price": AssetAmount(amount=PRICE_AMOUNT, asset=WSOL_MINT),
            },
            "description": (
                "Deep Thought computed for 7.5 million years. You can skip the "
                "wait for a small fee. Don't Panic."
            ),
            "mimeType": "application/json",
        },
    }


def build_resource_server(config: ServerConfig) -> x402ResourceServer:
    """Create the x402 resource server backed by the configured facilitator."""
    facilitator_client = HTTPFacilitatorClient(FacilitatorConfig(url=config.facilitator_url))
    server = x402ResourceServer(facilitator_client)
    register_exact_svm_server(server)
    return server


def build_payment_gate(config: ServerConfig) -> PaymentGate:
    """Create the x402 payment middleware for the route table."""
    return payment_middleware(build_routes(config), build_resource_server(config))


def create_app(
    config: ServerConfig,
    payment_gate: Optional[PaymentGate] = None,
    compute_delay: float = COMPUTE_DELAY_SECONDS,
) -> FastAPI:
    """Create the Deep Thought app.

    Args:
        config: Server configuration.
        payment_gate: HTTP middleware enforcing payment. Defaults to the x402
            payment middleware.
        compute_delay: Seconds Deep Thought "thinks" before answering.

    Returns:
        FastAPI application.
    """
    app = FastAPI(title="x402 Meaning of Life Server")

    gate = payment_gate or build_payment_gate(config)
    app.middleware("http")(gate)

    # Added last so it wraps the payment gate and 402 challenges carry CORS headers
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=".*",
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=EXPOSED_HEADERS,
    )

    @app.get(MEANING_OF_LIFE_PATH)
    async def meaning_of_life(response: Response) -> Dict[str, Any]:
        """Paid endpoint - 0.0042 WSOL."""
        for name, value in DEEP_THOUGHT_HEADERS.items():
            response.headers[name] = value

        # 7.5 million years, compressed
        await asyncio.sleep(compute_delay)

        return MEANING_OF_LIFE

    @app.get("/health")
    async def health() -> Dict[str, Any]:
        """Health check endpoint - free."""
        return {
            "status": "ok",
            "network": config.network,
            "payee": config.payee_address,
            "price": PRICE_LABEL,
        }

    return app


def banner(config: ServerConfig) -> str:
    """Startup banner shown on the console."""
    payee = f"{config.payee_address[:8]}...{config.payee_address[-6:]}"
    rule = "=" * 60
    return "\n".join(
        [
            rule,
            'x402 "Meaning of Life" Server',
            rule,
            f"Server:      http://localhost:{config.port}",
            f"Network:     {config.network}",
            f"Facilitator: {config.facilitator_url}",
            f"Price:       {PRICE_LABEL} (42, obviously)",
            f"Payee:       {payee}",
            rule,
            "Endpoints:",
            f"  GET {MEANING_OF_LIFE_PATH}  ({PRICE_LABEL})",
            "  GET /health           (free)",
            rule,
        ]
    )


def main() -> None:
    """Run the server with uvicorn."""
    load_dotenv()

    try:
        config = ServerConfig.from_env()
    except ConfigError as e:
        print(f"❌ {e}", file=sys.stderr)
        print("   Set it in .env file or export it directly", file=sys.stderr)
        sys.exit(1)

    configure_logging(config.log_level)
    app = create_app(config)

    print(banner(config))
    uvicorn.run(app, host="0.0.0.0", port=config.port)


if __name__ == "__main__":
    main()
