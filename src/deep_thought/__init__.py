"""Deep Thought - a pay-per-request x402 demo on Solana.

A FastAPI resource server that sells the answer to the meaning of life for
0.0042 WSOL, and an async client that wraps SOL into WSOL when needed and
pays for the answer through the x402 protocol.

Quick Start:
    ```bash
    export SVM_PAYEE_ADDRESS=<your address>
    deep-thought-server

    export KEYPAIR_PATH=~/.config/solana/id.json
    deep-thought-client
    ```
"""

from .config import ClientConfig, ServerConfig
from .constants import REQUIRED_WSOL, WRAP_AMOUNT, WSOL_MINT
from .errors import (
    ConfigError,
    ConfirmationTimeoutError,
    DeepThoughtError,
    KeypairError,
    PaidRequestError,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Config
    "ClientConfig",
    "ServerConfig",
    # Constants
    "REQUIRED_WSOL",
    "WRAP_AMOUNT",
    "WSOL_MINT",
    # Errors
    "DeepThoughtError",
    "ConfigError",
    "KeypairError",
    "ConfirmationTimeoutError",
    "PaidRequestError",
]
