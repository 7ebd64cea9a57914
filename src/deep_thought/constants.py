"""Network, asset and pricing constants."""

# Solana mainnet (CAIP-2)
SVM_NETWORK = "solana:5eykt4UsFv8P8NJdTREpY1vzqKqZKvdp"

WSOL_MINT = "So11111111111111111111111111111111111111112"
WSOL_DECIMALS = 9

DEFAULT_FACILITATOR_URL = "https://facilitator.payai.network"
DEFAULT_RPC_URL = "https://api.mainnet-beta.solana.com"
DEFAULT_SERVER_URL = "http://localhost:4021"
DEFAULT_KEYPAIR_PATH = "~/.config/solana/id.json"
DEFAULT_PORT = 4021

# Price of /meaning-of-life in WSOL base units (0.0042 WSOL)
PRICE_AMOUNT = "4200000"
PRICE_LABEL = "0.0042 WSOL"

# Client side: balance needed before paying, and how much to wrap when short
REQUIRED_WSOL = 4_200_000
WRAP_AMOUNT = 5_000_000

# Confirmation polling
CONFIRMATION_MAX_ATTEMPTS = 30
CONFIRMATION_INTERVAL_SECONDS = 1.0

# Simulated Deep Thought computation (7.5 million years, compressed)
COMPUTE_DELAY_SECONDS = 4.0

# Headers
PAYMENT_REQUIRED_HEADER = "PAYMENT-REQUIRED"
PAYMENT_RESPONSE_HEADER = "PAYMENT-RESPONSE"

DEEP_THOUGHT_HEADERS = {
    "X-Deep-Thought": "Computation complete",
    "X-Compute-Time": "7500000 years (discounted for payment)",
    "X-Towel": "Don't panic",
    "X-Vogon-Poetry": "Spared",
}

EXPOSED_HEADERS = [
    PAYMENT_REQUIRED_HEADER,
    PAYMENT_RESPONSE_HEADER,
    *DEEP_THOUGHT_HEADERS,
]

SOLSCAN_TX_URL = "https://solscan.io/tx/{signature}"
