"""
x402 client pieces for paying Deep Thought.

Exports:
    - create_payment_client: x402Client with the exact SVM scheme registered
    - get_settlement / get_response_settlement: decode PAYMENT-RESPONSE
"""

from .base import create_payment_client, get_response_settlement, get_settlement

__all__ = [
    "create_payment_client",
    "get_settlement",
    "get_response_settlement",
]
