"""Solana wallet loading for the Deep Thought client."""

import json
from pathlib import Path
from typing import Union

from solders.keypair import Keypair

from ..errors import KeypairError


def keypair_from_json(content: str) -> Keypair:
    """
    Create a Keypair from Solana CLI keypair file content.

    Args:
        content: JSON array of 64 integers (secret key followed by public key)

    Returns:
        Solders Keypair

    Raises:
        KeypairError: If the content is not a valid 64 byte secret key

    Example:
        >>> keypair = keypair_from_json("[12, 200, ...]")
        >>> print(keypair.pubkey())
    """
    try:
        secret = json.loads(content)
    except json.JSONDecodeError as e:
        raise KeypairError(f"Keypair file is not valid JSON: {e}") from e

    if not isinstance(secret, list) or len(secret) != 64:
        raise KeypairError("Keypair file must contain a JSON array of 64 bytes")

    try:
        return Keypair.from_bytes(bytes(secret))
    except (TypeError, ValueError) as e:
        raise KeypairError(f"Invalid keypair bytes: {e}") from e


def load_keypair(path: Union[str, Path]) -> Keypair:
    """
    Load a Keypair from a Solana CLI keypair file.

    Args:
        path: Path to the keypair file (e.g. ~/.config/solana/id.json)

    Returns:
        Solders Keypair
    """
    try:
        content = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise KeypairError(f"Cannot read keypair file {path}: {e}") from e
    return keypair_from_json(content)
