"""Error types raised by the Deep Thought server and client."""


class DeepThoughtError(Exception):
    """Base class for Deep Thought errors."""

    pass


class ConfigError(DeepThoughtError):
    """Raised when required configuration is missing or invalid."""

    pass


class KeypairError(DeepThoughtError):
    """Raised when the wallet keypair file cannot be loaded."""

    pass


class ConfirmationTimeoutError(DeepThoughtError):
    """Raised when a submitted transaction is not confirmed in time."""

    def __init__(self, signature: str, attempts: int):
        self.signature = signature
        self.attempts = attempts
        super().__init__(
            f"Wrap transaction not confirmed after {attempts} attempts: {signature}"
        )


class PaidRequestError(DeepThoughtError):
    """Raised when the paid request does not end in a success status."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Request failed: {status_code} - {body}")
