"""
The custom exceptions used throughout tronkit
"""
__all__ = ["TronKitError", "ValidationError", "InvalidKeyFormat", "InvalidMnemonic", "InvalidAddress",
           "ChecksumMismatch", "InvalidCharacter", "AmountFormatError", "CryptographicRangeError", "ECCError",
           "ExtendedKeyError", "UpstreamUnavailable", "UpstreamTimeout", "AllSourcesUnavailable",
           "DeadlineExceeded", "LedgerError", "ConfigError"]


class TronKitError(Exception):
    """
    Parent class for every error raised by tronkit
    """
    pass


# --- CALLER-FIXABLE --- #

class ValidationError(TronKitError):
    """
    Caller supplied malformed input. Never retried.
    """
    pass


class InvalidKeyFormat(ValidationError):
    """
    Private key is not 64 hex characters or lies outside (0, n)
    """
    pass


class InvalidMnemonic(ValidationError):
    """
    Wrong word count, unknown word or failed BIP39 checksum
    """
    pass


class InvalidAddress(ValidationError):
    """
    Address is neither a valid Base58Check nor a 21-byte hex address
    """
    pass


class ChecksumMismatch(ValidationError):
    """
    Base58Check checksum does not verify
    """
    pass


class InvalidCharacter(ValidationError):
    """
    Character outside the Base58 alphabet
    """
    pass


class AmountFormatError(ValidationError):
    """
    For amounts that cannot be represented exactly
    """
    pass


# --- CRYPTOGRAPHY --- #

class CryptographicRangeError(TronKitError):
    """
    For if the private key scalar is out of bounds
    """
    pass


class ECCError(TronKitError):
    """
    For use when deserializing pubkeys
    """
    pass


class ExtendedKeyError(TronKitError):
    """Custom exception for extended key operations"""
    pass


# --- UPSTREAM --- #

class UpstreamUnavailable(TronKitError):
    """
    Provider failed: transport error, bad status or unparsable body
    """

    def __init__(self, message: str, provider_id: str = ""):
        super().__init__(message)
        self.provider_id = provider_id


class UpstreamTimeout(UpstreamUnavailable):
    """
    Provider did not answer within the call timeout
    """
    pass


class AllSourcesUnavailable(TronKitError):
    """
    Terminal failure: every configured provider has been exhausted
    """

    def __init__(self, message: str, errors: list | None = None):
        super().__init__(message)
        self.errors = list(errors or [])


class DeadlineExceeded(AllSourcesUnavailable):
    """
    The caller's deadline expired before a provider answered
    """
    pass


# --- COLLABORATORS / STARTUP --- #

class LedgerError(TronKitError):
    """
    Raised by LedgerClient implementations when signing or broadcasting fails
    """
    pass


class ConfigError(TronKitError):
    """
    Invalid configuration values at startup
    """
    pass
