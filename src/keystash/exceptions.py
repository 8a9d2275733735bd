"""Exception types for keystash"""


class KeystashError(Exception):
    """Base exception for keystash"""

    pass


class UnavailableBackend(KeystashError):
    """Raised when a driver's storage facility is missing or disabled

    Only raised while constructing a driver. Callers recover by selecting a
    different driver.
    """

    pass


class InvalidKeyError(KeystashError, ValueError):
    """Raised when a key path segment cannot be encoded"""

    pass


class ConfigError(KeystashError, ValueError):
    """Raised when a configuration file is missing fields or malformed"""

    pass
