"""
typedkeys exception hierarchy.

Every error in the package inherits from TypedKeysError.
Degraded reads and writes (type mismatch, decode/encode failure) are
never raised; these classes cover declaration, configuration and
backend failures only.

Usage:
    try:
        storage[Keys.score] = score
    except StorageError as e:
        # Backend could not persist the cell
    except TypedKeysError as e:
        # Any typedkeys error
"""


class TypedKeysError(Exception):
    """Base exception for all typedkeys errors."""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


# ━━━ Configuration ━━━


class ConfigError(TypedKeysError):
    """Configuration is invalid, missing, or malformed."""

    pass


class RegistryError(TypedKeysError):
    """Backend factory not found or registration conflict."""

    pass


class BackendNotFoundError(RegistryError):
    """Requested backend does not exist in the registry."""

    pass


# ━━━ Keys ━━━


class KeyDeclarationError(TypedKeysError):
    """A key cannot be declared for the requested value type."""

    def __init__(
        self,
        message: str,
        key_name: str = "",
        value_type: object = None,
        details: dict | None = None,
    ):
        self.key_name = key_name
        self.value_type = value_type
        super().__init__(message, details)


class KeyTypeError(TypedKeysError, TypeError):
    """A value written through a native key does not match its declared type."""

    def __init__(self, message: str, key_name: str = "", details: dict | None = None):
        self.key_name = key_name
        super().__init__(message, details)


# ━━━ Backends ━━━


class StorageError(TypedKeysError):
    """Storage backend failure: database errors, unencodable cells, etc."""

    pass
