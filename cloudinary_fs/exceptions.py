# exceptions.py


class LogicError(Exception):
    """An error caused by using the adapter in a way it was not built for."""
    pass


class UnsupportedOperationError(LogicError):
    """The requested operation is not supported by the storage backend."""
    pass


class ConfigurationError(Exception):
    """The settings needed to reach the storage backend are missing or invalid."""
    pass
