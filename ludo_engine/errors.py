class LudoEngineError(Exception):
    """Base exception for the rules engine."""

    pass


class ConfigurationError(LudoEngineError):
    """Raised when a game configuration is rejected before a match exists."""

    pass
