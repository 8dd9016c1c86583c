"""Exception hierarchy for the extended Game of Life."""


class ExtLifeError(Exception):
    """Base for all extlife exceptions."""

    pass


class ConfigurationError(ExtLifeError):
    """A generation or game is wired up incorrectly (missing board/game)."""

    pass


class IntegrityError(ExtLifeError):
    """The grid is malformed, e.g. a tile has no occupant."""

    pass


class ConfigError(ExtLifeError):
    """Invalid values in a simulation config file."""

    pass


class StorageError(ExtLifeError):
    """Persistence failures. Raised after the transaction has rolled back."""

    pass
