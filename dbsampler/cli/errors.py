"""CLI-specific exceptions with Rich display support."""

from typing import List, Optional


class DbSamplerCLIError(Exception):
    """Base exception for CLI operations with Rich display support."""

    def __init__(self, message: str, suggestions: Optional[List[str]] = None):
        self.message = message
        self.suggestions = suggestions or []
        super().__init__(message)


class MissingConnectionError(DbSamplerCLIError):
    """Raised when neither the config nor the command line names a database."""

    def __init__(self, side: str, config_path: str):
        self.side = side
        self.config_path = config_path

        message = f"No {side} database configured in {config_path}"
        suggestions = [
            f"Add a '{side}' entry to the migration config",
            f"Or pass --{side} with a SQLAlchemy URL",
        ]
        super().__init__(message, suggestions)
