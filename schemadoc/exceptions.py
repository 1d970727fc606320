"""Exception hierarchy for SchemaDoc."""


class SchemaDocError(Exception):
    """Base class for every error that aborts a schema export."""


class ConfigurationError(SchemaDocError, ValueError):
    """Raised when required environment variables are missing or invalid."""


class ExtractionError(SchemaDocError, RuntimeError):
    """Raised when the database cannot be opened or a catalog query fails."""
