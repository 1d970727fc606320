"""SchemaDoc - dump a database's catalog to Markdown."""

__version__ = "0.1.0"
