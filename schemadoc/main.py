"""Main entry points for SchemaDoc."""

import logging
import os
import sys
from typing import Optional

from schemadoc.config import load_settings
from schemadoc.core import SchemaExporter
from schemadoc.exceptions import SchemaDocError
from schemadoc.models import DatabaseType

logger = logging.getLogger("schemadoc")


def configure_logging():
    """Configure logging from LOG_LEVEL (default INFO)."""
    level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def run(dialect: Optional[DatabaseType] = None) -> int:
    """Export the schema once and return the process exit code."""
    configure_logging()
    try:
        settings = load_settings(dialect)
        path = SchemaExporter(settings).export()
    except SchemaDocError as e:
        logger.error(str(e))
        return 1

    print(f"✅ Schema written to {path}")
    return 0


def main():
    """Export with the dialect inferred from the environment."""
    sys.exit(run())


def postgres():
    sys.exit(run(DatabaseType.POSTGRESQL))


def mysql():
    sys.exit(run(DatabaseType.MYSQL))


def mssql():
    sys.exit(run(DatabaseType.MSSQL))


def sqlite():
    sys.exit(run(DatabaseType.SQLITE))


if __name__ == "__main__":
    main()
