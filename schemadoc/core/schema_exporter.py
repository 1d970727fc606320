"""Runs one schema export: connect, read, render, write, disconnect."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from ..config import DatabaseSettings
from ..exceptions import ExtractionError
from ..models import SchemaSnapshot
from ..services import get_reader, MarkdownRenderer

logger = logging.getLogger(__name__)


class SchemaExporter:
    """Exports a database catalog to a Markdown file."""

    def __init__(self, settings: DatabaseSettings):
        """Initialize with resolved connection settings."""
        self.settings = settings
        self.reader = get_reader(settings.dialect)
        self.renderer = MarkdownRenderer()

    def create_engine(self) -> Engine:
        try:
            return create_engine(self.settings.url)
        except (SQLAlchemyError, ImportError) as e:
            raise ExtractionError(f"Failed to create database engine: {e}") from e

    def extract(self) -> SchemaSnapshot:
        """Read the catalog over a single connection."""
        engine = self.create_engine()
        try:
            try:
                conn = engine.connect()
            except SQLAlchemyError as e:
                raise ExtractionError(f"Failed to connect to database: {e}") from e

            with conn:
                logger.info(f"Connected to {self.settings.dialect.label} at {self.settings.display_url}")
                return self.reader.read(conn, self.settings.database)
        finally:
            engine.dispose()

    def write(self, content: str, path: Optional[Path] = None) -> Path:
        path = path or self.settings.output_path
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise ExtractionError(f"Failed to write {path}: {e}") from e
        return path

    def export(self, generated_at: Optional[datetime] = None) -> Path:
        """Extract, render and write. The file is touched only after every query succeeds."""
        snapshot = self.extract()
        content = self.renderer.render(snapshot, generated_at)
        path = self.write(content)
        logger.info(f"Wrote {len(snapshot.table_keys())} tables to {path}")
        return path
