"""Core export workflow for SchemaDoc."""

from .schema_exporter import SchemaExporter

__all__ = ["SchemaExporter"]
