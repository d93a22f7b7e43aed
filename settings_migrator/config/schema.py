"""
Configuration schema for the settings migrator.

Validates migrator.config.yaml with Pydantic v2:

    store_path: ./settings.db
    verbose: false
    format: text
"""

from typing import Literal

from pydantic import BaseModel, field_validator


class MigratorConfig(BaseModel):
    """
    Root configuration model.

    Attributes:
        store_path: Path to the SQLite settings store
        verbose: Enable DEBUG logging
        format: Output format - "text" (human) or "json" (agent)
    """

    store_path: str
    verbose: bool = False
    format: Literal["text", "json"] = "text"

    @field_validator("store_path")
    @classmethod
    def validate_store_path(cls, v: str) -> str:
        """Validate store_path is non-empty."""
        if not v or v.isspace():
            raise ValueError("store_path cannot be empty")
        return v
