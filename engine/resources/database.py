"""
Game Database.

Handles loading and validation of static game data (enemies, towns).
"""

import json
import logging
from pathlib import Path
from typing import Any

import jsonschema


class Database:
    """
    Central storage for static game data.

    Layout under ``data_path``:
        schemas/<name>.schema.json
        database/<category>/*.json
    """

    def __init__(self, data_path: Path | str):
        self._data_path = Path(data_path)
        self._schemas: dict[str, Any] = {}

        # Data stores, keyed by record id in file order
        self.enemies: dict[str, Any] = {}
        self.towns: dict[str, Any] = {}

        self.logger = logging.getLogger(__name__)

    @property
    def data_path(self) -> Path:
        return self._data_path

    def load_all(self) -> None:
        """Load all data from disk."""
        self._load_schemas()

        self.enemies = self._load_category("enemies", "enemy.schema.json")
        self.towns = self._load_category("towns", "town.schema.json")

        self.logger.info(
            f"Loaded {len(self.enemies)} enemies, "
            f"{len(self.towns)} towns from {self._data_path}."
        )

    def _load_schemas(self) -> None:
        """Load JSON schemas."""
        schema_dir = self._data_path / "schemas"
        if not schema_dir.exists():
            self.logger.warning(f"Schema directory not found: {schema_dir}")
            return

        for schema_file in sorted(schema_dir.glob("*.schema.json")):
            try:
                with open(schema_file, 'r', encoding='utf-8') as f:
                    self._schemas[schema_file.name] = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                self.logger.error(f"Failed to load schema {schema_file}: {e}")

    def _load_category(self, folder: str, schema_name: str) -> dict[str, Any]:
        """Load all JSON files in a category folder."""
        category_dir = self._data_path / "database" / folder
        data_store: dict[str, Any] = {}

        if not category_dir.exists():
            self.logger.warning(f"Data directory not found: {category_dir}")
            return data_store

        schema = self._schemas.get(schema_name)
        if schema is None:
            self.logger.warning(f"No schema found for {folder} ({schema_name})")

        for file_path in sorted(category_dir.glob("*.json")):
            try:
                with open(file_path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                self.logger.error(f"Failed to load {file_path}: {e}")
                continue

            # A file holds either one record or a list of records
            records = data if isinstance(data, list) else [data]
            for record in records:
                if schema:
                    try:
                        jsonschema.validate(instance=record, schema=schema)
                    except jsonschema.ValidationError as e:
                        self.logger.error(f"Validation error in {file_path}: {e.message}")
                        continue
                if isinstance(record, dict) and 'id' in record:
                    data_store[record['id']] = record

        return data_store

    def get_enemy(self, enemy_id: str) -> dict[str, Any] | None:
        return self.enemies.get(enemy_id)

    def get_town(self, town_id: str) -> dict[str, Any] | None:
        return self.towns.get(town_id)
