"""Wardrobe and attribute catalog storage abstractions with a SQLite implementation."""
from __future__ import annotations

import json
import sqlite3
import uuid
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from models.attributes import AttributeDefinition, ItemAttributeValue, validate_attribute_value
from models.candidate_item import CandidateItem


class WardrobeStore:
    """Persistence interface for attribute definitions and owners' clothes."""

    def create_definition(self, name: str, selectable_values: Sequence[str]) -> AttributeDefinition:
        raise NotImplementedError

    def get_definition(self, definition_id: str) -> Optional[AttributeDefinition]:
        raise NotImplementedError

    def find_definition_by_name(self, name: str) -> Optional[AttributeDefinition]:
        raise NotImplementedError

    def list_definitions(self) -> List[AttributeDefinition]:
        raise NotImplementedError

    def create_item(self, owner_id: str, item: CandidateItem) -> CandidateItem:
        raise NotImplementedError

    def get_item(self, owner_id: str, item_id: str) -> Optional[CandidateItem]:
        raise NotImplementedError

    def list_items_for_user(self, owner_id: str) -> List[CandidateItem]:
        raise NotImplementedError

    def delete_item(self, owner_id: str, item_id: str) -> bool:
        raise NotImplementedError


class SQLiteWardrobeStore(WardrobeStore):
    """Local SQLite-backed store for clothes and their attribute catalog."""

    def __init__(self, database_path: str | Path = "data/wardrobe.db") -> None:
        self.database_path = Path(database_path)
        if self.database_path.parent and not self.database_path.parent.exists():
            self.database_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_tables()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.database_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    def _ensure_tables(self) -> None:
        with self._connect() as conn:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS attribute_definitions (
                    definition_id TEXT PRIMARY KEY,
                    name TEXT NOT NULL UNIQUE,
                    selectable_values TEXT NOT NULL,
                    created_at TEXT NOT NULL
                );
                CREATE TABLE IF NOT EXISTS clothes (
                    owner_id TEXT NOT NULL,
                    item_id TEXT NOT NULL,
                    name TEXT NOT NULL,
                    image_url TEXT,
                    category TEXT NOT NULL,
                    PRIMARY KEY (owner_id, item_id)
                );
                CREATE TABLE IF NOT EXISTS clothes_attributes (
                    owner_id TEXT NOT NULL,
                    item_id TEXT NOT NULL,
                    position INTEGER NOT NULL,
                    definition_id TEXT NOT NULL REFERENCES attribute_definitions (definition_id),
                    value TEXT,
                    PRIMARY KEY (owner_id, item_id, position)
                );
                """
            )

    @staticmethod
    def _row_to_definition(row: sqlite3.Row) -> AttributeDefinition:
        return AttributeDefinition(
            definition_id=row["definition_id"],
            name=row["name"],
            selectable_values=tuple(json.loads(row["selectable_values"])),
            created_at=datetime.fromisoformat(row["created_at"]),
        )

    def create_definition(self, name: str, selectable_values: Sequence[str]) -> AttributeDefinition:
        definition = AttributeDefinition(
            definition_id=uuid.uuid4().hex,
            name=name,
            selectable_values=tuple(selectable_values),
        )
        if self.find_definition_by_name(definition.name):
            raise ValueError(f"Attribute definition '{definition.name}' already exists")
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO attribute_definitions (definition_id, name, selectable_values, created_at)
                VALUES (?, ?, ?, ?)
                """,
                (
                    definition.definition_id,
                    definition.name,
                    json.dumps(list(definition.selectable_values), ensure_ascii=False),
                    definition.created_at.isoformat(),
                ),
            )
        return definition

    def get_definition(self, definition_id: str) -> Optional[AttributeDefinition]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM attribute_definitions WHERE definition_id = ?", (definition_id,)
            ).fetchone()
            return self._row_to_definition(row) if row else None

    def find_definition_by_name(self, name: str) -> Optional[AttributeDefinition]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM attribute_definitions WHERE name = ?", (name.strip(),)
            ).fetchone()
            return self._row_to_definition(row) if row else None

    def list_definitions(self) -> List[AttributeDefinition]:
        with self._connect() as conn:
            rows = conn.execute("SELECT * FROM attribute_definitions ORDER BY created_at, name").fetchall()
            return [self._row_to_definition(row) for row in rows]

    def _validated_attributes(self, item: CandidateItem) -> List[ItemAttributeValue]:
        validated = []
        for attribute in item.attributes:
            stored = self.get_definition(attribute.definition.definition_id)
            if stored is None:
                raise ValueError(f"Unknown attribute definition '{attribute.definition.definition_id}'")
            value = validate_attribute_value(stored, attribute.value)
            validated.append(ItemAttributeValue(definition=stored, value=value))
        return validated

    def create_item(self, owner_id: str, item: CandidateItem) -> CandidateItem:
        attributes = self._validated_attributes(item)
        with self._connect() as conn:
            conn.execute(
                "DELETE FROM clothes_attributes WHERE owner_id = ? AND item_id = ?", (owner_id, item.item_id)
            )
            conn.execute(
                """
                INSERT OR REPLACE INTO clothes (owner_id, item_id, name, image_url, category)
                VALUES (?, ?, ?, ?, ?)
                """,
                (owner_id, item.item_id, item.name, item.image_url, item.category.value),
            )
            conn.executemany(
                """
                INSERT INTO clothes_attributes (owner_id, item_id, position, definition_id, value)
                VALUES (?, ?, ?, ?, ?)
                """,
                [
                    (owner_id, item.item_id, position, attribute.definition.definition_id, attribute.value)
                    for position, attribute in enumerate(attributes)
                ],
            )
        return CandidateItem(
            item_id=item.item_id,
            name=item.name,
            category=item.category,
            image_url=item.image_url,
            attributes=attributes,
        )

    def _load_attributes(
        self, conn: sqlite3.Connection, owner_id: str, definitions: Dict[str, AttributeDefinition]
    ) -> Dict[str, List[ItemAttributeValue]]:
        rows = conn.execute(
            "SELECT * FROM clothes_attributes WHERE owner_id = ? ORDER BY item_id, position", (owner_id,)
        ).fetchall()
        attributes: Dict[str, List[ItemAttributeValue]] = {}
        for row in rows:
            definition = definitions.get(row["definition_id"])
            if definition is None:
                continue
            attributes.setdefault(row["item_id"], []).append(
                ItemAttributeValue(definition=definition, value=row["value"])
            )
        return attributes

    def _rows_to_items(self, conn: sqlite3.Connection, owner_id: str, rows: List[sqlite3.Row]) -> List[CandidateItem]:
        definitions = {definition.definition_id: definition for definition in self.list_definitions()}
        attributes = self._load_attributes(conn, owner_id, definitions)
        return [
            CandidateItem(
                item_id=row["item_id"],
                name=row["name"],
                category=row["category"],
                image_url=row["image_url"],
                attributes=attributes.get(row["item_id"], []),
            )
            for row in rows
        ]

    def get_item(self, owner_id: str, item_id: str) -> Optional[CandidateItem]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM clothes WHERE owner_id = ? AND item_id = ?", (owner_id, item_id)
            ).fetchone()
            if not row:
                return None
            return self._rows_to_items(conn, owner_id, [row])[0]

    def list_items_for_user(self, owner_id: str) -> List[CandidateItem]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM clothes WHERE owner_id = ? ORDER BY item_id", (owner_id,)
            ).fetchall()
            return self._rows_to_items(conn, owner_id, rows)

    def delete_item(self, owner_id: str, item_id: str) -> bool:
        with self._connect() as conn:
            conn.execute(
                "DELETE FROM clothes_attributes WHERE owner_id = ? AND item_id = ?", (owner_id, item_id)
            )
            cursor = conn.execute(
                "DELETE FROM clothes WHERE owner_id = ? AND item_id = ?", (owner_id, item_id)
            )
            return cursor.rowcount > 0


__all__ = ["WardrobeStore", "SQLiteWardrobeStore"]
