"""SQLite persistence for planning objects and issues.

Object names carry a UNIQUE constraint; a duplicate insert surfaces as
``CodeConflictError`` so callers can re-read the roster and try again.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator, Mapping

from .errors import CodeConflictError
from .filter_state import ORDER_KEY, SORT_KEY
from .records import IssueRecord, ObjectDraft, ObjectRecord

logger = logging.getLogger(__name__)


SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS objects (
    id               INTEGER PRIMARY KEY AUTOINCREMENT,
    name             TEXT    NOT NULL UNIQUE,
    description      TEXT,
    module           TEXT    NOT NULL,
    category         TEXT    NOT NULL,
    region           TEXT    NOT NULL,
    source_system    TEXT    NOT NULL,
    current_stage    TEXT    NOT NULL,
    status           TEXT    NOT NULL DEFAULT 'on_track',
    owner_alias      TEXT,
    team_alias       TEXT,
    notes            TEXT,
    is_archived      INTEGER NOT NULL DEFAULT 0,
    stage_entered_at TEXT    NOT NULL,
    created_at       TEXT    NOT NULL,
    updated_at       TEXT    NOT NULL
);

CREATE TABLE IF NOT EXISTS issues (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    object_id       INTEGER NOT NULL REFERENCES objects(id) ON DELETE CASCADE,
    title           TEXT    NOT NULL,
    description     TEXT,
    issue_type      TEXT    NOT NULL,
    lifecycle_stage TEXT    NOT NULL,
    status          TEXT    NOT NULL DEFAULT 'open',
    owner_alias     TEXT,
    is_archived     INTEGER NOT NULL DEFAULT 0,
    created_at      TEXT    NOT NULL,
    updated_at      TEXT    NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_objects_module_category
    ON objects(module, category);
CREATE INDEX IF NOT EXISTS idx_issues_object_id
    ON issues(object_id);
CREATE INDEX IF NOT EXISTS idx_issues_status
    ON issues(status);
"""

OBJECT_EQUALITY_FILTERS = (
    "module",
    "category",
    "status",
    "current_stage",
    "source_system",
    "region",
)

OBJECT_SORT_COLUMNS = {
    "created_at": "created_at",
    "updated_at": "updated_at",
    "name": "name",
    "status": "status",
    "current_stage": "current_stage",
    "stage_entered_at": "stage_entered_at",
}

ISSUE_SORT_COLUMNS = {
    "created_at": "i.created_at",
    "updated_at": "i.updated_at",
    "title": "i.title",
    "status": "i.status",
    "issue_type": "i.issue_type",
    "lifecycle_stage": "i.lifecycle_stage",
}


def now_iso() -> str:
    return datetime.now().isoformat(timespec="seconds")


def _is_name_conflict(exc: sqlite3.IntegrityError) -> bool:
    return "objects.name" in str(exc)


def _archived_flag(filters: Mapping[str, str]) -> int:
    return 1 if filters.get("is_archived") == "true" else 0


def _object_order_clause(filters: Mapping[str, str]) -> str:
    sort_field = filters.get(SORT_KEY) or "created_at"
    ascending = filters.get(ORDER_KEY) == "asc"

    if sort_field == "aging":
        # Longest in stage first means the oldest stage_entered_at first.
        direction = "DESC" if ascending else "ASC"
        return f"ORDER BY stage_entered_at {direction}, id ASC"

    column = OBJECT_SORT_COLUMNS.get(sort_field, "created_at")
    direction = "ASC" if ascending else "DESC"
    return f"ORDER BY {column} {direction}, id ASC"


def _issue_order_clause(filters: Mapping[str, str]) -> str:
    column = ISSUE_SORT_COLUMNS.get(filters.get(SORT_KEY) or "created_at", "i.created_at")
    direction = "DESC" if filters.get(ORDER_KEY) == "desc" else "ASC"
    return f"ORDER BY {column} {direction}, i.id ASC"


def _row_to_object(row: sqlite3.Row) -> ObjectRecord:
    return ObjectRecord(
        id=row["id"],
        name=row["name"],
        module=row["module"],
        category=row["category"],
        region=row["region"],
        source_system=row["source_system"],
        current_stage=row["current_stage"],
        status=row["status"],
        description=row["description"],
        owner_alias=row["owner_alias"],
        team_alias=row["team_alias"],
        notes=row["notes"],
        is_archived=bool(row["is_archived"]),
        stage_entered_at=row["stage_entered_at"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _row_to_issue(row: sqlite3.Row) -> IssueRecord:
    return IssueRecord(
        id=row["id"],
        object_id=row["object_id"],
        object_name=row["object_name"],
        object_module=row["object_module"],
        title=row["title"],
        description=row["description"],
        issue_type=row["issue_type"],
        lifecycle_stage=row["lifecycle_stage"],
        status=row["status"],
        owner_alias=row["owner_alias"],
        is_archived=bool(row["is_archived"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class ObjectStore:
    def __init__(self, db_path: Path | str):
        self.db_path = Path(db_path)

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        try:
            conn = sqlite3.connect(self.db_path, timeout=10)
        except sqlite3.Error as exc:
            logger.error("Failed to connect to database at %s: %s", self.db_path, exc)
            raise
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    def initialize(self) -> None:
        """Create tables and indexes if missing."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        with self._connect() as conn:
            conn.executescript(SCHEMA_SQL)
        logger.info("Initialized planner database at %s", self.db_path)

    def object_names(self) -> list[str]:
        with self._connect() as conn:
            rows = conn.execute("SELECT name FROM objects ORDER BY id").fetchall()
        return [row["name"] for row in rows]

    def insert_object(
        self,
        draft: ObjectDraft,
        *,
        name: str,
        created_at: str | None = None,
        stage_entered_at: str | None = None,
    ) -> ObjectRecord:
        created = created_at or now_iso()
        try:
            with self._connect() as conn:
                cur = conn.execute(
                    "INSERT INTO objects (name, description, module, category, region, source_system,"
                    " current_stage, status, owner_alias, team_alias, notes, is_archived,"
                    " stage_entered_at, created_at, updated_at)"
                    " VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, 0, ?, ?, ?)",
                    (
                        name,
                        draft.description,
                        draft.module.value,
                        draft.category.value,
                        draft.region,
                        draft.source_system,
                        draft.current_stage,
                        draft.status,
                        draft.owner_alias,
                        draft.team_alias,
                        draft.notes,
                        stage_entered_at or created,
                        created,
                        created,
                    ),
                )
                row = conn.execute(
                    "SELECT * FROM objects WHERE id = ?", (cur.lastrowid,)
                ).fetchone()
        except sqlite3.IntegrityError as exc:
            if _is_name_conflict(exc):
                raise CodeConflictError(name) from exc
            raise
        return _row_to_object(row)

    def get_object(self, object_id: int) -> ObjectRecord | None:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM objects WHERE id = ?", (object_id,)).fetchone()
        return _row_to_object(row) if row else None

    def set_archived(self, object_id: int, archived: bool = True) -> ObjectRecord | None:
        """Archive or restore an object; returns the updated record, or None if missing."""
        with self._connect() as conn:
            conn.execute(
                "UPDATE objects SET is_archived = ?, updated_at = ? WHERE id = ?",
                (1 if archived else 0, now_iso(), object_id),
            )
        return self.get_object(object_id)

    def list_objects(self, filters: Mapping[str, str]) -> list[ObjectRecord]:
        clauses = ["is_archived = ?"]
        params: list = [_archived_flag(filters)]

        for key in OBJECT_EQUALITY_FILTERS:
            value = filters.get(key)
            if value:
                clauses.append(f"{key} = ?")
                params.append(value)

        search = filters.get("search")
        if search:
            clauses.append("name LIKE ?")
            params.append(f"%{search}%")

        query = (
            f"SELECT * FROM objects WHERE {' AND '.join(clauses)} "
            f"{_object_order_clause(filters)}"
        )
        with self._connect() as conn:
            rows = conn.execute(query, params).fetchall()
        return [_row_to_object(row) for row in rows]

    def insert_issue(
        self,
        object_id: int,
        *,
        title: str,
        issue_type: str,
        lifecycle_stage: str,
        status: str = "open",
        description: str | None = None,
        owner_alias: str | None = None,
        created_at: str | None = None,
    ) -> int:
        created = created_at or now_iso()
        with self._connect() as conn:
            cur = conn.execute(
                "INSERT INTO issues (object_id, title, description, issue_type, lifecycle_stage,"
                " status, owner_alias, is_archived, created_at, updated_at)"
                " VALUES (?, ?, ?, ?, ?, ?, ?, 0, ?, ?)",
                (
                    object_id,
                    title,
                    description,
                    issue_type,
                    lifecycle_stage,
                    status,
                    owner_alias,
                    created,
                    created,
                ),
            )
            issue_id = cur.lastrowid
        if issue_id is None:
            raise RuntimeError("Failed to insert issue")
        return issue_id

    def list_issues(self, filters: Mapping[str, str]) -> list[IssueRecord]:
        clauses = ["i.is_archived = ?"]
        params: list = [_archived_flag(filters)]

        status = filters.get("status")
        if status:
            statuses = status.split(",")
            placeholders = ",".join(["?"] * len(statuses))
            clauses.append(f"i.status IN ({placeholders})")
            params.extend(statuses)
        else:
            clauses.append("i.status != 'closed'")

        for key in ("issue_type", "lifecycle_stage"):
            value = filters.get(key)
            if value:
                clauses.append(f"i.{key} = ?")
                params.append(value)

        module = filters.get("module")
        if module:
            clauses.append("o.module = ?")
            params.append(module)

        search = filters.get("search")
        if search:
            clauses.append("i.title LIKE ?")
            params.append(f"%{search}%")

        query = (
            "SELECT i.*, o.name AS object_name, o.module AS object_module "
            "FROM issues i JOIN objects o ON o.id = i.object_id "
            f"WHERE {' AND '.join(clauses)} {_issue_order_clause(filters)}"
        )
        with self._connect() as conn:
            rows = conn.execute(query, params).fetchall()
        return [_row_to_issue(row) for row in rows]
