"""SQLite access for the count and replace queries."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Union

log = logging.getLogger("SMReplace.database")


class DatabaseError(Exception):
    """Opening the database or running a statement failed."""


def quote_identifier(name: str) -> str:
    """Quote a table or column name for use in SQL text."""
    return '"' + name.replace('"', '""') + '"'


def like_pattern(search_text: str) -> str:
    return f"%{search_text}%"


class ReplaceDatabase:
    """One connection to the target database, held for the whole run."""

    def __init__(self, db_path: Union[str, Path]):
        self.db_path = Path(db_path)
        self.conn = self._connect()

    def _connect(self) -> sqlite3.Connection:
        # mode=rw refuses to create a new, empty file for a mistyped path.
        uri = self.db_path.expanduser().resolve().as_uri() + "?mode=rw"
        try:
            conn = sqlite3.connect(uri, uri=True)
        except sqlite3.Error as exc:
            raise DatabaseError(f"Could not open database {self.db_path}: {exc}") from exc
        try:
            # Keep LIKE in step with REPLACE(), which is always case-sensitive.
            conn.execute("PRAGMA case_sensitive_like = ON")
        except sqlite3.Error as exc:
            conn.close()
            raise DatabaseError(f"Could not open database {self.db_path}: {exc}") from exc
        log.debug("Opened database %s", self.db_path)
        return conn

    def close(self) -> None:
        if self.conn is not None:
            self.conn.close()
            self.conn = None

    def __enter__(self) -> "ReplaceDatabase":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def check_target(self, table: str, column: str) -> None:
        """Fail unless table exists and has column.

        A double-quoted name that matches no column is read by SQLite as a
        string literal, so a mistyped column would otherwise match nothing
        (or everything) without an error.
        """
        try:
            rows = self.conn.execute("SELECT name FROM pragma_table_info(?)", (table,)).fetchall()
        except (sqlite3.Error, UnicodeEncodeError) as exc:
            raise DatabaseError(f"Could not inspect table {table}: {exc}") from exc
        if not rows:
            raise DatabaseError(f"No such table: {table}")
        # SQLite column names are case-insensitive.
        if column.lower() not in {row[0].lower() for row in rows}:
            raise DatabaseError(f"No such column: {table}.{column}")

    def count_matches(self, table: str, column: str, search_text: str) -> int:
        """Number of rows whose column contains search_text."""
        self.check_target(table, column)
        query = "SELECT COUNT(rowid) FROM {table} WHERE {column} LIKE ?".format(
            table=quote_identifier(table), column=quote_identifier(column)
        )
        log.debug("Count query: %s | pattern=%r", query, like_pattern(search_text))
        try:
            row = self.conn.execute(query, (like_pattern(search_text),)).fetchone()
        except (sqlite3.Error, UnicodeEncodeError) as exc:
            raise DatabaseError(f"Count query failed on {table}.{column}: {exc}") from exc
        return int(row[0]) if row else 0

    def replace(self, table: str, column: str, search_text: str, replace_text: str) -> int:
        """Replace every occurrence of search_text in column; return rows updated."""
        self.check_target(table, column)
        col = quote_identifier(column)
        query = "UPDATE {table} SET {col} = REPLACE({col}, ?, ?) WHERE {col} LIKE ?".format(
            table=quote_identifier(table), col=col
        )
        params = (search_text, replace_text, like_pattern(search_text))
        log.debug("Update query: %s | params=%r", query, params)
        try:
            with self.conn:
                cur = self.conn.execute(query, params)
        except (sqlite3.Error, UnicodeEncodeError) as exc:
            raise DatabaseError(f"Update failed on {table}.{column}: {exc}") from exc
        log.info("Updated %d row(s) in %s.%s", cur.rowcount, table, column)
        return cur.rowcount
