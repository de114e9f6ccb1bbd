"""Local SQLite storage for users, display pictures and message history."""

from __future__ import annotations

import sqlite3
import threading
from dataclasses import dataclass
from pathlib import Path

import platformdirs

APP_NAME = "meowsn"
_LEGACY_NAME = "icedm"

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS display_pictures (
        id INTEGER PRIMARY KEY,
        picture BLOB NOT NULL,
        hash TEXT UNIQUE NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS users (
        id INTEGER PRIMARY KEY,
        email TEXT UNIQUE NOT NULL,
        personal_message TEXT,
        display_picture_id INTEGER,
        FOREIGN KEY (display_picture_id) REFERENCES display_pictures (id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS messages (
        id INTEGER PRIMARY KEY,
        sender TEXT NOT NULL,
        receiver TEXT,
        is_nudge BOOL NOT NULL,
        text TEXT NOT NULL,
        bold BOOL NOT NULL,
        italic BOOL NOT NULL,
        underline BOOL NOT NULL,
        strikethrough BOOL NOT NULL,
        session_id TEXT
    )
    """,
)

_MESSAGE_COLUMNS = (
    "sender, receiver, is_nudge, text, bold, italic, underline, strikethrough, session_id"
)
_CONVERSATION_FILTER = (
    "(sender = :a OR receiver = :a) AND (receiver = :b OR sender = :b)"
)


class NoRowsError(LookupError):
    """Raised when a query that must find a row finds none."""


@dataclass(frozen=True)
class DisplayPicture:
    """Raw picture bytes together with their hash."""

    data: bytes
    hash: str


@dataclass(frozen=True)
class User:
    """What is stored about a contact."""

    personal_message: str | None
    display_picture: DisplayPicture | None


@dataclass
class Message:
    """A chat message or nudge."""

    sender: str
    text: str
    receiver: str | None = None
    is_nudge: bool = False
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strikethrough: bool = False
    session_id: str | None = None
    color: str = "0"
    is_history: bool = False
    errored: bool = False


def default_data_dir() -> Path:
    """Return the application's data directory, moving a legacy one into place first."""
    base = Path(platformdirs.user_data_path())
    legacy = base / _LEGACY_NAME
    current = base / APP_NAME
    if legacy.exists():
        legacy.rename(current)
    return current


def _message_from_row(row: sqlite3.Row) -> Message:
    return Message(
        sender=row["sender"],
        receiver=row["receiver"],
        is_nudge=bool(row["is_nudge"]),
        text=row["text"],
        bold=bool(row["bold"]),
        italic=bool(row["italic"]),
        underline=bool(row["underline"]),
        strikethrough=bool(row["strikethrough"]),
        session_id=row["session_id"],
        color="0",
        is_history=True,
        errored=False,
    )


class Database:
    """The application's SQLite database."""

    def __init__(self, data_dir: str | Path | None = None) -> None:
        directory = default_data_dir() if data_dir is None else Path(data_dir)
        directory.mkdir(parents=True, exist_ok=True)

        legacy_file = directory / f"{_LEGACY_NAME}.db"
        self.path = directory / f"{APP_NAME}.db"
        if legacy_file.exists():
            legacy_file.rename(self.path)

        self._lock = threading.Lock()
        self._conn = sqlite3.connect(self.path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        with self._lock, self._conn:
            for statement in _SCHEMA:
                self._conn.execute(statement)

    def close(self) -> None:
        """Close the underlying connection."""
        with self._lock:
            self._conn.close()

    def __enter__(self) -> Database:
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def _query(self, sql: str, params=()) -> list[sqlite3.Row]:
        with self._lock:
            return self._conn.execute(sql, params).fetchall()

    def _execute(self, sql: str, params=()) -> int:
        with self._lock, self._conn:
            return self._conn.execute(sql, params).rowcount

    def select_user_emails(self) -> list[str]:
        """Return the e-mail addresses of every stored user."""
        return [row["email"] for row in self._query("SELECT email FROM users")]

    def select_user(self, email: str) -> User:
        """Return a user that has a display picture; raise NoRowsError otherwise."""
        rows = self._query(
            "SELECT personal_message, picture, hash FROM users "
            "INNER JOIN display_pictures ON users.display_picture_id = display_pictures.id "
            "WHERE email = ?",
            (email,),
        )
        if not rows:
            raise NoRowsError(email)
        row = rows[-1]
        picture, picture_hash = row["picture"], row["hash"]
        display_picture = (
            DisplayPicture(data=bytes(picture), hash=picture_hash)
            if picture is not None and picture_hash is not None
            else None
        )
        return User(
            personal_message=row["personal_message"],
            display_picture=display_picture,
        )

    def select_display_picture_data(self, picture_hash: str) -> bytes:
        """Return the picture stored under a hash."""
        rows = self._query(
            "SELECT picture FROM display_pictures WHERE hash = ?", (picture_hash,)
        )
        if not rows:
            raise NoRowsError(picture_hash)
        return bytes(rows[-1]["picture"])

    def select_messages(self, sender1: str, sender2: str, limit: int) -> list[Message]:
        """Return the newest messages between two users, newest first."""
        rows = self._query(
            f"SELECT {_MESSAGE_COLUMNS} FROM messages WHERE {_CONVERSATION_FILTER} "
            "ORDER BY id DESC LIMIT :limit",
            {"a": sender1, "b": sender2, "limit": limit},
        )
        return [_message_from_row(row) for row in rows]

    def select_all_messages(self, sender1: str, sender2: str) -> list[Message]:
        """Return every message between two users."""
        rows = self._query(
            f"SELECT {_MESSAGE_COLUMNS} FROM messages WHERE {_CONVERSATION_FILTER}",
            {"a": sender1, "b": sender2},
        )
        return [_message_from_row(row) for row in rows]

    def select_messages_by_session_id(self, session_id: str, limit: int) -> list[Message]:
        """Return the newest messages of a session, newest first."""
        rows = self._query(
            f"SELECT {_MESSAGE_COLUMNS} FROM messages WHERE session_id = ? "
            "ORDER BY id DESC LIMIT ?",
            (session_id, limit),
        )
        return [_message_from_row(row) for row in rows]

    def insert_user_if_not_in_db(self, email: str) -> None:
        """Add a user unless one with this e-mail address already exists."""
        with self._lock, self._conn:
            found = self._conn.execute(
                "SELECT email FROM users WHERE email = ?", (email,)
            ).fetchone()
            if found is None:
                self._conn.execute("INSERT INTO users (email) VALUES (?)", (email,))

    def insert_display_picture(self, data: bytes, picture_hash: str) -> None:
        """Store a display picture; a duplicate hash raises sqlite3.IntegrityError."""
        self._execute(
            "INSERT INTO display_pictures (picture, hash) VALUES (?, ?)",
            (bytes(data), picture_hash),
        )

    def insert_message(self, message: Message) -> None:
        """Store a message."""
        self._execute(
            f"INSERT INTO messages ({_MESSAGE_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (
                message.sender,
                message.receiver,
                message.is_nudge,
                message.text,
                message.bold,
                message.italic,
                message.underline,
                message.strikethrough,
                message.session_id,
            ),
        )

    def update_personal_message(self, email: str, personal_message: str) -> None:
        """Set a user's personal message."""
        self._execute(
            "UPDATE users SET personal_message = ? WHERE email = ?",
            (personal_message, email),
        )

    def update_user_display_picture(self, email: str, picture_hash: str) -> int:
        """Point a user at a stored picture; return the number of users updated."""
        with self._lock, self._conn:
            rows = self._conn.execute(
                "SELECT id FROM display_pictures WHERE hash = ?", (picture_hash,)
            ).fetchall()
            if not rows:
                raise NoRowsError(picture_hash)
            return self._conn.execute(
                "UPDATE users SET display_picture_id = ? WHERE email = ?",
                (rows[-1]["id"], email),
            ).rowcount

    def delete_user(self, email: str) -> None:
        """Remove a user."""
        self._execute("DELETE FROM users WHERE email = ?", (email,))