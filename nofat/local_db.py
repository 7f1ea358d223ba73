"""
SQLite persistence for the current plan, chat history and fitness profiles.
"""

import json
import os
import sqlite3
from contextlib import contextmanager
from datetime import datetime


class FitnessDB:
    """Small SQLite wrapper for per-user app state."""

    def __init__(self, db_path):
        self.db_path = db_path
        parent = os.path.dirname(db_path)
        if parent:
            os.makedirs(parent, exist_ok=True)

        # Streamlit reruns scripts on worker threads.
        self.conn = sqlite3.connect(db_path, check_same_thread=False)
        self.conn.row_factory = sqlite3.Row

    def close(self):
        self.conn.close()

    @contextmanager
    def transaction(self):
        """Context manager for atomic write operations."""
        try:
            yield
            self.conn.commit()
        except Exception:
            self.conn.rollback()
            raise

    def init_schema(self):
        """Create schema if it does not already exist."""
        self.conn.executescript(
            """
            CREATE TABLE IF NOT EXISTS current_plans (
                user_id TEXT PRIMARY KEY,
                plan_id TEXT NOT NULL,
                plan_json TEXT NOT NULL,
                created_at TEXT NOT NULL DEFAULT (datetime('now')),
                updated_at TEXT NOT NULL DEFAULT (datetime('now'))
            );

            CREATE TABLE IF NOT EXISTS chat_messages (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id TEXT NOT NULL,
                role TEXT NOT NULL CHECK (role IN ('user', 'assistant')),
                content TEXT NOT NULL,
                image_url TEXT,
                created_at TEXT NOT NULL DEFAULT (datetime('now'))
            );

            CREATE TABLE IF NOT EXISTS fitness_profiles (
                user_id TEXT PRIMARY KEY,
                profile_json TEXT NOT NULL,
                updated_at TEXT NOT NULL DEFAULT (datetime('now'))
            );

            CREATE INDEX IF NOT EXISTS idx_chat_messages_user_id ON chat_messages(user_id, id);
            """
        )
        self.conn.commit()

    # ── Current plan ────────────────────────────────────────────────

    def save_current_plan(self, user_id, plan):
        """Replace the user's current plan and return the stored copy."""
        now = datetime.now()
        stored = dict(plan)
        stored["id"] = f"plan_{int(now.timestamp() * 1000)}"
        stored["createdAt"] = now.isoformat()

        with self.transaction():
            self.conn.execute(
                """
                INSERT INTO current_plans (user_id, plan_id, plan_json, updated_at)
                VALUES (?, ?, ?, datetime('now'))
                ON CONFLICT(user_id) DO UPDATE SET
                    plan_id = excluded.plan_id,
                    plan_json = excluded.plan_json,
                    updated_at = datetime('now')
                """,
                (str(user_id), stored["id"], json.dumps(stored, ensure_ascii=False)),
            )
        return stored

    def get_current_plan(self, user_id):
        row = self.conn.execute(
            "SELECT plan_json FROM current_plans WHERE user_id = ?",
            (str(user_id),),
        ).fetchone()
        return json.loads(row["plan_json"]) if row else None

    def clear_current_plan(self, user_id):
        with self.transaction():
            self.conn.execute("DELETE FROM current_plans WHERE user_id = ?", (str(user_id),))

    # ── Chat history ────────────────────────────────────────────────

    def add_chat_message(self, user_id, role, content, image_url=None):
        """Append one chat message and return it."""
        with self.transaction():
            cursor = self.conn.execute(
                """
                INSERT INTO chat_messages (user_id, role, content, image_url)
                VALUES (?, ?, ?, ?)
                """,
                (str(user_id), role, content, image_url),
            )
        row = self.conn.execute(
            "SELECT * FROM chat_messages WHERE id = ?",
            (cursor.lastrowid,),
        ).fetchone()
        return self._message_from_row(row)

    def get_chat_history(self, user_id, limit=None):
        """Return messages oldest first; with limit, only the most recent ones."""
        if limit is None:
            rows = self.conn.execute(
                "SELECT * FROM chat_messages WHERE user_id = ? ORDER BY id ASC",
                (str(user_id),),
            ).fetchall()
        else:
            rows = self.conn.execute(
                """
                SELECT * FROM (
                    SELECT * FROM chat_messages
                    WHERE user_id = ?
                    ORDER BY id DESC
                    LIMIT ?
                ) ORDER BY id ASC
                """,
                (str(user_id), int(limit)),
            ).fetchall()
        return [self._message_from_row(row) for row in rows]

    def clear_chat_history(self, user_id):
        with self.transaction():
            self.conn.execute("DELETE FROM chat_messages WHERE user_id = ?", (str(user_id),))

    @staticmethod
    def _message_from_row(row):
        message = {
            "id": f"msg_{row['id']}",
            "role": row["role"],
            "content": row["content"],
            "timestamp": row["created_at"],
        }
        if row["image_url"]:
            message["imageUrl"] = row["image_url"]
        return message

    # ── Fitness profile ─────────────────────────────────────────────

    def save_profile(self, user_id, profile):
        with self.transaction():
            self.conn.execute(
                """
                INSERT INTO fitness_profiles (user_id, profile_json, updated_at)
                VALUES (?, ?, datetime('now'))
                ON CONFLICT(user_id) DO UPDATE SET
                    profile_json = excluded.profile_json,
                    updated_at = datetime('now')
                """,
                (str(user_id), json.dumps(profile, ensure_ascii=False)),
            )

    def get_profile(self, user_id):
        row = self.conn.execute(
            "SELECT profile_json FROM fitness_profiles WHERE user_id = ?",
            (str(user_id),),
        ).fetchone()
        return json.loads(row["profile_json"]) if row else None
