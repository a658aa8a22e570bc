"""
ConversationManager - Pure Python chat history.

UI-agnostic record of question/answer exchanges for the active session,
with JSON export for download.
"""

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any

__all__ = ["EXPORT_FILENAME", "Exchange", "ConversationManager"]

EXPORT_FILENAME = "sheet-chat-history.json"


@dataclass
class Exchange:
    """One question and the answer shown for it."""

    query: str
    response: str
    timestamp: datetime
    file_name: str | None = None
    sheet_name: str | None = None


class ConversationManager:
    """
    Manages the chat transcript.

    Pure Python class with zero Streamlit dependencies.
    """

    def __init__(self) -> None:
        """Initialize empty conversation manager."""
        self._exchanges: list[Exchange] = []

    def add_exchange(
        self,
        query: str,
        response: str,
        file_name: str | None = None,
        sheet_name: str | None = None,
        timestamp: datetime | None = None,
    ) -> Exchange:
        """
        Append an exchange to the transcript.

        Args:
            query: Question as typed (case preserved)
            response: Answer text shown to the user
            file_name: Active file when the question was asked
            sheet_name: Active sheet when the question was asked
            timestamp: Defaults to now

        Returns:
            The stored Exchange
        """
        exchange = Exchange(
            query=query,
            response=response,
            timestamp=timestamp or datetime.now(),
            file_name=file_name,
            sheet_name=sheet_name,
        )
        self._exchanges.append(exchange)
        return exchange

    def get_transcript(self) -> list[Exchange]:
        """
        Get full transcript.

        Returns:
            Copy of the exchanges in chronological order
        """
        return self._exchanges.copy()

    def clear(self) -> None:
        """Drop every exchange."""
        self._exchanges = []

    def normalize_query(self, q: str | None) -> str:
        """
        Normalize query text: collapse whitespace and strip.

        Case is preserved for echo; matching lower-cases later.
        """
        if q is None:
            return ""
        return " ".join(q.strip().split())

    def serialize(self) -> dict[str, Any]:
        """
        Serialize conversation state to dict for persistence.

        Returns:
            Serializable dict representation
        """
        return {
            "exchanges": [
                {
                    "query": ex.query,
                    "response": ex.response,
                    "timestamp": ex.timestamp.isoformat(),
                    "file_name": ex.file_name,
                    "sheet_name": ex.sheet_name,
                }
                for ex in self._exchanges
            ]
        }

    @classmethod
    def deserialize(cls, data: dict[str, Any]) -> "ConversationManager":
        """Restore a manager from ``serialize()`` output."""
        manager = cls()
        for item in data.get("exchanges", []):
            manager._exchanges.append(
                Exchange(
                    query=item["query"],
                    response=item["response"],
                    timestamp=datetime.fromisoformat(item["timestamp"]),
                    file_name=item.get("file_name"),
                    sheet_name=item.get("sheet_name"),
                )
            )
        return manager

    def export_json(self) -> str:
        """History as a JSON list of {query, response, timestamp} for download."""
        payload = [
            {"query": ex.query, "response": ex.response, "timestamp": ex.timestamp.isoformat()}
            for ex in self._exchanges
        ]
        return json.dumps(payload, indent=2)
