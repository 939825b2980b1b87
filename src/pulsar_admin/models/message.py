"""
Message models: a peeked message and its position in the topic log.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, Field

from pulsar_admin.errors import InvalidMessageID

_INT_PART = re.compile(r"-?\d+")
_MAX_INT64 = 2**63 - 1


class MessageID(BaseModel):
    """Ledger/entry coordinate plus the ordinal of a sub-message inside a batch."""

    ledger_id: int = Field(alias="ledgerId")
    entry_id: int = Field(alias="entryId")
    partition_index: int = Field(default=-1, alias="partitionIndex")
    batch_index: int = Field(default=0, alias="batchIndex")

    model_config = {"frozen": True, "populate_by_name": True}

    @classmethod
    def parse(cls, text: str) -> MessageID:
        """Parse `ledger:entry[:partition[:batch]]`."""
        parts = text.split(":") if text else []
        if not 2 <= len(parts) <= 4 or not all(_INT_PART.fullmatch(p) for p in parts):
            raise InvalidMessageID(f"invalid message id string: {text!r}")
        values = [int(p) for p in parts]
        return cls(
            ledger_id=values[0],
            entry_id=values[1],
            partition_index=values[2] if len(values) > 2 else -1,
            batch_index=values[3] if len(values) > 3 else 0,
        )

    @classmethod
    def earliest(cls) -> MessageID:
        return cls(ledger_id=-1, entry_id=-1, partition_index=-1, batch_index=-1)

    @classmethod
    def latest(cls) -> MessageID:
        return cls(ledger_id=_MAX_INT64, entry_id=_MAX_INT64, partition_index=-1, batch_index=-1)

    def with_batch_index(self, index: int) -> MessageID:
        return self.model_copy(update={"batch_index": index})

    def to_json(self) -> dict[str, int]:
        """Broker JSON form: ledgerId / entryId / partitionIndex / batchIndex."""
        return self.model_dump(by_alias=True)

    def __str__(self) -> str:
        return f"{self.ledger_id}:{self.entry_id}:{self.partition_index}:{self.batch_index}"


class Message(BaseModel):
    topic: str
    message_id: MessageID
    payload: bytes
    properties: dict[str, str] = Field(default_factory=dict)

    model_config = {"frozen": True}
