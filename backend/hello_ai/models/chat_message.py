"""
Chat message: one role-tagged turn in a session's conversation. Append-only.
"""
from sqlalchemy import BigInteger, Column, Text

from hello_ai.db.base import Base


class ChatMessage(Base):
    __tablename__ = "chat_messages"

    id = Column(Text, primary_key=True, nullable=False)
    session_id = Column(Text, nullable=False)
    role = Column(Text, nullable=False)  # 'user' | 'assistant'
    content = Column(Text, nullable=False)
    created_at = Column(BigInteger, nullable=False)  # epoch ms; defines conversation order

    def to_display(self) -> dict:
        """Shape used by GET /api/messages."""
        return {
            "id": self.id,
            "role": self.role,
            "text": self.content,
            "ts": self.created_at,
            "kind": "normal",
        }
