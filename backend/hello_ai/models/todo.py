"""
Todo: per-session task with completion state. completed_at is set iff completed.
"""
from sqlalchemy import BigInteger, Boolean, Column, Text
from sqlalchemy import text as sa_text

from hello_ai.db.base import Base


class Todo(Base):
    __tablename__ = "todos"

    id = Column(Text, primary_key=True, nullable=False)
    session_id = Column(Text, nullable=False)
    text = Column(Text, nullable=False)
    completed = Column(Boolean(create_constraint=False), nullable=False, server_default=sa_text("0"))
    completed_at = Column(BigInteger, nullable=True)  # epoch ms; drives retention of completed todos
    created_at = Column(BigInteger, nullable=False)

    def to_api(self) -> dict:
        """Shape used by GET /api/todos."""
        return {"id": self.id, "text": self.text, "completed": bool(self.completed)}

    def to_api_detail(self) -> dict:
        """Shape returned after create/update."""
        return {
            **self.to_api(),
            "createdAt": self.created_at,
            "completedAt": self.completed_at,
        }
