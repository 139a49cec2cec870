"""Person fact: static personalization datum for Joe-bot (seeded, read at chat time)."""
from sqlalchemy import Column, Text

from hello_ai.db.base import Base


class PersonFact(Base):
    __tablename__ = "person_facts"

    key = Column(Text, primary_key=True, nullable=False)
    value = Column(Text, nullable=False)
    category = Column(Text, nullable=True)
