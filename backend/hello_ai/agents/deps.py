"""
Dependencies for the Joe-bot agent (injected at run time).
"""
from dataclasses import dataclass, field

from hello_ai.models.person_fact import PersonFact


@dataclass
class JoeDeps:
    """Per-request inputs for the instructions: opening phrase, persona facts, whether images are attached."""

    opening: str
    facts: list[PersonFact] = field(default_factory=list)
    has_images: bool = False
