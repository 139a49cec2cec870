from hello_ai.models.chat_message import ChatMessage
from hello_ai.models.person_fact import PersonFact
from hello_ai.models.todo import Todo

__all__ = [
    "ChatMessage",
    "PersonFact",
    "Todo",
]
