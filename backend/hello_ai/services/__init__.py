from hello_ai.services.chat_message_service import append_message, clear_session, list_messages
from hello_ai.services.session_service import create_session_id, get_or_create_session_id
from hello_ai.services.todo_service import create_todo, list_todos, update_todo

__all__ = [
    "append_message",
    "clear_session",
    "list_messages",
    "create_session_id",
    "get_or_create_session_id",
    "create_todo",
    "list_todos",
    "update_todo",
]
