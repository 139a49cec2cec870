"""
Single source of truth for database tables created by ensure_migrations.

Use these names when writing raw SQL. Order matters: migrations run in this order.
"""
# All tables that exist in the DB. Must match models.
ALL_TABLE_NAMES = (
    "chat_messages",
    "todos",
    "person_facts",
)

# Tables scoped by the session cookie (cleared per session, swept by retention).
SESSION_TABLE_NAMES = (
    "chat_messages",
    "todos",
)
