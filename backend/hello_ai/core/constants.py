"""
Centralized constants for sessions, retention, uploads and the chat model.

Change limits here instead of scattering literals across routes and services.
"""

# Session cookie (partition key for chat messages and todos)
SESSION_COOKIE = "__hello_ai_session"
SESSION_MAX_AGE_SECONDS = 60 * 60 * 24 * 365  # 1 year

# Retention: chat messages by created_at, todos by completed_at (completed only)
RETENTION_DAYS = 90
RETENTION_MS = RETENTION_DAYS * 24 * 60 * 60 * 1000

# Image attachments on POST /api/chat
MAX_IMAGE_COUNT = 4
MAX_IMAGE_BYTES = 5 * 1024 * 1024  # 5MB
ALLOWED_IMAGE_TYPES = ("image/jpeg", "image/png", "image/webp")

# Joe-bot completion settings
CHAT_TEMPERATURE = 0.25
CHAT_MAX_TOKENS = 180
CHAT_EMPTY_REPLY = "…(no response)"
CHAT_IMAGE_FALLBACK_PROMPT = "What do you see in these images?"

# Remote HTTP SQL endpoint
TURSO_PIPELINE_PATH = "/v2/pipeline"
TURSO_TIMEOUT_SECONDS = 20.0
