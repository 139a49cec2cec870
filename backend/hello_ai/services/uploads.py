"""
Chat input parsing and image attachment checks for POST /api/chat.

Body is either JSON {message} or multipart/form-data (message + files).
"""
from dataclasses import dataclass, field

from fastapi import Request
from starlette.datastructures import UploadFile

from hello_ai.core.constants import ALLOWED_IMAGE_TYPES, MAX_IMAGE_BYTES, MAX_IMAGE_COUNT
from hello_ai.core.errors import ImageValidationError


@dataclass
class ImageAttachment:
    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass
class ChatInput:
    format: str  # 'json' | 'multipart'
    message: str = ""
    files: list[ImageAttachment] = field(default_factory=list)


async def parse_chat_request(request: Request) -> ChatInput:
    content_type = request.headers.get("content-type") or ""

    if "application/json" in content_type:
        try:
            body = await request.json()
        except ValueError:
            body = {}
        raw = body.get("message") if isinstance(body, dict) else None
        return ChatInput(format="json", message=(raw if isinstance(raw, str) else "").strip())

    if "multipart/form-data" in content_type:
        form = await request.form()
        raw = form.get("message")
        message = (raw if isinstance(raw, str) else "").strip()
        files = []
        for entry in form.getlist("files"):
            if isinstance(entry, UploadFile):
                files.append(
                    ImageAttachment(
                        filename=entry.filename or "",
                        content_type=entry.content_type or "",
                        data=await entry.read(),
                    )
                )
        return ChatInput(format="multipart", message=message, files=files)

    return ChatInput(format="json")


def validate_images(
    files: list[ImageAttachment],
    *,
    max_count: int = MAX_IMAGE_COUNT,
    max_bytes_per_file: int = MAX_IMAGE_BYTES,
    allowed_types: tuple[str, ...] = ALLOWED_IMAGE_TYPES,
) -> None:
    """Raise ImageValidationError on the first count, size or type violation."""
    if len(files) > max_count:
        raise ImageValidationError(
            f"Maximum {max_count} images allowed. You attached {len(files)}.", "TOO_MANY"
        )
    for f in files:
        if f.size > max_bytes_per_file:
            mb = max_bytes_per_file / (1024 * 1024)
            raise ImageValidationError(
                f'Image "{f.filename}" is too large. Maximum {mb:.1f}MB per file.', "TOO_LARGE"
            )
        if f.content_type not in allowed_types:
            raise ImageValidationError(
                f'Image "{f.filename}" has unsupported type "{f.content_type}". Allowed: jpeg, png, webp.',
                "INVALID_TYPE",
            )


def content_to_store(message: str, photo_count: int) -> str:
    """Text saved for the user's turn: the message plus a photo count when images were attached."""
    if photo_count <= 0:
        return message
    photos = f"{photo_count} photo{'s' if photo_count > 1 else ''}"
    return f"{message} · {photos}" if message else photos
