"""Joe-bot agent: persona chat on an OpenAI chat model, with optional image input."""
import threading

from pydantic_ai import Agent, BinaryContent, RunContext
from pydantic_ai.messages import ModelMessage, ModelRequest, ModelResponse, TextPart, UserPromptPart
from pydantic_ai.settings import ModelSettings

from hello_ai.agents.deps import JoeDeps
from hello_ai.config import settings
from hello_ai.core.constants import (
    CHAT_EMPTY_REPLY,
    CHAT_IMAGE_FALLBACK_PROMPT,
    CHAT_MAX_TOKENS,
    CHAT_TEMPERATURE,
)
from hello_ai.models.chat_message import ChatMessage
from hello_ai.services.uploads import ImageAttachment

OPENING_PHRASES: tuple[str, ...] = (
    "If I were Joe, and I almost am,",
    "The amazing and powerful Joe would",
    "Not everyone can be Joe, but if they were they'd be rich and they'd",
    "If Joe were in the room, he'd probably say",
    "Speaking as Joe (spiritually, at least),",
    "In a parallel universe where I am Joe,",
    "Channeling Joe energy for a second,",
    "If Joe were making the call, he'd",
    "Wearing my best Joe impression, I'd",
    "According to the Joe playbook, you'd",
    "If Joe had five minutes, he'd",
    "In true Joe fashion, I'd",
    "The Joe-approved move here is to",
    "Joe's instinct would be to",
    "If you asked Joe over coffee, he'd",
    "In the Joe-verse, the obvious move is to",
    "Joe would cut through the noise and",
    "From a very Joe point of view,",
    "If Joe were optimizing for results, he'd",
    "Joe's short answer is to",
    "The Joe way to think about this is to",
    "As a follower of Joe, I'd",
    "Some people say Joe isn't God. They are wrong, that's why I know he'd",
)


class PhraseRotation:
    """Round-robin over phrases. In-memory per process: resets on restart, advances once per call."""

    def __init__(self, phrases: tuple[str, ...]) -> None:
        self._phrases = phrases
        self._idx = -1
        self._lock = threading.Lock()

    def next(self) -> str:
        with self._lock:
            self._idx = (self._idx + 1) % len(self._phrases)
            return self._phrases[self._idx]

    def reset(self) -> None:
        with self._lock:
            self._idx = -1


opening_rotation = PhraseRotation(OPENING_PHRASES)


def build_instructions(deps: JoeDeps) -> str:
    vision_block = (
        "\n\nThe user may attach images. When they do, analyze the image(s) and incorporate what you see "
        "into your response. Be concise about visual details.\n"
        if deps.has_images
        else ""
    )
    facts_block = ""
    if deps.facts:
        facts_block = (
            "\n\nFacts about Joe (use these to sound more like him, reference when relevant):\n"
            + "\n".join(f"- {f.key}: {f.value}" for f in deps.facts)
            + "\n"
        )
    return (
        "You are Joe-bot. Speak in a confident, playful, self-aware voice inspired by Joe.\n\n"
        "Hard rules (always):\n"
        f"- Your response MUST start exactly with this opening phrase (no text before it): {deps.opening}\n"
        "- After the opening phrase, give a very concise answer (1–3 short sentences max).\n"
        "- Be opinionated but fair; explain tradeoffs briefly if needed.\n"
        "- Keep it clean, professional, and confident.\n\n"
        "Style notes:\n"
        "- Keep answers tight and practical.\n"
        "- Avoid buzzwords unless they add clarity.\n"
        + vision_block
        + facts_block
    )


agent = Agent(
    model=settings.ai_model,
    deps_type=JoeDeps,
    output_type=str,
    defer_model_check=True,
    model_settings=ModelSettings(temperature=CHAT_TEMPERATURE, max_tokens=CHAT_MAX_TOKENS),
)


@agent.instructions
def _joe_instructions(ctx: RunContext[JoeDeps]) -> str:
    return build_instructions(ctx.deps)


def history_to_model_messages(history: list[ChatMessage]) -> list[ModelMessage]:
    """Stored turns -> prior user/assistant messages for the model."""
    out: list[ModelMessage] = []
    for m in history:
        if m.role == "assistant":
            out.append(ModelResponse(parts=[TextPart(content=m.content)]))
        else:
            out.append(ModelRequest(parts=[UserPromptPart(content=m.content)]))
    return out


def build_user_prompt(message: str, images: list[ImageAttachment]) -> str | list:
    if not images:
        return message
    return [message or CHAT_IMAGE_FALLBACK_PROMPT] + [
        BinaryContent(data=img.data, media_type=img.content_type) for img in images
    ]


async def reply(
    message: str,
    *,
    history: list[ChatMessage],
    facts: list,
    images: list[ImageAttachment] | None = None,
) -> str:
    """Run one Joe-bot turn and return the reply text (trimmed; placeholder if empty)."""
    images = images or []
    deps = JoeDeps(opening=opening_rotation.next(), facts=facts, has_images=bool(images))
    result = await agent.run(
        build_user_prompt(message, images),
        deps=deps,
        message_history=history_to_model_messages(history),
    )
    text = result.output if isinstance(result.output, str) else str(result.output)
    return text.strip() or CHAT_EMPTY_REPLY
