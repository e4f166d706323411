"""
Static command tables for the AI router bot.

COMMAND_SPECS is the single source of truth: each entry names the
command, its menu category, what the user must supply, the Workers AI
model it runs and how the model output becomes reply text. The category
menus are derived from it, so a command cannot exist without a handler
or vice versa.
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional


class InputKind(str, Enum):
    PROMPT = "prompt"              # chat prompt -> text generation
    TEXT = "text"                  # text to analyze
    TRANSLATION = "translation"    # "<src> <dst> <text>"
    PHOTO = "photo"                # attached photo
    IMAGE_PROMPT = "image_prompt"  # prompt -> generated image
    AUDIO = "audio"                # attached voice note or audio file


class MissingFieldError(KeyError):
    """Model result lacks the field a formatter needs."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(field)

    def __str__(self) -> str:
        return f"model response has no '{self.field}' field"


Formatter = Callable[[Any], str]


def field_formatter(field: str, title: Optional[str] = None) -> Formatter:
    """Reply with one field of the result, optionally under a title line."""

    def fmt(result: Any) -> str:
        if not isinstance(result, dict) or field not in result:
            raise MissingFieldError(field)
        value = result[field]
        return f"{title}:\n{value}" if title else str(value)

    return fmt


def dump_formatter(title: str) -> Formatter:
    """Reply with the whole result as indented JSON."""

    def fmt(result: Any) -> str:
        return f"{title}:\n{json.dumps(result, indent=2, ensure_ascii=False)}"

    return fmt


def translation_formatter(result: Any) -> str:
    if not isinstance(result, dict) or "translated_text" not in result:
        raise MissingFieldError("translated_text")
    return f"Translation: {result['translated_text']}"


@dataclass(frozen=True)
class CommandSpec:
    command: str
    description: str
    category: str
    input_kind: InputKind
    model: str
    formatter: Optional[Formatter] = None


# Emojis for categories
EMOJIS = {
    "TEXT_GEN": "📝",
    "TEXT_ANALYSIS": "🔍",
    "TRANSLATION": "🌐",
    "IMAGE_ANALYSIS": "🖼️",
    "IMAGE_GEN": "🎨",
    "SPEECH": "🎤",
}

CATEGORIES = {
    "TEXT_GEN": "Text Generation",
    "TEXT_ANALYSIS": "Text Analysis",
    "TRANSLATION": "Translation",
    "IMAGE_ANALYSIS": "Image Analysis",
    "IMAGE_GEN": "Image Generation",
    "SPEECH": "Speech Processing",
}

_chat_reply = field_formatter("response")
_analysis_dump = dump_formatter("Analysis Results")

COMMAND_SPECS: tuple[CommandSpec, ...] = (
    # Text generation
    CommandSpec("/llama", "Llama 2 Chat", "TEXT_GEN", InputKind.PROMPT,
                "@cf/meta/llama-2-7b-chat-int8", _chat_reply),
    CommandSpec("/codellama", "Code Llama", "TEXT_GEN", InputKind.PROMPT,
                "@cf/meta/codellama-7b-instruct", _chat_reply),
    CommandSpec("/mistral", "Mistral", "TEXT_GEN", InputKind.PROMPT,
                "@cf/mistral/mistral-7b-instruct-v0.1", _chat_reply),
    CommandSpec("/yi", "Yi Chat", "TEXT_GEN", InputKind.PROMPT,
                "@cf/yi/yi-34b-chat", _chat_reply),

    # Text analysis
    CommandSpec("/sentiment", "Analyze sentiment", "TEXT_ANALYSIS", InputKind.TEXT,
                "@cf/huggingface/distilbert-sst2", dump_formatter("Sentiment Analysis")),
    CommandSpec("/summarize", "Summarize text", "TEXT_ANALYSIS", InputKind.TEXT,
                "@cf/google/flan-t5-xxl", field_formatter("summary", "Summary")),
    CommandSpec("/extract", "Extract information", "TEXT_ANALYSIS", InputKind.TEXT,
                "@cf/google/flan-t5-xxl",
                field_formatter("extracted_information", "Extracted Information")),
    CommandSpec("/detect_lang", "Detect language", "TEXT_ANALYSIS", InputKind.TEXT,
                "@cf/google/flan-t5-xxl", field_formatter("detected_language", "Detected Language")),

    # Translation
    CommandSpec("/translate", "Translate text", "TRANSLATION", InputKind.TRANSLATION,
                "@cf/meta/m2m100-1.2b", translation_formatter),

    # Image analysis
    CommandSpec("/classify", "Image classification", "IMAGE_ANALYSIS", InputKind.PHOTO,
                "@cf/microsoft/resnet-50", _analysis_dump),
    CommandSpec("/detect", "Object detection", "IMAGE_ANALYSIS", InputKind.PHOTO,
                "@cf/facebook/detr-resnet-50", _analysis_dump),
    CommandSpec("/segment", "Image segmentation", "IMAGE_ANALYSIS", InputKind.PHOTO,
                "@cf/facebook/detr-resnet-50-panoptic", _analysis_dump),
    CommandSpec("/caption", "Image captioning", "IMAGE_ANALYSIS", InputKind.PHOTO,
                "@cf/microsoft/git-large-coco", _analysis_dump),

    # Image generation (result is an image, no text formatter)
    CommandSpec("/stable", "Generate image with Stable Diffusion", "IMAGE_GEN",
                InputKind.IMAGE_PROMPT, "@cf/stabilityai/stable-diffusion-xl-base-1.0"),

    # Speech
    CommandSpec("/speech2text", "Convert speech to text", "SPEECH", InputKind.AUDIO,
                "@cf/openai/whisper", field_formatter("text", "Transcription")),
    CommandSpec("/whisper", "Process audio with Whisper", "SPEECH", InputKind.AUDIO,
                "@cf/openai/whisper", field_formatter("text", "Transcription")),
)

COMMANDS: dict[str, CommandSpec] = {spec.command: spec for spec in COMMAND_SPECS}

CATEGORY_COMMANDS: dict[str, list[tuple[str, str]]] = {
    key: [(spec.command, spec.description) for spec in COMMAND_SPECS if spec.category == key]
    for key in CATEGORIES
}

# Shortcut buttons offered by a bare /translate
LANGUAGE_PAIRS = (
    ("en", "es"),
    ("es", "en"),
    ("en", "fr"),
    ("fr", "en"),
    ("en", "de"),
    ("de", "en"),
)

HELP_MESSAGE = (
    "Welcome to the AI Assistant Bot! 🤖✨\n"
    "\n"
    "Here are the available categories:\n"
    "\n"
    + "\n".join(f"{EMOJIS[key]} {title}" for key, title in CATEGORIES.items())
    + "\n"
    "\n"
    "Send /category to see commands for each category.\n"
    "Send /help to see this message again."
)


def validate_tables() -> None:
    """Raise ValueError if the static tables disagree with each other."""
    if len(COMMANDS) != len(COMMAND_SPECS):
        raise ValueError("duplicate command in COMMAND_SPECS")
    if set(EMOJIS) != set(CATEGORIES):
        raise ValueError("EMOJIS and CATEGORIES keys differ")
    for spec in COMMAND_SPECS:
        if spec.category not in CATEGORIES:
            raise ValueError(f"{spec.command}: unknown category {spec.category}")
        if not spec.command.startswith("/") or spec.command != spec.command.lower():
            raise ValueError(f"{spec.command}: commands must be lowercase and start with '/'")
        if spec.formatter is None and spec.input_kind is not InputKind.IMAGE_PROMPT:
            raise ValueError(f"{spec.command}: text reply without a formatter")
    for key, commands in CATEGORY_COMMANDS.items():
        if not commands:
            raise ValueError(f"category {key} has no commands")
        if f"/{key.lower()}" in COMMANDS:
            raise ValueError(f"category /{key} shadows a command")


validate_tables()
