"""
Command handlers for the AI router bot.

One handler per InputKind. Each validates the user's input, makes at
most one Workers AI call and returns a HandlerResult; sending is left to
the router. Missing input is answered with guidance text (a Success),
upstream exceptions propagate to the router boundary.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from telegram import InlineKeyboardButton, InlineKeyboardMarkup

from botrelay.services.inference import WorkersAIClient
from .commands import (
    CATEGORIES,
    CATEGORY_COMMANDS,
    EMOJIS,
    LANGUAGE_PAIRS,
    CommandSpec,
    InputKind,
    MissingFieldError,
)
from .logging_config import bot_logger as logger
from .results import Failure, FailureKind, HandlerResult, PhotoReply, Success, reply_text
from .telegram_api import TelegramClient
from .updates import InboundUpdate


@dataclass
class CommandContext:
    """Everything a handler may touch for one update."""

    update: InboundUpdate
    content: str
    telegram: TelegramClient
    inference: WorkersAIClient


# =============================================================================
# Menus
# =============================================================================

def category_keyboard() -> InlineKeyboardMarkup:
    """One button per category; callback re-enters the router as /<KEY>."""
    return InlineKeyboardMarkup([
        [InlineKeyboardButton(f"{EMOJIS[key]} {title}", callback_data=f"/{key}")]
        for key, title in CATEGORIES.items()
    ])


def command_list_text(category: str) -> str:
    lines = [f"{command} - {description}" for command, description in CATEGORY_COMMANDS[category]]
    return f"{EMOJIS[category]} {CATEGORIES[category]} Commands:\n\n" + "\n".join(lines)


def translation_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup([
        [InlineKeyboardButton(
            f"{source.upper()} → {target.upper()}",
            callback_data=f"/translate {source} {target}",
        )]
        for source, target in LANGUAGE_PAIRS
    ])


# =============================================================================
# Model-backed commands
# =============================================================================

def _format(spec: CommandSpec, result: Any) -> HandlerResult:
    try:
        return reply_text(spec.formatter(result))
    except MissingFieldError as e:
        logger.warning(f"{spec.model} returned unexpected result for {spec.command}: {e}")
        return Failure(FailureKind.INFERENCE, str(e))


async def handle_prompt(spec: CommandSpec, ctx: CommandContext) -> HandlerResult:
    if not ctx.content:
        return reply_text("Please provide a prompt after the command.")

    result = await ctx.inference.run(spec.model, {
        "messages": [{"role": "user", "content": ctx.content}]
    })
    return _format(spec, result)


async def handle_text_analysis(spec: CommandSpec, ctx: CommandContext) -> HandlerResult:
    if not ctx.content:
        return reply_text("Please provide text to analyze.")

    result = await ctx.inference.run(spec.model, {"text": ctx.content})
    return _format(spec, result)


async def handle_translation(spec: CommandSpec, ctx: CommandContext) -> HandlerResult:
    """
    /translate <source_lang> <target_lang> <text>

    A bare /translate offers the language-pair shortcuts; their callbacks
    come back as "/translate en es" and get the usage hint.
    """
    if not ctx.content:
        return reply_text("Choose a translation pair:", translation_keyboard())

    parts = ctx.content.split(maxsplit=2)
    if len(parts) < 3:
        return reply_text("Please use the format: /translate [source_lang] [target_lang] [text]")

    source_lang, target_lang, text = parts
    result = await ctx.inference.run(spec.model, {
        "text": text,
        "source_lang": source_lang,
        "target_lang": target_lang,
    })
    return _format(spec, result)


async def handle_image_analysis(spec: CommandSpec, ctx: CommandContext) -> HandlerResult:
    if not ctx.update.photo_file_id:
        return reply_text("Please send an image with the command.")

    image_bytes = await ctx.telegram.fetch_file_bytes(ctx.update.photo_file_id)
    result = await ctx.inference.run(spec.model, image_bytes)
    return _format(spec, result)


async def handle_image_generation(spec: CommandSpec, ctx: CommandContext) -> HandlerResult:
    if not ctx.content:
        return reply_text("Please provide a prompt for image generation.")

    result = await ctx.inference.run(spec.model, {"prompt": ctx.content})
    if not isinstance(result, (bytes, bytearray)) or not result:
        return Failure(FailureKind.INFERENCE, "model did not return an image")

    return Success(PhotoReply(bytes(result), caption=ctx.content, filename="image.png"))


async def handle_speech(spec: CommandSpec, ctx: CommandContext) -> HandlerResult:
    if not ctx.update.audio_file_id:
        return reply_text("Please send an audio message or file.")

    audio_bytes = await ctx.telegram.fetch_file_bytes(ctx.update.audio_file_id)
    result = await ctx.inference.run(spec.model, audio_bytes)
    return _format(spec, result)


Handler = Callable[[CommandSpec, CommandContext], Awaitable[HandlerResult]]

HANDLERS: dict[InputKind, Handler] = {
    InputKind.PROMPT: handle_prompt,
    InputKind.TEXT: handle_text_analysis,
    InputKind.TRANSLATION: handle_translation,
    InputKind.PHOTO: handle_image_analysis,
    InputKind.IMAGE_PROMPT: handle_image_generation,
    InputKind.AUDIO: handle_speech,
}
