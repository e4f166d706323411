"""
AI router bot: dispatches slash commands to Workers AI models.

Dispatch order (first match wins):
1. /start, /help          -> help text
2. /category              -> category picker
3. /<CATEGORY_KEY>        -> that category's command list
4. a command in COMMANDS  -> its InputKind handler
5. anything else          -> "unknown command"

Every handled update ends in exactly one sendMessage or sendPhoto.
"""

import httpx
from typing import Optional

from botrelay.errors import InferenceError, TelegramAPIError
from botrelay.services.inference import WorkersAIClient
from .commands import CATEGORIES, COMMANDS, HELP_MESSAGE
from .handlers import HANDLERS, CommandContext, category_keyboard, command_list_text
from .logging_config import bot_logger as logger
from .results import Failure, FailureKind, HandlerResult, PhotoReply, Reply, failure_reply, reply_text
from .telegram_api import TelegramClient
from .updates import InboundUpdate

UNKNOWN_COMMAND = "Unknown command. Use /help to see available commands."


def split_command(text: str) -> tuple[str, str]:
    """
    Split "/Cmd@SomeBot  rest of text" into ("/cmd", "rest of text").
    """
    stripped = text.strip()
    if not stripped:
        return "", ""

    parts = stripped.split(maxsplit=1)
    command = parts[0].lower()
    content = parts[1].strip() if len(parts) > 1 else ""

    # Commands sent in groups carry the bot's username
    if command.startswith("/") and "@" in command:
        command = command.split("@", 1)[0]

    return command, content


class CommandRouter:
    """
    Routes one inbound update to a handler and sends its reply.

    Dependencies are injected so tests can pass fakes.
    """

    def __init__(self, telegram: TelegramClient, inference: WorkersAIClient):
        self.telegram = telegram
        self.inference = inference

    async def resolve(self, update: InboundUpdate) -> HandlerResult:
        """Pick the branch for an update and run it, without sending."""
        command, content = split_command(update.text)

        if command in ("/start", "/help"):
            return reply_text(HELP_MESSAGE)

        if command == "/category":
            return reply_text("Choose a category:", category_keyboard())

        category = command[1:].upper() if command.startswith("/") else ""
        if category in CATEGORIES:
            return reply_text(command_list_text(category))

        spec = COMMANDS.get(command)
        if spec is None:
            return reply_text(UNKNOWN_COMMAND)

        logger.info(f"Dispatching {command} to {spec.model} for chat_id={update.chat_id}")
        ctx = CommandContext(
            update=update,
            content=content,
            telegram=self.telegram,
            inference=self.inference,
        )

        try:
            return await HANDLERS[spec.input_kind](spec, ctx)
        except InferenceError as e:
            logger.error(f"Inference failed for {command}: {e}", exc_info=True)
            return Failure(FailureKind.INFERENCE, str(e))
        except (TelegramAPIError, httpx.HTTPError) as e:
            logger.error(f"Telegram call failed for {command}: {e}", exc_info=True)
            return Failure(FailureKind.MESSAGING, str(e))

    async def handle_update(self, update: InboundUpdate) -> None:
        """Resolve the update and deliver exactly one reply."""
        result = await self.resolve(update)

        if isinstance(result, Failure):
            reply: Reply = failure_reply(result)
        else:
            reply = result.reply

        try:
            await self._send(update.chat_id, reply)
        except (TelegramAPIError, httpx.HTTPError) as e:
            logger.error(f"Failed to deliver reply to chat_id={update.chat_id}: {e}", exc_info=True)

    async def _send(self, chat_id: int, reply: Reply) -> Optional[dict]:
        if isinstance(reply, PhotoReply):
            return await self.telegram.send_photo(
                chat_id, reply.photo, caption=reply.caption, filename=reply.filename
            )
        return await self.telegram.send_message(chat_id, reply.text, reply_markup=reply.keyboard)
