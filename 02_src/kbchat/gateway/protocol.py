"""JSON command builders and response/event parsers for the chat backend.

Commands are plain dicts serialized by the gateway. Responses and listener
lines are validated with pydantic; any mismatch is reported as ProtocolError.
"""

import json

from pydantic import TypeAdapter, ValidationError

from ..errors import ProtocolError
from ..logging_config import get_logger
from ..models import (
    ApiResponse,
    Channel,
    ChatMessage,
    Conversation,
    ConversationList,
    ConversationSummary,
    ListenerEvent,
    Message,
    MessageList,
    MessageSent,
)

logger = get_logger(__name__)

_summaries = TypeAdapter(list[ConversationSummary])


def list_command() -> dict:
    """Command listing all conversations."""
    return {"method": "list"}


def read_command(channel: Channel, count: int) -> dict:
    """Command reading the latest `count` messages of a channel."""
    return {
        "method": "read",
        "params": {
            "options": {
                "channel": channel.to_wire(),
                "pagination": {"num": count},
            }
        },
    }


def send_command(channel: Channel, body: str) -> dict:
    """Command sending a text message to a channel."""
    return {
        "method": "send",
        "params": {
            "options": {
                "channel": channel.to_wire(),
                "message": {"body": body},
            }
        },
    }


def parse_response(document: dict) -> ApiResponse:
    """Classify a gateway response document into an ApiResponse variant."""
    error = document.get("error")
    if error is not None:
        message = error.get("message") if isinstance(error, dict) else str(error)
        raise ProtocolError(f"Backend error: {message}", error=error)

    result = document.get("result")
    if not isinstance(result, dict):
        raise ProtocolError("Response has no result object", document=document)

    try:
        if "conversations" in result:
            summaries = _summaries.validate_python(result["conversations"] or [])
            return ConversationList(
                [Conversation.from_summary(summary) for summary in summaries]
            )

        if "messages" in result:
            messages = []
            for wrapper in result["messages"] or []:
                if not isinstance(wrapper, dict) or "msg" not in wrapper:
                    # Undecryptable entries come back as {"error": ...}
                    logger.debug("Skipping message entry without msg: %s", wrapper)
                    continue
                try:
                    messages.append(Message.model_validate(wrapper["msg"]))
                except ValidationError as e:
                    # e.g. edit/delete content types; one bad entry must not
                    # cost the rest of the batch
                    logger.warning("Skipping malformed message entry: %s", e)
            return MessageList(messages)
    except ValidationError as e:
        raise ProtocolError(f"Malformed response: {e}") from e

    return MessageSent(raw=result)


def parse_listener_line(line: str) -> ListenerEvent | None:
    """Parse one line of listener output.

    Returns None for blank lines and for event types the client does not
    handle. Raises ProtocolError for anything unparseable.
    """
    line = line.strip()
    if not line:
        return None

    try:
        document = json.loads(line)
    except json.JSONDecodeError as e:
        raise ProtocolError(f"Listener line is not JSON: {e}", line=line) from e

    if not isinstance(document, dict):
        raise ProtocolError("Listener line is not an object", line=line)

    event_type = document.get("type")
    if event_type != "chat":
        logger.debug("Ignoring listener event of type %r", event_type)
        return None

    payload = document.get("msg")
    # Accept both {"msg": {"msg": {...}}} and {"msg": {...}}
    if isinstance(payload, dict) and isinstance(payload.get("msg"), dict):
        payload = payload["msg"]

    try:
        return ChatMessage(Message.model_validate(payload))
    except ValidationError as e:
        raise ProtocolError(f"Malformed chat event: {e}", line=line) from e
