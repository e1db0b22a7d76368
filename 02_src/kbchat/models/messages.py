"""Chat message models as delivered by the backend."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from .channel import Channel


class Sender(BaseModel):
    """Author of a message."""

    model_config = ConfigDict(frozen=True)

    username: str
    device_name: str


class MessageBody(BaseModel):
    model_config = ConfigDict(frozen=True)

    body: str


class _Content(BaseModel):
    model_config = ConfigDict(frozen=True)


class JoinContent(_Content):
    type: Literal["join"] = "join"


class AttachmentContent(_Content):
    type: Literal["attachment"] = "attachment"


class MetadataContent(_Content):
    type: Literal["metadata"] = "metadata"


class SystemContent(_Content):
    type: Literal["system"] = "system"


class TextContent(_Content):
    type: Literal["text"] = "text"
    text: MessageBody

    @property
    def body(self) -> str:
        return self.text.body


class UnfurlContent(_Content):
    type: Literal["unfurl"] = "unfurl"


class ReactionContent(_Content):
    type: Literal["reaction"] = "reaction"


# Tagged on the "type" field; an unlisted type fails validation.
MessageContent = Annotated[
    Union[
        JoinContent,
        AttachmentContent,
        MetadataContent,
        SystemContent,
        TextContent,
        UnfurlContent,
        ReactionContent,
    ],
    Field(discriminator="type"),
]


class Message(BaseModel):
    """A single chat message."""

    model_config = ConfigDict(frozen=True)

    conversation_id: str
    sender: Sender
    channel: Channel
    content: MessageContent

    @property
    def body(self) -> str | None:
        """Text body, or None for content that carries no text."""
        if isinstance(self.content, TextContent):
            return self.content.body
        return None
