"""Channel descriptors: how the backend addresses a conversation."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class MemberType(str, Enum):
    """Membership kind of a channel."""

    INDIVIDUAL = "impteamnative"
    TEAM = "team"


class Channel(BaseModel):
    """Immutable backend address of a conversation."""

    model_config = ConfigDict(frozen=True)

    name: str
    topic_name: str = ""
    members_type: MemberType

    def to_wire(self) -> dict:
        """Serialize for a gateway command, omitting an empty topic."""
        return self.model_dump(mode="json", exclude_defaults=True)

    @property
    def display_name(self) -> str:
        if self.members_type is MemberType.TEAM and self.topic_name:
            return f"{self.name}#{self.topic_name}"
        return self.name
