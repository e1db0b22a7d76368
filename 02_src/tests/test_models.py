"""Tests for data models."""

import pytest
from pydantic import ValidationError

from conftest import message_json
from kbchat.models import (
    Channel,
    Conversation,
    ConversationSummary,
    JoinContent,
    MemberType,
    Message,
    ReactionContent,
    TextContent,
)


class TestChannel:
    """Tests for Channel model."""

    def test_parse_defaults_topic(self):
        channel = Channel.model_validate({"name": "alice,bob", "members_type": "impteamnative"})
        assert channel.topic_name == ""
        assert channel.members_type is MemberType.INDIVIDUAL

    def test_to_wire_omits_empty_topic(self):
        channel = Channel(name="chan", members_type=MemberType.TEAM)
        assert channel.to_wire() == {"name": "chan", "members_type": "team"}

    def test_to_wire_keeps_topic(self):
        channel = Channel(name="chan", topic_name="general", members_type=MemberType.TEAM)
        assert channel.to_wire() == {
            "name": "chan",
            "topic_name": "general",
            "members_type": "team",
        }

    def test_channel_is_immutable(self):
        channel = Channel(name="chan", members_type=MemberType.TEAM)
        with pytest.raises(ValidationError):
            channel.name = "other"

    def test_unknown_members_type(self):
        with pytest.raises(ValidationError):
            Channel.model_validate({"name": "chan", "members_type": "nope"})

    def test_display_name(self):
        team = Channel(name="chan", topic_name="general", members_type=MemberType.TEAM)
        user = Channel(name="alice,bob", members_type=MemberType.INDIVIDUAL)
        assert team.display_name == "chan#general"
        assert user.display_name == "alice,bob"

    def test_team_without_topic(self):
        assert Channel(name="chan", members_type=MemberType.TEAM).display_name == "chan"
        empty = Channel(name="chan", topic_name="", members_type=MemberType.TEAM)
        assert empty.display_name == "chan"


class TestMessage:
    """Tests for Message content variants."""

    def test_text_message(self):
        message = Message.model_validate(message_json("c1", "hi"))
        assert isinstance(message.content, TextContent)
        assert message.body == "hi"
        assert message.sender.username == "alice"

    @pytest.mark.parametrize(
        "content_type",
        ["join", "attachment", "metadata", "system", "unfurl", "reaction"],
    )
    def test_non_text_variants_have_no_body(self, content_type):
        data = message_json()
        data["content"] = {"type": content_type, "extra": {"ignored": True}}
        message = Message.model_validate(data)
        assert message.content.type == content_type
        assert message.body is None

    def test_variant_classes(self):
        data = message_json()
        data["content"] = {"type": "join"}
        assert isinstance(Message.model_validate(data).content, JoinContent)
        data["content"] = {"type": "reaction", "reaction": {"b": ":+1:"}}
        assert isinstance(Message.model_validate(data).content, ReactionContent)

    def test_unknown_content_type(self):
        data = message_json()
        data["content"] = {"type": "hologram"}
        with pytest.raises(ValidationError):
            Message.model_validate(data)

    def test_extra_fields_ignored(self):
        data = message_json()
        data["id"] = 42
        data["sent_at"] = 1600000000
        assert Message.model_validate(data).conversation_id == "conv1"


class TestConversation:
    """Tests for Conversation model."""

    def test_from_summary(self):
        summary = ConversationSummary.model_validate(
            {
                "id": "c1",
                "channel": {"name": "chan", "members_type": "team"},
                "unread": True,
            }
        )
        conversation = Conversation.from_summary(summary)
        assert conversation.id == "c1"
        assert conversation.unread is True
        assert conversation.fetched is False
        assert conversation.messages == []

    def test_insert_message_prepends(self, make_message):
        conversation = Conversation(id="c1", channel=make_message().channel)
        m1, m2 = make_message(text="one"), make_message(text="two")
        conversation.insert_message(m1)
        conversation.insert_message(m2)
        assert conversation.messages == [m2, m1]

    def test_insert_messages_appends_older_batch(self, make_message):
        conversation = Conversation(id="c1", channel=make_message().channel)
        live = make_message(text="live")
        conversation.insert_message(live)
        batch = [make_message(text="newer"), make_message(text="older")]
        conversation.insert_messages(batch)
        assert [m.body for m in conversation.messages] == ["live", "newer", "older"]

    def test_mark_fetched(self, make_conversation):
        conversation = make_conversation("c1")
        conversation.mark_fetched()
        conversation.mark_fetched()
        assert conversation.fetched is True
