from __future__ import annotations

from chat_models import Message, Reaction, UserSummary
from chat_models.message import REACTION_ADDED, REACTION_REMOVED


def _message(**overrides) -> Message:
    values = dict(
        id="m1",
        chat_id="c1",
        sender=UserSummary(id="u1", username="alice", display_name="Alice"),
        content="hello",
        created_at="2024-01-01T00:00:00Z",
    )
    values.update(overrides)
    return Message(**values)


def test_toggle_reaction_adds_then_removes():
    message = _message()

    reacted, action = message.toggle_reaction("u2", "👍", "t1")
    assert action == REACTION_ADDED
    assert reacted.reactions == (Reaction(user_id="u2", emoji="👍", created_at="t1"),)
    assert message.reactions == ()

    cleared, action = reacted.toggle_reaction("u2", "👍", "t2")
    assert action == REACTION_REMOVED
    assert cleared.reactions == ()


def test_reaction_counts_keep_first_seen_order():
    message = _message(
        reactions=(
            Reaction("u1", "🔥", "t1"),
            Reaction("u2", "👍", "t2"),
            Reaction("u3", "🔥", "t3"),
        )
    )
    assert message.reaction_counts() == [("🔥", 2), ("👍", 1)]


def test_decoded_duplicates_are_kept():
    message = Message.from_dict(
        {
            "id": "m1",
            "chatId": "c1",
            "senderId": {"id": "u1", "username": "alice"},
            "createdAt": "t0",
            "reactions": [
                {"userId": "u2", "emoji": "👍"},
                {"userId": {"_id": "u2", "username": "bob"}, "emoji": "👍"},
            ],
        }
    )
    assert len(message.reactions) == 2
    assert {reaction.user_id for reaction in message.reactions} == {"u2"}


def test_pending_message_tracks_local_send_state():
    sender = UserSummary(id="u1", username="alice", display_name="Alice")
    pending = Message.pending(local_id="local-1", chat_id="c1", sender=sender, content="hi", created_at="t0")

    assert pending.is_sending
    failed = pending.mark_failed()
    assert failed.send_failed
    assert not failed.is_sending
