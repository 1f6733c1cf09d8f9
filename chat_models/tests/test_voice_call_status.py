from __future__ import annotations

import pytest

from chat_models import CallParticipant, CallStatus, InvalidCallTransition, VoiceCall


def _call(status: CallStatus = CallStatus.IDLE) -> VoiceCall:
    return VoiceCall(chat_id="c1", channel_name="chan", caller_id="u1", caller_name="Alice", status=status)


@pytest.mark.parametrize("current", list(CallStatus))
def test_status_never_moves_backwards(current):
    for target in CallStatus:
        assert current.can_advance_to(target) == (target.rank > current.rank)


def test_advance_records_start_time_on_connect():
    call = _call().advance(CallStatus.RINGING).advance(CallStatus.CONNECTED, start_time=1_000)

    assert call.status is CallStatus.CONNECTED
    assert call.start_time == 1_000
    assert call.elapsed_seconds(61_500) == 60


def test_backward_transition_raises():
    call = _call(CallStatus.CONNECTED)
    with pytest.raises(InvalidCallTransition):
        call.advance(CallStatus.RINGING)
    with pytest.raises(InvalidCallTransition):
        call.advance(CallStatus.CONNECTED)


def test_participants_replace_by_user_and_listeners_are_not_speakers():
    speaker = CallParticipant(user_id="u1", username="alice")
    listener = CallParticipant(user_id="u2", username="bob", is_listener=True)
    call = _call().with_participant(speaker).with_participant(listener)
    call = call.with_participant(CallParticipant(user_id="u1", username="alice", is_muted=True))

    assert [p.user_id for p in call.participants] == ["u2", "u1"]
    assert call.participants[-1].is_muted
    assert [p.user_id for p in call.speakers()] == ["u1"]
    assert [p.user_id for p in call.without_participant("u2").participants] == ["u1"]
