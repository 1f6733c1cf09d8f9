from __future__ import annotations

from call_overlay.overlay_controller import (
    CallOverlayController,
    OverlayState,
    format_call_duration,
    start_overlay_command,
    update_overlay_command,
)
from chat_models import CallStatus, VoiceCall


def test_connected_call_drives_overlay_duration():
    shown = {}
    controller = CallOverlayController(
        create_window_fn=lambda name, duration: shown.update(name=name, duration=duration) or shown,
        set_duration_fn=lambda window, duration: window.update(duration=duration),
        destroy_window_fn=lambda window: window.clear(),
        stop_self_fn=lambda: None,
        toggle_mute_fn=lambda: True,
        broadcast_fn=lambda action: None,
        launch_app_fn=lambda: None,
    )
    call = VoiceCall(chat_id="c1", channel_name="chan", caller_id="u1", caller_name="Alice")
    call = call.advance(CallStatus.CONNECTING).advance(CallStatus.CONNECTED, start_time=0)

    controller.handle_command(start_overlay_command("Crew", format_call_duration(call.elapsed_seconds(0))))
    controller.handle_command(update_overlay_command(format_call_duration(call.elapsed_seconds(3_725_000))))

    assert controller.state is OverlayState.SHOWING
    assert shown == {"name": "Crew", "duration": "1:02:05"}

    controller.on_end_call_tapped()
    assert controller.state is OverlayState.HIDDEN
    assert shown == {}
