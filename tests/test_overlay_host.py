import json

import pytest

from gaja_overlay.host import OverlayHost
from gaja_overlay.host.overlay_host import CLIENT_MISSING_STATUS, CLIENT_MISSING_TEXT
from gaja_overlay.state import DisplayMode
from gaja_overlay.surface import EventIngestionAdapter, OverlaySurface, STATUS_UPDATE_EVENT


@pytest.fixture()
def host(qt_app, window, clock):
    host = OverlayHost(auto_hide_sec=30.0, clock=clock)
    host.attach_window(window)
    return host


def _collect(host):
    events = []
    host.listen(STATUS_UPDATE_EVENT, events.append)
    return events


def test_initial_state(host):
    assert host.get_state() == {
        "visible": False,
        "status": "Offline",
        "text": "",
        "is_listening": False,
        "is_speaking": False,
        "wake_word_detected": False,
    }


def test_changed_payload_is_emitted_once(host):
    events = _collect(host)
    payload = {"status": "Listening", "is_listening": True, "text": ""}

    host.process_status_data(payload)
    host.process_status_data(payload)

    assert events == [
        {
            "status": "Listening",
            "text": "",
            "is_listening": True,
            "is_speaking": False,
            "wake_word_detected": False,
        }
    ]


def test_missing_status_defaults_to_unknown(host):
    host.process_status_data({"text": "Hej"})

    assert host.state.status == "Unknown"
    assert host.state.text == "Hej"


def test_activity_shows_window(host, window):
    host.process_status_data({"wake_word_detected": True})

    assert window.visible is True
    assert host.get_state()["visible"] is True


def test_auto_hide_after_quiet_period(host, window, clock):
    host.process_status_data({"is_speaking": True, "text": "Odpowiedź"})
    clock.now = 10.0
    host.process_status_data({})
    assert window.visible is True

    clock.now = 25.0
    host.check_idle()
    assert window.visible is True

    clock.now = 31.0
    host.check_idle()
    assert window.visible is False
    assert host.state.visible is False


def test_no_auto_hide_while_content_remains(host, window, clock):
    host.process_status_data({"text": "Still reading"})
    clock.now = 120.0
    host.check_idle()

    assert window.visible is True


def test_update_status_always_emits(host):
    events = _collect(host)

    host.update_status("Manual", "", True, False, False)
    host.update_status("Manual", "", True, False, False)

    assert len(events) == 2
    assert events[0]["status"] == "Manual"


def test_unlisten_stops_events_and_is_idempotent(host):
    events = []
    unlisten = host.listen(STATUS_UPDATE_EVENT, events.append)

    unlisten()
    unlisten()
    host.update_status("Manual", "x", False, False, False)

    assert events == []


def test_unknown_event_and_command_raise(host):
    with pytest.raises(ValueError):
        host.listen("window-moved", lambda payload: None)
    with pytest.raises(ValueError):
        host.invoke("reboot")


def test_invoke_open_devtools_emits_request(host):
    requests = []
    host.devtools_requested.connect(lambda: requests.append(True))

    host.invoke("open_devtools")

    assert requests == [True]


def test_client_missing_updates_state_without_emitting(host):
    events = _collect(host)

    host.client_missing()

    assert host.state.status == CLIENT_MISSING_STATUS
    assert host.state.text == CLIENT_MISSING_TEXT
    assert events == []


def test_connection_status(host):
    seen = []
    host.connection_changed.connect(seen.append)

    host.set_connection_status("Connected to CLIENT port 5001")

    assert host.state.status == "Connected to CLIENT port 5001"
    assert seen == ["Connected to CLIENT port 5001"]


def test_ipc_show_hide_status(host, window):
    assert host.handle_ipc_command("show\n") == "ok"
    assert window.visible is True
    assert json.loads(host.handle_ipc_command("status"))["visible"] is True
    assert host.handle_ipc_command("hide") == "ok"
    assert window.visible is False


def test_ipc_update_status(host):
    events = _collect(host)
    command = json.dumps(
        {"command": "update_status", "text": "Hi", "is_speaking": True, "status": "Test"}
    )

    assert host.handle_ipc_command(command) == "ok"
    assert events[0]["text"] == "Hi"
    assert events[0]["is_speaking"] is True
    assert events[0]["status"] == "Test"


def test_ipc_rejects_bad_input(host):
    assert host.handle_ipc_command("{not json").startswith("error:")
    assert host.handle_ipc_command('{"command": "format_disk"}') == "unknown command"
    assert host.handle_ipc_command("dance") == "unknown command"


def test_surface_follows_host_until_closed(host):
    surface = OverlaySurface(EventIngestionAdapter(host))
    surface.start()

    host.process_status_data({"is_listening": True})
    assert surface.display_state.mode is DisplayMode.LISTENING

    surface.close()
    host.process_status_data({"is_speaking": True})
    assert surface.display_state.mode is DisplayMode.LISTENING
