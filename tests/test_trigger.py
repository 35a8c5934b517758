import json

import trigger
from gaja_overlay.config import IPC_SOCKET_NAME


def test_socket_name_matches_overlay():
    assert trigger.IPC_SOCKET_NAME == IPC_SOCKET_NAME


def test_build_update_command():
    payload = json.loads(trigger.build_update_command(text="Cześć", speaking=True))

    assert payload == {
        "command": "update_status",
        "status": "Manual",
        "text": "Cześć",
        "is_listening": False,
        "is_speaking": True,
        "wake_word_detected": False,
    }


def test_main_sends_simple_command(monkeypatch):
    sent = []
    monkeypatch.setattr(trigger, "send_command", lambda cmd: (sent.append(cmd), (True, "ok"))[1])

    assert trigger.main(["show"]) == 0
    assert sent == ["show"]


def test_main_sends_update(monkeypatch):
    sent = []
    monkeypatch.setattr(trigger, "send_command", lambda cmd: (sent.append(cmd), (True, "ok"))[1])

    assert trigger.main(["update", "--text", "Hej", "--wake-word"]) == 0
    payload = json.loads(sent[0])
    assert payload["text"] == "Hej"
    assert payload["wake_word_detected"] is True


def test_main_reports_failure(monkeypatch, capsys):
    monkeypatch.setattr(trigger, "send_command", lambda cmd: (False, "Could not connect"))

    assert trigger.main(["devtools"]) == 1
    assert "Could not connect" in capsys.readouterr().err
