from __future__ import annotations

import pytest

from timeout_tile import permission
from timeout_tile.errors import RemediationLaunchError
from timeout_tile.permission import BrowserRemediation, CommandRemediation, PermissionGate


class _StubNotifier:
    def __init__(self) -> None:
        self.messages: list[tuple[str, bool]] = []

    def notify(self, text: str, long: bool = False) -> None:
        self.messages.append((text, long))


def test_command_remediation_substitutes_identity(monkeypatch) -> None:
    spawned: list[list[str]] = []

    def fake_popen(argv, **kwargs):
        spawned.append(argv)
        return object()

    monkeypatch.setattr(permission.subprocess, "Popen", fake_popen)

    CommandRemediation(["xdg-open", "settings://apps/{app_id}"]).launch("timeout-tile")

    assert spawned == [["xdg-open", "settings://apps/timeout-tile"]]


def test_command_remediation_missing_binary(monkeypatch) -> None:
    def fake_popen(argv, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", argv[0])

    monkeypatch.setattr(permission.subprocess, "Popen", fake_popen)

    with pytest.raises(RemediationLaunchError) as excinfo:
        CommandRemediation(["gnome-control-center", "power"]).launch("timeout-tile")
    assert excinfo.value.context["target"] == "gnome-control-center power"


def test_browser_remediation(monkeypatch) -> None:
    opened: list[str] = []
    monkeypatch.setattr(permission.webbrowser, "open", lambda url, new=0: opened.append(url) or True)

    BrowserRemediation("http://ha.local/profile/security?app={app_id}").launch("tile")

    assert opened == ["http://ha.local/profile/security?app=tile"]


def test_browser_remediation_without_browser(monkeypatch) -> None:
    monkeypatch.setattr(permission.webbrowser, "open", lambda url, new=0: False)

    with pytest.raises(RemediationLaunchError):
        BrowserRemediation("http://ha.local/profile/security").launch("tile")


def test_gate_probes_every_time() -> None:
    answers = iter([True, False, True])
    gate = PermissionGate(lambda: next(answers), CommandRemediation(["true"]), _StubNotifier(), "tile")

    assert [gate.probe(), gate.probe(), gate.probe()] == [True, False, True]


def test_request_remediation_prompts_then_launches(monkeypatch) -> None:
    monkeypatch.setattr(permission.subprocess, "Popen", lambda argv, **kwargs: object())
    notifier = _StubNotifier()
    gate = PermissionGate(lambda: False, CommandRemediation(["true"]), notifier, "tile")

    assert gate.request_remediation() is True
    assert notifier.messages == [("Allow Screen Timeout to modify system settings", True)]


def test_request_remediation_failure_is_shown_not_raised() -> None:
    class _Broken:
        def launch(self, identity: str) -> None:
            raise RemediationLaunchError("no activity host")

    notifier = _StubNotifier()
    gate = PermissionGate(lambda: False, _Broken(), notifier, "tile")

    assert gate.request_remediation() is False
    assert notifier.messages[-1] == ("Could not open the permission settings", True)
