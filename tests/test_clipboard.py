"""Tests for the clipboard helpers.  No real clipboard is touched."""

import subprocess

import pytest

from pipcalc import clipboard
from pipcalc.clipboard import ClipboardError, copy_value, format_price, write_text


@pytest.fixture
def calls(monkeypatch):
    """Pretend every command is installed and record what runs."""
    recorded = []

    def fake_run(cmd, **kwargs):
        recorded.append((cmd[0], kwargs["input"]))
        return subprocess.CompletedProcess(cmd, 0)

    monkeypatch.setattr(clipboard.shutil, "which", lambda name: f"/usr/bin/{name}")
    monkeypatch.setattr(clipboard.subprocess, "run", fake_run)
    return recorded


class TestWriteText:
    def test_first_command_wins(self, calls):
        cmd = write_text("1.09500")
        assert cmd == ["pbcopy"]
        assert calls == [("pbcopy", "1.09500")]

    def test_falls_back_on_failure(self, monkeypatch):
        recorded = []

        def flaky_run(cmd, **kwargs):
            recorded.append(cmd[0])
            if cmd[0] == "pbcopy":
                raise subprocess.CalledProcessError(1, cmd)
            return subprocess.CompletedProcess(cmd, 0)

        monkeypatch.setattr(clipboard.shutil, "which", lambda name: f"/usr/bin/{name}")
        monkeypatch.setattr(clipboard.subprocess, "run", flaky_run)
        assert write_text("1.0") == ["wl-copy"]
        assert recorded == ["pbcopy", "wl-copy"]

    def test_skips_missing_commands(self, monkeypatch, calls):
        monkeypatch.setattr(
            clipboard.shutil, "which",
            lambda name: "/usr/bin/xclip" if name == "xclip" else None,
        )
        assert write_text("x")[0] == "xclip"

    def test_nothing_available(self, monkeypatch):
        monkeypatch.setattr(clipboard.shutil, "which", lambda name: None)
        with pytest.raises(ClipboardError, match="No clipboard command"):
            write_text("x")


class TestCopyValue:
    def test_format_price(self):
        assert format_price(1.095) == "1.09500"
        assert format_price(150.123456) == "150.12346"

    def test_success_notification(self, calls):
        note = copy_value(1.095, "Stop Loss")
        assert note.title == "Copied!"
        assert note.description == "Stop Loss copied to clipboard"
        assert note.variant == "default"
        assert calls[0][1] == "1.09500"

    def test_failure_notification(self, monkeypatch):
        monkeypatch.setattr(clipboard.shutil, "which", lambda name: None)
        note = copy_value(1.095, "Stop Loss")
        assert note.title == "Copy failed"
        assert note.description == "Unable to copy to clipboard"
        assert note.variant == "destructive"
