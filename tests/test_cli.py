import json
from types import SimpleNamespace

from typer.testing import CliRunner

from ytcmd import cli, doctor

runner = CliRunner()


def test_gen_prints_command():
    r = runner.invoke(cli.app, ["gen", "https://x.com/v", "-f", "1080p", "-o", "~/Downloads/"])
    assert r.exit_code == 0
    assert r.stdout.strip() == (
        'yt-dlp -f "bestvideo[height=1080]+bestaudio/best" '
        '-o "~/Downloads/%(title)s.%(ext)s" "https://x.com/v"'
    )


def test_gen_blank_url_fails_without_command():
    r = runner.invoke(cli.app, ["gen", "   "])
    assert r.exit_code == 1
    assert "yt-dlp" not in r.stdout
    assert "Please enter a valid URL." in r.output


def test_gen_json():
    r = runner.invoke(cli.app, ["gen", " https://x.com/v ", "--format", "list_formats", "--json"])
    assert r.exit_code == 0
    payload = json.loads(r.stdout)
    assert payload["url"] == "https://x.com/v"
    assert payload["format"] == "list_formats"
    assert payload["command"] == 'yt-dlp -F "https://x.com/v"'


def test_gen_copy_uses_clipboard(monkeypatch):
    copied = []
    monkeypatch.setattr(cli, "copy_to_clipboard", copied.append)
    r = runner.invoke(cli.app, ["gen", "https://x.com/v", "--copy"])
    assert r.exit_code == 0
    assert copied == ['yt-dlp -o "~/Downloads/%(title)s.%(ext)s" "https://x.com/v"']


def test_gen_copy_failure_still_prints(monkeypatch):
    def _fail(text):
        raise cli.ClipboardUnavailable("no display")

    monkeypatch.setattr(cli, "copy_to_clipboard", _fail)
    r = runner.invoke(cli.app, ["gen", "https://x.com/v", "--copy"])
    assert r.exit_code == 0
    assert '"https://x.com/v"' in r.stdout


def test_form_enter_url_then_quit():
    r = runner.invoke(cli.app, ["form"], input="u\nhttps://x.com/v\nq\n")
    assert r.exit_code == 0
    assert r.stdout.rstrip().endswith('yt-dlp -o "~/Downloads/%(title)s.%(ext)s" "https://x.com/v"')


def test_form_pick_format_by_number():
    r = runner.invoke(cli.app, ["form", "--url", "https://x.com/v"], input="f\n10\no\n2\nq\n")
    assert r.exit_code == 0
    assert r.stdout.rstrip().endswith(
        'yt-dlp -f "bestvideo[height=1080]+bestaudio/best" -o "./%(title)s.%(ext)s" "https://x.com/v"'
    )


def test_formats_lists_catalog():
    r = runner.invoke(cli.app, ["formats"])
    assert r.exit_code == 0
    assert "list_formats" in r.stdout
    assert "Full HD (1080p) Video" in r.stdout


def test_doctor_exit_code(monkeypatch):
    monkeypatch.setattr(doctor.shutil, "which", lambda name: None)
    r = runner.invoke(cli.app, ["doctor"])
    assert r.exit_code == 2
    assert json.loads(r.stdout)["yt_dlp"] is False


def test_locations_lists_presets():
    r = runner.invoke(cli.app, ["locations"])
    assert r.exit_code == 0
    assert "~/Downloads/" in r.stdout
    assert "Current Directory" in r.stdout


def test_gen_json_list_formats_has_no_outdir():
    r = runner.invoke(cli.app, ["gen", "u", "-f", "list_formats", "-o", "./", "--json"])
    assert r.exit_code == 0
    assert json.loads(r.stdout)["outdir"] is None


def test_gen_json_keeps_outdir_for_downloads():
    r = runner.invoke(cli.app, ["gen", "u", "-f", "mp3", "-o", "./", "--json"])
    assert json.loads(r.stdout)["outdir"] == "./"


def test_form_copy_action(monkeypatch):
    copied = []
    monkeypatch.setattr(cli, "copy_to_clipboard", copied.append)
    r = runner.invoke(cli.app, ["form", "--url", "u"], input="c\nq\n")
    assert r.exit_code == 0
    assert copied == ['yt-dlp -o "~/Downloads/%(title)s.%(ext)s" "u"']
    assert "Copied!" in r.stdout


def test_form_copy_failure_keeps_command(monkeypatch):
    def _fail(text):
        raise cli.ClipboardUnavailable("no display")

    monkeypatch.setattr(cli, "copy_to_clipboard", _fail)
    r = runner.invoke(cli.app, ["form", "--url", "u"], input="c\nq\n")
    assert r.exit_code == 0
    assert "Could not copy to clipboard (no display)." in r.stdout
    assert "Copied!" not in r.stdout
    assert r.stdout.rstrip().endswith('yt-dlp -o "~/Downloads/%(title)s.%(ext)s" "u"')


def test_form_copy_without_url():
    r = runner.invoke(cli.app, ["form"], input="c\nq\n")
    assert r.exit_code == 0
    assert "Nothing to copy yet." in r.stdout


def test_form_output_refused_when_listing_formats():
    r = runner.invoke(cli.app, ["form", "--url", "u"], input="f\n14\no\nq\n")
    assert r.exit_code == 0
    assert "Output location does not apply when listing formats." in r.stdout
    assert r.stdout.rstrip().endswith('yt-dlp -F "u"')


def _fake_run(monkeypatch, codes):
    ran = []

    def _run(cmd):
        ran.append(cmd)
        return SimpleNamespace(returncode=codes[len(ran) - 1])

    monkeypatch.setattr(cli.subprocess, "run", _run)
    return ran


def _tool(cmd):
    return "ruff" if any("ruff" in part for part in cmd) else "pytest"


def test_gate_runs_ruff_then_pytest(monkeypatch):
    ran = _fake_run(monkeypatch, [0, 0])
    r = runner.invoke(cli.app, ["gate"])
    assert r.exit_code == 0
    assert [_tool(c) for c in ran] == ["ruff", "pytest"]


def test_gate_stops_when_ruff_fails(monkeypatch):
    ran = _fake_run(monkeypatch, [1, 0])
    r = runner.invoke(cli.app, ["gate"])
    assert r.exit_code == 1
    assert [_tool(c) for c in ran] == ["ruff"]


def test_gate_returns_pytest_exit_code(monkeypatch):
    ran = _fake_run(monkeypatch, [0, 5])
    r = runner.invoke(cli.app, ["gate"])
    assert r.exit_code == 5
    assert len(ran) == 2
