from __future__ import annotations

import json
import logging
import shlex
import subprocess
import sys
from pathlib import Path

import typer

from . import doctor
from .builder import generate
from .clipboard import ClipboardUnavailable, copy_to_clipboard
from .form import CommandForm
from .formats import CATALOG, DEFAULT_OUTPUT_DIR, OUTPUT_LOCATIONS, FormatChoice, resolve_format
from .log import setup_logging

log = logging.getLogger(__name__)

app = typer.Typer(add_completion=False, no_args_is_help=True)


PLACEHOLDER = "Enter a URL to generate command..."
FORMAT_OPTIONS: list[tuple[str, str]] = [(c.value, CATALOG[c].label) for c in FormatChoice]


def _copy(command: str) -> bool:
    try:
        copy_to_clipboard(command)
    except ClipboardUnavailable as e:
        log.warning("clipboard unavailable: %s", e)
        typer.secho(f"Could not copy to clipboard ({e}); copy the command manually.", fg=typer.colors.YELLOW, err=True)
        return False
    return True


@app.command()
def gen(
    url: str = typer.Argument(..., help="Video URL (YouTube or any yt-dlp supported site)."),
    fmt: str = typer.Option(
        FormatChoice.BEST.value, "--format", "-f", help="Format choice (see `formats`). Unknown values mean best."
    ),
    outdir: str = typer.Option(DEFAULT_OUTPUT_DIR, "--outdir", "-o", help="Output directory prefix for the -o template."),
    copy: bool = typer.Option(False, "--copy", "-c", help="Also copy the command to the clipboard."),
    json_out: bool = typer.Option(False, "--json", help="Print a JSON object instead of the bare command."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging on stderr."),
):
    """Print the yt-dlp command for a URL."""
    setup_logging(verbose)
    result = generate(url, fmt, outdir)
    if not result.ready:
        typer.secho(result.error, fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    if json_out:
        payload = {
            "url": url.strip(),
            "format": resolve_format(fmt).value,
            "outdir": None if resolve_format(fmt) is FormatChoice.LIST_FORMATS else outdir,
            "command": result.command,
        }
        sys.stdout.write(json.dumps(payload) + "\n")
    else:
        typer.echo(result.command)

    if copy and _copy(result.command):
        typer.secho("Copied!", fg=typer.colors.GREEN, err=True)


def _render(form: CommandForm) -> None:
    typer.echo("")
    typer.echo(f"URL:     {form.url or '-'}")
    typer.echo(f"Format:  {CATALOG[form.format_choice].label} [{form.format_choice.value}]")
    if form.output_dir_relevant:
        typer.echo(f"Output:  {form.output_dir}")
    if form.error:
        typer.secho(form.error, fg=typer.colors.RED)
    typer.echo(f"Command: {form.command or PLACEHOLDER}")
    if form.copied:
        typer.secho("Copied!", fg=typer.colors.GREEN)


def _choose(options: list[tuple[str, str]], current: str) -> str:
    """Pick by number, or type a value directly."""
    for i, (value, label) in enumerate(options, 1):
        marker = "*" if value == current else " "
        typer.echo(f"{marker} {i:2d}. {label} [{value}]")
    answer = typer.prompt("Number or value", default=current).strip()
    if answer.isdigit() and 1 <= int(answer) <= len(options):
        return options[int(answer) - 1][0]
    return answer


@app.command()
def form(
    url: str = typer.Option("", "--url", help="Pre-fill the URL field."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging on stderr."),
):
    """Interactive form: edit URL, format and output location; the command updates after every change."""
    setup_logging(verbose)
    f = CommandForm(copy_to_clipboard, url=url)
    try:
        while True:
            _render(f)
            action = typer.prompt("[u]rl [f]ormat [o]utput [c]opy [q]uit", default="c" if f.command else "u")
            action = action.strip().lower()[:1]
            if action == "q":
                break
            if action == "u":
                f.url = typer.prompt("URL", default="", show_default=False)
            elif action == "f":
                f.format_choice = _choose(FORMAT_OPTIONS, f.format_choice.value)
            elif action == "o":
                if not f.output_dir_relevant:
                    typer.echo("Output location does not apply when listing formats.")
                    continue
                f.output_dir = _choose(OUTPUT_LOCATIONS, f.output_dir)
            elif action == "c":
                if not f.command:
                    typer.echo("Nothing to copy yet.")
                    continue
                try:
                    f.copy()
                except ClipboardUnavailable as e:
                    log.warning("clipboard unavailable: %s", e)
                    typer.secho(f"Could not copy to clipboard ({e}).", fg=typer.colors.YELLOW)
            else:
                typer.echo(f"Unknown action: {action!r}")
    finally:
        f.close()

    if f.command:
        typer.echo(f.command)


@app.command()
def formats():
    """List the available format choices."""
    width = max(len(v) for v, _ in FORMAT_OPTIONS)
    for value, label in FORMAT_OPTIONS:
        typer.echo(f"{value:<{width}}  {label}")


@app.command()
def locations():
    """List the suggested output locations. Any other path works too."""
    width = max(len(v) for v, _ in OUTPUT_LOCATIONS)
    for value, label in OUTPUT_LOCATIONS:
        typer.echo(f"{value:<{width}}  {label}")


@app.command(name="doctor")
def doctor_cmd(
    json_out: bool = typer.Option(True, "--json/--no-json", help="Output JSON (default) for scripting."),
):
    """Check that yt-dlp and ffmpeg are installed, so generated commands can run."""
    report = doctor.check()
    doctor.print_report(report, json_out=json_out)
    raise typer.Exit(0 if report.yt_dlp else 2)


GATE_STEPS: list[list[str]] = [
    ["ruff", "check", "."],
    ["pytest", "-q"],
]


def _tool_cmd(args: list[str]) -> list[str]:
    """Prefer the tool's script next to the interpreter, else ``python -m <tool>``."""
    script = Path(sys.executable).resolve().parent / args[0]
    if script.exists():
        return [str(script), *args[1:]]
    return [sys.executable, "-m", args[0], *args[1:]]


@app.command()
def gate():
    """Run the lint and test steps in order; stop at the first failure."""
    for step in GATE_STEPS:
        cmd = _tool_cmd(step)
        typer.echo("$ " + " ".join(shlex.quote(c) for c in cmd), err=True)
        rc = subprocess.run(cmd).returncode
        if rc != 0:
            raise typer.Exit(rc)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
