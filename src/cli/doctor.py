"""Doctor command for environment diagnostics."""

from __future__ import annotations

from pathlib import Path

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_client
from core.config import AppSettings, write_user_env_vars
from core.errors import MissingWordList
from core.resources_loader import read_word_list, resolve_word_list_path

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_http(settings: AppSettings) -> tuple[bool, str]:
    try:
        with build_client(settings) as client:
            response = client.get("")
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc)


def _check_word_list(settings: AppSettings) -> tuple[bool, str]:
    """Locate and read the word list the passphrase command would use."""

    try:
        path = resolve_word_list_path(
            settings.word_list_path,
            search_root=settings.word_list_search_root,
            pattern=settings.word_list_pattern,
            recursive=settings.word_list_recursive,
        )
        words = read_word_list(path, encoding=settings.word_list_encoding)
    except MissingWordList as exc:
        return False, exc.message
    except (OSError, UnicodeDecodeError) as exc:
        return False, str(exc)
    if not words:
        return False, f"{path} is empty"
    return True, f"{path} ({len(words)} words)"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="acctsmith Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Identificadores
    table.add_row(
        "Identifier shape",
        "OK",
        f"{settings.identifier_prefix}<initial><surname[:{settings.surname_chars}]>"
        f" (max {settings.identifier_max_length})",
    )

    # Word list
    ok_words, detail_words = _check_word_list(settings)
    table.add_row("Word list", "OK" if ok_words else "FAIL", detail_words)
    table.add_row("Banned words", "OK", f"{len(settings.banned_words)} configured")

    # Directory backend (best-effort)
    if settings.directory_base_url:
        ok_http, detail_http = _check_http(settings)
        table.add_row("Directory HTTP", "OK" if ok_http else "FAIL", detail_http)
    elif settings.directory_snapshot_path:
        snapshot_ok = settings.directory_snapshot_path.is_file()
        table.add_row(
            "Directory snapshot",
            "OK" if snapshot_ok else "FAIL",
            str(settings.directory_snapshot_path),
        )
    else:
        table.add_row("Directory", "OPTIONAL", "No backend set -> uniqueness not checked")

    _console.print(table)

    if not ok_words:
        _console.print(
            f"\n[yellow]Note:[/yellow] drop a file matching `{settings.word_list_pattern}` under the "
            "working directory or run `acctsmith doctor setup`."
        )


@app.command()
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    word_list = typer.prompt("Word list path", default="", show_default=False).strip()
    directory_url = typer.prompt("Directory lookup URL", default="", show_default=False).strip()
    token = ""
    if directory_url:
        token = typer.prompt("Directory bearer token", default="", hide_input=True).strip()

    if word_list and not Path(word_list).expanduser().is_file():
        raise typer.BadParameter(f"word list not found: {word_list}")

    env_path = write_user_env_vars(
        {
            "ACCTSMITH_WORD_LIST_PATH": word_list or None,
            "ACCTSMITH_DIRECTORY_BASE_URL": directory_url or None,
            "ACCTSMITH_DIRECTORY_TOKEN": token or None,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
