"""CLI principal (Typer).

Por qué Typer:
- Tipado de opciones/argumentos sin boilerplate de argparse.
- Subcomandos (`doctor`) como apps independientes.

Regla: la CLI solo traduce opciones -> parámetros explícitos del Core y
presenta resultados. Ningún servicio del Core pregunta nada al usuario.
"""

from __future__ import annotations

import json
from contextlib import ExitStack
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from adapters.directory import HttpDirectoryCheck, InMemoryDirectory, load_directory_snapshot
from cli import doctor
from cli.ui_components import build_identifier_panel, build_secrets_table, print_banner
from core.config import AppSettings
from core.domain.models import IdentifierPolicy, PassphraseOptions, PasswordPolicy
from core.errors import AcctSmithError, ValidationError
from core.interfaces.existence import ExistenceCheck
from core.observability import setup_logging
from core.resources_loader import WordListCache, resolve_word_list_path
from core.services.identifier import derive_identifier, resolve_identifier
from core.services.passphrase import generate_passphrases
from core.services.password import generate_password


app = typer.Typer(
    no_args_is_help=True,
    help="Provisioning de identificadores de cuenta y generación de credenciales.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


@dataclass
class CliState:
    settings: AppSettings
    banner: bool = True
    word_lists: WordListCache = field(default_factory=WordListCache)


def _state(ctx: typer.Context) -> CliState:
    if not isinstance(ctx.obj, CliState):
        ctx.obj = CliState(settings=AppSettings())
    return ctx.obj


def _fail(exc: AcctSmithError) -> typer.Exit:
    _err_console.print(f"[red]Error ({exc.code}):[/red] {exc.message}")
    return typer.Exit(code=2 if isinstance(exc, ValidationError) else 1)


@app.callback()
def main_callback(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING..."),
    log_format: Optional[str] = typer.Option(None, "--log-format", help="rich | json"),
    no_banner: bool = typer.Option(False, "--no-banner", help="No mostrar el banner."),
) -> None:
    settings = AppSettings()
    setup_logging(
        level=log_level or settings.log_level,
        fmt=log_format or settings.log_format,
    )
    ctx.obj = CliState(
        settings=settings,
        banner=not no_banner,
        word_lists=WordListCache(encoding=settings.word_list_encoding),
    )


def _existence_check(
    stack: ExitStack,
    settings: AppSettings,
    *,
    snapshot: Path | None,
    directory_url: str | None,
) -> ExistenceCheck:
    if directory_url or (settings.directory_base_url and snapshot is None):
        return stack.enter_context(HttpDirectoryCheck(settings, base_url=directory_url))

    snapshot = snapshot or settings.directory_snapshot_path
    if snapshot is not None:
        return load_directory_snapshot(snapshot)

    _err_console.print(
        "[yellow]Warning:[/yellow] no directory configured; uniqueness was not checked."
    )
    return InMemoryDirectory()


@app.command()
def identifier(
    ctx: typer.Context,
    given_name: str = typer.Argument(..., help="Nombre de pila."),
    surname: str = typer.Argument(..., help="Apellido."),
    snapshot: Optional[Path] = typer.Option(
        None,
        "--snapshot",
        exists=True,
        dir_okay=False,
        help="Snapshot local de identificadores existentes (JSON o texto).",
    ),
    directory_url: Optional[str] = typer.Option(
        None,
        "--directory-url",
        help="Endpoint HTTP de lookup (GET <url>/<id>).",
    ),
    as_json: bool = typer.Option(False, "--json", help="Salida JSON."),
) -> None:
    """Deriva un identificador y lo hace único contra el directorio."""

    state = _state(ctx)
    settings = state.settings
    policy = IdentifierPolicy.from_settings(settings)

    try:
        with ExitStack() as stack:
            exists = _existence_check(
                stack,
                settings,
                snapshot=snapshot,
                directory_url=directory_url,
            )
            base = derive_identifier(given_name, surname, policy=policy)
            result = resolve_identifier(
                base,
                exists,
                max_length=policy.max_length,
                max_attempts=settings.resolve_max_attempts,
            )
    except AcctSmithError as exc:
        raise _fail(exc) from exc

    if as_json:
        typer.echo(json.dumps(result.model_dump(mode="json"), ensure_ascii=False))
        return
    if state.banner:
        print_banner(_console)
    _console.print(build_identifier_panel(result))


@app.command()
def password(
    ctx: typer.Context,
    count: int = typer.Option(1, "--count", "-n", min=1, max=1000),
    username: Optional[str] = typer.Option(None, "--for", help="Cuenta destino (solo contexto)."),
    as_json: bool = typer.Option(False, "--json", help="Salida JSON."),
) -> None:
    """Genera passwords aleatorios con reglas posicionales."""

    state = _state(ctx)
    try:
        policy = PasswordPolicy.from_settings(state.settings)
        values = [generate_password(policy=policy, username=username) for _ in range(count)]
    except AcctSmithError as exc:
        raise _fail(exc) from exc

    if as_json:
        typer.echo(json.dumps({"passwords": values}))
        return
    if state.banner:
        print_banner(_console)
    _console.print(build_secrets_table("Passwords", values))


@app.command()
def passphrase(
    ctx: typer.Context,
    min_length: Optional[int] = typer.Option(None, "--min-length", "-l", min=1),
    word_list: Optional[Path] = typer.Option(None, "--word-list", "-w", dir_okay=False),
    count: Optional[int] = typer.Option(None, "--count", "-n", min=0, max=1000),
    complex_: bool = typer.Option(False, "--complex", help="Caja aleatoria y rellenos con puntuación."),
    ban: Optional[List[str]] = typer.Option(None, "--ban", help="Subcadena prohibida (repetible)."),
    no_default_bans: bool = typer.Option(
        False,
        "--no-default-bans",
        help="No aplicar la lista de palabras prohibidas configurada.",
    ),
    as_json: bool = typer.Option(False, "--json", help="Salida JSON."),
) -> None:
    """Genera passphrases a partir de una lista de palabras."""

    state = _state(ctx)
    settings = state.settings

    banned: list[str] = [] if no_default_bans else list(settings.banned_words)
    banned.extend(ban or [])

    try:
        options = PassphraseOptions.from_settings(
            settings,
            min_length=min_length,
            iterations=count,
            complex=complex_,
            banned_words=banned,
        )
        path = resolve_word_list_path(
            word_list or settings.word_list_path,
            search_root=settings.word_list_search_root,
            pattern=settings.word_list_pattern,
            recursive=settings.word_list_recursive,
        )
        values = generate_passphrases(state.word_lists.load(path), options)
    except AcctSmithError as exc:
        raise _fail(exc) from exc

    if as_json:
        typer.echo(json.dumps({"word_list": str(path), "passphrases": values}, ensure_ascii=False))
        return
    if state.banner:
        print_banner(_console)
    _console.print(build_secrets_table("Passphrases", values))
    _console.print(f"[dim]Word list: {path}[/dim]")


def run() -> None:
    app()
