"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import ResolvedIdentifier


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Por qué aquí:
    - Evita dependencias circulares (main <-> doctor).
    - Permite desactivar banner en modos no interactivos (JSON/pipelines).
    """

    title = Text("acctsmith", style="bold cyan")
    subtitle = Text("Identificadores de cuenta • Passwords • Passphrases", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_secrets_table(title: str, values: list[str]) -> Table:
    """Tabla numerada de credenciales generadas."""

    table = Table(title=title)
    table.add_column("#", style="dim", no_wrap=True)
    table.add_column("Value", style="bold white", no_wrap=True)
    table.add_column("Length", style="cyan", justify="right")
    for index, value in enumerate(values, start=1):
        table.add_row(str(index), value, str(len(value)))
    return table


def build_identifier_panel(result: ResolvedIdentifier) -> Panel:
    body = Text()
    body.append("Base:     ", style="dim")
    body.append(result.base + "\n")
    body.append("Final:    ", style="dim")
    body.append(result.final + "\n", style="bold green")
    body.append("Lookups:  ", style="dim")
    body.append(str(result.attempts))
    if result.suffixed:
        body.append("\n\nBase was taken; a numeric suffix was applied.", style="yellow")
    return Panel(body, title=Text("Identifier", style="bold green"), border_style="green")
