"""
Keysmith Console Interface
===========================

Rich-powered console abstraction shared by every Keysmith front end.

The class wraps :class:`rich.console.Console` and adds helpers for the
banner, section headers, severity-coloured messages, tables and status
spinners, all with one consistent theme.

References:
    - Rich library: https://github.com/Textualize/rich
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import IO, Any, Generator, Optional, Sequence

from rich.align import Align
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

# ---------------------------------------------------------------------------
# Theme
# ---------------------------------------------------------------------------
_KEYSMITH_THEME = Theme(
    {
        "keysmith.banner": "bold bright_cyan",
        "keysmith.section": "bold bright_magenta",
        "keysmith.success": "bold green",
        "keysmith.warning": "bold yellow",
        "keysmith.error": "bold red",
        "keysmith.info": "bold bright_blue",
        "keysmith.dim": "dim white",
        "keysmith.secret": "bold bright_white",
        "keysmith.weak": "bold white on red",
        "keysmith.moderate": "bold yellow",
        "keysmith.good": "bold bright_cyan",
        "keysmith.strong": "bold green",
        "keysmith.excellent": "bold bright_green",
    }
)

_BANNER_ART = r"""[bright_cyan]
  ██╗  ██╗███████╗██╗   ██╗███████╗███╗   ███╗██╗████████╗██╗  ██╗
  ██║ ██╔╝██╔════╝╚██╗ ██╔╝██╔════╝████╗ ████║██║╚══██╔══╝██║  ██║
  █████╔╝ █████╗   ╚████╔╝ ███████╗██╔████╔██║██║   ██║   ███████║
  ██╔═██╗ ██╔══╝    ╚██╔╝  ╚════██║██║╚██╔╝██║██║   ██║   ██╔══██║
  ██║  ██╗███████╗   ██║   ███████║██║ ╚═╝ ██║██║   ██║   ██║  ██║
  ╚═╝  ╚═╝╚══════╝   ╚═╝   ╚══════╝╚═╝     ╚═╝╚═╝   ╚═╝   ╚═╝  ╚═╝
[/bright_cyan]"""

_TAGLINE = "Password and passphrase generation with entropy reporting"


class KeysmithConsole:
    """Unified console interface for Keysmith output.

    Usage::

        con = KeysmithConsole()
        con.banner()
        con.section("Generated Passwords")
        con.success("4 passwords generated")

    Args:
        quiet:  Suppress all output (library / test mode).
        record: Enable Rich recording for later export.
        file:   Stream to write to; defaults to ``sys.stdout``.
    """

    def __init__(
        self,
        *,
        quiet: bool = False,
        record: bool = False,
        file: Optional[IO[str]] = None,
    ) -> None:
        self._console = Console(
            theme=_KEYSMITH_THEME,
            quiet=quiet,
            record=record,
            highlight=False,
            file=file,
        )

    @property
    def rich(self) -> Console:
        """Direct access to the underlying Rich Console instance."""
        return self._console

    # ------------------------------------------------------------------ #
    #  Banner / sections
    # ------------------------------------------------------------------ #

    def banner(self, version: str = "1.0.0") -> None:
        subtitle = (
            f"[keysmith.info]{_TAGLINE}[/keysmith.info]\n"
            f"[keysmith.dim]Version: {version}[/keysmith.dim]"
        )
        panel = Panel(
            Align.center(Text.from_markup(_BANNER_ART + "\n" + subtitle)),
            border_style="bright_cyan",
            padding=(0, 2),
        )
        self._console.print(panel)

    def section(self, title: str) -> None:
        """Print a section rule."""
        self._console.rule(f"  {title}  ", style="keysmith.section", characters="─")
        self._console.print()

    # ------------------------------------------------------------------ #
    #  Message helpers (severity-coloured)
    # ------------------------------------------------------------------ #

    def success(self, message: str) -> None:
        self._console.print(
            f"[keysmith.success][✔] SUCCESS:[/keysmith.success] {escape(message)}"
        )

    def warning(self, message: str) -> None:
        self._console.print(
            f"[keysmith.warning][⚠] WARNING:[/keysmith.warning] {escape(message)}"
        )

    def error(self, message: str) -> None:
        self._console.print(
            f"[keysmith.error][✘] ERROR:[/keysmith.error] {escape(message)}"
        )

    def info(self, message: str) -> None:
        self._console.print(
            f"[keysmith.info][ℹ] INFO:[/keysmith.info] {escape(message)}"
        )

    # ------------------------------------------------------------------ #
    #  Table display
    # ------------------------------------------------------------------ #

    def table(
        self,
        title: str,
        columns: Sequence[str],
        rows: Sequence[Sequence[Any]],
        *,
        caption: str | None = None,
        styles: Sequence[str] | None = None,
    ) -> None:
        """Render a styled table; every cell is stringified."""
        tbl = Table(
            title=title,
            caption=caption,
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
            padding=(0, 1),
        )
        for idx, col_name in enumerate(columns):
            style = styles[idx] if styles and idx < len(styles) else ""
            tbl.add_column(col_name, style=style)
        for row in rows:
            tbl.add_row(*(str(cell) for cell in row))
        self._console.print(tbl)

    # ------------------------------------------------------------------ #
    #  Status spinner
    # ------------------------------------------------------------------ #

    @contextmanager
    def status(self, message: str = "Working...") -> Generator[Any, None, None]:
        """Spinner shown while a long step (such as an audit) runs."""
        with self._console.status(
            f"[keysmith.info]{escape(message)}[/keysmith.info]",
            spinner="dots",
            spinner_style="bright_cyan",
        ) as status_obj:
            yield status_obj

    # ------------------------------------------------------------------ #
    #  Utility
    # ------------------------------------------------------------------ #

    def print(self, *args: Any, **kwargs: Any) -> None:
        """Proxy to :meth:`rich.console.Console.print`."""
        self._console.print(*args, **kwargs)

    def blank(self, count: int = 1) -> None:
        for _ in range(count):
            self._console.print()
