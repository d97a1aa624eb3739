"""
Alea Console Interface
=======================

Thin presentation layer over :class:`rich.console.Console` for the Alea
CLI: themed banner, section rules, severity-tagged messages, tables and
a status spinner.

References:
    - Rich library: https://github.com/Textualize/rich
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.status import Status
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

_ALEA_THEME = Theme(
    {
        "alea.banner": "bold bright_cyan",
        "alea.section": "bold bright_magenta",
        "alea.success": "bold green",
        "alea.warning": "bold yellow",
        "alea.error": "bold red",
        "alea.info": "bold bright_blue",
        "alea.dim": "dim white",
        "alea.highlight": "bold bright_white",
    }
)

_BANNER_ART = r"""[alea.banner]
   _   _
  /_\ | | ___  __ _
 //_\\| |/ _ \/ _` |
/  _  \ |  __/ (_| |
\_/ \_/_|\___|\__,_|
[/alea.banner]"""

_TAGLINE = "Unbiased randomness & chi-squared validation"

# severity -> (marker, label)
_MESSAGE_TAGS: dict[str, tuple[str, str]] = {
    "success": ("✔", "SUCCESS"),
    "warning": ("⚠", "WARNING"),
    "error": ("✘", "ERROR"),
    "info": ("ℹ", "INFO"),
}


class AleaConsole:
    """Themed Rich console shared by the CLI commands.

    Usage::

        con = AleaConsole()
        con.banner()
        con.section("Chi-Squared Test")
        con.success("Sampler is unbiased")

    Args:
        quiet: Suppress all output.
    """

    def __init__(self, *, quiet: bool = False) -> None:
        self._console = Console(theme=_ALEA_THEME, quiet=quiet, highlight=False)

    @property
    def rich(self) -> Console:
        """The wrapped Rich console, for renderables built elsewhere."""
        return self._console

    def print(self, *args: Any, **kwargs: Any) -> None:
        self._console.print(*args, **kwargs)

    # ------------------------------------------------------------------ #
    #  Layout
    # ------------------------------------------------------------------ #

    def banner(self, version: str = "1.0.0") -> None:
        """Logo, tagline and *version* in a centred panel."""
        body = Text.from_markup(
            f"{_BANNER_ART}\n[alea.highlight]{_TAGLINE}[/alea.highlight]\n"
            f"[alea.dim]Version: {version}[/alea.dim]"
        )
        self._console.print(
            Panel(Align.center(body), border_style="bright_cyan", padding=(1, 2))
        )

    def section(self, title: str) -> None:
        """Horizontal rule carrying *title*, followed by a blank line."""
        self._console.rule(f"  {title}  ", style="alea.section", characters="─")
        self._console.print()

    # ------------------------------------------------------------------ #
    #  Messages
    # ------------------------------------------------------------------ #

    def message(self, severity: str, text: str) -> None:
        """Print *text* prefixed with the tag for *severity*.

        *text* is interpreted as Rich markup; escape untrusted input.
        """
        marker, label = _MESSAGE_TAGS[severity]
        style = f"alea.{severity}"
        self._console.print(f"[{style}][{marker}] {label}:[/{style}] {text}")

    def success(self, text: str) -> None:
        self.message("success", text)

    def warning(self, text: str) -> None:
        self.message("warning", text)

    def error(self, text: str) -> None:
        self.message("error", text)

    def info(self, text: str) -> None:
        self.message("info", text)

    # ------------------------------------------------------------------ #
    #  Tables / progress
    # ------------------------------------------------------------------ #

    def table(
        self,
        title: str,
        columns: Sequence[str],
        rows: Sequence[Sequence[Any]],
        *,
        styles: Sequence[str] = (),
    ) -> None:
        """Render *rows* under *columns*; cells are stringified.

        *styles* gives optional per-column Rich styles, matched by position.
        """
        tbl = Table(
            title=title,
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
        )
        for name, style in zip(columns, [*styles, *[""] * len(columns)]):
            tbl.add_column(name, style=style)
        for row in rows:
            tbl.add_row(*map(str, row))
        self._console.print(tbl)

    @contextmanager
    def status(self, text: str = "Working...") -> Iterator[Status]:
        """Spinner shown while the block runs."""
        with self._console.status(
            f"[alea.info]{text}[/alea.info]",
            spinner="dots",
            spinner_style="bright_cyan",
        ) as spinner:
            yield spinner
