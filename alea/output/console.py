"""
Alea Console Output
====================

Rich-based console output formatters for Alea results: chi-squared
tables, uniformity reports, samples, shuffles and hash verification.

Uses the shared :class:`~alea_common.console.AleaConsole` for consistent
styling.

References:
    - Rich Library Documentation. https://rich.readthedocs.io/
"""

from __future__ import annotations

from typing import Optional

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from alea_common.console import AleaConsole
from alea.core.models import (
    ChiSquaredResult,
    HashVerification,
    SampleResult,
    ShuffleResult,
    UniformityReport,
)


def _verdict(ok: bool, good: str = "PASS", bad: str = "FAIL") -> tuple[str, str]:
    return (good, "bold bright_green") if ok else (bad, "bold red")


def _fmt(value: float) -> str:
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.4f}"


class AleaConsoleOutput:
    """Console output formatters for Alea results.

    Usage::

        output = AleaConsoleOutput(AleaConsole())
        output.display_chi_squared(result)
        output.display_uniformity(report)
    """

    def __init__(self, console: Optional[AleaConsole] = None) -> None:
        self.console = console or AleaConsole()
        self._rich = self.console.rich

    # ------------------------------------------------------------------ #
    #  Chi-Squared
    # ------------------------------------------------------------------ #

    def display_chi_squared(self, result: ChiSquaredResult) -> None:
        """Display observed/expected counts and the test verdict.

        Args:
            result: ChiSquaredResult from the engine.
        """
        self.console.section("Chi-Squared Test")

        tbl = Table(
            title=f"Observed (expected), {result.width} x {result.height}",
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
        )
        tbl.add_column("Row", style="dim", justify="right")
        for x in range(result.width):
            tbl.add_column(f"Col {x}", justify="right")

        for y, (obs_row, exp_row) in enumerate(zip(result.observed, result.expected)):
            cells = [
                f"{_fmt(obs)} [dim]({exp:.2f})[/dim]"
                for obs, exp in zip(obs_row, exp_row)
            ]
            tbl.add_row(str(y), *cells)

        self._rich.print(tbl)

        label, colour = _verdict(
            not result.significant, good="NOT SIGNIFICANT", bad="SIGNIFICANT"
        )
        summary = Text()
        summary.append("Statistic: ", style="bold")
        summary.append(f"{result.statistic:.6f}\n")
        summary.append("Degrees of freedom: ", style="bold")
        summary.append(f"{result.degrees_of_freedom}\n")
        summary.append("p-value: ", style="bold")
        summary.append(f"{result.p_value:.6g}\n")
        summary.append(f"Verdict (alpha={result.alpha:g}): ", style="bold")
        summary.append(label, style=colour)

        self._rich.print(Panel(summary, title="Result", border_style="cyan"))

    # ------------------------------------------------------------------ #
    #  Uniformity
    # ------------------------------------------------------------------ #

    def display_uniformity(self, report: UniformityReport, *, limit: int = 10) -> None:
        """Display the aggregate verdict and the weakest trials.

        Args:
            report: UniformityReport from the engine.
            limit: Maximum number of individual trials listed.
        """
        self.console.section("Sampler Uniformity")

        label, colour = _verdict(report.passed)
        summary = Text()
        summary.append("Overall: ", style="bold")
        summary.append(label, style=colour)
        summary.append(
            f"\nTrials: {report.trials_passed}/{report.trials} passed "
            f"({report.pass_rate:.2%}, required {report.required_pass_rate:.2%})\n"
        )
        summary.append(
            f"Bound: {report.bound}  Samples/trial: {report.samples_per_trial:,}  "
            f"alpha: {report.alpha:g}\n"
        )
        summary.append(f"Minimum p-value: {report.min_p_value:.6g}")

        self._rich.print(Panel(summary, title="Uniformity Check", border_style="cyan"))

        weakest = sorted(report.results, key=lambda t: t.p_value)[:limit]
        if not weakest:
            return

        tbl = Table(
            title="Lowest p-value trials",
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
        )
        tbl.add_column("Statistic", justify="right")
        tbl.add_column("p-value", justify="right")
        tbl.add_column("Frequencies")
        tbl.add_column("Result", justify="center")

        for trial in weakest:
            colour = "green" if trial.passed else "red"
            text = "PASS" if trial.passed else "FAIL"
            tbl.add_row(
                f"{trial.statistic:.4f}",
                f"{trial.p_value:.6f}",
                " ".join(str(f) for f in trial.frequencies),
                f"[{colour}]{text}[/{colour}]",
            )

        self._rich.print(tbl)

    # ------------------------------------------------------------------ #
    #  Sampling / Shuffling
    # ------------------------------------------------------------------ #

    def display_sample(self, result: SampleResult) -> None:
        """Display sampled integers."""
        title = f"Samples below {result.bound:,}"
        if result.seeded:
            title += " (seeded)"
        body = Text(", ".join(str(v) for v in result.values), style="alea.highlight")
        self._rich.print(Panel(body, title=title, border_style="cyan"))

    def display_shuffle(self, result: ShuffleResult) -> None:
        """Display a shuffled sequence with its new positions."""
        self.console.table(
            "Shuffled" + (" (seeded)" if result.seeded else ""),
            ["#", "Item"],
            [(idx, item) for idx, item in enumerate(result.items)],
            styles=["dim", "bold"],
        )

    # ------------------------------------------------------------------ #
    #  Hashing
    # ------------------------------------------------------------------ #

    def display_verification(self, result: HashVerification) -> None:
        """Display the outcome of a password verification."""
        label, colour = _verdict(result.valid, good="MATCH", bad="NO MATCH")
        text = Text()
        text.append("Algorithm: ", style="bold")
        text.append(f"pbkdf2-{result.algorithm}\n")
        text.append("Iterations: ", style="bold")
        text.append(f"{result.iterations:,}\n")
        text.append("Result: ", style="bold")
        text.append(label, style=colour)
        self._rich.print(Panel(text, title="Password Verification", border_style="cyan"))
