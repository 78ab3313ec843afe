# Copyright 2025 KTTC AI (https://github.com/kttc-ai)
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Rich UI components for CLI output.

Shared console, status message helpers and the comparison result table.
"""

from __future__ import annotations

import json

from rich.console import Console
from rich.table import Table
from rich.text import Text

from tspectrum.core.models import ResultSet
from tspectrum.scoring.spectrum import LITERAL_THRESHOLD

console = Console()


def print_header(title: str, subtitle: str | None = None) -> None:
    """Print a minimal header with title and optional subtitle."""
    console.print()
    console.print(f"[bold cyan]{title}[/bold cyan]")
    if subtitle:
        console.print(f"[dim]{subtitle}[/dim]")
    console.print()


def print_error(message: str) -> None:
    console.print(f"[red]✗[/red] {message}")


def print_warning(message: str) -> None:
    console.print(f"[yellow]⚠[/yellow] {message}")


def _spectrum_text(score: float | None) -> Text:
    if score is None:
        return Text("n/a", style="dim")
    # Literal-leaning scores in blue, free-leaning in magenta
    style = "blue" if score <= LITERAL_THRESHOLD else "magenta"
    return Text(f"{score:.1f}", style=style)


def build_result_table(result: ResultSet, show_failures: bool = True) -> Table:
    """Build a table with one row per attempt.

    Args:
        result: Comparison result
        show_failures: Include failed attempts with their reasons

    Returns:
        Rich table ready to print
    """
    table = Table(
        title=f"Translation Comparison ({result.tier.value} tier)",
        show_header=True,
        header_style="bold cyan",
        title_style="bold",
    )

    table.add_column("Provider", style="cyan", no_wrap=True)
    table.add_column("Translation")
    table.add_column("Complexity", justify="right")
    table.add_column("Spectrum", justify="right")
    table.add_column("Feedback", style="dim")

    for attempt in result.attempts:
        if not attempt.ok:
            if show_failures:
                table.add_row(
                    attempt.provider_id,
                    Text(f"✗ {attempt.failure_reason}", style="red"),
                    "-",
                    "-",
                    "",
                )
            continue

        complexity = (
            f"{attempt.complexity_score:.2f}" if attempt.complexity_score is not None else "n/a"
        )
        table.add_row(
            attempt.provider_id,
            attempt.translated_text or "",
            complexity,
            _spectrum_text(attempt.spectrum_score),
            attempt.spectrum_feedback or "",
        )

    return table


def print_result_set(result: ResultSet, verbose: bool = False) -> None:
    """Print a comparison result as a table.

    Failed attempts are listed only in verbose mode; otherwise a one-line
    count is shown.
    """
    console.print(build_result_table(result, show_failures=verbose))
    failed = result.failed()
    if failed and not verbose:
        print_warning(f"{len(failed)} provider(s) failed (use --verbose for details)")


def result_to_json(result: ResultSet) -> str:
    """Serialize a result set with the persistence column names."""
    data = {
        "tier": result.tier.value,
        "results": result.to_records(),
        "failures": [
            {"model_name": a.provider_id, "failure_reason": a.failure_reason}
            for a in result.failed()
        ],
    }
    return json.dumps(data, indent=2, ensure_ascii=False)
