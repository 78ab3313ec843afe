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

"""Main CLI application entry point for tspectrum.

Commands:
- compare: translate a text with every provider of a tier and score them
- complexity: print the complexity score of a text
"""

from __future__ import annotations

import typer

from tspectrum import __version__
from tspectrum.cli.commands.compare import compare
from tspectrum.cli.ui import console
from tspectrum.core.complexity import complexity_score

app = typer.Typer(
    name="tspectrum",
    help="tspectrum - compare machine translations side by side\n\n"
    "Fans a text out to several providers and scores every translation for "
    "complexity and literal-vs-free style.",
    add_completion=True,
    rich_markup_mode="rich",
    no_args_is_help=True,
)

app.command()(compare)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"tspectrum version: [bold cyan]{__version__}[/bold cyan]")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(  # noqa: ARG001 - Used by Typer callback
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """
    tspectrum - compare machine translations side by side.
    """
    pass


@app.command()
def complexity(
    text: str = typer.Argument(..., help="Text to measure"),
) -> None:
    """
    Print the complexity score (average characters per word) of a text.

    Example:
        tspectrum complexity "The quick fox."
    """
    score = complexity_score(text)
    if score is None:
        console.print("[yellow]⚠[/yellow] Empty text has no complexity score")
        raise typer.Exit(code=1)
    console.print(f"Complexity: [cyan]{score:.2f}[/cyan]")


if __name__ == "__main__":
    app()
