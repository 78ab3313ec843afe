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

"""Compare command: translate one text with every provider of a tier."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import typer

from tspectrum.cli.ui import console, print_error, print_header, print_result_set, result_to_json
from tspectrum.core.models import CallerIdentity, ResultSet, ServiceTier
from tspectrum.orchestrator import TranslationOrchestrator
from tspectrum.providers.factory import TransportPool, build_adapters, build_judge
from tspectrum.quota import QuotaTracker
from tspectrum.service import TranslationService
from tspectrum.utils.config import get_settings

LOCAL_ADDRESS = "127.0.0.1"
LOCAL_ACCOUNT = "local"


def load_source_text(text: str | None, file: str | None) -> str:
    """Resolve the source text from the argument or a file.

    Raises:
        typer.BadParameter: If both or neither are given, or the file is missing
    """
    if text is not None and file is not None:
        raise typer.BadParameter("Pass either TEXT or --file, not both")
    if file is not None:
        path = Path(file)
        if not path.exists():
            raise typer.BadParameter(f"File not found: {file}")
        return path.read_text(encoding="utf-8").strip()
    if text is None:
        raise typer.BadParameter("Missing TEXT (or --file)")
    return text


def local_caller(tier: ServiceTier) -> CallerIdentity:
    """Identity used for runs started from the command line."""
    if tier is ServiceTier.PAID:
        return CallerIdentity(account_id=LOCAL_ACCOUNT, tier=ServiceTier.PAID)
    return CallerIdentity(address=LOCAL_ADDRESS)


async def _compare_async(text: str, tier: ServiceTier, domain: str | None) -> ResultSet:
    """Build the engine from settings and run one comparison."""
    settings = get_settings()
    pool = TransportPool(settings)

    orchestrator = TranslationOrchestrator(
        build_adapters(settings, tiers=(tier,), pool=pool),
        judge=build_judge(settings, pool) if tier is ServiceTier.PAID else None,
        judge_mode=settings.judge_mode,
    )
    service = TranslationService(
        orchestrator,
        QuotaTracker(daily_limit=settings.daily_quota_limit),
        max_text_chars=settings.max_text_chars,
    )

    try:
        return await service.compare(text, local_caller(tier), domain)
    finally:
        await orchestrator.close()


def compare(
    text: str | None = typer.Argument(None, help="Text to translate"),
    file: str | None = typer.Option(None, "--file", "-f", help="Read the source text from a file"),
    tier: ServiceTier = typer.Option(
        ServiceTier.FREE, "--tier", "-t", help="Service tier (free: 2 providers, paid: 3 + judge)"
    ),
    domain: str | None = typer.Option(
        None, "--domain", "-d", help="Subject domain, e.g. medical or law (paid tier only)"
    ),
    json_output: bool = typer.Option(False, "--json", help="Print results as JSON"),
    verbose: bool = typer.Option(False, "--verbose", help="Verbose output"),
) -> None:
    """
    Translate a text with several providers and compare the results.

    Every translation gets a complexity score (average characters per
    word). On the paid tier a judge model also places each translation on
    the literal (1.0) to free (10.0) spectrum.

    Example:
        tspectrum compare "안녕하세요, 만나서 반갑습니다." --tier paid --domain literature
    """
    settings = get_settings()
    log_level = logging.DEBUG if verbose else settings.log_level.upper()
    logging.basicConfig(level=log_level, format="%(message)s", force=True)

    source_text = load_source_text(text, file)

    if not json_output:
        print_header("tspectrum comparison", f"{tier.value} tier")

    try:
        result = asyncio.run(_compare_async(source_text, tier, domain))
    except KeyboardInterrupt:
        console.print("\n[yellow]⚠ Interrupted by user[/yellow]")
        raise typer.Exit(code=130) from None
    except Exception as e:
        print_error(f"Error: {e}")
        if verbose:
            console.print_exception()
        raise typer.Exit(code=1) from e

    if json_output:
        typer.echo(result_to_json(result))
    else:
        print_result_set(result, verbose=verbose)

    if result.all_failed:
        raise typer.Exit(code=1)
