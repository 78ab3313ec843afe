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

"""Unit tests for the command-line interface."""

import json
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from tests.conftest import MockAdapter, MockTransport, judge_payload
from tspectrum import __version__
from tspectrum.cli import ui
from tspectrum.cli.main import app
from tspectrum.core.errors import ConfigurationError
from tspectrum.core.models import ServiceTier
from tspectrum.providers.base import ProviderError
from tspectrum.scoring.spectrum import SpectrumJudge
from tspectrum.utils.config import Settings

COMPARE = "tspectrum.cli.commands.compare"


@pytest.fixture(autouse=True)
def _restore_logging(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """The compare command reconfigures the root logger; undo it afterwards."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    monkeypatch.setattr(ui.console, "width", 200)
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def quiet_settings() -> Settings:
    return Settings(log_level="CRITICAL")


def _adapters_factory(adapters: list[MockAdapter]) -> Any:
    def build(settings: Settings, tiers: tuple[ServiceTier, ...], pool: Any) -> dict:
        return {tier: adapters for tier in tiers}

    return build


@pytest.mark.unit
class TestCLIBasics:
    """Test top-level CLI behaviour."""

    def test_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "compare" in result.stdout
        assert "complexity" in result.stdout

    def test_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout


@pytest.mark.unit
class TestComplexityCommand:
    """Test the complexity command."""

    def test_score(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["complexity", "The quick fox."])
        assert result.exit_code == 0
        assert "3.67" in result.stdout

    def test_blank_text(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["complexity", "   "])
        assert result.exit_code == 1


@pytest.mark.unit
class TestCompareCommand:
    """Test the compare command with mocked adapters."""

    def test_free_tier_table(self, cli_runner: CliRunner, quiet_settings: Settings) -> None:
        adapters = [MockAdapter("alpha", text="Hello there"), MockAdapter("beta", text="Hi")]

        with (
            patch(f"{COMPARE}.get_settings", return_value=quiet_settings),
            patch(f"{COMPARE}.build_adapters", side_effect=_adapters_factory(adapters)),
        ):
            result = cli_runner.invoke(app, ["compare", "안녕하세요"])

        assert result.exit_code == 0, result.output
        assert "Translation Comparison" in result.stdout
        assert "alpha" in result.stdout
        assert "Hello there" in result.stdout
        assert adapters[0].calls == [("안녕하세요", None)]

    def test_json_output(self, cli_runner: CliRunner, quiet_settings: Settings) -> None:
        adapters = [
            MockAdapter("alpha", text="Hello there"),
            MockAdapter("beta", error=ProviderError("beta is down")),
        ]

        with (
            patch(f"{COMPARE}.get_settings", return_value=quiet_settings),
            patch(f"{COMPARE}.build_adapters", side_effect=_adapters_factory(adapters)),
        ):
            result = cli_runner.invoke(app, ["compare", "안녕하세요", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["tier"] == "free"
        assert data["results"] == [
            {
                "model_name": "alpha",
                "translated_text": "Hello there",
                "complexity_score": 5.0,
                "spectrum_score": None,
                "spectrum_feedback": None,
            }
        ]
        assert data["failures"] == [{"model_name": "beta", "failure_reason": "beta is down"}]

    def test_paid_tier_with_domain(self, cli_runner: CliRunner, quiet_settings: Settings) -> None:
        adapters = [MockAdapter("alpha", text="Hello"), MockAdapter("beta", text="Hi")]
        judge = SpectrumJudge(
            MockTransport(
                [
                    judge_payload(
                        [
                            {"model_name": "alpha", "spectrum_score": 2.0},
                            {"model_name": "beta", "spectrum_score": 9.0},
                        ]
                    )
                ]
            )
        )

        with (
            patch(f"{COMPARE}.get_settings", return_value=quiet_settings),
            patch(f"{COMPARE}.build_adapters", side_effect=_adapters_factory(adapters)),
            patch(f"{COMPARE}.build_judge", return_value=judge),
        ):
            result = cli_runner.invoke(
                app, ["compare", "안녕하세요", "--tier", "paid", "--domain", "law", "--json"]
            )

        assert result.exit_code == 0, result.output
        scores = {r["model_name"]: r["spectrum_score"] for r in json.loads(result.stdout)["results"]}
        assert scores == {"alpha": 2.0, "beta": 9.0}
        assert adapters[0].calls[0][1] is not None

    def test_source_from_file(
        self, cli_runner: CliRunner, quiet_settings: Settings, tmp_path: Path
    ) -> None:
        source = tmp_path / "source.txt"
        source.write_text("안녕하세요\n", encoding="utf-8")
        adapters = [MockAdapter("alpha", text="Hello")]

        with (
            patch(f"{COMPARE}.get_settings", return_value=quiet_settings),
            patch(f"{COMPARE}.build_adapters", side_effect=_adapters_factory(adapters)),
        ):
            result = cli_runner.invoke(app, ["compare", "--file", str(source), "--json"])

        assert result.exit_code == 0, result.output
        assert adapters[0].calls == [("안녕하세요", None)]

    def test_text_and_file_conflict(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        source = tmp_path / "source.txt"
        source.write_text("x", encoding="utf-8")
        result = cli_runner.invoke(app, ["compare", "Hello", "--file", str(source)])
        assert result.exit_code == 2

    def test_missing_text(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["compare"])
        assert result.exit_code == 2

    def test_configuration_error(self, cli_runner: CliRunner, quiet_settings: Settings) -> None:
        with (
            patch(f"{COMPARE}.get_settings", return_value=quiet_settings),
            patch(
                f"{COMPARE}.build_adapters",
                side_effect=ConfigurationError("OpenAI API key not configured"),
            ),
        ):
            result = cli_runner.invoke(app, ["compare", "안녕하세요"])

        assert result.exit_code == 1
        assert "OpenAI API key not configured" in result.stdout

    def test_all_providers_failed(self, cli_runner: CliRunner, quiet_settings: Settings) -> None:
        adapters = [MockAdapter("alpha", error=ProviderError("down"))]

        with (
            patch(f"{COMPARE}.get_settings", return_value=quiet_settings),
            patch(f"{COMPARE}.build_adapters", side_effect=_adapters_factory(adapters)),
        ):
            result = cli_runner.invoke(app, ["compare", "안녕하세요", "--json"])

        assert result.exit_code == 1
        assert json.loads(result.stdout)["results"] == []
