"""Tests for the CLI."""

import json
from collections.abc import Generator
from pathlib import Path
from typing import Any
from unittest.mock import patch

import httpx
import pytest
import typer
from typer.testing import CliRunner

from conjugations.cli import _build_checklist, app

runner = CliRunner()

TENSE_IDS = ["present", "preterite", "imperfect", "future"]


@pytest.fixture(autouse=True)
def _no_dotenv() -> Generator[None, None, None]:
    """Keep a developer's .env out of CLI tests."""
    with patch("conjugations.cli.load_dotenv"):
        yield


class TestBuildChecklist:
    """Tests for _build_checklist."""

    def test_no_options(self) -> None:
        assert _build_checklist(TENSE_IDS, only=None, disable=None, use_default=False) is None

    def test_only(self) -> None:
        checklist = _build_checklist(TENSE_IDS, only=["future"], disable=None, use_default=False)
        assert checklist == {
            "present": False,
            "preterite": False,
            "imperfect": False,
            "future": True,
        }

    def test_disable(self) -> None:
        checklist = _build_checklist(TENSE_IDS, only=None, disable=["present"], use_default=False)
        assert checklist == {"present": False}

    def test_default_then_disable(self) -> None:
        checklist = _build_checklist(TENSE_IDS, only=None, disable=["present"], use_default=True)
        assert checklist is not None
        assert checklist["present"] is False
        assert checklist["preterite"] is False

    def test_unknown_tense(self) -> None:
        with pytest.raises(typer.BadParameter, match="Unknown tense: pluscuam"):
            _build_checklist(TENSE_IDS, only=["pluscuam"], disable=None, use_default=False)


class TestShowCommand:
    """Tests for the show command."""

    def test_no_args_shows_help(self) -> None:
        result = runner.invoke(app, [])
        assert "Usage" in result.output

    def test_help(self) -> None:
        result = runner.invoke(app, ["show", "--help"])
        assert result.exit_code == 0
        assert "--only" in result.output
        assert "--disable" in result.output

    def test_shows_all_tenses(self) -> None:
        result = runner.invoke(app, ["show", "hablar"])
        assert result.exit_code == 0, result.output
        assert "hablar (spanish)" in result.output
        assert "hablo" in result.output
        assert "he hablado" in result.output
        assert "Deber + Infinitive" in result.output

    def test_unknown_verb(self) -> None:
        result = runner.invoke(app, ["show", "xyzverbar"])
        assert result.exit_code == 1
        assert "No conjugation found" in result.output

    def test_only_option(self) -> None:
        result = runner.invoke(app, ["show", "ser", "--only", "present"])
        assert result.exit_code == 0, result.output
        assert "soy" in result.output
        assert "fui" not in result.output

    def test_disable_option(self) -> None:
        result = runner.invoke(app, ["show", "ser", "-x", "present"])
        assert result.exit_code == 0, result.output
        assert "soy" not in result.output
        assert "fui" in result.output

    def test_default_checklist(self) -> None:
        result = runner.invoke(app, ["show", "comer", "--default-checklist"])
        assert result.exit_code == 0, result.output
        assert "como" in result.output
        assert "comí" not in result.output

    def test_unknown_tense_option(self) -> None:
        result = runner.invoke(app, ["show", "hablar", "--only", "bogus"])
        assert result.exit_code != 0

    def test_json_output(self) -> None:
        result = runner.invoke(app, ["show", "hablar", "--json", "--only", "present-perfect"])
        assert result.exit_code == 0, result.output
        record = json.loads(result.output)
        assert record["infinitive"] == "hablar"
        assert [t["tense_id"] for t in record["tenses"]] == ["present-perfect"]
        assert record["tenses"][0]["conjugations"][5]["form"] == "han hablado"

    def test_data_option(self, dataset_file: Path) -> None:
        result = runner.invoke(app, ["--data", str(dataset_file), "show", "hablar"])
        assert result.exit_code == 0, result.output
        assert "Present Perfect" in result.output
        assert "Preterite" not in result.output

    def test_reflexive_verb(self, tmp_path: Path, small_dataset: dict[str, Any]) -> None:
        small_dataset["verbs"]["levantarse"] = [
            ["levanto", "levantas", "levanta", "levantamos", "levantáis", "levantan"],
            [
                "he levantado",
                "has levantado",
                "ha levantado",
                "hemos levantado",
                "habéis levantado",
                "han levantado",
            ],
        ]
        small_dataset["verb_count"] = 3
        path = tmp_path / "reflexive.json"
        path.write_text(json.dumps(small_dataset, ensure_ascii=False), encoding="utf-8")

        result = runner.invoke(app, ["--data", str(path), "show", "levantarse"])

        assert result.exit_code == 0, result.output
        assert "me levanto" in result.output
        assert "me he levantado" in result.output
        assert "se levantan" in result.output

    def test_malformed_data(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{}", encoding="utf-8")
        result = runner.invoke(app, ["--data", str(path), "show", "hablar"])
        assert result.exit_code == 1
        assert "could not load conjugation data" in result.output

    def test_data_not_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "latin1.json"
        path.write_bytes('{"language": "español"}'.encode("latin-1"))
        result = runner.invoke(app, ["--data", str(path), "check", "hablar"])
        assert result.exit_code == 1
        assert "could not load conjugation data" in result.output
        assert not isinstance(result.exception, UnicodeDecodeError)

    def test_missing_data_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["--data", str(tmp_path / "nope.json"), "show", "hablar"])
        assert result.exit_code == 1


class TestCheckCommand:
    """Tests for the check command."""

    def test_known(self) -> None:
        result = runner.invoke(app, ["check", "tener"])
        assert result.exit_code == 0
        assert "tener: found" in result.output

    def test_unknown(self) -> None:
        result = runner.invoke(app, ["check", "xyzverbar"])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_unsupported_language(self) -> None:
        result = runner.invoke(app, ["check", "hablar", "-l", "french"])
        assert result.exit_code == 1


class TestConstructsCommand:
    """Tests for the constructs command."""

    def test_lists_constructs(self) -> None:
        result = runner.invoke(app, ["constructs"])
        assert result.exit_code == 0, result.output
        assert "[x] present " in result.output
        assert "[ ] preterite " in result.output
        assert "Moods:" in result.output

    def test_unsupported_language(self) -> None:
        result = runner.invoke(app, ["constructs", "-l", "klingon"])
        assert result.exit_code != 0


class TestBuildDataCommand:
    """Tests for the build-data command."""

    def test_download_failure(self, tmp_path: Path) -> None:
        with patch(
            "conjugations.cli.download_jehle_csv",
            side_effect=httpx.ConnectError("offline"),
        ):
            result = runner.invoke(app, ["build-data", "-o", str(tmp_path / "out.json")])

        assert result.exit_code == 1
        assert "download failed" in result.output
        assert not (tmp_path / "out.json").exists()

    def test_writes_dataset(self, tmp_path: Path) -> None:
        dataset = {
            "language": "spanish",
            "verb_count": 0,
            "tenses": [
                {"tense_id": "present", "tense_name": "P", "description": "", "persons": ["yo"]}
            ],
            "verbs": {},
        }
        output = tmp_path / "out.json"

        with (
            patch("conjugations.cli.download_jehle_csv", return_value=tmp_path / "j.csv"),
            patch("conjugations.cli.parse_jehle_csv", return_value={}),
            patch("conjugations.cli.build_dataset", return_value=dataset) as mock_build,
        ):
            result = runner.invoke(
                app, ["build-data", "-o", str(output), "--verbs", "hablar, ser"]
            )

        assert result.exit_code == 0, result.output
        assert mock_build.call_args.args[1] == ["hablar", "ser"]
        assert json.loads(output.read_text(encoding="utf-8"))["language"] == "spanish"
        assert "0 verbs" in result.output

    def test_rejects_invalid_dataset(self, tmp_path: Path) -> None:
        dataset = {"language": "spanish", "tenses": [], "verbs": {}}
        output = tmp_path / "out.json"

        with (
            patch("conjugations.cli.download_jehle_csv", return_value=tmp_path / "j.csv"),
            patch("conjugations.cli.parse_jehle_csv", return_value={}),
            patch("conjugations.cli.build_dataset", return_value=dataset),
        ):
            result = runner.invoke(app, ["build-data", "-o", str(output)])

        assert result.exit_code == 1
        assert "generated dataset is invalid" in result.output
        assert not output.exists()
