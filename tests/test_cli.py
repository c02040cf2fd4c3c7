from __future__ import annotations

import json

from click.testing import CliRunner

from news_curator.cli import cli


def test_cli_usage_option_shows_guide() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--usage"])
    assert result.exit_code == 0
    assert "news-curator COMMAND [OPTIONS]" in result.output
    assert "Examples:" in result.output


def test_cli_curate_help_option_shows_options() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["curate", "--help"])
    assert result.exit_code == 0
    assert "--timeout" in result.output
    assert "--usage" in result.output


def test_cli_extract_from_file(tmp_path) -> None:
    source = tmp_path / "out.txt"
    source.write_text('Here:\n```json\n{"headline":"A","summary":"B","urls":["u1"]}\n```', encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(cli, ["extract", str(source)])

    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload == {"headline": "A", "summary": "B", "urls": ["u1"], "stage": "fenced_block"}


def test_cli_extract_not_found_exits_nonzero() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["extract"], input="I could not find any relevant news.")
    assert result.exit_code == 1


def test_cli_seed_and_posts_digest(tmp_path) -> None:
    database_url = f"sqlite:///{tmp_path / 'cli.db'}"
    runner = CliRunner()

    result = runner.invoke(cli, ["seed", "--database-url", database_url])
    assert result.exit_code == 0
    assert "seeded 3 categories" in result.output

    result = runner.invoke(
        cli,
        ["posts", "--database-url", database_url, "--out", str(tmp_path / "posts.md")],
    )
    assert result.exit_code == 0
    digests = list(tmp_path.glob("posts-*.md"))
    assert len(digests) == 1
    assert "## Real Madrid Signs Star Forward" in digests[0].read_text(encoding="utf-8")


def test_cli_curate_runs_service(tmp_path, monkeypatch) -> None:
    database_url = f"sqlite:///{tmp_path / 'cli.db'}"
    runner = CliRunner()
    runner.invoke(cli, ["seed", "--database-url", database_url])

    class FakeAgent:
        def __init__(self, config):  # noqa: ANN001
            self.config = config

        async def run(self, instructions, prompt):  # noqa: ANN001, ANN202
            return '{"headline":"Fresh F1 News","summary":"S","urls":[]}'

    monkeypatch.setattr("news_curator.cli.AgentClient", FakeAgent)
    result = runner.invoke(
        cli,
        ["curate", "f1", "--database-url", database_url, "--api-key", "k", "--json"],
    )

    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["title"] == "Fresh F1 News"
    assert payload["category"]["name"] == "F1"


def test_cli_curate_unknown_category_reports_error(tmp_path) -> None:
    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["curate", "Cooking", "--database-url", f"sqlite:///{tmp_path / 'cli.db'}"],
    )
    assert result.exit_code == 0
    assert "unknown category" in result.output
