from __future__ import annotations

import asyncio
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TextIO

import click
import uvicorn
from dotenv import load_dotenv
from pydantic import ValidationError

from news_curator.config import Config
from news_curator.curation.agent import AgentClient
from news_curator.curation.errors import CurationError
from news_curator.curation.extractor import extract_with_stage
from news_curator.curation.service import CurationService
from news_curator.output.markdown import render_posts, write_digest
from news_curator.output.report import emit_report
from news_curator.storage.repository import CurationStore
from news_curator.storage.seed import seed as seed_store
from news_curator.web.app import create_app


USAGE_GUIDE = """Usage:
  news-curator COMMAND [OPTIONS]

Examples:
  news-curator seed
  news-curator curate F1 --json
  news-curator serve --port 8000
  news-curator posts --out digest-output/posts.md
  cat agent-output.txt | news-curator extract

Tips:
  - Use --help (or -h) on any command to see all options.
  - Settings also come from NEWS_CURATOR_* environment variables or a .env file.
  - curate accepts a category id or a category name.
"""


def _show_usage(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    click.echo(USAGE_GUIDE)
    ctx.exit(0)


def _configure_logging(verbose: bool | None) -> None:
    logging.basicConfig(
        level=logging.DEBUG if bool(verbose) else logging.INFO,
        stream=sys.stderr,
        format="%(levelname)s %(message)s",
    )


def _build_config(**optional_values: object) -> Config | None:
    load_dotenv(override=False)
    overrides = {key: value for key, value in optional_values.items() if value is not None}
    try:
        return Config(**overrides)
    except ValidationError as exc:
        click.echo(f"configuration error: {exc}", err=True)
        return None


usage_option = click.option(
    "--usage",
    is_flag=True,
    is_eager=True,
    expose_value=False,
    callback=_show_usage,
    help="Show usage guide and examples.",
)
database_url_option = click.option(
    "--database-url",
    default=None,
    help="SQLAlchemy database URL (default sqlite:///./news_curator.db).",
)
verbose_option = click.option("--verbose", is_flag=True, default=None, help="Verbose stderr logs.")


@click.group(
    context_settings={"help_option_names": ["--help", "-h"]},
    invoke_without_command=True,
)
@usage_option
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Curate category news into synthesized posts with an AI agent."""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command(
    "serve",
    context_settings={"help_option_names": ["--help", "-h"]},
    help="Serve the JSON API (/curate, /posts, /categories).",
)
@usage_option
@click.option("--host", default=None, help="Bind address.")
@click.option("--port", type=int, default=None, help="Bind port.")
@database_url_option
@verbose_option
def serve(
    host: str | None,
    port: int | None,
    database_url: str | None,
    verbose: bool | None,
) -> None:
    _configure_logging(verbose)
    config = _build_config(host=host, port=port, database_url=database_url, verbose=verbose)
    if config is None:
        return

    app = create_app(config)
    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        log_level="debug" if config.verbose else "info",
    )


@cli.command(
    "curate",
    context_settings={"help_option_names": ["--help", "-h"]},
    help="Run one curation for CATEGORY (id or name) and store the post.",
)
@usage_option
@click.argument("category")
@database_url_option
@click.option("--base-url", default=None, help="OpenAI-compatible base URL.")
@click.option("--api-key", default=None, help="API key (prefer env/.env).")
@click.option("--model", default=None, help="Model identifier.")
@click.option("--timeout", "agent_timeout", type=float, default=None, help="Agent timeout in seconds.")
@click.option(
    "--web-search/--no-web-search",
    default=None,
    help="Enable the hosted web search tool.",
)
@click.option("--json", "json_output", is_flag=True, default=False, help="Print the created post as JSON.")
@verbose_option
def curate(  # noqa: PLR0913
    category: str,
    database_url: str | None,
    base_url: str | None,
    api_key: str | None,
    model: str | None,
    agent_timeout: float | None,
    web_search: bool | None,
    json_output: bool,
    verbose: bool | None,
) -> None:
    _configure_logging(verbose)
    config = _build_config(
        database_url=database_url,
        base_url=base_url,
        api_key=api_key,
        model=model,
        agent_timeout=agent_timeout,
        web_search=web_search,
        verbose=verbose,
    )
    if config is None:
        return

    try:
        store = CurationStore.from_config(config)
        found = store.find_category(category)
        if found is None:
            click.echo(f"curation error: unknown category {category!r}", err=True)
            return

        agent = AgentClient(config) if config.api_key_value() else None
        service = CurationService(store, agent)
        post = asyncio.run(service.curate(found.id))
    except CurationError as exc:
        click.echo(f"curation error: {exc}", err=True)
        return
    except Exception as exc:  # noqa: BLE001
        click.echo(f"pipeline error: {exc}", err=True)
        return

    if json_output:
        emit_report(post)
    else:
        click.echo(f"Created post {post.id} for {found.name}: {post.title}")


@cli.command(
    "extract",
    context_settings={"help_option_names": ["--help", "-h"]},
    help="Extract the curation JSON from agent output in FILE (default stdin).",
)
@usage_option
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@verbose_option
@click.pass_context
def extract(ctx: click.Context, source: TextIO, verbose: bool | None) -> None:
    _configure_logging(verbose)
    result, stage = extract_with_stage(source.read())
    if result is None or stage is None:
        click.echo("not found", err=True)
        ctx.exit(1)
    emit_report(result, stage=stage.value)


@cli.command(
    "posts",
    context_settings={"help_option_names": ["--help", "-h"]},
    help="Render stored posts as a Markdown digest.",
)
@usage_option
@click.option("--out", type=click.Path(path_type=Path), default=None, help="Markdown output base path.")
@database_url_option
@verbose_option
def posts(out: Path | None, database_url: str | None, verbose: bool | None) -> None:
    _configure_logging(verbose)
    config = _build_config(database_url=database_url, verbose=verbose)
    if config is None:
        return

    generated_at = datetime.now(tz=timezone.utc)
    store = CurationStore.from_config(config)
    digest = render_posts(store.list_posts(), generated_at)
    if out is None:
        click.echo(digest)
        return
    target = write_digest(digest, out, generated_at.date())
    click.echo(f"wrote {target}")


@cli.command(
    "seed",
    context_settings={"help_option_names": ["--help", "-h"]},
    help="Create the schema and demo categories, sources and posts.",
)
@usage_option
@click.option("--reset", is_flag=True, default=False, help="Delete all existing data first.")
@database_url_option
@verbose_option
def seed(reset: bool, database_url: str | None, verbose: bool | None) -> None:
    _configure_logging(verbose)
    config = _build_config(database_url=database_url, verbose=verbose)
    if config is None:
        return

    store = CurationStore.from_config(config)
    created = seed_store(store, reset=reset)
    click.echo(f"seeded {created} categories")


def main() -> int:
    try:
        result = cli.main(standalone_mode=False)
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except Exception as exc:  # noqa: BLE001
        click.echo(f"fatal error: {exc}", err=True)
        return 1
    return result if isinstance(result, int) else 0


if __name__ == "__main__":
    raise SystemExit(main())
