"""CLI interface for GitHub Paginator."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from github_paginator import __version__
from github_paginator.config import get_config
from github_paginator.context import Context
from github_paginator.exceptions import PaginationCancelledError
from github_paginator.models.options import ListOptions, PaginatorOpts
from github_paginator.paginator import noop_processor, paginate
from github_paginator.services.github_rest_client import GitHubRestClient, RestLister
from github_paginator.utils.rate_limiter import (
    HeaderRateLimiter,
    check_and_report_rate_limit,
    check_rate_limit_from_api,
)

app = typer.Typer(
    name="github-paginator",
    help="Walk every page of a GitHub API endpoint",
    add_completion=False,
)

console = Console()


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        console.print(f"github-paginator version {__version__}")
        raise typer.Exit()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
    )


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """GitHub Paginator - Walk every page of a GitHub API endpoint."""
    pass


@app.command("list")
def list_endpoint(
    endpoint: str = typer.Argument(..., help="API endpoint, e.g. /users/torvalds/repos"),
    page: int = typer.Option(1, "--page", help="Page to start from"),
    per_page: Optional[int] = typer.Option(
        None,
        "--per-page",
        help="Items per page (defaults to GITHUB_PAGINATOR_PER_PAGE or 100)",
    ),
    max_pages: Optional[int] = typer.Option(
        None,
        "--max-pages",
        min=1,
        help="Stop after this many pages",
    ),
    min_remaining: Optional[int] = typer.Option(
        None,
        "--min-remaining",
        help="Stop once remaining API requests drop to this value",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Give up fetching new pages after this many seconds",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write fetched items to this JSON file",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Verbose output",
    ),
):
    """Fetch all pages of an endpoint.

    Examples:
        github-paginator list /users/torvalds/repos
        github-paginator list /orgs/python/repos --max-pages 3 -o repos.json
    """
    _setup_logging(verbose)
    config = get_config()

    opts = PaginatorOpts(
        list_options=ListOptions(page=page, per_page=per_page or config.default_per_page),
        max_pages=max_pages if max_pages is not None else config.max_pages,
    )
    floor = min_remaining if min_remaining is not None else config.min_remaining
    ctx = Context.with_timeout(timeout) if timeout is not None else Context.background()

    try:
        result = asyncio.run(_run_list(endpoint, opts, floor, ctx))
    except KeyboardInterrupt:
        console.print("\n[yellow]Pagination cancelled[/yellow]")
        raise typer.Exit(1)

    console.print(
        f"Fetched [bold]{len(result.items)}[/bold] items from "
        f"{result.pages_fetched} page(s)"
    )

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, "w", encoding="utf-8") as f:
            json.dump(result.items, f, indent=2, ensure_ascii=False)
        console.print(f"Items written to: [cyan]{output}[/cyan]")

    if result.error is not None:
        if isinstance(result.error, PaginationCancelledError):
            console.print(f"[yellow]Stopped early: {result.error}[/yellow]")
        else:
            console.print(f"[red]Error: {result.error}[/red]")
        raise typer.Exit(1)


async def _run_list(endpoint: str, opts: PaginatorOpts, min_remaining: int, ctx: Context):
    """Run the pagination asynchronously."""
    async with GitHubRestClient() as client:
        return await paginate(
            ctx,
            RestLister(client, endpoint),
            noop_processor,
            HeaderRateLimiter(min_remaining=min_remaining),
            opts,
        )


@app.command()
def check_token():
    """Check GitHub token configuration and rate limits."""
    config = get_config()

    if config.is_authenticated:
        console.print("[green]GitHub token is configured[/green]")
    else:
        console.print("[yellow]No GitHub token configured[/yellow]")
        console.print("To configure a token:")
        console.print("  export GITHUB_TOKEN=your_token_here")

    rate_info = asyncio.run(
        check_rate_limit_from_api(api_url=config.github_api_url, token=config.github_token)
    )
    core = rate_info["core"]
    console.print(f"Rate limit: {core['remaining']}/{core['limit']} requests remaining")
    if not check_and_report_rate_limit(rate_info, config.is_authenticated):
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
