import asyncio
import json

from typer import Typer, Option, Argument, Exit
from typing import Annotated
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import SearchSettings, ServerSettings, configure_logging
from .errors import ValidationError
from .search import ProductSearchEngine, SEARCH_MODES
from .storage import build_sample_catalog
from .vespa import VespaClient

app = Typer(help="Hybrid lexical and vector search over the demo product catalog.")
console = Console()


def build_engine() -> ProductSearchEngine:
    settings = ServerSettings.from_env()
    return ProductSearchEngine(
        build_sample_catalog(),
        settings=SearchSettings.from_env(),
        vespa=VespaClient(settings.vespa_url, timeout=settings.vespa_timeout),
    )


@app.command()
def serve(
    host: Annotated[str | None, Option("--host", help="Bind address.")] = None,
    port: Annotated[int | None, Option("--port", "-p", help="Bind port.")] = None,
) -> None:
    """Run the HTTP API."""
    from .server import run_server

    run_server(host=host, port=port)


@app.command()
def search(
    query: Annotated[str, Argument(help="Text to search for.")],
    mode: Annotated[
        str,
        Option("--mode", "-m", help=f"Search mode: {', '.join(SEARCH_MODES)}."),
    ] = "text",
) -> None:
    """Search the demo catalog. Vector modes embed the query text."""
    configure_logging("WARNING")
    engine = build_engine()
    query_vector = engine.embedder.embed_query(query) if mode != "text" else None
    try:
        response = engine.search(query, mode, query_vector)
    except ValidationError as exc:
        console.print(f"[bold red]{exc}[/]")
        raise Exit(code=1)

    table = Table(title=f"{response.count} result(s) for {query!r} ({mode})")
    table.add_column("ID", justify="right")
    table.add_column("Title")
    table.add_column("Category")
    table.add_column("Price", justify="right")
    table.add_column("Score", justify="right")
    table.add_column("Matched by")
    for hit in response.results:
        table.add_row(
            hit.product.id,
            hit.product.title,
            hit.product.category,
            f"{hit.product.price:.2f}",
            f"{hit.score:.4f}" if hit.score is not None else "-",
            hit.matched_by,
        )
    console.print(table)


@app.command()
def products() -> None:
    """List the demo catalog."""
    engine = build_engine()
    table = Table(title="Products")
    table.add_column("ID", justify="right")
    table.add_column("Title")
    table.add_column("Category")
    table.add_column("Price", justify="right")
    for product in engine.list_products():
        table.add_row(product.id, product.title, product.category, f"{product.price:.2f}")
    console.print(table)


@app.command("vespa-status")
def vespa_status() -> None:
    """Probe the configured Vespa application."""
    configure_logging("ERROR")
    engine = build_engine()
    status = asyncio.run(engine.external_engine_status())
    console.print(
        Panel(
            json.dumps(status.to_dict(), indent=2),
            title_align="left",
            title="Vespa status",
            border_style="bold green" if status.connected else "bold red",
        )
    )
