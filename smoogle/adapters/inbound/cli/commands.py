"""CLI interface for Smoogle."""

import asyncio
import json
import os
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.status import Status
from rich.table import Table

from ....config import settings, setup_logging
from ....core.domain import QueryPhase, QueryState, ResultSet
from ....core.services import QueryController
from ...common.exception_handler import format_exception_json

app = typer.Typer(
    name="smoogle",
    help="Smoogle.eth - a semantic smart contract search engine",
    add_completion=False,
)

console = Console(legacy_windows=False)

# Determine if we're in debug mode (shows full stack traces)
DEBUG_MODE = os.getenv("DEBUG", "false").lower() == "true"

PHASE_MESSAGES = {
    QueryPhase.EMBEDDING: "[bold green]Embedding query...[/]",
    QueryPhase.SEARCHING: "[bold green]Searching contracts...[/]",
}


def handle_cli_error(exc: BaseException) -> None:
    """Display an error with its code; full JSON details in debug mode."""
    error_data = format_exception_json(exc, include_trace=DEBUG_MODE)

    if DEBUG_MODE:
        console.print(
            Panel(
                json.dumps(error_data, indent=2),
                title="[bold red]Error Details[/]",
                border_style="red",
            )
        )
        return

    error_code = error_data["error"].get("code", "UNKNOWN")
    console.print(f"\n[red]Error [{error_code}]:[/] {escape(error_data['error']['message'])}")
    console.print(f"[dim]Type: {error_data['error']['type']}[/]")
    console.print("[dim]Set DEBUG=true for full details[/]")


def render_results(results: ResultSet) -> None:
    """Print a result set in index order."""
    if not results:
        console.print("[yellow]No matching contracts found.[/]")
        return

    table = Table(title="Results", show_lines=True)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Title")
    table.add_column("Contract Address", style="green")
    table.add_column("Creator Address", style="green")
    table.add_column("Score", justify="right")

    for rank, result in enumerate(results, start=1):
        title = escape(result.title or "(untitled)")
        if result.url:
            title = f"[link={result.url}]{title}[/link]\n[dim]{escape(result.url)}[/]"
        table.add_row(
            str(rank),
            title,
            escape(result.contract_address),
            escape(result.creator_address),
            f"{result.score:.3f}",
        )

    console.print(table)


def render_state(state: QueryState | None, as_json: bool = False) -> None:
    if state is None:
        return
    if state.phase is QueryPhase.FAILED and state.error is not None:
        handle_cli_error(state.error)
    elif state.phase is QueryPhase.DISPLAYING:
        if as_json:
            payload = {"query": state.query, "results": [r.to_dict() for r in state.results]}
            typer.echo(json.dumps(payload, indent=2))
        else:
            render_results(state.results)


async def _submit_with_status(
    controller: QueryController, query: str, top_k: int | None = None
) -> QueryState | None:
    """Submit a query while a spinner tracks the controller's busy phases."""
    with console.status(PHASE_MESSAGES[QueryPhase.EMBEDDING]) as status:

        def on_change(state: QueryState, status: Status = status) -> None:
            if state.phase in PHASE_MESSAGES:
                status.update(PHASE_MESSAGES[state.phase])

        unsubscribe = controller.subscribe(on_change)
        try:
            return await controller.submit(query, top_k=top_k)
        finally:
            unsubscribe()


async def _search_once(query: str, top_k: int | None, as_json: bool) -> bool:
    from ....composition.container import build_controller

    controller = build_controller(top_k)
    try:
        state = await _submit_with_status(controller, query)
    finally:
        await controller.index.close()
    render_state(state, as_json=as_json)
    return state is not None and state.phase is QueryPhase.DISPLAYING


async def _interactive_session(top_k: int | None) -> None:
    from ....composition.container import build_controller

    controller = build_controller(top_k)
    try:
        while True:
            query = await asyncio.to_thread(Prompt.ask, "\n[bold cyan]Search[/]")

            if query.lower() in ("quit", "exit", "q"):
                console.print("[dim]Goodbye![/]")
                break

            try:
                state = await _submit_with_status(controller, query)
            except Exception as exc:
                handle_cli_error(exc)
                continue
            render_state(state)
    finally:
        await controller.index.close()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Configure logging before any command runs."""
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        json_format=settings.log_json,
    )


@app.command()
def search(
    query: str = typer.Argument(..., help="What the contract should do or be called"),
    top_k: Optional[int] = typer.Option(None, "--top-k", "-k", min=1, max=100, help="Results to show"),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON"),
) -> None:
    """Run a single search and print the ranked contracts."""
    try:
        succeeded = asyncio.run(_search_once(query, top_k, as_json))
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    if not succeeded:
        raise typer.Exit(1)


@app.command()
def interactive(
    top_k: Optional[int] = typer.Option(None, "--top-k", "-k", min=1, max=100, help="Results to show"),
) -> None:
    """Start an interactive search session."""
    console.print(
        Panel.fit(
            "[bold]Smoogle.eth[/]\n"
            "[dim]A semantic Smart Contract Search Engine[/]\n\n"
            "Examples:\n"
            "• ERC20 token with a capped supply\n"
            "• NFT marketplace with royalties\n"
            "• multisig wallet\n\n"
            "[dim]Type 'quit' or 'exit' to leave[/]",
            border_style="blue",
        )
    )

    try:
        asyncio.run(_interactive_session(top_k))
    except KeyboardInterrupt:
        console.print("\n[dim]Goodbye![/]")
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)


@app.command()
def status() -> None:
    """Show configuration and the state of the contract index."""
    from ....composition.container import get_index

    console.print("[bold]Smoogle Status[/]\n")
    console.print(f"Embedding model: {settings.embedding_model} ({settings.embedding_dimension} dims)")
    console.print(f"Default top-k: {settings.top_k}")

    if not settings.qdrant_url:
        console.print("❌ Qdrant URL not set (set SMOOGLE_QDRANT_URL in .env)")
        raise typer.Exit(1)
    console.print(f"✅ Qdrant configured at {settings.qdrant_url}")

    async def _stats() -> dict:
        index = get_index()
        try:
            return await index.collection_stats()
        finally:
            await index.close()

    try:
        stats = asyncio.run(_stats())
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    emoji = "✅" if stats["count"] > 0 else "⚪"
    console.print(f"\n{emoji} {stats['name']}: {stats['count']} contracts ({stats['status']})")


if __name__ == "__main__":
    app()
