# lexia/cli.py
"""
CLI interface for lexia.

Thin presentation layer over the tools/ service layer.
All commands delegate to the same functions the HTTP API and MCP wrap.
"""

import asyncio
import json

import typer

from lexia.config.loader import load_config
from lexia.errors import LexiaError
from lexia.tools.services import build_services

app = typer.Typer(
    name="lexia",
    help="Strategic case analysis and legal document drafting.",
    no_args_is_help=True,
)

_RISK_COLORS = {
    "low": typer.colors.GREEN,
    "medium": typer.colors.YELLOW,
    "high": typer.colors.RED,
    "critical": typer.colors.MAGENTA,
}


def _run(coro):
    """Run async function from sync CLI context."""
    return asyncio.run(coro)


async def _with_services(call):
    """Build services, initialize the store, run call(services), then close."""
    services = build_services(load_config())
    await services.store.initialize()
    try:
        return await call(services)
    finally:
        await services.close()


def _fail(e: Exception) -> None:
    typer.echo(typer.style(f"Error: {e}", fg=typer.colors.RED), err=True)
    raise typer.Exit(1)


@app.command()
def serve(
    host: str = typer.Option(None, "--host", help="Bind address (default from config)"),
    port: int = typer.Option(None, "--port", "-p", help="Port (default from config)"),
):
    """Start the HTTP API."""
    import uvicorn

    from lexia.api.app import create_app
    from lexia.logging_config import configure_logging

    config = load_config()
    configure_logging(config.logging.level)
    uvicorn.run(
        create_app(config),
        host=host or config.server.host,
        port=port or config.server.port,
        log_config=None,
    )


@app.command()
def mcp():
    """Start the MCP server on stdio."""
    from lexia.__main__ import main

    asyncio.run(main())


@app.command()
def analyze(
    case_id: str = typer.Argument(..., help="Case to analyze"),
    user: str = typer.Option(..., "--user", "-u", help="Acting user id"),
):
    """Run a strategic analysis for a case and store it."""
    from lexia.tools.analyze_case import analyze_case

    try:
        result = _run(_with_services(lambda s: analyze_case(user, case_id, s)))
    except LexiaError as e:
        _fail(e)

    analysis = result["analysis"]
    risk = analysis["riskMatrix"]
    typer.echo(f"Analysis: {result['analysisId']}")
    typer.echo(f"Case:     {analysis['caseNumber']} {analysis['caseTitle']}")
    typer.echo(
        typer.style(
            f"Risk:     {risk['riskLevel']} ({risk['overallScore']}/10)",
            fg=_RISK_COLORS.get(risk["riskLevel"], typer.colors.WHITE),
        )
    )
    typer.echo(f"Strategy: {analysis['recommendations']['primaryStrategy']}")
    for i, step in enumerate(analysis["recommendations"]["nextSteps"], 1):
        typer.echo(f"  {i}. {step}")
    meta = analysis["metadata"]
    typer.echo(f"Tokens:   {meta['tokensUsed']}  Duration: {meta['durationMs']}ms")


@app.command()
def analyses(
    user: str = typer.Option(..., "--user", "-u", help="Acting user id"),
    case: str = typer.Option(None, "--case", "-c", help="Only analyses of this case"),
):
    """List stored analyses, newest first."""
    from rich.console import Console
    from rich.table import Table

    from lexia.tools.list_analyses import list_analyses

    try:
        result = _run(_with_services(lambda s: list_analyses(user, case, s)))
    except LexiaError as e:
        _fail(e)

    rows = result["analyses"]
    if not rows:
        typer.echo("No analyses found.")
        return

    table = Table()
    table.add_column("ID", no_wrap=True)
    table.add_column("CASE")
    table.add_column("RISK")
    table.add_column("SCORE", justify="right")
    table.add_column("STRATEGY")
    table.add_column("CREATED", style="dim")
    for row in rows:
        score = row["overallScore"]
        table.add_row(
            row["id"],
            f"{row['caseNumber'] or ''} {row['caseTitle'] or ''}".strip(),
            row["riskLevel"] or "-",
            f"{score:g}" if score is not None else "-",
            row["primaryStrategy"] or "-",
            row["created_at"],
        )
    Console().print(table)


@app.command()
def show(
    analysis_id: str = typer.Argument(..., help="Analysis to print"),
    user: str = typer.Option(..., "--user", "-u", help="Acting user id"),
):
    """Print a stored analysis as JSON."""
    from lexia.tools.get_analysis import get_analysis

    try:
        result = _run(_with_services(lambda s: get_analysis(user, analysis_id, s)))
    except LexiaError as e:
        _fail(e)

    typer.echo(json.dumps(result["analysis"], ensure_ascii=False, indent=2))


@app.command()
def token(user_id: str = typer.Argument(..., help="User the token authenticates as")):
    """Create an API bearer token (printed once, stored hashed)."""
    raw = _run(_with_services(lambda s: s.store.create_api_token(user_id)))
    typer.echo(raw)


if __name__ == "__main__":
    app()
