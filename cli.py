#!/usr/bin/env python3
"""CLI interface for the Business Message Analyzer."""

import logging
import sys
import time

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from message_agent import (
    AnalysisLogger,
    Dispatcher,
    ResponseParser,
    RuleBasedAnalyzer,
    get_stats,
    load_config,
)

console = Console()

RISK_STYLES = {
    "Safe": "green",
    "Suspicious": "yellow",
    "High Risk Fraud": "bold red",
    "Unknown": "dim",
}


def _setup_logging(level: str):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


def _read_input(text, path) -> str:
    """Message text from argument, file, or stdin (in that order)."""
    if text:
        return text
    if path:
        try:
            with open(path, encoding="utf-8") as f:
                return f.read()
        except OSError as e:
            raise click.ClickException(f"Cannot read {path}: {e.strerror}")
    if not sys.stdin.isatty():
        return sys.stdin.read()
    raise click.UsageError("Provide a message, --file, or pipe text on stdin")


def _render(result, title: str):
    style = RISK_STYLES.get(result.risk_level, "white")
    console.print(Panel.fit(
        f"[{style}]{escape(result.risk_level)}[/]\n{escape(result.reason)}",
        title=title,
    ))

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_row("Business Impact", escape(result.business_impact))
    table.add_row("Recommended Action", escape(result.recommended_action))
    table.add_row("Lead Quality", f"{result.lead_quality_score}/10" if result.is_lead else "-")
    table.add_row("Business Insight", escape(result.business_insight))
    console.print(table)

    if result.suggested_reply:
        console.print(Panel(escape(result.suggested_reply), title="Suggested Reply", style="dim"))


@click.group()
@click.option("--config", "-c", default="config.yaml", help="Path to config file")
@click.option("--verbose", "-v", is_flag=True, help="Debug logging")
@click.pass_context
def cli(ctx, config, verbose):
    """Business Message Analyzer - risk, impact and reply suggestions."""
    ctx.ensure_object(dict)
    try:
        ctx.obj["config"] = load_config(config)
    except ValueError as e:
        raise click.ClickException(str(e))
    _setup_logging("DEBUG" if verbose else ctx.obj["config"].log_level)


@cli.command()
@click.argument("message", required=False)
@click.option("--file", "-f", "path", type=click.Path(dir_okay=False), help="Read message from file")
@click.option("--sender", "-s", default=None, help="Sender information")
@click.option("--context", "-x", "business_context", default=None, help="Business context")
@click.option("--json", "as_json", is_flag=True, help="Print the JSON response body")
@click.option("--no-log", is_flag=True, help="Don't write an audit log entry")
@click.pass_context
def analyze(ctx, message, path, sender, business_context, as_json, no_log):
    """Analyze a message with the rule-based analyzer."""
    config = ctx.obj["config"]
    text = _read_input(message, path)

    dispatcher = Dispatcher(fallback=RuleBasedAnalyzer(config.keywords))

    started = time.perf_counter()
    try:
        decision = dispatcher.decide(text, sender, business_context)
    except ValueError as e:
        raise click.ClickException(str(e))
    elapsed_ms = int((time.perf_counter() - started) * 1000)

    if not no_log:
        AnalysisLogger(config.log_dir).log_analysis(
            text, decision,
            sender_info=sender,
            context=business_context,
            processing_time_ms=elapsed_ms,
        )

    if as_json:
        click.echo(decision.result.to_json(indent=2))
    else:
        _render(decision.result, decision.source)


@cli.command()
@click.argument("path", required=False, type=click.Path(dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print the JSON response body")
def parse(path, as_json):
    """Normalize raw model output (file or stdin) into an analysis."""
    text = _read_input(None, path)
    result = ResponseParser().parse(text)

    if as_json:
        click.echo(result.to_json(indent=2))
    else:
        _render(result, "Parsed Model Output")


@cli.command()
@click.pass_context
def stats(ctx):
    """Summarize the analysis audit log."""
    config = ctx.obj["config"]
    data = get_stats(config.log_dir)

    if not data["total"]:
        console.print(f"[dim]No analyses logged in {config.log_dir}.[/]")
        return

    table = Table(title=f"Analyses ({data['total']})")
    table.add_column("Risk Level", style="cyan")
    table.add_column("Count", justify="right")
    for level, count in data["by_risk"].items():
        table.add_row(f"[{RISK_STYLES.get(level, 'white')}]{level}[/]", str(count))
    console.print(table)

    console.print(
        f"Fallback: {data['fallback']} | With errors: {data['errors']} | "
        f"Scored leads: {data['leads']} (avg {data['avg_lead_score']}/10)"
    )


@cli.command()
@click.pass_context
def test(ctx):
    """Show loaded configuration."""
    config = ctx.obj["config"]

    console.print(Panel.fit("[bold]Configuration Test[/]", title="Test Mode"))

    console.print("\n[bold]Logging:[/]")
    console.print(f"  Level: {config.log_level}")
    console.print(f"  Audit log dir: {config.log_dir}")

    console.print("\n[bold]Keywords:[/]")
    console.print(f"  Fraud ({len(config.keywords.fraud)}): {', '.join(config.keywords.fraud)}")
    console.print(f"  Sales ({len(config.keywords.sales)}): {', '.join(config.keywords.sales)}")
    console.print(
        f"  Complaint ({len(config.keywords.complaint)}): {', '.join(config.keywords.complaint)}"
    )


if __name__ == "__main__":
    cli()
