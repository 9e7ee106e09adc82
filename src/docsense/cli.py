"""DocSense CLI."""

import json
import logging
import mimetypes
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from docsense.config import settings
from docsense.errors import DocSenseError
from docsense.models import AnalysisType, SummaryLength, blocks_from_textract
from docsense.pipeline import LayoutReconstructor
from docsense.service import SUPPORTED_LANGUAGES, DocumentAnalyzer

app = typer.Typer(
    name="docsense",
    help="Translate or summarize scanned documents from their OCR layout",
    add_completion=False,
)
console = Console()


def setup_logging(level: Optional[str] = None) -> None:
    """Route log records through rich."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=False)],
        force=True,
    )


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, help="Override LOG_LEVEL"),
) -> None:
    """Configure logging for every command."""
    setup_logging(log_level)


@app.command()
def analyze(
    file_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Document to analyze"),
    analysis_type: AnalysisType = typer.Option(AnalysisType.SUMMARIZE, "--type", help="Analysis to run"),
    target: Optional[str] = typer.Option(None, help="Target language code for translation"),
    length: SummaryLength = typer.Option(SummaryLength.MEDIUM, help="Summary length"),
    mime_type: Optional[str] = typer.Option(None, "--mime", help="Override detected MIME type"),
    region: Optional[str] = typer.Option(None, help="AWS region"),
) -> None:
    """Translate or summarize a document using AWS services."""
    mime = mime_type or mimetypes.guess_type(file_path.name)[0] or "text/plain"
    console.print(f"[bold blue]Analyzing:[/bold blue] {file_path} [dim]({mime})[/dim]")

    analyzer = DocumentAnalyzer.from_aws(region_name=region)
    try:
        result = analyzer.analyze(
            file_path.read_bytes(),
            mime,
            analysis_type,
            target_language=target,
            summary_length=length,
        )
    except DocSenseError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=1)

    language_info = result.source_language
    if result.target_language:
        language_info = f"{language_info} -> {result.target_language}"
    console.print(f"[dim]Language: {language_info}[/dim]")
    console.print(result.result_text)


@app.command()
def reconstruct(
    blocks_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Saved Textract JSON response"),
    raw: bool = typer.Option(False, "--raw", help="Print layout text before normalization"),
) -> None:
    """Rebuild reading-order text from a saved OCR response."""
    data = json.loads(blocks_path.read_text(encoding="utf-8"))
    raw_blocks = data.get("Blocks", []) if isinstance(data, dict) else data
    blocks = blocks_from_textract(raw_blocks)

    reconstructor = LayoutReconstructor()
    text = reconstructor.render(blocks) if raw else reconstructor.reconstruct(blocks)
    if not text:
        console.print("[yellow]No text found in blocks[/yellow]")
        raise typer.Exit(code=1)
    console.print(text, markup=False, highlight=False)


@app.command()
def languages() -> None:
    """List supported target languages."""
    table = Table(title="Supported Languages")
    table.add_column("Code", style="cyan")
    table.add_column("Language")
    for code, name in SUPPORTED_LANGUAGES.items():
        table.add_row(code, name)
    console.print(table)


if __name__ == "__main__":
    app()
