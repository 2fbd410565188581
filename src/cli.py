"""
Interface de linha de comando (CLI) do Stock Checker.
Usa Typer para uma experiência moderna e rica.
"""

import asyncio
import json
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from config.settings import get_settings
from src.checker import StockChecker
from src.core.exceptions import InvalidQueryError, LaunchError
from src.core.models import SearchResponse
from src.scrapers.session import BrowserSession

# Inicializa CLI
app = typer.Typer(
    name="stock-checker",
    help="Verifica se um produto aparece na busca de supermercados online.",
    add_completion=False,
)

# Console Rico para output formatado
console = Console()


def run_async(coro):
    """Helper para executar corrotinas."""
    return asyncio.run(coro)


@app.command("search")
def search(
    query: str = typer.Argument(..., help="Termo de busca (ex: 'almond milk')"),
    store: Optional[list[str]] = typer.Option(
        None, "--store", "-s", help="Código da loja (pode repetir)"
    ),
    json_output: bool = typer.Option(False, "--json", "-j", help="Saída em formato JSON"),
):
    """
    Verifica a disponibilidade de um produto nas lojas.

    Exemplos:
        stock-checker search "milk"
        stock-checker search "almond" --store fairprice
        stock-checker search "chocolate bar" --json
    """
    checker = StockChecker()

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            progress.add_task(f"Buscando '{query}'...", total=None)
            response = run_async(
                checker.check_availability(query, store_codes=store or None)
            )
    except (InvalidQueryError, ValueError) as e:
        console.print(f"[red]✗ {getattr(e, 'message', e)}[/red]")
        raise typer.Exit(code=2)

    if json_output:
        console.print_json(json.dumps(response.to_payload(), default=str))
        return

    _display_results(response)


@app.command("stores")
def list_stores(
    json_output: bool = typer.Option(False, "--json", "-j", help="Saída em formato JSON"),
):
    """
    Lista lojas configuradas.
    """
    checker = StockChecker()

    if json_output:
        _, body = checker.handle_stores_request()
        console.print_json(json.dumps(body))
        return

    table = Table(title="Lojas Configuradas")
    table.add_column("Código", style="cyan")
    table.add_column("Nome", style="green")
    table.add_column("URL de busca", style="blue")

    for info in checker.list_stores():
        table.add_row(info.code, info.name, info.base_search_url)

    console.print(table)


@app.command("check-browser")
def check_browser(
    url: str = typer.Option("https://example.com", "--url", "-u", help="Página de teste"),
):
    """
    Verifica se o Chromium do Playwright inicia e abre uma página.
    """
    try:
        title, version = run_async(_inspect_browser(url))
    except LaunchError as e:
        console.print(f"[red]✗ Navegador não iniciou: {e.diagnostic}[/red]")
        console.print("[dim]Dica: rode 'playwright install chromium'[/dim]")
        raise typer.Exit(code=1)
    except Exception as e:
        console.print(f"[red]✗ Falha ao abrir {url}: {e}[/red]")
        raise typer.Exit(code=1)

    console.print(Panel(
        f"[bold]Versão:[/bold] {version}\n"
        f"[bold]Página:[/bold] {url}\n"
        f"[bold]Título:[/bold] {title}",
        title="✓ Navegador funcionando",
        border_style="green",
    ))


async def _inspect_browser(url: str) -> tuple[str, Optional[str]]:
    """Inicia a sessão, abre a página de teste e retorna (título, versão)."""
    settings = get_settings()
    async with BrowserSession(settings) as session:
        async with session.page() as page:
            await page.goto(url, wait_until="networkidle", timeout=10000)
            return await page.title(), session.browser_version


@app.command("version")
def version():
    """
    Exibe a versão do sistema.
    """
    from src import __version__

    console.print(f"[bold blue]Stock Checker[/bold blue] v{__version__}")
    console.print("Verificação de disponibilidade de produtos em supermercados")


# FUNÇÕES DE DISPLAY

def _display_results(response: SearchResponse):
    """Exibe resultados da verificação formatados."""
    summary = response.summary

    console.print()
    console.print(Panel(
        f"[bold]Busca:[/bold] {response.query}\n"
        f"[bold]Lojas:[/bold] {summary.total}  "
        f"[green]✓ {summary.available}[/green]  "
        f"[red]✗ {summary.unavailable}[/red]",
        title="🔍 Resultado da Busca",
        border_style="blue",
    ))

    table = Table(title="Disponibilidade por Loja")
    table.add_column("Loja", style="cyan", width=18)
    table.add_column("Disponível", justify="center", width=10)
    table.add_column("Status", style="yellow", width=18)
    table.add_column("Produto / Erro", style="white", width=50, overflow="fold")

    for result in response.results:
        icon = "[green]✓[/green]" if result.has_item else "[red]✗[/red]"
        detail = result.matched_product or result.error or ""
        table.add_row(
            result.store_name,
            icon,
            result.status.value,
            detail,
        )

    console.print(table)

    if response.available_stores:
        names = ", ".join(r.store_name for r in response.available_stores)
        console.print(f"\n[bold]Disponível em:[/bold] {names}")


# ENTRY POINT

def main():
    """Entry point principal."""
    app()


if __name__ == "__main__":
    main()
