"""Console output helpers. Status lines go to stdout, errors to stderr."""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def info(message: str):
    console.print(f"ℹ️ {escape(message)}")


def warn(message: str):
    console.print(f"[yellow]⚠️ {escape(message)}[/yellow]")


def error(message: str):
    err_console.print(f"[red]🚨 {escape(message)}[/red]")


def success(message: str):
    console.print(f"[green]✅ {escape(message)}[/green]")


def done(message: str):
    console.print(f"[green]✨ {escape(message)}[/green]")


def banner(name: str, version: str, description: str):
    console.print(
        Panel.fit(
            f"[bold magenta]{name}[/bold magenta] [dim]v{version}[/dim]\n{description}",
            border_style="cyan",
        )
    )
