"""Command-line interface for flashstate.

Usage:
    flashstate dev --host 0.0.0.0 --port 3000
    flashstate serve --config production --host 0.0.0.0 --port 3000
    flashstate config-check
    flashstate routes
    flashstate simulate "set:notice=Created" "" ""

"""
import typer
from typing import List, Optional
from enum import Enum
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box

from flashstate.main import create_app
from flashstate.config import DevelopmentConfig, ProductionConfig
from flashstate.services.flash_store import KeyState
from flashstate.utils.cycle_script import CycleScriptError, run_cycles

app = typer.Typer(help="CLI tool for running and exploring flashstate")
console = Console()

STATE_STYLES = {
    KeyState.FRESH: 'green',
    KeyState.PENDING_DELETE: 'yellow',
}


class ConfigMode(str, Enum):
    """Supported configuration modes."""
    DEVELOPMENT = "development"
    PRODUCTION = "production"


def _config_for(mode: ConfigMode):
    if mode == ConfigMode.DEVELOPMENT:
        return DevelopmentConfig, "Development"
    return ProductionConfig, "Production"


def _print_startup_banner(config_name: str, host: str, port: int, debug: bool = False):
    """Print a startup banner with configuration info."""
    url = f"http://{host}:{port}"

    config_info = f"""[bold blue]flashstate[/bold blue]

[green]Configuration:[/green] {config_name}
[green]Host:[/green] {host}
[green]Port:[/green] {port}
[green]Debug Mode:[/green] {'Enabled' if debug else 'Disabled'}
[green]URL:[/green] {url}

[yellow]Available Routes:[/yellow]
• Notices: {url}/
• Flash JSON: {url}/flash.json
• Health: {url}/health"""

    console.print(Panel(config_info, box=box.ROUNDED, padding=(1, 2)))


@app.command()
def dev(
    host: str = typer.Option("localhost", "--host", "-h", help="Host to bind to"),
    port: int = typer.Option(3000, "--port", "-p", help="Port to bind to"),
    debug: bool = typer.Option(True, "--debug/--no-debug", help="Enable debug mode"),
    reload: bool = typer.Option(True, "--reload/--no-reload", help="Enable auto-reload on code changes"),
):
    """Run the application in development mode with debug features enabled."""
    try:
        _print_startup_banner("Development", host, port, debug)

        flask_app = create_app(DevelopmentConfig)

        console.print("\n[bold green]Starting development server...[/bold green]")
        flask_app.run(host=host, port=port, debug=debug, use_reloader=reload)
    except Exception as e:
        console.print(f"[red]Error starting development server: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def serve(
    config: ConfigMode = typer.Option(ConfigMode.DEVELOPMENT, "--config", "-c", help="Configuration mode"),
    host: str = typer.Option("localhost", "--host", "-h", help="Host to bind to"),
    port: int = typer.Option(3000, "--port", "-p", help="Port to bind to"),
    debug: Optional[bool] = typer.Option(None, "--debug/--no-debug", help="Enable debug mode (auto-detected if not specified)"),
):
    """Run the application with custom configuration options."""
    try:
        config_class, config_name = _config_for(config)
        debug_mode = debug if debug is not None else config == ConfigMode.DEVELOPMENT

        _print_startup_banner(config_name, host, port, debug_mode)

        flask_app = create_app(config_class)

        console.print(f"\n[bold green]Starting {config_name.lower()} server...[/bold green]")
        flask_app.run(host=host, port=port, debug=debug_mode, threaded=True)
    except Exception as e:
        console.print(f"[red]Error starting server: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def config_check(
    config: ConfigMode = typer.Option(ConfigMode.DEVELOPMENT, "--config", "-c", help="Configuration mode to check")
):
    """Validate configuration and display current settings."""
    try:
        config_class, config_name = _config_for(config)

        console.print(f"\n[bold blue]Configuration Check: {config_name} Mode[/bold blue]")

        flask_app = create_app(config_class)

        table = Table(show_header=True, header_style="bold magenta", box=box.ROUNDED)
        table.add_column("Setting", style="cyan", no_wrap=True)
        table.add_column("Value", style="white")
        table.add_column("Source", style="yellow")

        config_items = [
            ("DEBUG", str(flask_app.config.get('DEBUG', 'Not Set')), "Flask Config"),
            ("FLASK_SECRET_KEY_FLASHSTATE", "***" if flask_app.config.get('SECRET_KEY') else "Not Set", "Environment/Config"),
            ("FLASHSTATE_SESSION_KEY", flask_app.config.get('FLASH_SESSION_KEY', 'Not Set'), "Environment/Config"),
            ("FLASHSTATE_DEFAULT_CATEGORY", flask_app.config.get('FLASH_DEFAULT_CATEGORY', 'Not Set'), "Environment/Config"),
            ("FLASHSTATE_HTMX_NOW", str(flask_app.config.get('FLASH_HTMX_NOW', 'Not Set')), "Environment/Config"),
            ("CORS_ORIGINS_FLASHSTATE", str(flask_app.config.get('CORS_ORIGINS', 'Not Set')), "Environment/Config"),
            ("CSP_MODE", flask_app.config.get('CSP_MODE', 'Not Set'), "Environment/Config"),
            ("DISABLE_SECURITY_FLASHSTATE", str(flask_app.config.get('DISABLE_SECURITY', 'Not Set')), "Environment/Config"),
        ]

        for setting, value, source in config_items:
            table.add_row(setting, str(value), source)

        console.print(table)

        issues = []

        secret_key = flask_app.config.get('SECRET_KEY')
        if not secret_key:
            issues.append("SECRET_KEY is not set: sessions are disabled and only flash.now works")
        elif secret_key == 'dev-secret-key-change-in-production':
            if config == ConfigMode.PRODUCTION:
                issues.append("FLASK_SECRET_KEY_FLASHSTATE should be set to a secure value in production")
            else:
                issues.append("Using default FLASK_SECRET_KEY_FLASHSTATE (acceptable for development)")

        if config == ConfigMode.PRODUCTION and flask_app.config.get('DEBUG'):
            issues.append("DEBUG should be disabled in production mode")

        if issues:
            console.print("\n[bold yellow]Configuration Issues:[/bold yellow]")
            for i, issue in enumerate(issues, 1):
                console.print(f"  {i}. [yellow]{issue}[/yellow]")
        else:
            console.print("\n[bold green]✓ Configuration looks good![/bold green]")

    except Exception as e:
        console.print(f"[red]Error checking configuration: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def routes():
    """Display all Flask routes and their methods."""
    try:
        console.print("\n[bold blue]Flask Application Routes[/bold blue]")

        flask_app = create_app()

        table = Table(show_header=True, header_style="bold magenta", box=box.ROUNDED)
        table.add_column("Route", style="cyan")
        table.add_column("Methods", style="green")
        table.add_column("Endpoint", style="yellow")
        table.add_column("Blueprint", style="white")

        for rule in flask_app.url_map.iter_rules():
            methods = ', '.join(sorted([m for m in rule.methods if m not in ['HEAD', 'OPTIONS']]))
            blueprint = rule.endpoint.split('.')[0] if '.' in rule.endpoint else 'main'
            table.add_row(str(rule.rule), methods, rule.endpoint, blueprint)

        console.print(table)

        total_routes = len(list(flask_app.url_map.iter_rules()))
        console.print(f"\n[dim]Total routes: {total_routes}[/dim]")

    except Exception as e:
        console.print(f"[red]Error listing routes: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def simulate(
    cycles: List[str] = typer.Argument(..., help="One script per request cycle, e.g. 'set:notice=Hi;keep'"),
):
    """Run flash operations over several request cycles and show what each one sees."""
    try:
        results = run_cycles(cycles)
    except CycleScriptError as e:
        console.print(f"[red]Invalid cycle script: {e}[/red]")
        raise typer.Exit(1)

    table = Table(show_header=True, header_style="bold magenta", box=box.ROUNDED)
    table.add_column("Cycle", style="cyan", justify="right")
    table.add_column("Script", style="white")
    table.add_column("Visible at start", style="white")
    table.add_column("After sweep", style="white")

    for script, result in zip(cycles, results):
        visible = ', '.join(f"{key}={value}" for key, value in result.visible.items()) or '-'
        states = ', '.join(
            f"[{STATE_STYLES.get(state, 'white')}]{key}:{state.value}[/{STATE_STYLES.get(state, 'white')}]"
            for key, state in result.states.items()
        ) or '-'
        table.add_row(str(result.index), script or '-', visible, states)

    console.print(table)


if __name__ == "__main__":
    app()
