"""CLI: pulsar-admin config set|show|clear"""

from typing import Optional

import click
from rich.console import Console

console = Console()


def _load_config() -> dict:
    from pulsar_admin.cli.main import _load_config
    return _load_config()


def _save_config(cfg: dict) -> None:
    from pulsar_admin.cli.main import _save_config
    _save_config(cfg)


@click.group()
def config():
    """Admin endpoint settings."""


@config.command("set")
@click.option("--url", required=True, help="Broker web service URL, e.g. http://localhost:8080")
@click.option("--token", default=None, help="Bearer token sent with every request")
def config_set(url: str, token: Optional[str]):
    """Save the admin URL (and token)."""
    cfg = _load_config()
    cfg["base_url"] = url
    if token is not None:
        cfg["token"] = token
    _save_config(cfg)
    console.print(f"[green]Using {url}[/green]")


@config.command("show")
def config_show():
    """Show current settings."""
    cfg = _load_config()
    if cfg.get("base_url"):
        token = "set" if cfg.get("token") else "not set"
        console.print(f"URL: {cfg['base_url']} (token {token})")
    else:
        console.print("[yellow]No URL configured. Run `pulsar-admin config set --url ...`.[/yellow]")


@config.command("clear")
def config_clear():
    """Forget saved settings."""
    _save_config({})
    console.print("[green]Settings cleared.[/green]")
