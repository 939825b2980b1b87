"""
Pulsar admin CLI, the `pulsar-admin` command.

Commands:
  pulsar-admin config <cmd>          Admin URL / token settings
  pulsar-admin subscriptions <cmd>   Subscription management and peek
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

try:
    import click
    from rich.console import Console
except ImportError:
    raise SystemExit("CLI requires extras: pip install pulsar-admin[cli]")

from pulsar_admin.client import AsyncPulsarAdmin
from pulsar_admin.errors import PulsarAdminError
from pulsar_admin.transport.http import DEFAULT_BASE_URL

console = Console()
CONFIG_FILE = Path.home() / ".pulsar-admin" / "config.json"


def _load_config() -> dict:
    try:
        return json.loads(CONFIG_FILE.read_text())
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def _save_config(cfg: dict) -> None:
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_FILE.write_text(json.dumps(cfg, indent=2))


def _get_client() -> AsyncPulsarAdmin:
    cfg = _load_config()
    ctx = click.get_current_context()
    url = (ctx.find_root().obj or {}).get("url")
    return AsyncPulsarAdmin(
        base_url=url or cfg.get("base_url", DEFAULT_BASE_URL),
        token=cfg.get("token"),
    )


def _run(coro):
    try:
        return asyncio.run(coro)
    except PulsarAdminError as e:
        console.print(f"[red]{e.code}: {e}[/red]")
        raise SystemExit(1)


@click.group()
@click.version_option("0.1.0")
@click.option("--url", envvar="PULSAR_ADMIN_URL", default=None, help="Broker web service URL")
@click.option("-v", "--verbose", is_flag=True, help="Log HTTP requests")
@click.pass_context
def main(ctx: click.Context, url: Optional[str], verbose: bool):
    """Pulsar admin CLI: manage subscriptions and peek messages."""
    ctx.obj = {"url": url}
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


# Register subcommands from separate modules
from pulsar_admin.cli.config import config
from pulsar_admin.cli.subscriptions import subscriptions

main.add_command(config)
main.add_command(subscriptions)


if __name__ == "__main__":
    main()
