import click

from orderflow.infrastructure.bootstrap import engine, order_server, settings
from orderflow.infrastructure.cli.order_commands import (
    order_create,
    order_list,
    order_show,
    order_status,
)
from orderflow.infrastructure.logging import configure_logging
from orderflow.infrastructure.persistence.database import init_schema


@click.group()
def cli() -> None:
    """Orders — order workflow service"""
    config = settings()
    configure_logging(config.log_level, config.log_json)


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.command("init-db")
def init_db() -> None:
    """Create the orders tables."""
    init_schema(engine())
    click.echo("Database schema ready.")


@cli.command("serve")
def serve() -> None:
    """Answer order requests from the RabbitMQ queue."""
    init_schema(engine())
    order_server().serve_forever()


# Register subcommands
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_status)
