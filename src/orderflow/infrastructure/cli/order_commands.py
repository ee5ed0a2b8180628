"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from orderflow.application.dto import OrderDTO, OrderItemSpec, OrderListQuery, OrderSummaryDTO
from orderflow.domain.exceptions import DomainException
from orderflow.domain.model.order import OrderStatus
from orderflow.infrastructure.bootstrap import (
    change_order_status_handler,
    create_order_handler,
    list_orders_handler,
    show_order_handler,
)

_STATUS_CHOICE = click.Choice([s.value for s in OrderStatus], case_sensitive=False)


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse '1:3,2:5' into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        pid_str, qty_str = pair.rsplit(":", 1)
        try:
            product_id = int(pid_str)
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid item '{pair}'. Product id and quantity must be integers."
            )
        specs.append(OrderItemSpec(product_id=product_id, quantity=qty))
    return specs


def _display_order(dto: OrderDTO) -> None:
    click.echo(f"Order {dto.id}  (status={dto.status})")
    click.echo(f"Created:  {dto.created_at:%Y-%m-%d %H:%M}")
    click.echo()
    click.echo(f"  {'Product':<24} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*51}")
    for item in dto.items:
        line_total = item.price * item.quantity
        click.echo(
            f"  {item.name:<24} {item.quantity:>5} {item.price:>10.2f} {line_total:>10.2f}"
        )
    click.echo(f"  {'-'*51}")
    click.echo(f"  {'Order Total':<24} {dto.total_items:>5} {dto.total_amount:>21.2f}")


def _display_summary(dto: OrderSummaryDTO) -> None:
    click.echo(
        f"{dto.id}  {dto.status:<10} {dto.total_items:>5} items  "
        f"{dto.total_amount:>10.2f}  {dto.created_at:%Y-%m-%d %H:%M}"
    )


@click.command("create")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
def order_create(items: str) -> None:
    """Create a new purchase order priced from the catalog."""
    specs = _parse_items(items)

    try:
        dto = create_order_handler().handle(specs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--status", type=_STATUS_CHOICE, default=None, help="Only orders in this status.")
@click.option("--page", type=int, default=1, show_default=True)
@click.option("--limit", type=int, default=10, show_default=True)
def order_list(status: str | None, page: int, limit: int) -> None:
    """List orders, one page at a time."""
    query = OrderListQuery(
        status=status.upper() if status else None, page=page, limit=limit
    )

    try:
        result = list_orders_handler().handle(query)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    for dto in result.data:
        _display_summary(dto)
    meta = result.meta
    click.echo(
        f"Page {meta.current_page} of {meta.total_pages}  "
        f"({meta.total_items} orders, {meta.per_page} per page)"
    )


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
def order_show(order_id: str) -> None:
    """Show an order with current product names."""
    try:
        dto = show_order_handler().handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("status")
@click.option("--id", "order_id", required=True, help="Order ID to update.")
@click.option("--status", required=True, type=_STATUS_CHOICE, help="New status.")
def order_status(order_id: str, status: str) -> None:
    """Change the status of an order."""
    try:
        dto = change_order_status_handler().handle(order_id, status.upper())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.id} is {dto.status}.")
