"""
OrderFlow CLI.

Command-line interface for common operations.
"""

import sys
import time
from pathlib import Path

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent))

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="orderflow",
    help="OrderFlow food ordering backend CLI",
    add_completion=False,
)
console = Console()


def _cents(amount: int) -> str:
    return f"${amount / 100:.2f}"


# =============================================================================
# Database Commands
# =============================================================================

@app.command()
def init_db():
    """Create all database tables."""
    from rest_api.models import Base
    from shared.infrastructure.db import engine

    console.print("[blue]Creating database tables[/blue]")
    try:
        Base.metadata.create_all(bind=engine)
        console.print(f"[green]✓ {len(Base.metadata.tables)} tables created/verified[/green]")
    except Exception as e:
        console.print(f"[red]✗ Table creation failed: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def seed(
    force: bool = typer.Option(False, "--force", "-f", help="Allow seeding in production"),
):
    """Seed the default menu and the admin account."""
    from rest_api.seed import seed_admin, seed_menu
    from shared.config.settings import settings
    from shared.infrastructure.db import get_db_context

    if settings.environment == "production" and not force:
        console.print("[red]Cannot seed production without --force[/red]")
        raise typer.Exit(1)

    try:
        with get_db_context() as db:
            inserted = seed_menu(db)
            admin_created = seed_admin(db)
    except Exception as e:
        console.print(f"[red]✗ Seeding failed: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓ Menu items inserted: {inserted}[/green]")
    if admin_created:
        console.print(f"[green]✓ Admin created: {settings.seed_admin_email}[/green]")
    else:
        console.print("[yellow]Admin already present[/yellow]")


@app.command()
def create_admin(
    email: str = typer.Argument(..., help="Admin email"),
    password: str = typer.Option(..., prompt=True, hide_input=True, confirmation_prompt=True),
    name: str = typer.Option("Administrator", help="Display name"),
):
    """Create an admin account, or promote an existing user."""
    from rest_api.services.domain import UserService
    from shared.infrastructure.db import get_db_context

    if len(password) < 6:
        console.print("[red]Password must be at least 6 characters[/red]")
        raise typer.Exit(1)

    with get_db_context() as db:
        user, created = UserService(db).ensure_admin(email, password, name=name)
        user_id = user.id

    if created:
        console.print(f"[green]✓ Admin created (id={user_id})[/green]")
    else:
        console.print(f"[yellow]User already exists (id={user_id}); role is admin[/yellow]")


@app.command()
def list_orders(
    limit: int = typer.Option(20, help="Number of orders to show"),
    status: str = typer.Option(None, help="Only orders in this status"),
):
    """Show the most recent orders."""
    from rest_api.services.domain import OrderService
    from shared.config.constants import OrderStatus
    from shared.infrastructure.db import get_db_context

    if status and status not in OrderStatus.ALL:
        console.print(f"[red]Unknown status '{status}'. Expected one of: {', '.join(OrderStatus.ALL)}[/red]")
        raise typer.Exit(1)

    table = Table(title="Orders")
    table.add_column("ID", style="cyan")
    table.add_column("Customer")
    table.add_column("Status", style="green")
    table.add_column("Items", justify="right")
    table.add_column("Total", justify="right", style="yellow")
    table.add_column("Promo")
    table.add_column("Created")

    with get_db_context() as db:
        orders = OrderService(db).list_orders(limit=limit, status=status)
        for order in orders:
            table.add_row(
                str(order.id),
                order.customer_name,
                order.status,
                str(sum(line.quantity for line in order.items)),
                _cents(order.final_amount),
                order.promo_code or "-",
                order.created_at.strftime("%Y-%m-%d %H:%M"),
            )

    if not orders:
        console.print("[yellow]No orders found[/yellow]")
        return
    console.print(table)


# =============================================================================
# Health Commands
# =============================================================================

@app.command()
def health(
    url: str = typer.Option("http://localhost:8000/api/health", help="Health endpoint"),
):
    """Check the running API."""
    import httpx

    table = Table(title="Service Health")
    table.add_column("Service", style="cyan")
    table.add_column("Status", style="green")
    table.add_column("Connections", justify="right")
    table.add_column("Response Time", style="yellow")

    try:
        start = time.time()
        response = httpx.get(url, timeout=5.0)
        elapsed = (time.time() - start) * 1000
        if response.status_code == 200:
            body = response.json()
            table.add_row("REST API", "✓ Healthy", str(body.get("connections", "?")), f"{elapsed:.0f}ms")
        else:
            table.add_row("REST API", f"✗ Status {response.status_code}", "-", f"{elapsed:.0f}ms")
    except httpx.HTTPError as e:
        table.add_row("REST API", f"✗ {type(e).__name__}", "-", "-")

    console.print(table)


@app.command()
def version():
    """Show version information."""
    table = Table(title="OrderFlow Version")
    table.add_column("Component", style="cyan")
    table.add_column("Version", style="green")

    table.add_row("API", "1.0.0")
    table.add_row("Python", sys.version.split()[0])

    console.print(table)


if __name__ == "__main__":
    app()
