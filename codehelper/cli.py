"""Admin CLI: database setup, user data removal, development tokens."""
import asyncio
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from codehelper.core.config import get_settings
from codehelper.core.security import create_access_token
from codehelper.db.base import Base
from codehelper.db.session import create_engine, create_sessionmaker
from codehelper.models import (
    Assessment,
    ChatSession,
    LanguageProgress,
    Message,
    Stats,
    User,
    UserTaskProgress,
)
from codehelper.services.seeding import seed_content

app = typer.Typer(help="Programming Helper AI admin CLI")
console = Console()

# deletion order: children before the user row
USER_DATA = [
    ("Messages", Message),
    ("Chat sessions", ChatSession),
    ("Assessments", Assessment),
    ("Language progress", LanguageProgress),
    ("Task progress", UserTaskProgress),
    ("Stats", Stats),
]


async def init_db(database_url: str) -> None:
    engine = create_engine(database_url)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        async with create_sessionmaker(engine)() as db:
            await seed_content(db)
    finally:
        await engine.dispose()


async def count_user_data(db: AsyncSession, user_id: str) -> dict[str, int]:
    counts = {}
    for label, model in USER_DATA:
        result = await db.execute(select(func.count()).select_from(model).where(model.user_id == user_id))
        counts[label] = result.scalar_one()
    return counts


async def delete_user_data(db: AsyncSession, user_id: str) -> None:
    """Remove the user and everything they own in one transaction."""
    async with db.begin():
        for _, model in USER_DATA:
            await db.execute(delete(model).where(model.user_id == user_id))
        await db.execute(delete(User).where(User.id == user_id))


async def _delete_user(database_url: str, user_id: str, yes: bool) -> int:
    engine = create_engine(database_url)
    try:
        async with create_sessionmaker(engine)() as db:
            user = await db.get(User, user_id)
            if user is None:
                console.print(f"[red]✗[/red] User {user_id} not found")
                return 1

            table = Table(title=f"User {user_id} ({user.role})")
            table.add_column("Data")
            table.add_column("Rows", justify="right")
            for label, count in (await count_user_data(db, user_id)).items():
                table.add_row(label, str(count))
            console.print(table)

            if user.is_admin:
                console.print("[red]✗[/red] Admin accounts cannot be deleted")
                return 1
            if not yes and not typer.confirm("Delete all of this user's data?"):
                console.print("[yellow]Cancelled.[/yellow]")
                return 0

            await db.rollback()
            await delete_user_data(db, user_id)
            console.print(f"[green]✓[/green] Deleted all data for {user_id}")
            return 0
    finally:
        await engine.dispose()


@app.command("init-db")
def init_db_command():
    """Create tables and seed questions and tasks."""
    settings = get_settings()
    asyncio.run(init_db(settings.database_url))
    console.print("[green]✓[/green] Database initialized")


@app.command("delete-user")
def delete_user_command(
    user_id: str,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
):
    """Hard-delete a non-admin user and all their data."""
    settings = get_settings()
    raise typer.Exit(asyncio.run(_delete_user(settings.database_url, user_id, yes)))


@app.command("issue-token")
def issue_token_command(
    user_id: str,
    email: Optional[str] = typer.Option(None, help="Email claim"),
    minutes: Optional[int] = typer.Option(None, help="Lifetime in minutes"),
):
    """Print a signed identity token for local development."""
    settings = get_settings()
    extra = {"email": email} if email else None
    typer.echo(create_access_token(settings, user_id, extra=extra, expires_minutes=minutes))


if __name__ == "__main__":
    app()
