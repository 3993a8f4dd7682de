# stocksync/cli/create_tables.py
import asyncio
import click

from stocksync.core.config import get_settings
from stocksync.database import create_all, create_engine_and_sessionmaker


@click.command("create-tables")
def create_tables():
    """Create all database tables directly using SQLAlchemy"""
    settings = get_settings()

    async def _create_tables():
        engine, _ = create_engine_and_sessionmaker(settings.async_database_url)
        try:
            await create_all(engine)
        finally:
            await engine.dispose()

    asyncio.run(_create_tables())
    click.echo("All tables created successfully!")


if __name__ == "__main__":
    create_tables()
