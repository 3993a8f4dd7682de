# stocksync/cli/uninstall.py
import asyncio
import click

from stocksync.core.config import get_settings
from stocksync.database import create_all, create_engine_and_sessionmaker
from stocksync.integrations.stores import SqlCredentialStore


async def wipe_credentials(database_url: str) -> None:
    engine, session_factory = create_engine_and_sessionmaker(database_url)
    try:
        await create_all(engine)
        await SqlCredentialStore(session_factory).clear()
    finally:
        await engine.dispose()


@click.command()
@click.option('--yes', is_flag=True, help='Do not ask for confirmation')
def uninstall(yes):
    """Delete every stored marketplace credential (app id, secret, tokens, account id)"""
    if not yes:
        click.confirm("This disconnects the marketplace and forgets the app credentials. Continue?", abort=True)

    asyncio.run(wipe_credentials(get_settings().async_database_url))
    click.echo("Marketplace credentials removed.")


if __name__ == "__main__":
    uninstall()
