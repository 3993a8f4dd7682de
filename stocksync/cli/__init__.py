import click

from .create_tables import create_tables
from .uninstall import uninstall


@click.group()
def cli():
    """Marketplace stock sync maintenance commands"""
    pass


cli.add_command(create_tables)
cli.add_command(uninstall)
