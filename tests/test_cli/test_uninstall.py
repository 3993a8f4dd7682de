# tests/test_cli/test_uninstall.py
import asyncio

import pytest
from click.testing import CliRunner

from stocksync.cli import cli
from stocksync.core.config import clear_settings_cache
from stocksync.core.enums import CredentialKey
from stocksync.database import create_all, create_engine_and_sessionmaker
from stocksync.integrations.stores import SqlCredentialStore


@pytest.fixture
def database_url(tmp_path, monkeypatch):
    url = f"sqlite+aiosqlite:///{tmp_path / 'stocksync.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    clear_settings_cache()
    yield url
    clear_settings_cache()


async def _seed(url):
    engine, factory = create_engine_and_sessionmaker(url)
    await create_all(engine)
    store = SqlCredentialStore(factory)
    for key in CredentialKey:
        await store.set(key, f"value-{key.value}")
    await engine.dispose()


async def _snapshot(url):
    engine, factory = create_engine_and_sessionmaker(url)
    snapshot = await SqlCredentialStore(factory).snapshot()
    await engine.dispose()
    return snapshot


def test_uninstall_clears_all_credentials(database_url):
    asyncio.run(_seed(database_url))

    result = CliRunner().invoke(cli, ["uninstall", "--yes"])

    assert result.exit_code == 0, result.output
    assert "credentials removed" in result.output
    assert asyncio.run(_snapshot(database_url)).is_empty()


def test_uninstall_on_fresh_database(database_url):
    result = CliRunner().invoke(cli, ["uninstall", "--yes"])

    assert result.exit_code == 0, result.output
    assert asyncio.run(_snapshot(database_url)).is_empty()


def test_uninstall_asks_for_confirmation(database_url):
    asyncio.run(_seed(database_url))

    result = CliRunner().invoke(cli, ["uninstall"], input="n\n")

    assert result.exit_code != 0
    assert asyncio.run(_snapshot(database_url)).client_id == "value-client_id"


def test_create_tables(database_url):
    result = CliRunner().invoke(cli, ["create-tables"])

    assert result.exit_code == 0, result.output
    assert asyncio.run(_snapshot(database_url)).is_empty()
