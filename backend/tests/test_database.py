"""Tests for wms.core.database: schema creation, versioning, empty-store notice."""

import logging

from sqlalchemy import text

from wms.core.database import SCHEMA_VERSION, WMSDatabase
from wms.services import layout_service


async def test_init_records_schema_version(store):
    assert await store.schema_version() == SCHEMA_VERSION == 2


async def test_init_creates_tables(store):
    async with store.engine.connect() as conn:
        rows = await conn.execute(text("SELECT name FROM sqlite_master WHERE type='table'"))
        tables = {row[0] for row in rows}
    assert {"layouts", "groups", "locations"} <= tables


async def test_init_creates_foreign_key_indexes(store):
    async with store.engine.connect() as conn:
        rows = await conn.execute(text("SELECT name FROM sqlite_master WHERE type='index'"))
        indexes = {row[0] for row in rows}
    assert "ix_groups_layout_id" in indexes
    assert "ix_locations_group_id" in indexes
    assert "ix_locations_layout_id" in indexes
    assert "ix_layouts_created_at" in indexes


async def test_empty_store_logs_notice(database_url, caplog):
    store = WMSDatabase(database_url)
    with caplog.at_level(logging.INFO, logger="wms.core.database"):
        await store.init()
    await store.close()
    assert any("vacía" in record.message for record in caplog.records)


async def test_init_keeps_existing_data(database_url):
    store = WMSDatabase(database_url)
    await store.init()
    async with store.session() as db:
        await layout_service.create_layout(db, "Main", 2, 2)
    await store.close()

    reopened = WMSDatabase(database_url)
    await reopened.init()
    async with reopened.session() as db:
        layouts = await layout_service.get_layouts(db)
    await reopened.close()
    assert [layout.name for layout in layouts] == ["Main"]


async def test_reset_drops_data(store):
    async with store.session() as db:
        await layout_service.create_layout(db, "Main", 2, 2)
    await store.reset()
    async with store.session() as db:
        assert await layout_service.get_layouts(db) == []
    assert await store.schema_version() == SCHEMA_VERSION
