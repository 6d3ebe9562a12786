"""Tests for wms.services.integrity_service.

Orphans are inserted through a second engine without foreign-key enforcement,
which is how rows written by older or interrupted clients look on disk.
"""

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine

from wms.services import group_service, integrity_service, layout_service, location_service


@pytest.fixture
async def raw_engine(database_url, store):
    engine = create_async_engine(database_url)
    yield engine
    await engine.dispose()


async def test_clean_store(db):
    layout_id = await layout_service.create_layout(db, "Main", 1, 1)
    await group_service.create_group_with_locations(db, layout_id, "A", column=1, rows=2, columns=2)

    report = await integrity_service.scan_integrity(db)
    assert report.ok
    assert report.orphan_groups == []


async def test_detects_mismatched_layout_id(db):
    first = await layout_service.create_layout(db, "First", 1, 1)
    second = await layout_service.create_layout(db, "Second", 1, 1)
    group_id = await group_service.create_group(db, "A", first, column=1, row=1, rows=1, columns=1)
    stray = await location_service.create_location(db, group_id, second, 0, 0, "A-1-1")

    report = await integrity_service.scan_integrity(db)
    assert not report.ok
    assert report.mismatched_locations == [stray]


async def test_repair_realigns_layout_id(db):
    first = await layout_service.create_layout(db, "First", 1, 1)
    second = await layout_service.create_layout(db, "Second", 1, 1)
    group_id = await group_service.create_group(db, "A", first, column=1, row=1, rows=1, columns=1)
    stray = await location_service.create_location(db, group_id, second, 0, 0, "A-1-1")

    report = await integrity_service.repair_integrity(db)
    assert report.ok
    assert (await location_service.get_location(db, stray)).layout_id == first


async def test_detects_and_repairs_orphans(db, raw_engine):
    layout_id = await layout_service.create_layout(db, "Main", 1, 1)
    async with raw_engine.begin() as conn:
        await conn.execute(text(
            "INSERT INTO groups (id, layout_id, name, \"column\", \"row\", rows, columns, created_at) "
            "VALUES (50, 999, 'ghost', 1, 1, 1, 1, '2024-01-01 00:00:00.000000')"
        ))
        await conn.execute(text(
            "INSERT INTO locations (id, group_id, layout_id, \"row\", \"column\", address, is_occupied) "
            "VALUES (60, 50, 999, 0, 0, 'ghost-1-1', 0)"
        ))
        await conn.execute(text(
            "INSERT INTO locations (id, group_id, layout_id, \"row\", \"column\", address, is_occupied) "
            f"VALUES (61, 777, {layout_id}, 0, 0, 'lost-1-1', 0)"
        ))

    report = await integrity_service.scan_integrity(db)
    assert report.orphan_groups == [50]
    assert report.orphan_locations == [60, 61]

    repaired = await integrity_service.repair_integrity(db)
    assert repaired.ok
    assert await location_service.get_location(db, 60) is None
    assert await location_service.get_location(db, 61) is None
    assert await group_service.get_group(db, 50) is None


async def test_detects_and_repairs_grid_violations(db):
    layout_id = await layout_service.create_layout(db, "Main", 1, 1)
    group = await group_service.create_group_with_locations(db, layout_id, "A", column=1, rows=2, columns=2)
    outside = await location_service.create_location(db, group.id, layout_id, 9, 9, "A-10-10")
    repeated = await location_service.create_location(db, group.id, layout_id, 0, 0, "A-1-1")

    report = await integrity_service.scan_integrity(db)
    assert report.out_of_range_locations == [outside]
    assert report.duplicate_locations == [repeated]
    assert not report.ok

    repaired = await integrity_service.repair_integrity(db)
    assert repaired.ok
    locations = await location_service.get_locations_by_group_id(db, group.id)
    assert len(locations) == 4
    assert {(loc.row, loc.column) for loc in locations} == {(0, 0), (0, 1), (1, 0), (1, 1)}
