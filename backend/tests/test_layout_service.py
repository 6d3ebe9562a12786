"""Tests for wms.services.layout_service."""

import pytest
from sqlalchemy.exc import SQLAlchemyError

from wms.schemas.layout import Layout as LayoutSchema
from wms.services import group_service, layout_service, location_service


class TestLayoutCRUD:

    @pytest.mark.parametrize("rows, columns", [(1, 1), (3, 5), (12, 1)])
    async def test_create_and_read_back(self, db, rows, columns):
        layout_id = await layout_service.create_layout(db, "Warehouse", rows, columns)

        loaded = await layout_service.get_layout_by_id(db, layout_id)
        assert loaded.name == "Warehouse"
        assert loaded.rows == rows
        assert loaded.columns == columns
        assert loaded.created_at is not None

    async def test_missing_layout_is_none(self, db):
        assert await layout_service.get_layout_by_id(db, 999) is None

    async def test_layouts_most_recent_first(self, db):
        first = await layout_service.create_layout(db, "First", 1, 1)
        second = await layout_service.create_layout(db, "Second", 1, 1)
        third = await layout_service.create_layout(db, "Third", 1, 1)

        layouts = await layout_service.get_layouts(db)
        assert [layout.id for layout in layouts] == [third, second, first]

    async def test_ids_are_unique(self, db):
        ids = {await layout_service.create_layout(db, f"L{i}", 1, 1) for i in range(5)}
        assert len(ids) == 5


class TestDeleteLayout:

    async def test_cascades_to_groups_and_locations(self, db):
        layout_id = await layout_service.create_layout(db, "Main", 2, 3)
        group_a = await group_service.create_group_with_locations(db, layout_id, "A", column=1, rows=2, columns=2)
        group_b = await group_service.create_group_with_locations(db, layout_id, "B", column=2, rows=1, columns=3)

        assert await layout_service.delete_layout(db, layout_id) is True

        assert await layout_service.get_layout_by_id(db, layout_id) is None
        assert await group_service.get_groups_by_layout_id(db, layout_id) == []
        assert await location_service.get_locations_by_layout_id(db, layout_id) == []
        assert await location_service.get_locations_by_group_id(db, group_a.id) == []
        assert await location_service.get_locations_by_group_id(db, group_b.id) == []

    async def test_other_layouts_untouched(self, db):
        doomed = await layout_service.create_layout(db, "Doomed", 1, 1)
        kept = await layout_service.create_layout(db, "Kept", 1, 1)
        await group_service.create_group_with_locations(db, doomed, "A", column=1, rows=2, columns=2)
        kept_group = await group_service.create_group_with_locations(db, kept, "K", column=1, rows=2, columns=2)

        await layout_service.delete_layout(db, doomed)

        assert [g.id for g in await group_service.get_groups_by_layout_id(db, kept)] == [kept_group.id]
        assert len(await location_service.get_locations_by_layout_id(db, kept)) == 4

    async def test_missing_layout(self, db):
        assert await layout_service.delete_layout(db, 42) is False


class TestLayoutGrid:

    async def test_unknown_layout(self, db):
        assert await layout_service.get_layout_grid(db, 7) is None

    async def test_cells_cover_layout(self, db):
        layout_id = await layout_service.create_layout(db, "Main", 2, 3)

        grid = await layout_service.get_layout_grid(db, layout_id)
        assert len(grid.cells) == 2
        assert all(len(row) == 3 for row in grid.cells)
        assert grid.cells[1][2].row == 2
        assert grid.cells[1][2].column == 3
        assert all(cell.group is None for row in grid.cells for cell in row)
        assert grid.total == 0

    async def test_groups_placed_by_row_and_column(self, db):
        layout_id = await layout_service.create_layout(db, "Main", 2, 3)
        group = await group_service.create_group_with_locations(db, layout_id, "A", column=3, row=2, rows=2, columns=2)

        grid = await layout_service.get_layout_grid(db, layout_id)
        cell = grid.cells[1][2]
        assert cell.group.id == group.id
        assert [(loc.row, loc.column) for loc in cell.group.locations] == [(0, 0), (0, 1), (1, 0), (1, 1)]
        assert grid.unplaced_groups == []

    async def test_occupancy_counters(self, db):
        layout_id = await layout_service.create_layout(db, "Main", 1, 2)
        group = await group_service.create_group_with_locations(db, layout_id, "A", column=1, rows=2, columns=2)
        locations = await location_service.get_locations_by_group_id(db, group.id)
        await location_service.toggle_location_occupancy(db, locations[0].id)

        grid = await layout_service.get_layout_grid(db, layout_id)
        assert grid.occupied == 1
        assert grid.total == 4
        assert grid.cells[0][0].group.occupied == 1
        assert grid.empty == 3
        assert grid.occupancy_rate == 25
        assert grid.cells[0][0].group.empty == 3

    async def test_second_group_in_same_cell_is_unplaced(self, db):
        layout_id = await layout_service.create_layout(db, "Main", 1, 1)
        await group_service.create_group_with_locations(db, layout_id, "A", column=1, rows=1, columns=1)
        second = await group_service.create_group_with_locations(db, layout_id, "B", column=1, rows=1, columns=1)

        grid = await layout_service.get_layout_grid(db, layout_id)
        assert [g.id for g in grid.unplaced_groups] == [second.id]
        assert grid.total == 2


class TestDeleteLayoutIsAtomic:

    async def test_failure_midway_keeps_everything(self, db, monkeypatch):
        layout_id = await layout_service.create_layout(db, "Main", 1, 1)
        group = await group_service.create_group_with_locations(db, layout_id, "A", column=1, rows=2, columns=2)

        real_execute = db.execute
        statements = []

        async def execute_failing_on_group_delete(statement, *args, **kwargs):
            statements.append(statement)
            # 1: lookup, 2-3: location deletes, 4: group delete
            if len(statements) == 4:
                raise SQLAlchemyError("disk I/O error")
            return await real_execute(statement, *args, **kwargs)

        monkeypatch.setattr(db, "execute", execute_failing_on_group_delete)
        with pytest.raises(SQLAlchemyError):
            await layout_service.delete_layout(db, layout_id)
        monkeypatch.undo()

        assert await layout_service.get_layout_by_id(db, layout_id) is not None
        assert [g.id for g in await group_service.get_groups_by_layout_id(db, layout_id)] == [group.id]
        assert len(await location_service.get_locations_by_group_id(db, group.id)) == 4


class TestUnvalidatedRows:

    async def test_grid_and_listing_tolerate_unvalidated_rows(self, db):
        # La capa de acceso a datos no valida: lo guardado igual debe poder mostrarse
        layout_id = await layout_service.create_layout(db, "", 1, 1)
        group_id = await group_service.create_group(db, "", layout_id, column=0, row=1, rows=1, columns=1)

        layouts = await layout_service.get_layouts(db)
        assert [LayoutSchema.model_validate(layout).name for layout in layouts] == [""]

        grid = await layout_service.get_layout_grid(db, layout_id)
        assert [g.id for g in grid.unplaced_groups] == [group_id]
        assert grid.unplaced_groups[0].column == 0
