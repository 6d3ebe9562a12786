import logging
from sqlalchemy import and_, delete, or_, select
from sqlalchemy.orm import aliased
from sqlalchemy.ext.asyncio import AsyncSession

from wms.models.layout import Layout
from wms.models.group import Group
from wms.models.location import Location
from wms.schemas.integrity import IntegrityReport

logger = logging.getLogger(__name__)

async def scan_integrity(db: AsyncSession) -> IntegrityReport:
    """
    Busca registros huérfanos, ubicaciones cuyo layout_id redundante no coincide
    con el layout de su grupo y ubicaciones que rompen la grilla del grupo
    (fuera de rango o celda repetida).
    """
    orphan_groups = await db.execute(
        select(Group.id)
        .outerjoin(Layout, Group.layout_id == Layout.id)
        .where(Layout.id.is_(None))
        .order_by(Group.id)
    )
    orphan_locations = await db.execute(
        select(Location.id)
        .outerjoin(Group, Location.group_id == Group.id)
        .outerjoin(Layout, Location.layout_id == Layout.id)
        .where((Group.id.is_(None)) | (Layout.id.is_(None)))
        .order_by(Location.id)
    )
    mismatched = await db.execute(
        select(Location.id)
        .join(Group, Location.group_id == Group.id)
        .where(Location.layout_id != Group.layout_id)
        .order_by(Location.id)
    )
    out_of_range = await db.execute(
        select(Location.id)
        .join(Group, Location.group_id == Group.id)
        .where(or_(
            Location.row < 0,
            Location.row >= Group.rows,
            Location.column < 0,
            Location.column >= Group.columns,
        ))
        .order_by(Location.id)
    )
    earlier = aliased(Location)
    duplicates = await db.execute(
        select(Location.id)
        .where(
            select(earlier.id)
            .where(and_(
                earlier.group_id == Location.group_id,
                earlier.row == Location.row,
                earlier.column == Location.column,
                earlier.id < Location.id,
            ))
            .exists()
        )
        .order_by(Location.id)
    )
    return IntegrityReport(
        orphan_groups=list(orphan_groups.scalars().all()),
        orphan_locations=list(orphan_locations.scalars().all()),
        mismatched_locations=list(mismatched.scalars().all()),
        out_of_range_locations=list(out_of_range.scalars().all()),
        duplicate_locations=list(duplicates.scalars().all()),
    )

async def repair_integrity(db: AsyncSession) -> IntegrityReport:
    """
    Elimina huérfanos (ubicaciones antes que grupos) y ubicaciones fuera de la grilla
    o repetidas, y corrige el layout_id de las ubicaciones desalineadas tomando el de su grupo.
    Devuelve el resultado de volver a escanear.
    """
    report = await scan_integrity(db)
    if report.ok:
        return report

    try:
        if report.orphan_groups:
            await db.execute(delete(Location).where(Location.group_id.in_(report.orphan_groups)))
        if report.orphan_locations:
            await db.execute(delete(Location).where(Location.id.in_(report.orphan_locations)))
        if report.orphan_groups:
            await db.execute(delete(Group).where(Group.id.in_(report.orphan_groups)))
        misplaced = report.out_of_range_locations + report.duplicate_locations
        if misplaced:
            await db.execute(delete(Location).where(Location.id.in_(misplaced)))
        if report.mismatched_locations:
            result = await db.execute(
                select(Location).where(Location.id.in_(report.mismatched_locations))
            )
            for db_location in result.scalars().all():
                group_layout = await db.execute(select(Group.layout_id).where(Group.id == db_location.group_id))
                db_location.layout_id = group_layout.scalar_one()
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.warning(
        f"⚠️ Integridad reparada: {len(report.orphan_groups)} grupos huérfanos, "
        f"{len(report.orphan_locations)} ubicaciones huérfanas, "
        f"{len(report.mismatched_locations)} ubicaciones desalineadas, "
        f"{len(report.out_of_range_locations) + len(report.duplicate_locations)} ubicaciones fuera de la grilla"
    )
    return await scan_integrity(db)
