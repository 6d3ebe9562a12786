from pydantic import BaseModel, computed_field
from typing import List

class IntegrityReport(BaseModel):
    orphan_groups: List[int] = []               # grupos cuyo layout no existe
    orphan_locations: List[int] = []            # ubicaciones cuyo grupo o layout no existe
    mismatched_locations: List[int] = []        # layout_id distinto al de su grupo
    out_of_range_locations: List[int] = []      # fila/columna fuera de la grilla del grupo
    duplicate_locations: List[int] = []         # celdas repetidas; se conserva la de menor ID

    @computed_field
    @property
    def ok(self) -> bool:
        return not (
            self.orphan_groups
            or self.orphan_locations
            or self.mismatched_locations
            or self.out_of_range_locations
            or self.duplicate_locations
        )
