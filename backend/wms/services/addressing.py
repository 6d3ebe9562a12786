"""
Generación de direcciones legibles para las ubicaciones de un grupo.
"""
from typing import List, Union
from wms.schemas.group import AddressFormat


def row_letter(row: int) -> str:
    # 0 -> "A", 1 -> "B", ...; pasado "Z" sigue la tabla de caracteres sin control
    return chr(65 + row)


def address_for(group_name: str, row: int, column: int, address_format: Union[AddressFormat, str] = AddressFormat.ROW_COL) -> str:
    """
    Construye la dirección de la ubicación (row, column), ambos 0-based.

    ROW-COL:       {grupo}-{fila+1}-{columna+1}
    LETTER-NUMBER: {grupo}-{letra(fila)}-{columna+1}
    Cualquier otro formato cae en ROW-COL.
    """
    if address_format == AddressFormat.LETTER_NUMBER:
        return f"{group_name}-{row_letter(row)}-{column + 1}"
    return f"{group_name}-{row + 1}-{column + 1}"


def preview_addresses(group_name: str, rows: int, columns: int, address_format: Union[AddressFormat, str] = AddressFormat.ROW_COL) -> List[List[str]]:
    return [
        [address_for(group_name, row, column, address_format) for column in range(columns)]
        for row in range(rows)
    ]
