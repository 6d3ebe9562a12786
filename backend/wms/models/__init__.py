from wms.models.layout import Layout
from wms.models.group import Group
from wms.models.location import Location
