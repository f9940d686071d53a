"""Property lookup used by the rental workflow.

Property listing, editing and search belong to the listing side of the
marketplace; the workflow only needs the owner and the current rent.
"""

from __future__ import annotations

from rentdesk.core.exceptions import NotFoundError
from rentdesk.models import Property
from rentdesk.services.base_service import BaseService


class PropertyService(BaseService):
    def get_property(self, property_id: int) -> Property:
        prop = self.db.get(Property, property_id)
        if prop is None:
            raise NotFoundError(f"Property {property_id} not found.")
        return prop
