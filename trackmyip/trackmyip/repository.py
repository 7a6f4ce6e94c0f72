"""
Async CRUD façade over the GeolocationRecord table.

Every call runs its own query through Django's async ORM in autocommit
mode, so a change is on disk before the coroutine returns. Update and
delete of an id that does not exist are silent no-ops.
"""
import logging
from typing import List

from .models import GeolocationRecord

logger = logging.getLogger(__name__)


class GeolocationRepository:

    async def list_all(self) -> List[GeolocationRecord]:
        return [record async for record in GeolocationRecord.objects.all()]

    async def add(self, record: GeolocationRecord) -> GeolocationRecord:
        """Insert `record`; the store assigns record.id."""
        record.pk = None
        await record.asave(force_insert=True)
        logger.info(f"Added geolocation {record.pk}: {record}")
        return record

    async def update(self, record: GeolocationRecord) -> bool:
        """Overwrite every field but the id. Returns False when the id is unknown."""
        updated = await (
            GeolocationRecord.objects
            .filter(pk=record.pk)
            .aupdate(**record.field_values())
        )
        if not updated:
            logger.debug(f"Update skipped, geolocation {record.pk} does not exist")
            return False
        logger.info(f"Updated geolocation {record.pk}: {record}")
        return True

    async def delete(self, record_id: int) -> bool:
        """Remove the row with `record_id`. Returns False when the id is unknown."""
        deleted, _ = await GeolocationRecord.objects.filter(pk=record_id).adelete()
        if not deleted:
            logger.debug(f"Delete skipped, geolocation {record_id} does not exist")
            return False
        logger.info(f"Deleted geolocation {record_id}")
        return True
