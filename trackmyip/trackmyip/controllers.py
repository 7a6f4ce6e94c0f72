"""
Controllers that front-ends bind to.

GeolocationController owns the list of records shown to the user and runs
the search / add / update / delete workflow. At most one operation runs at
a time: while one is in flight the controller is LOADING and every
can_* predicate reports False. The state always returns to IDLE, whether
the operation succeeded, was rejected or raised.

SettingsController loads, saves and checks the ipstack API key.

Both take their collaborators in the constructor and report changes through
the signals in trackmyip.signals.
"""
import enum
import logging
from contextlib import contextmanager
from typing import List, Optional

from asgiref.sync import sync_to_async

from . import signals
from .exceptions import DuplicateRecord, GeolocationLookupError, NetworkError
from .ipstack import ApiKeyStatus, IpStackClient
from .models import GeolocationRecord
from .navigation import open_url
from .settings_store import ApiKeyStore

logger = logging.getLogger(__name__)

IPSTACK_WEBSITE = 'https://ipstack.com/'


class ControllerState(enum.Enum):
    IDLE = 'idle'
    LOADING = 'loading'


def lookup_error_message(error):
    """Text shown to the user for a failed lookup."""
    if isinstance(error, NetworkError):
        return NetworkError.FRIENDLY_MESSAGE
    return str(error)


class GeolocationController:
    """
    The geolocation workflow.

    repository: GeolocationRepository (or anything with the same coroutines)
    client: IpStackClient (or anything with fetch(query))
    dialogs: DialogService used for notices and the delete confirmation
    """
    LOOKUP_TITLE = "Reading geolocation"
    ADD_TITLE = "Adding geolocation"
    DELETE_TITLE = "Deleting geolocation"
    DELETE_QUESTION = "Are you sure you want to delete the selected geolocation?"

    def __init__(self, repository, client, dialogs):
        self.repository = repository
        self.client = client
        self.dialogs = dialogs
        self.records: List[GeolocationRecord] = []
        self.selected: Optional[GeolocationRecord] = None
        self.state = ControllerState.IDLE

    # ---- state -----------------------------------------------------------

    @property
    def busy(self) -> bool:
        return self.state is ControllerState.LOADING

    @property
    def can_refresh(self) -> bool:
        return not self.busy

    def can_search(self, query: Optional[str]) -> bool:
        return not self.busy and bool(query and query.strip())

    @property
    def can_update(self) -> bool:
        return self.selected is not None and not self.busy

    @property
    def can_delete(self) -> bool:
        return self.selected is not None and not self.busy

    def _set_state(self, state):
        self.state = state
        signals.state_changed.send(sender=self, state=state)

    @contextmanager
    def _busy(self):
        # No await between the check and the set, so this cannot interleave
        # with another coroutine on the same event loop.
        if self.busy:
            raise RuntimeError("Another geolocation operation is in progress")
        self._set_state(ControllerState.LOADING)
        try:
            yield
        finally:
            self._set_state(ControllerState.IDLE)

    def _find(self, record_id) -> Optional[GeolocationRecord]:
        for record in self.records:
            if record.pk == record_id:
                return record
        return None

    def _notify_selection(self):
        signals.selection_changed.send(
            sender=self,
            selected=self.selected,
            can_update=self.can_update,
            can_delete=self.can_delete,
        )

    # ---- selection -------------------------------------------------------

    def select(self, record: Optional[GeolocationRecord]):
        """Select `record` (or clear the selection with None)."""
        self.selected = record
        self._notify_selection()

    def select_by_id(self, record_id) -> Optional[GeolocationRecord]:
        """Select the cached record with `record_id`; clears the selection if absent."""
        record = self._find(record_id)
        self.select(record)
        return record

    # ---- commands --------------------------------------------------------

    async def refresh(self) -> bool:
        """Reload every record from the store, keeping store order."""
        if not self.can_refresh:
            logger.debug("Refresh ignored, an operation is in progress")
            return False
        with self._busy():
            records = await self.repository.list_all()
            self.records.clear()
            self.records.extend(records)
            signals.records_reset.send(sender=self, records=self.records)
        logger.info(f"Loaded {len(self.records)} geolocations")

        if self.selected is not None:
            # Point the selection at the fresh instance, or drop it if the row is gone
            self.select(self._find(self.selected.pk))
        return True

    def check_duplicate(self, record: GeolocationRecord):
        """Raise DuplicateRecord if the list already holds `record.ip` (case-sensitive)."""
        if any(existing.ip == record.ip for existing in self.records):
            raise DuplicateRecord(record.ip)

    async def _store_new(self, record):
        self.check_duplicate(record)
        stored = await self.repository.add(record)
        self.records.append(stored)
        signals.record_added.send(sender=self, record=stored)
        return stored

    async def add_record(self, record: GeolocationRecord) -> Optional[GeolocationRecord]:
        """
        Persist `record` and append it to the list.

        Raises DuplicateRecord, without touching the store, when a record
        with the same IP is already listed. Returns None if busy.
        """
        if self.busy:
            logger.debug("Add ignored, an operation is in progress")
            return None
        with self._busy():
            return await self._store_new(record)

    async def search_and_add(self, query: str) -> Optional[GeolocationRecord]:
        """
        Look up `query` and add the result.

        Lookup failures and duplicates are reported through the dialog
        service and return None; nothing is stored in that case.
        """
        if not self.can_search(query):
            logger.debug("Search ignored, query is blank or an operation is in progress")
            return None
        query = query.strip()

        with self._busy():
            try:
                record = await sync_to_async(self.client.fetch)(query)
            except GeolocationLookupError as e:
                logger.warning(f"Lookup of {query} failed: {e}")
                await self.dialogs.show_message(self.LOOKUP_TITLE, lookup_error_message(e))
                return None

            try:
                return await self._store_new(record)
            except DuplicateRecord as e:
                logger.warning(f"Rejected duplicate geolocation for {e.ip}")
                await self.dialogs.show_message(self.ADD_TITLE, e.message)
                return None

    async def update_selected(self) -> bool:
        """
        Save the selected record and copy its fields onto the listed record
        with the same id, in place, so holders of that object see the change.
        """
        if not self.can_update:
            logger.debug("Update ignored, nothing selected or an operation is in progress")
            return False
        selected = self.selected
        with self._busy():
            stored = await self.repository.update(selected)
            cached = self._find(selected.pk)
            if cached is not None:
                if cached is not selected:
                    cached.copy_from(selected)
                signals.record_updated.send(sender=self, record=cached)
        return stored

    async def delete_selected(self) -> bool:
        """Ask for confirmation, then delete the selected record."""
        if not self.can_delete:
            logger.debug("Delete ignored, nothing selected or an operation is in progress")
            return False
        # The confirmed record, even if the selection moves while the prompt is open
        record_id = self.selected.pk
        confirmed = await self.dialogs.confirm(self.DELETE_TITLE, self.DELETE_QUESTION)
        if not confirmed:
            logger.info("Delete cancelled by user")
            return False
        if self.busy:
            logger.debug("Delete ignored, an operation started during the prompt")
            return False

        with self._busy():
            await self.repository.delete(record_id)
            for index, record in enumerate(self.records):
                if record.pk == record_id:
                    del self.records[index]
                    signals.record_removed.send(sender=self, record=record)
                    break
        if self.selected is not None and self.selected.pk == record_id:
            self.select(None)
        return True


class SettingsController:
    """
    Edit and verify the ipstack API key.

    `api_key` holds the value being edited; load() fills it from the store
    and save() writes it back.
    """
    SAVE_TITLE = "Saving settings"
    CHECK_TITLE = "API key validation"

    STATUS_MESSAGES = {
        ApiKeyStatus.VALID: "The API key is valid.",
        ApiKeyStatus.INVALID: "The API key is invalid.",
        ApiKeyStatus.UNREACHABLE: "Could not reach the geolocation API to check the key.",
    }

    def __init__(self, dialogs, store=None, client_factory=IpStackClient):
        self.dialogs = dialogs
        self.store = store or ApiKeyStore()
        self.client_factory = client_factory
        self.api_key = ''

    @property
    def can_save(self) -> bool:
        return bool(self.api_key and self.api_key.strip())

    can_check = can_save

    async def load(self) -> str:
        self.api_key = await sync_to_async(self.store.get_api_key)()
        return self.api_key

    async def save(self) -> bool:
        if not self.can_save:
            return False
        await sync_to_async(self.store.set_api_key)(self.api_key)
        signals.api_key_changed.send(sender=self, api_key=self.api_key.strip(), status=None)
        await self.dialogs.show_message(self.SAVE_TITLE, "Settings saved.")
        return True

    async def clear(self) -> str:
        """Drop the stored key; the configured default (if any) applies again."""
        await sync_to_async(self.store.set_api_key)('')
        await self.load()
        signals.api_key_changed.send(sender=self, api_key=self.api_key, status=None)
        return self.api_key

    async def check_api_key(self) -> Optional[ApiKeyStatus]:
        """Probe the API with the edited key and tell the user the outcome."""
        if not self.can_check:
            return None
        client = self.client_factory(api_key=self.api_key.strip())
        status = await sync_to_async(client.check_api_key)()
        signals.api_key_changed.send(sender=self, api_key=self.api_key.strip(), status=status)
        await self.dialogs.show_message(self.CHECK_TITLE, self.STATUS_MESSAGES[status])
        return status

    def open_website(self, url=IPSTACK_WEBSITE):
        """Open the ipstack site, where keys are issued."""
        open_url(url)
