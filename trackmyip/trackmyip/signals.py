"""
Change notifications sent by the controllers.

Front-ends connect receivers to these instead of polling controller state.
The sender is always the controller instance, so one front-end can follow
several controllers independently.

    from trackmyip import signals

    def on_added(sender, record, **kwargs):
        table.append_row(record)

    signals.record_added.connect(on_added, sender=controller)
"""
from django.dispatch import Signal

# kwargs: state (ControllerState)
state_changed = Signal()

# kwargs: records (list of GeolocationRecord, the controller's own list)
records_reset = Signal()

# kwargs: record
record_added = Signal()

# kwargs: record (the cached instance, updated in place)
record_updated = Signal()

# kwargs: record
record_removed = Signal()

# kwargs: selected, can_update, can_delete
selection_changed = Signal()

# kwargs: api_key, status (ApiKeyStatus or None after save)
api_key_changed = Signal()
