from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand

from trackmyip.controllers import GeolocationController, SettingsController
from trackmyip.dialogs import ConsoleDialogService
from trackmyip.ipstack import IpStackClient
from trackmyip.repository import GeolocationRepository


class TrackMyIPCommand(BaseCommand):
    """
    Base for TrackMyIP management commands.

    Wires the controllers to the terminal and runs their coroutines from
    the synchronous handle() method.
    """

    def get_dialogs(self, assume_yes=False):
        return ConsoleDialogService(stdout=self.stdout, assume_yes=assume_yes)

    def get_controller(self, assume_yes=False):
        return GeolocationController(
            repository=GeolocationRepository(),
            client=IpStackClient(),
            dialogs=self.get_dialogs(assume_yes),
        )

    def get_settings_controller(self):
        return SettingsController(dialogs=self.get_dialogs())

    def run(self, coroutine_function, *args, **kwargs):
        return async_to_sync(coroutine_function)(*args, **kwargs)

    def format_record(self, record):
        return (
            f"{record.pk:>5}  {record.ip:<24} "
            f"{record.country or '-'} / {record.region or '-'} / {record.city or '-'}  "
            f"({record.latitude:.4f}, {record.longitude:.4f})"
        )
