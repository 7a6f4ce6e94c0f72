from django.apps import AppConfig


class TrackMyIPConfig(AppConfig):
    """
    Configuration for the TrackMyIP application.

    This app provides:
    - Geolocation lookups through the ipstack API
    - Persistence of lookup results
    - Controllers that front-ends bind to (state, can-execute, signals)
    - Management commands for the terminal
    """
    default_auto_field = 'django.db.models.AutoField'
    name = 'trackmyip'
    verbose_name = 'TrackMyIP'

    def ready(self):
        # Make sure the signal objects exist before any front-end connects
        from . import signals  # noqa
