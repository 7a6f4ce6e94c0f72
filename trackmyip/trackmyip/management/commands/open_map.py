from django.core.management.base import CommandError

from trackmyip.exceptions import NavigationError
from trackmyip.management.base import TrackMyIPCommand
from trackmyip.navigation import open_url


class Command(TrackMyIPCommand):
    """
    Show a stored geolocation on OpenStreetMap in the web browser.

    Usage:
        python manage.py open_map 3
    """
    help = 'Open the location of a stored geolocation in the web browser'

    def add_arguments(self, parser):
        """
        Define command-line arguments.
        """
        parser.add_argument(
            'id',
            type=int,
            help='Id of the geolocation to show'
        )

    def handle(self, *args, **options):
        """
        Main logic for the command.
        """
        record_id = options['id']
        controller = self.get_controller()
        self.run(controller.refresh)

        record = controller.select_by_id(record_id)
        if record is None:
            raise CommandError(f'Geolocation {record_id} does not exist')

        # OpenStreetMap centred on the stored coordinates
        url = record.as_map_url()
        try:
            open_url(url)
        except (ValueError, NavigationError) as e:
            raise CommandError(str(e))
        self.stdout.write(self.style.SUCCESS(f'Opened {url}'))
