from django.core.management.base import CommandError

from trackmyip.management.base import TrackMyIPCommand
from trackmyip.serializers import GeolocationRecordSerializer


class Command(TrackMyIPCommand):
    """
    Edit a stored geolocation.

    Usage:
        python manage.py update_geolocation 3 --city "Los Angeles"
        python manage.py update_geolocation 3 --latitude 34.05 --longitude -118.24
    """
    help = 'Update fields of a stored geolocation'

    FIELD_OPTIONS = ('ip', 'country', 'region', 'city', 'latitude', 'longitude')

    def add_arguments(self, parser):
        """
        Define command-line arguments.
        """
        parser.add_argument(
            'id',
            type=int,
            help='Id of the geolocation to update'
        )
        parser.add_argument('--ip', type=str, help='New IP address or hostname')
        parser.add_argument('--country', type=str, help='New country name')
        parser.add_argument('--region', type=str, help='New region name')
        parser.add_argument('--city', type=str, help='New city name')
        parser.add_argument('--latitude', type=float, help='New latitude')
        parser.add_argument('--longitude', type=float, help='New longitude')

    def handle(self, *args, **options):
        """
        Main logic for the command.
        """
        record_id = options['id']

        # Only the options actually passed are edits
        edits = {
            field: options[field]
            for field in self.FIELD_OPTIONS
            if options.get(field) is not None
        }
        if not edits:
            raise CommandError('Nothing to update, pass at least one field option')

        # Load the list and select the record to edit
        controller = self.get_controller()
        self.run(controller.refresh)
        record = controller.select_by_id(record_id)
        if record is None:
            raise CommandError(f'Geolocation {record_id} does not exist')

        # Validate the edits (coordinate ranges, non-blank IP)
        serializer = GeolocationRecordSerializer(record, data=edits, partial=True)
        if not serializer.is_valid():
            raise CommandError(f'Invalid values: {serializer.errors}')

        # Save an edited copy; the listed record is updated in place
        controller.select(serializer.apply_to(record))
        self.run(controller.update_selected)

        self.stdout.write(
            self.style.SUCCESS(f'Updated geolocation:\n{self.format_record(record)}')
        )
