import json

from trackmyip.management.base import TrackMyIPCommand
from trackmyip.serializers import GeolocationRecordSerializer


class Command(TrackMyIPCommand):
    """
    List stored geolocations.

    Usage:
        python manage.py list_geolocations
        python manage.py list_geolocations --json
    """
    help = 'List stored geolocations'

    def add_arguments(self, parser):
        """
        Define command-line arguments.
        """
        parser.add_argument(
            '--json',
            action='store_true',
            help='Print the records as JSON'
        )

    def handle(self, *args, **options):
        """
        Print every stored geolocation in store order.
        """
        controller = self.get_controller()
        self.run(controller.refresh)

        # Machine-readable output goes through the same serializer the edits use
        if options['json']:
            data = GeolocationRecordSerializer(controller.records, many=True).data
            self.stdout.write(json.dumps(data, indent=2))
            return

        if not controller.records:
            self.stdout.write(self.style.WARNING('No geolocations stored'))
            return

        for record in controller.records:
            self.stdout.write(self.format_record(record))
