from django.core.management.base import CommandError

from trackmyip.management.base import TrackMyIPCommand


class Command(TrackMyIPCommand):
    """
    Look up IP addresses or hostnames and store the results.

    Usage:
        python manage.py lookup_ip 134.201.250.155
        python manage.py lookup_ip www.example.com 8.8.8.8
    """
    help = 'Look up geolocations and add them to the database'

    def add_arguments(self, parser):
        """
        Define command-line arguments.
        """
        parser.add_argument(
            'queries',
            nargs='+',
            type=str,
            help='IP addresses or hostnames to look up'
        )

    def handle(self, *args, **options):
        """
        Main logic for the command.

        Failed lookups and duplicates are reported as they happen; the
        command only fails when none of the queries produced a record.
        """
        controller = self.get_controller()
        # Load the stored records first so duplicates are detected
        self.run(controller.refresh)

        added = 0
        for query in options['queries']:
            if not controller.can_search(query):
                self.stdout.write(self.style.WARNING(f'Skipping empty query {query!r}'))
                continue
            # Errors are shown through the dialog service and give None
            record = self.run(controller.search_and_add, query)
            if record is not None:
                added += 1
                self.stdout.write(
                    self.style.SUCCESS(f'Added geolocation:\n{self.format_record(record)}')
                )

        if added == 0:
            raise CommandError('No geolocation was added')
