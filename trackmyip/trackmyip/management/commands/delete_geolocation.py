from trackmyip.management.base import TrackMyIPCommand


class Command(TrackMyIPCommand):
    """
    Delete a stored geolocation.

    Usage:
        python manage.py delete_geolocation 3
        python manage.py delete_geolocation 3 --yes
    """
    help = 'Delete a stored geolocation'

    def add_arguments(self, parser):
        """
        Define command-line arguments.
        """
        parser.add_argument(
            'id',
            type=int,
            help='Id of the geolocation to delete'
        )
        parser.add_argument(
            '--yes',
            action='store_true',
            help='Do not ask for confirmation'
        )

    def handle(self, *args, **options):
        """
        Main logic for the command.
        """
        record_id = options['id']
        controller = self.get_controller(assume_yes=options['yes'])
        self.run(controller.refresh)

        # Deleting an unknown id is a no-op, not an error
        record = controller.select_by_id(record_id)
        if record is None:
            self.stdout.write(
                self.style.WARNING(f'Geolocation {record_id} does not exist')
            )
            return

        # Asks for confirmation unless --yes was given
        if self.run(controller.delete_selected):
            self.stdout.write(
                self.style.SUCCESS(f'Deleted geolocation {record_id}: {record}')
            )
        else:
            self.stdout.write(self.style.WARNING('Deletion cancelled'))
