from django.core.management.base import CommandError

from trackmyip.exceptions import NavigationError
from trackmyip.ipstack import ApiKeyStatus
from trackmyip.management.base import TrackMyIPCommand


def mask(key):
    if len(key) <= 4:
        return '*' * len(key)
    return '*' * (len(key) - 4) + key[-4:]


class Command(TrackMyIPCommand):
    """
    Show, change or verify the ipstack API key.

    Usage:
        python manage.py api_key
        python manage.py api_key --set 0123456789abcdef --check
        python manage.py api_key --clear
        python manage.py api_key --website
    """
    help = 'Manage the ipstack API key'

    def add_arguments(self, parser):
        """
        Define command-line arguments.
        """
        group = parser.add_mutually_exclusive_group()
        group.add_argument(
            '--set',
            dest='new_key',
            type=str,
            help='Store a new API key'
        )
        group.add_argument(
            '--clear',
            action='store_true',
            help='Remove the stored key and fall back to IPSTACK_API_KEY'
        )
        parser.add_argument(
            '--check',
            action='store_true',
            help='Verify the key with a single probe request'
        )
        parser.add_argument(
            '--website',
            action='store_true',
            help='Open the ipstack website to get a key'
        )

    def handle(self, *args, **options):
        """
        Main logic for the command.
        """
        controller = self.get_settings_controller()

        # Point the user at the page where keys are issued
        if options['website']:
            try:
                controller.open_website()
            except (ValueError, NavigationError) as e:
                raise CommandError(str(e))

        # Change the stored key, or just read the current one
        if options['clear']:
            self.run(controller.clear)
            self.stdout.write(self.style.SUCCESS('Stored API key removed'))
        elif options['new_key'] is not None:
            controller.api_key = options['new_key']
            if not controller.can_save:
                raise CommandError('API key must not be empty')
            self.run(controller.save)
        else:
            self.run(controller.load)

        if not controller.api_key:
            self.stdout.write(self.style.WARNING('No API key configured'))
        else:
            self.stdout.write(f'API key: {mask(controller.api_key)}')

        # One probe request; anything but VALID fails the command
        if options['check']:
            if not controller.can_check:
                raise CommandError('No API key to check')
            status = self.run(controller.check_api_key)
            if status is not ApiKeyStatus.VALID:
                raise CommandError(controller.STATUS_MESSAGES[status])
