import json

from django.core.management.base import BaseCommand, CommandError

from apps.layout.exceptions import LayoutRequestError
from apps.layout.helpers.context import DEVICES, DEFAULT_DEVICE
from apps.layout.models import ANONYMOUS_USER_ID
from apps.layout.services import LayoutService


class Command(BaseCommand):
    help = "Print the stored layout settings for a user and (path, device) context"

    def add_arguments(self, parser):
        parser.add_argument("--user", default=ANONYMOUS_USER_ID, help="Identity token the settings are stored under")
        parser.add_argument("--path", required=True, help="Page path, e.g. /")
        parser.add_argument("--device", default=DEFAULT_DEVICE, choices=DEVICES)

    def handle(self, *args, **options):
        try:
            settings = LayoutService().read(options["user"], options["path"], options["device"])
        except LayoutRequestError as exc:
            raise CommandError(exc.message) from exc
        self.stdout.write(json.dumps(settings, indent=2, sort_keys=True))
