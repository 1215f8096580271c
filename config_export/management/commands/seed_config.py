"""
Seed Configuration Command

Creates the configuration objects the API reads at runtime:
- system.site       (site name and outgoing mail address)
- contact.settings  (flood control and the default contact preference)

Usage:
    python manage.py seed_config                      # Seed missing objects
    python manage.py seed_config --force              # Overwrite existing objects
    python manage.py seed_config --names system.site  # Specific objects
"""
from django.conf import settings
from django.core.management.base import BaseCommand

from config_export.services import ConfigStore


def default_config():
    return {
        'system.site': {
            'name': settings.SITE_NAME,
            'mail': settings.CONTACT_EMAIL_FROM,
            'slogan': '',
        },
        'contact.settings': {
            'default_form': 'feedback',
            'flood': {
                'limit': 5,
                'interval': 3600,
            },
            'user_default_enabled': True,
        },
    }


class Command(BaseCommand):
    help = 'Seed default configuration objects (system.site, contact.settings)'

    def add_arguments(self, parser):
        parser.add_argument(
            '--force',
            action='store_true',
            help='Overwrite configuration objects that already exist',
        )
        parser.add_argument(
            '--names',
            nargs='+',
            default=None,
            help='Specific configuration names to seed (default: all)',
        )

    def handle(self, *args, **options):
        store = ConfigStore()
        defaults = default_config()
        names = options['names'] or list(defaults)

        created_count = 0
        skipped_count = 0

        for name in names:
            if name not in defaults:
                self.stdout.write(self.style.WARNING(f'Unknown configuration: {name}'))
                continue

            if not store.get(name).is_new() and not options['force']:
                self.stdout.write(self.style.WARNING(
                    f'  {name} already exists (use --force to overwrite)'
                ))
                skipped_count += 1
                continue

            store.set(name, defaults[name])
            self.stdout.write(self.style.SUCCESS(f'  {name} saved'))
            created_count += 1

        self.stdout.write('')
        self.stdout.write(f'Saved: {created_count}, skipped: {skipped_count}')
