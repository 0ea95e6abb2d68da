from django.core.management.base import BaseCommand

from apps.users.services import ensure_bootstrap_users


class Command(BaseCommand):
    help = 'Creates or re-asserts the fixed super-admin and admin accounts'

    def handle(self, *args, **options):
        for user in ensure_bootstrap_users():
            self.stdout.write(self.style.SUCCESS(f"Ensured {user.username} ({user.role})"))
