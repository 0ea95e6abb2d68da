from django.core.management.base import BaseCommand, CommandError

from apps.users.services import seed_department_users


class Command(BaseCommand):
    help = 'Creates or refreshes the department accounts listed in DEPARTMENT_USERS'

    def add_arguments(self, parser):
        parser.add_argument('--password', required=True, help='Password set on every department account')

    def handle(self, *args, **options):
        password = options['password']
        if not password:
            raise CommandError('Password must not be empty')
        created, updated = seed_department_users(password)
        self.stdout.write(self.style.SUCCESS(f"Created {created}, updated {updated} department accounts"))
