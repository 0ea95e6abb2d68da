from django.apps import AppConfig
from django.db.models.signals import post_migrate


def _ensure_bootstrap_users(sender, **kwargs):
    from .services import ensure_bootstrap_users

    ensure_bootstrap_users()


class UsersConfig(AppConfig):
    name = 'apps.users'
    label = 'users'
    default_auto_field = 'django.db.models.BigAutoField'

    def ready(self):
        post_migrate.connect(_ensure_bootstrap_users, sender=self)
