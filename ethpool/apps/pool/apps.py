from django.apps import AppConfig


class PoolConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "ethpool.apps.pool"
    verbose_name = "Pool"

    def ready(self):
        import ethpool.apps.pool.signals  # noqa
