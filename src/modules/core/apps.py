from django.apps import AppConfig


class CoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "modules.core"
    label = "core"

    def ready(self) -> None:
        from modules.core.database import DatabaseGateway

        self.gateway = DatabaseGateway()


def get_gateway():
    """Return the process-wide ``DatabaseGateway`` owned by this app."""
    from django.apps import apps

    return apps.get_app_config("core").gateway
