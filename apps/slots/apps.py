from django.apps import AppConfig


class SlotsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.slots"
    verbose_name = "Slots"

    def ready(self):
        from apps.slots.application.event_handlers import register_handlers

        register_handlers()
