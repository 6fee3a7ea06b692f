from django.apps import AppConfig


class ProfileConfig(AppConfig):
    name = "jewelstore.profile"
    verbose_name = "Customer Profile"
    default_auto_field = "django.db.models.BigAutoField"
