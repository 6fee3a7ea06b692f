from django.apps import AppConfig


class InvestmentsConfig(AppConfig):
    name = "jewelstore.investments"
    verbose_name = "Gold Investments"
    default_auto_field = "django.db.models.BigAutoField"
