from django.apps import AppConfig


class AccountsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "domains.accounts"
    label = "accounts"  # AUTH_USER_MODEL = "accounts.User"
