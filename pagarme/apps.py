from django.apps import AppConfig


class PagarmeConfig(AppConfig):
    name = 'pagarme'
    verbose_name = 'Pagar.me Payments'
