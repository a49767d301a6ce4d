"""
Management command to generate a Pagar.me card hash.
"""

import asyncio

from django.core.management.base import BaseCommand, CommandError
from pagarme.client import connect
from pagarme.exceptions import PagarmeException
from pagarme.security import KeyDescriptor, encrypt_card
from pagarme.utils.formatters import mask_card_number
from pagarme.utils.validators import validate_card


class Command(BaseCommand):
    help = 'Generate a Pagar.me card hash'

    def add_arguments(self, parser):
        parser.add_argument(
            '--number',
            type=str,
            required=True,
            help='Card number (e.g., 4111111111111111)'
        )
        parser.add_argument(
            '--holder',
            type=str,
            required=True,
            help='Card holder name'
        )
        parser.add_argument(
            '--expiration',
            type=str,
            required=True,
            help='Expiration date (MMYY or MM/YY)'
        )
        parser.add_argument(
            '--cvv',
            type=str,
            required=True,
            help='Card CVV'
        )
        parser.add_argument(
            '--key-id',
            type=str,
            help='Key id to use with --public-key-file'
        )
        parser.add_argument(
            '--public-key-file',
            type=str,
            help='PEM public key file; encrypts offline instead of fetching a key'
        )

    def handle(self, *args, **options):
        card = {
            'card_number': options['number'],
            'card_holder_name': options['holder'],
            'card_expiration_date': options['expiration'],
            'card_cvv': options['cvv'],
        }
        key_id = options.get('key_id')
        key_file = options.get('public_key_file')

        if bool(key_id) != bool(key_file):
            raise CommandError('--key-id and --public-key-file must be used together')

        self.stdout.write(self.style.SUCCESS('\n=== Pagar.me Card Hash ===\n'))

        try:
            card = validate_card(card)
            self.stdout.write(f'  Card: {mask_card_number(card.card_number)}')

            if key_file:
                try:
                    with open(key_file, encoding='utf-8') as fh:
                        public_key = fh.read()
                except OSError as e:
                    raise CommandError(f'Cannot read public key file: {str(e)}')

                self.stdout.write(f'  Key: {key_id} (offline)\n')
                card_hash = asyncio.run(
                    encrypt_card(KeyDescriptor(id=key_id, public_key=public_key), card)
                )
            else:
                self.stdout.write('  Key: requesting from API\n')
                with connect() as client:
                    card_hash = asyncio.run(client.security.encrypt(card, validate=False))

        except PagarmeException as e:
            raise CommandError(f'Card hash generation failed: {e.message}')

        self.stdout.write(self.style.SUCCESS('✓ Card hash generated'))
        self.stdout.write(card_hash)
