"""Management command to verify a payment-gateway order against the backend."""

import os
import signal
import threading

from django.core.management.base import BaseCommand, CommandError

from jewelstore.api import schemes as schemes_api
from jewelstore.api.retry import RetryPolicy
from jewelstore.investments.payments import PaymentVerification


class Command(BaseCommand):
    help = "Verify a gateway order, retrying with backoff until it is confirmed"

    def add_arguments(self, parser):
        parser.add_argument("order_id", help="Gateway order id")
        parser.add_argument(
            "--token",
            default=os.environ.get("JEWELSTORE_CUSTOMER_TOKEN"),
            help="Customer bearer token (default: $JEWELSTORE_CUSTOMER_TOKEN)",
        )
        parser.add_argument(
            "--scheme-payment",
            type=int,
            help="Verify a scheme installment with this payment id instead of a gold plan",
        )
        parser.add_argument("--max-retries", type=int, help="Override PAYMENT_VERIFY_MAX_RETRIES")
        parser.add_argument("--base-delay", type=float, help="Override PAYMENT_VERIFY_BASE_DELAY (seconds)")

    def handle(self, *args, **options):
        token = options["token"]
        if not token:
            raise CommandError("A customer token is required (--token or JEWELSTORE_CUSTOMER_TOKEN).")

        policy = RetryPolicy.from_settings()
        policy = RetryPolicy(
            max_retries=options["max_retries"] if options["max_retries"] is not None else policy.max_retries,
            base_delay=options["base_delay"] if options["base_delay"] is not None else policy.base_delay,
        )

        verify = None
        if options["scheme_payment"] is not None:
            payment_id = options["scheme_payment"]

            def verify(token, order_id):
                return schemes_api.verify_installment_payment(token, order_id, payment_id=payment_id)

        verification = PaymentVerification(options["order_id"], token, verify=verify, policy=policy)

        cancel = threading.Event()
        previous = signal.signal(signal.SIGINT, lambda signum, frame: cancel.set())
        try:
            self.stdout.write(f"Verifying {options['order_id']}...")
            verification.run(
                cancel_event=cancel,
                on_retry=lambda attempt, delay: self.stdout.write(
                    self.style.WARNING(f"  {verification.message}; retry {attempt}/{policy.max_retries} in {delay:g}s")
                ),
            )
        finally:
            signal.signal(signal.SIGINT, previous)

        if cancel.is_set():
            raise CommandError("Verification cancelled.")
        if verification.succeeded:
            self.stdout.write(self.style.SUCCESS(verification.message))
            return
        raise CommandError(verification.message)
