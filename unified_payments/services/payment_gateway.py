"""
Payment Gateway
Single entry point that routes payments, payouts and balance lookups to the
provider selected by the caller. Provider payloads are returned unchanged.
"""

import logging
from typing import Any, Dict, List, Optional

from unified_payments.config import GatewayConfig
from unified_payments.exceptions import ValidationError
from unified_payments.models import Provider
from unified_payments.services.http_transport import AiohttpTransport, HttpTransport
from unified_payments.services.kamoney_service import KamoneyService
from unified_payments.services.nowpayments_service import NowPaymentsService

KAMONEY_SERVICE_BY_CURRENCY = {
    "BRL": "pix",
    "PIX": "pix",
    "BOLETO": "payment_slips",
    "TRANSFER": "direct_transfers",
    "TED": "direct_transfers",
    "DOC": "direct_transfers",
}
DEFAULT_KAMONEY_SERVICE = "pix"


def determine_kamoney_service(currency: Optional[str]) -> str:
    """Map a currency or rail name to the KAMONEY service that handles it"""
    return KAMONEY_SERVICE_BY_CURRENCY.get(str(currency or "").strip().upper(), DEFAULT_KAMONEY_SERVICE)


class PaymentGateway:
    """Unified facade over the KAMONEY and NOWPayments clients"""

    def __init__(
        self,
        config: GatewayConfig,
        logger: Optional[logging.Logger] = None,
        transport: Optional[HttpTransport] = None,
    ):
        config.validate()

        self.config = config
        self.logger = logger or config.logger or logging.getLogger(__name__)
        self.transport = transport or AiohttpTransport()

        client_options = dict(
            timeout=config.timeout,
            retry_attempts=config.retry_attempts,
            backoff_time_unit=config.backoff_time_unit,
            logger=self.logger,
            transport=self.transport,
        )

        self.kamoney = KamoneyService(
            public_key=config.kamoney_public_key,
            secret_key=config.kamoney_secret_key,
            base_url=config.kamoney_base_url,
            **client_options,
        )
        self.nowpayments = NowPaymentsService(
            api_key=config.nowpayments_api_key,
            base_url=config.nowpayments_base_url,
            **client_options,
        )

        self.logger.info(f"💳 Payment gateway ready ({config.environment})")

    async def create_payment(self, provider, amount, currency: str, **options) -> Any:
        provider = Provider.parse(provider)

        if provider is Provider.KAMONEY:
            service = options.pop("service", None) or determine_kamoney_service(currency)
            return await self.kamoney.create_order(amount=amount, service=service, **options)
        elif provider is Provider.NOWPAYMENTS:
            pay_currency = options.pop("pay_currency", None) or currency
            return await self.nowpayments.create_payment(
                price_amount=amount,
                price_currency=currency,
                pay_currency=pay_currency,
                **options,
            )
        raise AssertionError(f"Unhandled provider: {provider}")

    async def get_payment_status(self, provider, payment_id) -> Any:
        provider = Provider.parse(provider)

        if provider is Provider.KAMONEY:
            return await self.kamoney.get_order(payment_id)
        elif provider is Provider.NOWPAYMENTS:
            return await self.nowpayments.get_payment_status(payment_id)
        raise AssertionError(f"Unhandled provider: {provider}")

    async def create_payout(self, provider, amount, currency: str, **options) -> Any:
        provider = Provider.parse(provider)

        if provider is Provider.KAMONEY:
            service = options.pop("service", None) or determine_kamoney_service(currency)
            return await self.kamoney.create_withdrawal(amount=amount, service=service, **options)
        elif provider is Provider.NOWPAYMENTS:
            ipn_callback_url = options.pop("ipn_callback_url", None)
            withdrawals: Optional[List[Dict[str, Any]]] = options.pop("withdrawals", None)

            if withdrawals and options:
                raise ValidationError(
                    f"Unexpected payout options with explicit withdrawals: {', '.join(sorted(options))}"
                )
            if not withdrawals:
                # extra_id, payout_description etc. are per-withdrawal fields
                withdrawals = [{
                    "address": options.pop("address", None),
                    "amount": amount,
                    "currency": currency,
                    **options,
                }]

            return await self.nowpayments.create_payout(
                withdrawals=withdrawals,
                ipn_callback_url=ipn_callback_url,
            )
        raise AssertionError(f"Unhandled provider: {provider}")

    async def get_balance(self, provider) -> Any:
        provider = Provider.parse(provider)

        if provider is Provider.KAMONEY:
            return await self.kamoney.get_wallet_balance()
        elif provider is Provider.NOWPAYMENTS:
            return await self.nowpayments.get_balance()
        raise AssertionError(f"Unhandled provider: {provider}")

    async def close(self) -> None:
        await self.transport.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
