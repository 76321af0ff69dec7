"""NOWPayments Cryptocurrency Payment API Service"""

from typing import Any, Dict, List, Optional

from unified_payments.models import HttpMethod, compact
from unified_payments.services.provider_client import ProviderClient
from unified_payments.utils.data_sanitizer import mask_api_key_safe

NOWPAYMENTS_BASE_URL = "https://api.nowpayments.io/v1"


class NowPaymentsService(ProviderClient):
    """Client for the NOWPayments API; authenticated by an x-api-key header"""

    service_name = "nowpayments"

    def __init__(self, api_key: str, base_url: Optional[str] = None, **options):
        super().__init__(base_url=base_url or NOWPAYMENTS_BASE_URL, **options)

        if not api_key:
            raise ValueError("NOWPayments api_key is required")

        self.api_key = api_key
        self.logger.info(f"🪙 NOWPayments service initialized with key: {mask_api_key_safe(api_key)}")

    def _auth_headers(self) -> Dict[str, str]:
        return {"x-api-key": self.api_key}

    async def _get(self, path: str, params: Optional[dict] = None) -> Any:
        return await self.execute_unsigned(HttpMethod.GET, path, compact(params), self._auth_headers())

    async def _post(self, path: str, payload: Optional[dict] = None) -> Any:
        return await self.execute_unsigned(HttpMethod.POST, path, compact(payload), self._auth_headers())

    # API status & auth
    async def get_status(self) -> Any:
        return await self.execute_unsigned(HttpMethod.GET, "/status")

    async def authenticate(self, email: str, password: str) -> Any:
        """Exchange account credentials for a JWT (required by payout endpoints)"""
        return await self.execute_unsigned(HttpMethod.POST, "/auth", {"email": email, "password": password})

    async def get_balance(self) -> Any:
        return await self._get("/balance")

    # Currencies & estimates
    async def get_available_currencies(self, fixed_rate: bool = False, fiat: bool = False) -> Any:
        return await self._get("/currencies", {"fixed_rate": fixed_rate, "fiat": fiat})

    async def get_minimum_payment_amount(
        self,
        currency_from: str,
        currency_to: str,
        fiat: Optional[str] = None,
    ) -> Any:
        params = {"currency_from": currency_from, "currency_to": currency_to, "fiat": fiat}
        return await self._get("/min-amount", params)

    async def get_estimated_price(self, amount, currency_from: str, currency_to: str) -> Any:
        params = {"amount": amount, "currency_from": currency_from, "currency_to": currency_to}
        return await self._get("/estimate", params)

    # Payments
    async def create_payment(self, price_amount, price_currency: str, pay_currency: str, **options) -> Any:
        payload = {
            "price_amount": price_amount,
            "price_currency": price_currency,
            "pay_currency": pay_currency,
            **options,
        }
        return await self._post("/payment", payload)

    async def create_invoice(self, price_amount, price_currency: str, **options) -> Any:
        payload = {"price_amount": price_amount, "price_currency": price_currency, **options}
        return await self._post("/invoice", payload)

    async def get_payment_status(self, payment_id) -> Any:
        return await self._get(f"/payment/{payment_id}")

    # Payouts
    async def create_payout(self, withdrawals: List[dict], ipn_callback_url: Optional[str] = None) -> Any:
        payload = {"withdrawals": withdrawals, "ipn_callback_url": ipn_callback_url}
        return await self._post("/payout", payload)

    async def get_payout_status(self, payout_id) -> Any:
        return await self._get(f"/payout/{payout_id}")

    def __repr__(self) -> str:
        return f"NowPaymentsService(base_url={self.base_url!r}, api_key={mask_api_key_safe(self.api_key)})"
