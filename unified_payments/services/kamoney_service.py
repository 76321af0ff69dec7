"""KAMONEY Pix Payment API Service - HMAC-signed private endpoints"""

from typing import Any, Optional

from unified_payments.models import HttpMethod, compact
from unified_payments.services.provider_client import ProviderClient
from unified_payments.utils.data_sanitizer import mask_api_key_safe

KAMONEY_BASE_URL = "https://api2.kamoney.com.br/v2"


class KamoneyService(ProviderClient):
    """
    Client for the KAMONEY API (Pix, bank transfers, boletos, wallet)

    Public endpoints are sent as-is. Private endpoints are signed: a nonce is
    merged into the params, the canonical params are HMAC-SHA512 signed with
    the secret key, and `public` / `sign` headers are attached.
    """

    service_name = "kamoney"

    def __init__(self, public_key: str, secret_key: str, base_url: Optional[str] = None, **options):
        super().__init__(base_url=base_url or KAMONEY_BASE_URL, **options)

        if not public_key or not secret_key:
            raise ValueError("KAMONEY public_key and secret_key are required")

        self.public_key = public_key
        self._secret_key = secret_key

        self.logger.info(f"🇧🇷 KAMONEY service initialized with key: {mask_api_key_safe(public_key)}")

    async def _signed(self, method: HttpMethod, path: str, params: Optional[dict] = None) -> Any:
        return await self.execute_signed(
            method,
            path,
            compact(params),
            secret_key=self._secret_key,
            public_key=self.public_key,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def get_services_order(self) -> Any:
        return await self.execute_unsigned(HttpMethod.GET, "/public/services/order")

    async def get_services_merchant(self) -> Any:
        return await self.execute_unsigned(HttpMethod.GET, "/public/services/merchant")

    async def get_services_buy(self) -> Any:
        return await self.execute_unsigned(HttpMethod.GET, "/public/services/buy")

    async def get_limits(self, service: str) -> Any:
        return await self.execute_unsigned(HttpMethod.GET, f"/public/services/{service}/limits")

    # ------------------------------------------------------------------
    # Private API (signed)
    # ------------------------------------------------------------------

    async def create_order(self, amount, service: str, **options) -> Any:
        payload = {"amount": amount, "service": service, **options}
        return await self._signed(HttpMethod.POST, "/private/order", payload)

    async def get_order(self, order_id: str) -> Any:
        return await self._signed(HttpMethod.GET, f"/private/order/{order_id}")

    async def cancel_order(self, order_id: str) -> Any:
        return await self._signed(HttpMethod.DELETE, f"/private/order/{order_id}")

    async def create_pix_payment(self, amount, pix_key: str, **options) -> Any:
        """Charge collected through Pix"""
        payload = {"amount": amount, "pix_key": pix_key, "service": "pix", **options}
        return await self._signed(HttpMethod.POST, "/private/order", payload)

    async def send_pix_payment(self, amount, pix_key: str, **options) -> Any:
        """Outgoing Pix transfer to a recipient key"""
        payload = {"amount": amount, "pix_key": pix_key, "service": "direct_transfers", **options}
        return await self._signed(HttpMethod.POST, "/private/order", payload)

    async def get_wallet_balance(self) -> Any:
        return await self._signed(HttpMethod.GET, "/private/wallet")

    async def get_wallet_statement(
        self,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        page: int = 1,
        limit: int = 50,
    ) -> Any:
        params = {"start_date": start_date, "end_date": end_date, "page": page, "limit": limit}
        return await self._signed(HttpMethod.GET, "/private/wallet/statement", params)

    async def create_withdrawal(self, amount, service: str, **options) -> Any:
        payload = {"amount": amount, "service": service, **options}
        return await self._signed(HttpMethod.POST, "/private/withdrawal", payload)

    async def get_withdrawal(self, withdrawal_id: str) -> Any:
        return await self._signed(HttpMethod.GET, f"/private/withdrawal/{withdrawal_id}")

    def __repr__(self) -> str:
        return f"KamoneyService(base_url={self.base_url!r}, public_key={mask_api_key_safe(self.public_key)})"
