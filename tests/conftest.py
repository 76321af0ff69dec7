"""
Shared fixtures for the unified payments test suite

Key Components:
1. Recording transport so no test touches the network
2. Instant sleep so retry backoff never waits
3. Provider clients and gateway configuration wired to both
"""

from unittest.mock import AsyncMock

import pytest

from tests.utils.constants import TEST_NOWPAYMENTS_KEY, TEST_PUBLIC_KEY, TEST_SECRET_KEY
from tests.utils.fake_transport import RecordingTransport
from unified_payments.config import GatewayConfig
from unified_payments.services.kamoney_service import KamoneyService
from unified_payments.services.nowpayments_service import NowPaymentsService
from unified_payments.services.retry_policy import RetryPolicy


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def instant_sleep():
    return AsyncMock(return_value=None)


@pytest.fixture
def retry_policy(instant_sleep):
    return RetryPolicy(max_attempts=3, time_unit=1.0, sleep=instant_sleep)


@pytest.fixture
def kamoney_service(transport, retry_policy):
    return KamoneyService(
        public_key=TEST_PUBLIC_KEY,
        secret_key=TEST_SECRET_KEY,
        transport=transport,
        retry_policy=retry_policy,
    )


@pytest.fixture
def nowpayments_service(transport, retry_policy):
    return NowPaymentsService(
        api_key=TEST_NOWPAYMENTS_KEY,
        transport=transport,
        retry_policy=retry_policy,
    )


@pytest.fixture
def gateway_config():
    return GatewayConfig(
        kamoney_public_key=TEST_PUBLIC_KEY,
        kamoney_secret_key=TEST_SECRET_KEY,
        nowpayments_api_key=TEST_NOWPAYMENTS_KEY,
        backoff_time_unit=0,
    )
