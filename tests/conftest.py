"""
Shared fixtures.

Unit tests run against tests.utils.MockTransport. Tests marked ``e2e`` talk
to a live Dataverse environment configured through config.json or the
environment (see config.load_config) and are skipped when none is set up.
"""

import sys
from pathlib import Path

import pytest
from playwright.sync_api import sync_playwright

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import load_config
from dataverse import (
    ContactBuilder,
    AccountBuilder,
    DataverseRequest,
    SessionTransport,
    provisioned_record,
)


@pytest.fixture(scope='session')
def dataverse_config():
    config = load_config()
    if not config.is_configured:
        pytest.skip("No Dataverse environment configured (BASE_URL or config.json)")
    return config


@pytest.fixture(scope='session')
def api_context(dataverse_config):
    """
    Authenticated transport for the whole session.

    Uses a bearer token when one is configured, otherwise a Playwright
    request context loaded with the browser's saved storage state.
    """
    if dataverse_config.access_token:
        transport = SessionTransport(access_token=dataverse_config.access_token)
        yield transport
        transport.dispose()
        return

    storage_state = Path(dataverse_config.storage_state)
    if not storage_state.exists():
        pytest.skip(f"No saved session at {storage_state}; log in through the browser first")

    playwright = sync_playwright().start()
    context = playwright.request.new_context(
        base_url=dataverse_config.base_url,
        storage_state=str(storage_state),
    )
    yield context
    context.dispose()
    playwright.stop()


@pytest.fixture
def web_api(api_context, dataverse_config):
    return DataverseRequest(api_context, dataverse_config.web_api_url)


@pytest.fixture
def contact(web_api):
    """A generic contact that exists for the duration of the test."""
    built = ContactBuilder().build_generic()
    with provisioned_record(web_api, 'contacts', built.to_payload()) as record_id:
        yield built.with_id(record_id)


@pytest.fixture
def account(web_api):
    """A generic account that exists for the duration of the test."""
    built = AccountBuilder().build_generic()
    with provisioned_record(web_api, 'accounts', built.to_payload()) as record_id:
        yield built.with_id(record_id)
