"""
Fixture provisioning and record assertion tests.
"""

import inspect

import pytest

from dataverse import (
    Contact,
    DataverseRequest,
    HttpStatusError,
    assert_contains_contact,
    contains_contact,
    provisioned_record,
)

from tests.utils import MockResponse, MockTransport, RECORD_ID, WEB_API_URL, created


def make_gateway(*responses):
    transport = MockTransport(*responses)
    return DataverseRequest(transport, WEB_API_URL), transport


class TestProvisionedRecord:
    """Test create/yield/delete around a test body."""

    def test_creates_and_deletes(self):
        """Should yield the new id and delete it afterwards."""
        web_api, transport = make_gateway(created(), MockResponse(204))

        with provisioned_record(web_api, 'contacts', {'lastname': 'Hopper'}) as record_id:
            assert record_id == RECORD_ID
            assert len(transport.calls) == 1

        assert [c['method'] for c in transport.calls] == ['POST', 'DELETE']
        assert transport.calls[1]['url'] == f"{WEB_API_URL}/contacts({RECORD_ID})"

    def test_deletes_when_body_fails(self):
        """Teardown runs and the body's error propagates."""
        web_api, transport = make_gateway(created(), MockResponse(204))

        with pytest.raises(AssertionError, match='boom'):
            with provisioned_record(web_api, 'contacts', {'lastname': 'Hopper'}):
                raise AssertionError('boom')

        assert transport.calls[-1]['method'] == 'DELETE'

    def test_cleanup_failure_does_not_mask_body_failure(self):
        """A failing delete after a failing body keeps the body's error."""
        web_api, _ = make_gateway(created(), MockResponse(404))

        with pytest.raises(AssertionError, match='boom'):
            with provisioned_record(web_api, 'contacts', {'lastname': 'Hopper'}):
                raise AssertionError('boom')

    def test_cleanup_failure_raised_after_passing_body(self):
        """A failing delete after a passing body is reported."""
        web_api, _ = make_gateway(created(), MockResponse(404))

        with pytest.raises(HttpStatusError):
            with provisioned_record(web_api, 'contacts', {'lastname': 'Hopper'}):
                pass

    def test_nothing_to_delete_when_create_fails(self):
        """A failed create raises and issues no delete."""
        web_api, transport = make_gateway(MockResponse(400))

        with pytest.raises(HttpStatusError):
            with provisioned_record(web_api, 'contacts', {}):
                pass

        assert len(transport.calls) == 1


class TestContainsContact:
    """Test matching contacts against Web API records."""

    records = [
        {'firstname': 'Grace', 'lastname': 'Hopper', 'emailaddress1': 'g@example.com', 'contactid': '1'},
        {'firstname': 'Ada', 'lastname': 'Lovelace', 'emailaddress1': None, 'contactid': '2'},
    ]

    def test_match_on_set_columns(self):
        """Should match when every set column agrees."""
        assert contains_contact(self.records, Contact('Lovelace', 'Ada'))
        assert_contains_contact(self.records, Contact('Hopper', 'Grace', 'g@example.com'))

    def test_mismatch(self):
        """Should fail with the contact's name in the message."""
        assert not contains_contact(self.records, Contact('Hopper', 'Ada'))
        with pytest.raises(AssertionError, match='Ada Hopper'):
            assert_contains_contact(self.records, Contact('Hopper', 'Ada'))

    def test_mismatch_raises_explicitly(self):
        """Should raise AssertionError itself, so python -O cannot skip the check."""
        source = inspect.getsource(assert_contains_contact)
        assert 'raise AssertionError' in source
        assert '\n    assert ' not in source
        with pytest.raises(AssertionError, match='among 0 record'):
            assert_contains_contact([], Contact('Hopper', 'Ada'))
