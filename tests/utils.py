"""
Mock transport for exercising the gateway without a Dataverse environment.
"""

import json


class MockResponse:
    """Mock APIResponse with the attributes the gateway reads."""

    def __init__(self, status=200, body=None, headers=None, status_text=None, raw=None):
        self.status = status
        self.status_text = status_text or {
            200: 'OK', 201: 'Created', 204: 'No Content', 304: 'Not Modified',
            400: 'Bad Request', 404: 'Not Found', 412: 'Precondition Failed',
        }.get(status, '')
        self.headers = headers or {}
        self._raw = raw if raw is not None else ('' if body is None else json.dumps(body))

    def json(self):
        return json.loads(self._raw)

    def text(self):
        return self._raw


class MockTransport:
    """
    Records every call and answers with queued responses, in order.
    """

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def queue(self, response):
        self.responses.append(response)

    def _respond(self, method, url, **kwargs):
        self.calls.append({'method': method, 'url': url, **kwargs})
        if not self.responses:
            raise AssertionError(f"Unexpected {method} {url}")
        return self.responses.pop(0)

    def get(self, url, **kwargs):
        return self._respond('GET', url, **kwargs)

    def post(self, url, **kwargs):
        return self._respond('POST', url, **kwargs)

    def patch(self, url, **kwargs):
        return self._respond('PATCH', url, **kwargs)

    def delete(self, url, **kwargs):
        return self._respond('DELETE', url, **kwargs)


WEB_API_URL = 'https://org.crm.dynamics.com/api/data/v9.2'
RECORD_ID = '3fa85f64-5717-4562-b3fc-2c963f66afa6'


def created(collection='contacts', record_id=RECORD_ID):
    """A 204 create response carrying the OData-EntityId header."""
    return MockResponse(204, headers={
        'odata-entityid': f"{WEB_API_URL}/{collection}({record_id})"
    })
