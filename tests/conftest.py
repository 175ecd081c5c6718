import json

import pytest

from utils.records import Record

BASE_URL = "https://outreach.test"


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(body)

    def json(self):
        return json.loads(self.text)


class FakeSession:
    """Stands in for requests.Session, replaying queued responses."""

    def __init__(self, *responses):
        self.headers = {}
        self.responses = list(responses)
        self.calls = []

    def _next(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def get(self, url, **kwargs):
        return self._next("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._next("POST", url, **kwargs)


def make_record(record_id="rec1", **overrides):
    fields = {
        "Name": "Jane Doe",
        "Organization": [{"id": "org1", "name": "Acme Foods"}],
        "Email": "jane@x.com",
        "Title": "Head of Sustainability",
        "Summary": "Regional grocery chain",
        "Angle for Outreach": "Food waste reduction",
        "Note": "Met at conference",
        "Google Drive Folder URL": "https://drive.google.com/drive/folders/abc",
    }
    fields.update(overrides)
    return Record(record_id, fields)


@pytest.fixture
def record():
    return make_record()


@pytest.fixture
def catalog():
    return {"intro_1": "First touch introduction", "follow_up": "Gentle follow up"}
