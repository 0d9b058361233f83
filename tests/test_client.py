"""Tests for the requests-based API client, using a fake session."""

import json

import requests

from lesson_booking_client import LessonBookingClient


def make_response(status_code, body=None, url="http://test/"):
    response = requests.Response()
    response.status_code = status_code
    response.url = url
    response._content = b"" if body is None else json.dumps(body).encode("utf-8")
    response.headers["Content-Type"] = "application/json"
    return response


class FakeSession:
    """Records calls and replays canned responses."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, **kwargs):
        self.calls.append(kwargs)
        result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


def test_list_lessons():
    session = FakeSession(make_response(200, [{"id": "Art-Hen-70"}]))
    client = LessonBookingClient(base_url="http://localhost:3000/", session=session)
    lessons, error = client.list_lessons()
    assert error is None
    assert lessons == [{"id": "Art-Hen-70"}]
    assert session.calls[0]["method"] == "GET"
    assert session.calls[0]["url"] == "http://localhost:3000/lessons"


def test_prefix_and_quoted_ids():
    session = FakeSession(make_response(200, {"id": "A B"}))
    client = LessonBookingClient(base_url="http://localhost:3000", prefix="/api/v1", session=session)
    client.update_lesson("A B", {"space": 3})
    call = session.calls[0]
    assert call["method"] == "PUT"
    assert call["url"] == "http://localhost:3000/api/v1/lessons/A%20B"
    assert call["json"] == {"space": 3}


def test_search_sends_query():
    session = FakeSession(make_response(200, []))
    client = LessonBookingClient(base_url="http://localhost:3000", session=session)
    lessons, error = client.search_lessons("art")
    assert (lessons, error) == ([], None)
    assert session.calls[0]["params"] == {"query": "art"}


def test_submit_order():
    session = FakeSession(make_response(201, {"ok": True, "orderId": 7}))
    client = LessonBookingClient(base_url="http://localhost:3000", session=session)
    result, error = client.submit_order("Jane Doe", "5551234", [{"id": "Art-Hen-70", "qty": 2}])
    assert error is None
    assert result["orderId"] == 7
    assert session.calls[0]["json"] == {
        "name": "Jane Doe",
        "phone": "5551234",
        "items": [{"id": "Art-Hen-70", "qty": 2}],
    }


def test_domain_error_is_decoded():
    detail = {"error": "INSUFFICIENT_SPACE", "message": "Not enough space", "lesson_id": "Art-Hen-70"}
    session = FakeSession(make_response(409, {"detail": detail}))
    client = LessonBookingClient(base_url="http://localhost:3000", session=session)
    result, error = client.submit_order("Jane Doe", "5551234", [{"id": "Art-Hen-70", "qty": 9}])
    assert result is None
    assert error == {"status_code": 409, "code": "INSUFFICIENT_SPACE", "message": "Not enough space"}


def test_health_failure_is_decoded():
    session = FakeSession(make_response(500, {"ok": False, "error": "Database not initialised"}))
    client = LessonBookingClient(base_url="http://localhost:3000", session=session)
    result, error = client.health()
    assert result is None
    assert error["status_code"] == 500
    assert error["code"] is None
    assert error["message"] == "Database not initialised"


def test_connection_error():
    session = FakeSession(requests.ConnectionError("refused"))
    client = LessonBookingClient(base_url="http://localhost:3000", session=session)
    lessons, error = client.list_lessons()
    assert lessons == []
    assert error["status_code"] is None
    assert "refused" in error["message"]
