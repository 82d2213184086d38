"""Unit tests for the RestResponse value object."""

import pytest

from app.presentation.rest import RestResponse


@pytest.fixture
def response() -> RestResponse:
    return RestResponse()


def test_defaults(response: RestResponse):
    memento = response.get_memento()
    assert memento["data"] is None
    assert memento["mime_type"] == "application/json"
    assert memento["renderer"] == "json"
    assert memento["status_code"] == 200
    assert memento["status_text"] == ""
    assert dict(memento["headers"]) == {}
    assert memento["finished"] is False


def test_every_mutator_is_chainable(response: RestResponse):
    result = (
        response.set_status(201, "Created")
        .set_headers({"X-One": "1"})
        .set_header("X-Two", "2")
        .set_data({"id": 1})
        .set_mime_type("application/vnd.api+json")
        .set_renderer("json")
        .finish()
    )
    assert result is response
    assert response.no_data() is response
    assert response.set_error() is response


@pytest.mark.parametrize(
    "code, text, expected",
    [
        (404, None, (404, "Initial")),
        (None, "Changed", (500, "Changed")),
        (201, "Created", (201, "Created")),
        (None, None, (500, "Initial")),
    ],
)
def test_set_status_updates_only_supplied_fields(code, text, expected):
    response = RestResponse().set_status(500, "Initial")
    response.set_status(code, text)
    assert (response.status_code, response.status_text) == expected


def test_set_status_accepts_empty_text():
    response = RestResponse().set_status(500, "Initial").set_status(text="")
    assert response.status_text == ""
    assert response.status_code == 500


def test_set_headers_merges_and_overwrites(response: RestResponse):
    response.set_headers({"a": "1"})
    response.set_headers({"b": "2"})
    assert response.headers == {"a": "1", "b": "2"}

    response.set_headers({"a": "3"})
    assert response.headers == {"a": "3", "b": "2"}


def test_set_header_is_case_preserving(response: RestResponse):
    response.set_header("X-Request-Id", "abc").set_header("x-request-id", "def")
    assert response.headers == {"X-Request-Id": "abc", "x-request-id": "def"}


def test_no_data_resets_body_regardless_of_prior_state(response: RestResponse):
    response.set_data([1, 2, 3]).set_renderer("xml").set_mime_type("application/xml")
    response.no_data()
    assert response.data is None
    assert response.renderer == "plain"
    assert response.mime_type == "text/plain"


def test_set_error_without_detail(response: RestResponse):
    response.set_data({"will": "vanish"})
    response.set_error(error_type="X", error_code=404, message="m", detail="")

    memento = response.get_memento()
    assert memento["status_code"] == 404
    assert memento["status_text"] == "X"
    assert memento["headers"]["X-REST-ERROR-MESSAGE"] == "m"
    assert "X-REST-ERROR-DETAIL" not in memento["headers"]
    assert memento["data"] is None
    assert memento["renderer"] == "plain"


def test_set_error_defaults(response: RestResponse):
    response.set_error()
    assert response.status_code == 500
    assert response.status_text == "Unspecified error"
    assert response.headers == {
        "X-REST-ERROR-MESSAGE": "An unhandled exception occurred within the REST API",
    }


def test_set_error_with_detail_and_no_message(response: RestResponse):
    response.set_error(message="", detail="stack")
    assert "X-REST-ERROR-MESSAGE" not in response.headers
    assert response.headers["X-REST-ERROR-DETAIL"] == "stack"


def test_finish(response: RestResponse):
    assert response.is_finished() is False
    response.finish()
    assert response.is_finished() is True


def test_memento_is_a_read_only_snapshot(response: RestResponse):
    response.set_data("before").set_header("X-A", "1")
    memento = response.get_memento()

    response.set_data("after").set_header("X-A", "2").set_header("X-B", "3")

    assert memento["data"] == "before"
    assert dict(memento["headers"]) == {"X-A": "1"}
    with pytest.raises(TypeError):
        memento["data"] = "mutated"  # type: ignore[index]
    with pytest.raises(TypeError):
        memento["headers"]["X-C"] = "4"  # type: ignore[index]
