import pytest

from tuono.request import BodyParseError, BodyParseErrorKind, Location, Request


def test_it_correctly_parse_the_body():
    request = Request(
        "http://localhost:3000",
        raw_body=b'{"field1": true, "field2": "hello"}',
    )
    body = request.body()
    assert body["field1"] is True
    assert body["field2"] == "hello"


def test_it_should_trigger_an_error_when_body_is_invalid():
    request = Request("http://localhost:3000", raw_body=b'{"field1": true')
    with pytest.raises(BodyParseError) as info:
        request.body()
    assert info.value.kind is BodyParseErrorKind.SERDE


def test_missing_json_body_is_an_io_error():
    request = Request("http://localhost:3000")
    with pytest.raises(BodyParseError) as info:
        request.body()
    assert info.value.kind is BodyParseErrorKind.IO


def test_it_correctly_parses_form_data():
    request = Request(
        "http://localhost:3000",
        headers={"content-type": "application/x-www-form-urlencoded"},
        raw_body=b"name=John+Doe&email=john%40example.com",
    )
    data = request.form_data()
    assert data["name"] == "John Doe"
    assert data["email"] == "john@example.com"


def test_header_names_are_case_insensitive():
    request = Request(
        "http://localhost:3000",
        headers={"Content-Type": "application/x-www-form-urlencoded; charset=utf-8"},
        raw_body=b"name=Jane",
    )
    assert request.form_data() == {"name": "Jane"}


def test_it_rejects_wrong_form_content_type():
    request = Request(
        "http://localhost:3000",
        headers={
            "content-type": "application/json",
            "body": "name=John+Doe&email=john%40example.com",
        },
    )
    with pytest.raises(BodyParseError) as info:
        request.form_data()
    assert info.value.kind is BodyParseErrorKind.CONTENT_TYPE


def test_it_handles_missing_form_body():
    request = Request(
        "http://localhost:3000",
        headers={"content-type": "application/x-www-form-urlencoded"},
    )
    with pytest.raises(BodyParseError) as info:
        request.form_data()
    assert info.value.kind is BodyParseErrorKind.IO


def test_location_from_absolute_uri():
    location = Location.from_uri("http://localhost:3000/about?a=1&b=two")
    assert location.pathname == "/about"
    assert location.search_str == "a=1&b=two"
    assert location.search == {"a": "1", "b": "two"}
    assert location.href == "http://localhost:3000/about?a=1&b=two"


def test_location_defaults_path_to_root():
    location = Location.from_uri("http://localhost:3000")
    assert location.pathname == "/"
    assert location.href == "http://localhost:3000/"
    assert location.search == {}
    assert location.search_str == ""


def test_location_to_dict_uses_client_field_names():
    location = Request("/posts?page=2").location()
    assert location.to_dict() == {
        "href": "/posts?page=2",
        "pathname": "/posts",
        "searchStr": "page=2",
        "search": {"page": "2"},
    }