import copy

import pytest

from movies_api.services.validation import validate_movie, validate_partial_movie


@pytest.fixture
def payload():
    return {
        "title": "Alien",
        "year": 1979,
        "director": "Ridley Scott",
        "duration": 117,
        "rate": 8.5,
        "poster": "http://example.com/alien.jpg",
        "genre": ["Horror", "Sci-Fi"],
    }


def _paths(result):
    return [error["path"] for error in result.errors]


def test_valid_payload(payload):
    result = validate_movie(payload)
    assert result.ok
    assert result.errors == []
    assert result.data == payload


def test_validation_does_not_mutate_input(payload):
    original = copy.deepcopy(payload)
    payload["extra"] = "dropped"
    result = validate_movie(payload)
    assert "extra" not in result.data
    assert payload == {**original, "extra": "dropped"}


def test_missing_fields_are_all_reported():
    result = validate_movie({})
    assert not result.ok
    assert result.data is None
    assert sorted(path[0] for path in _paths(result)) == sorted(
        ["title", "year", "director", "duration", "poster", "genre"]
    )


@pytest.mark.parametrize(
    "field, value",
    [
        ("title", ""),
        ("title", 42),
        ("year", "1979"),
        ("year", True),
        ("year", 1850),
        ("year", 2100),
        ("duration", 0),
        ("duration", 90.5),
        ("rate", -1.0),
        ("rate", 10.5),
        ("poster", "not a url"),
        ("poster", "ftp://example.com/a.jpg"),
        ("poster", "http://exa mple.com/x"),
        ("poster", "http://a:b"),
        ("poster", "https://%%%/x"),
        ("poster", "http://-/"),
        ("poster", "http://[::1"),
        ("genre", []),
        ("genre", ["Western"]),
        ("genre", "Drama"),
    ],
)
def test_invalid_field_is_reported(payload, field, value):
    payload[field] = value
    result = validate_movie(payload)
    assert not result.ok
    assert [field] == _paths(result)[0][:1]


def test_rate_is_optional_with_default(payload):
    payload.pop("rate")
    result = validate_movie(payload)
    assert result.ok
    assert result.data["rate"] == 5.0


def test_duplicate_genres_collapse(payload):
    payload["genre"] = ["Drama", "Crime", "Drama"]
    assert validate_movie(payload).data["genre"] == ["Drama", "Crime"]


def test_non_object_payload():
    result = validate_movie(["Alien"])
    assert not result.ok
    assert _paths(result) == [[]]


def test_partial_only_returns_supplied_fields():
    result = validate_partial_movie({"year": 1999, "unknown": "x"})
    assert result.ok
    assert result.data == {"year": 1999}


def test_partial_empty_payload_is_valid():
    result = validate_partial_movie({})
    assert result.ok
    assert result.data == {}


def test_partial_applies_field_rules():
    result = validate_partial_movie({"duration": -3, "title": "ok"})
    assert not result.ok
    assert _paths(result) == [["duration"]]


def test_partial_rejects_null():
    result = validate_partial_movie({"genre": None})
    assert not result.ok
    assert _paths(result) == [["genre"]]


@pytest.mark.parametrize(
    "poster",
    [
        "http://example.com",
        "https://m.media-amazon.com/images/I/91Rc8cAmnAL._AC_UF1000,1000_QL80_.jpg",
        "http://127.0.0.1:5500/poster.png",
    ],
)
def test_poster_is_stored_as_sent(payload, poster):
    payload["poster"] = poster
    result = validate_movie(payload)
    assert result.ok
    assert result.data["poster"] == poster


def test_partial_rejects_invalid_poster():
    result = validate_partial_movie({"poster": "http://exa mple.com/x"})
    assert not result.ok
    assert _paths(result) == [["poster"]]


def test_partial_accepts_every_field_when_valid(payload):
    result = validate_partial_movie(payload)
    assert result.ok
    assert result.data == payload
