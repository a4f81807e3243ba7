"""
Unit tests for film input validation.
"""

from films.models.validation import validate_film, validate_film_update

VALID = {
    "rating": 1,
    "filmstart": "2022-01-31",
    "dauer": 180,
    "sprache": "Englisch",
    "direktor": "Tom Alder",
    "genres": ["ACTION", "HORROR"],
    "titel": {
        "titel": "Titelpost",
        "originaltitel": "Originaltitelpost",
        "serienname": "SeriennamePost",
    },
    "schauspielers": [
        {
            "vorname": "Tom",
            "nachname": "Cruise",
            "geschlecht": "männlich",
            "email": "tomdecruise@gmail.com",
            "telefonnummer": "0133623342",
        }
    ],
}


def paths(errors):
    return sorted(path for path, _ in errors)


def test_valid_film():
    assert validate_film(VALID) == []


def test_optional_fields_may_be_missing():
    assert validate_film({"rating": 0, "titel": {"titel": "Alien"}}) == []


def test_all_violations_reported_at_once():
    """Bad rating, filmstart, dauer and title give exactly four messages."""
    payload = {
        "rating": -1,
        "filmstart": "lksadjskd",
        "dauer": -1,
        "sprache": "213891",
        "direktor": "12391908",
        "titel": {
            "titel": "____!!!???@@@@",
            "originaltitel": "invalidOriginaltitel",
            "serienname": "invalidSerienname",
        },
    }
    errors = validate_film(payload)
    assert paths(errors) == ["dauer", "filmstart", "rating", "titel.titel"]


def test_rating_above_maximum():
    errors = validate_film({**VALID, "rating": 6})
    assert paths(errors) == ["rating"]


def test_rating_must_be_integer():
    assert paths(validate_film({**VALID, "rating": "five"})) == ["rating"]
    assert paths(validate_film({**VALID, "rating": 4.5})) == ["rating"]


def test_too_long_strings():
    payload = {**VALID, "sprache": "x" * 41, "direktor": "y" * 41}
    assert paths(validate_film(payload)) == ["direktor", "sprache"]


def test_duplicate_genres():
    assert paths(validate_film({**VALID, "genres": ["ACTION", "ACTION"]})) == ["genres"]


def test_unknown_genre():
    assert paths(validate_film({**VALID, "genres": ["WESTERN"]})) == ["genres[0]"]


def test_missing_title():
    payload = {key: value for key, value in VALID.items() if key != "titel"}
    assert paths(validate_film(payload)) == ["titel"]


def test_actor_needs_names():
    payload = {**VALID, "schauspielers": [{"vorname": "Tom"}]}
    assert paths(validate_film(payload)) == ["schauspielers[0].nachname"]


def test_actor_geschlecht_length():
    actor = VALID["schauspielers"][0]
    too_long = {**VALID, "schauspielers": [{**actor, "geschlecht": "x" * 21}]}
    longest = {**VALID, "schauspielers": [{**actor, "geschlecht": "x" * 20}]}

    assert paths(validate_film(too_long)) == ["schauspielers[0].geschlecht"]
    assert validate_film(longest) == []


def test_update_ignores_title_and_actors():
    payload = {"rating": 2, "dauer": 90}
    assert validate_film_update(payload) == []


def test_update_reports_scalars():
    errors = validate_film_update({"rating": 9, "dauer": 0})
    assert paths(errors) == ["dauer", "rating"]
