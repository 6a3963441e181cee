import pytest

from geo6.common.errors import InvalidArgument, UnsupportedOperation
from geo6.common.models import GeocodeQuery, ReverseQuery
from geo6.provider.paths import (
    FULL_FORM,
    PARTIAL_FORM,
    STREET_FORM,
    TEXT_FORM,
    build_geocode_path,
    build_reverse_path,
    is_ip_literal,
    plain_number,
    select_path_form,
    validate_geocode_query,
)


@pytest.mark.parametrize("text", ["127.0.0.1", "::1", "::ffff:88.188.221.14", " 10.0.0.1 "])
def test_ip_literals_are_unsupported(text):
    with pytest.raises(UnsupportedOperation):
        validate_geocode_query(GeocodeQuery(text=text))


def test_empty_text_and_street_is_invalid():
    with pytest.raises(InvalidArgument):
        validate_geocode_query(GeocodeQuery(text="  ", postal_code="1000"))


def test_street_name_alone_is_enough():
    validate_geocode_query(GeocodeQuery(street_name="Motstraat"))


def test_is_ip_literal_rejects_addresses():
    assert not is_ip_literal("28 Motstraat, 2800 Mechelen")
    assert is_ip_literal("2001:db8::1")


def test_full_form_when_postal_code_and_locality():
    query = GeocodeQuery(
        text="1 Place des Palais 1000 Bruxelles",
        street_name="Place des Palais",
        street_number="1",
        postal_code="1000",
        locality="Bruxelles",
    )
    assert select_path_form(query) == FULL_FORM
    assert build_geocode_path(query) == "/geocode/getAddressList/Bruxelles/1000/Place+des+Palais/1"


def test_partial_form_uses_whichever_is_present():
    by_postal = GeocodeQuery(street_name="Motstraat", street_number="28", postal_code="2800")
    by_locality = GeocodeQuery(street_name="Motstraat", street_number="28", locality="Mechelen")

    assert select_path_form(by_postal) == PARTIAL_FORM
    assert build_geocode_path(by_postal) == "/geocode/getAddressList/2800/Motstraat/28"
    assert build_geocode_path(by_locality) == "/geocode/getAddressList/Mechelen/Motstraat/28"


def test_street_form():
    query = GeocodeQuery(text="ignored", street_name="Aachener Straße", street_number="33")
    assert select_path_form(query) == STREET_FORM
    assert build_geocode_path(query) == "/geocode/getAddressList/Aachener+Stra%C3%9Fe/33"


def test_text_form_encodes_free_text():
    query = GeocodeQuery(text="28 Motstraat, 2800 Mechelen")
    assert select_path_form(query) == TEXT_FORM
    assert build_geocode_path(query) == "/geocode/getAddressList/28+Motstraat%2C+2800+Mechelen"


def test_missing_street_number_is_dropped():
    query = GeocodeQuery(street_name="Motstraat", postal_code="2800")
    assert build_geocode_path(query) == "/geocode/getAddressList/2800/Motstraat"


@pytest.mark.parametrize(
    ("fields", "expected"),
    [
        ({"postal_code": "1", "locality": "x", "street_name": "s"}, FULL_FORM),
        ({"postal_code": "1", "locality": "x"}, FULL_FORM),
        ({"postal_code": "1", "street_name": "s"}, PARTIAL_FORM),
        ({"locality": "x"}, PARTIAL_FORM),
        ({"street_name": "s", "street_number": "1"}, STREET_FORM),
        ({"street_number": "1"}, TEXT_FORM),
        ({}, TEXT_FORM),
    ],
)
def test_path_selection_is_total(fields, expected):
    assert select_path_form(GeocodeQuery(text="t", **fields)) == expected


def test_reverse_path_plain_numbers():
    assert build_reverse_path(ReverseQuery(50.841973, 4.362288)) == "/latlng/50.841973,4.362288"
    assert build_reverse_path(ReverseQuery(50.5, 4.0, radius=100)) == "/latlng/50.5,4,100"


def test_plain_number_avoids_exponent():
    assert plain_number(1e-05) == "0.00001"
    assert plain_number(12.0) == "12"


@pytest.mark.parametrize(
    ("fields", "expected"),
    [
        ({"locality": "Mechelen", "street_number": "28"}, "/geocode/getAddressList/Mechelen"),
        ({"postal_code": "2800", "locality": "Mechelen", "street_number": "28"}, "/geocode/getAddressList/Mechelen/2800"),
    ],
)
def test_street_number_without_street_name_is_not_sent(fields, expected):
    path = build_geocode_path(GeocodeQuery(text="x", **fields))
    assert path == expected
    assert "//" not in path
