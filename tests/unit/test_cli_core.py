from pathlib import Path

from geo6.cli import build_query, parse_args
from geo6.common.config_loader import load_provider_config
from geo6.common.models import GeocodeQuery, ReverseQuery


def test_parse_args_geocode_defaults():
    args = parse_args(["geocode", "28 Motstraat, 2800 Mechelen"])
    assert args.command == "geocode"
    assert args.text == "28 Motstraat, 2800 Mechelen"
    assert args.overlay_config is None
    assert args.locale is None


def test_build_query_uses_config_defaults():
    config = load_provider_config(Path("config/geo6.yml"), env={"GEO6_CUSTOMER_ID": "c", "GEO6_API_KEY": "k"})

    geocode = build_query(parse_args(["geocode", "x", "--postal-code", "2800"]), config)
    reverse = build_query(parse_args(["reverse", "50.8", "4.3", "--radius", "25", "--locale", "nl"]), config)

    assert isinstance(geocode, GeocodeQuery)
    assert geocode.postal_code == "2800"
    assert geocode.limit == 5
    assert isinstance(reverse, ReverseQuery)
    assert reverse.radius == 25.0
    assert reverse.language == "nl"


def test_build_query_keeps_explicit_zero_limit():
    config = load_provider_config(Path("config/geo6.yml"), env={"GEO6_CUSTOMER_ID": "c", "GEO6_API_KEY": "k"})
    query = build_query(parse_args(["geocode", "x", "--limit", "0"]), config)
    assert query.limit == 0
