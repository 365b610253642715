import pytest

from courtside.services.odds_math import favorite_index, format_american, implied_probability, total_tone


def test_implied_probability_examples():
    assert implied_probability(150) == pytest.approx(0.4)
    assert implied_probability(-150) == pytest.approx(0.6)
    assert implied_probability(100) == pytest.approx(0.5)
    assert implied_probability("-140") == pytest.approx(140 / 240)


@pytest.mark.parametrize("price", [0, None, "", "abc", float("nan"), float("inf"), True, {}, []])
def test_implied_probability_invalid(price):
    assert implied_probability(price) is None


def test_implied_probability_is_within_unit_interval():
    for price in (-10000, -101, -100, 101, 250, 10000):
        p = implied_probability(price)
        assert 0 < p < 1


def test_favorite_index_picks_negative_price():
    assert favorite_index([{"price": 150}, {"price": -150}]) == 1


def test_favorite_index_empty_and_all_invalid():
    assert favorite_index([]) is None
    assert favorite_index([{"price": None}, {"price": 0}, {}]) is None


def test_favorite_index_ties_go_to_first():
    assert favorite_index([{"price": -110}, {"price": -110}]) == 0


def test_favorite_index_skips_invalid_entries():
    assert favorite_index([{"price": None}, {"price": 120}, {"price": -140}]) == 2
    assert favorite_index([{"price": "n/a"}, {"price": 120}]) == 1


@pytest.mark.parametrize(
    "name,tone",
    [("Over 221.5", "fav"), ("OVER", "fav"), ("under 221.5", "dog"), ("Under", "dog"), ("Lakers", None), (None, None)],
)
def test_total_tone(name, tone):
    assert total_tone(name) == tone


def test_format_american():
    assert format_american(150) == "+150"
    assert format_american(-150) == "-150"
    assert format_american(0) == "0"
    assert format_american(150.0) == "+150"
    assert format_american(-112.5) == "-112.5"
    assert format_american("120") == "+120"


def test_format_american_passes_through_unparseable():
    assert format_american(None) is None
    assert format_american("EVEN") == "EVEN"


def test_favorite_index_tolerates_non_dict_quotes():
    assert favorite_index(["x", None, {"price": -110}]) == 2
    assert favorite_index(["x", 42]) is None
