from datetime import date, timedelta

import pytest

from listing_scraper.errors import DateParseFailure
from listing_scraper.extraction.shipping import ShippingExtractor, ShippingInfo, parse_shipping_date


RUN_DATE = date(2024, 10, 21)


def _fixed_parser(_text: str, _today: date) -> date:
    return date(2030, 1, 1)


def test_free_delivery_tomorrow_resolves_to_next_day() -> None:
    info = ShippingExtractor(today=RUN_DATE).extract(["Free Delivery Tomorrow"])

    assert info.text == "Free Delivery Tomorrow"
    assert info.date == date(2024, 10, 22)


def test_relative_dates_default_to_the_run_date() -> None:
    info = ShippingExtractor().extract(["Free Delivery Tomorrow"])

    assert info.date == date.today() + timedelta(days=1)


def test_absolute_delivery_date() -> None:
    info = ShippingExtractor(today=RUN_DATE).extract(["Delivery by 25 Oct 2024"])

    assert info.text == "Delivery by 25 Oct 2024"
    assert info.date == date(2024, 10, 25)


def test_iso_date_after_deliveries_from() -> None:
    info = ShippingExtractor(today=RUN_DATE).extract(["Deliveries from 2024-11-01"])

    assert info.text == "Deliveries from 2024-11-01"
    assert info.date == date(2024, 11, 1)


def test_no_matching_fragment() -> None:
    info = ShippingExtractor(today=RUN_DATE).extract(["iPhone 11", "64GB", "£699.99", "Availability: In Stock"])

    assert info == ShippingInfo()
    assert info.text == ""
    assert info.date is None


@pytest.mark.parametrize(
    ("fragment", "expected_text"),
    [
        ("Free Delivery", "Free Delivery"),
        ("Delivery from Monday", "Delivery from Monday"),
        ("Delivers Wednesday", "Delivers Wednesday"),
        ("Order within 6 hours and have it Tomorrow", "Order within 6 hours and have it Tomorrow"),
        ("Available on 1 Nov 2024", "Available on 1 Nov 2024"),
        ("Free Shipping", "Free Shipping"),
        ("Unavailable for delivery", "Unavailable for delivery"),
    ],
)
def test_phrase_families(fragment: str, expected_text: str) -> None:
    info = ShippingExtractor(today=RUN_DATE, date_parser=_fixed_parser).extract([fragment])

    assert info.text == expected_text


def test_phrase_without_trailing_text_has_no_date() -> None:
    calls: list[str] = []

    def recording_parser(text: str, today: date) -> date:
        calls.append(text)
        return today

    info = ShippingExtractor(today=RUN_DATE, date_parser=recording_parser).extract(["Free Shipping"])

    assert info.text == "Free Shipping"
    assert info.date is None
    assert calls == []


def test_matching_is_case_sensitive() -> None:
    info = ShippingExtractor(today=RUN_DATE, date_parser=_fixed_parser).extract(["free delivery tomorrow"])

    assert info.text == ""


def test_first_matching_fragment_wins() -> None:
    fragments = ["Availability: In Stock", "Delivery from 25 Oct 2024", "Free Delivery Tomorrow"]

    info = ShippingExtractor(today=RUN_DATE).extract(fragments)

    assert info.text == "Delivery from 25 Oct 2024"
    assert info.date == date(2024, 10, 25)


def test_date_parse_failure_keeps_text_and_drops_date() -> None:
    def failing_parser(text: str, _today: date) -> date:
        raise DateParseFailure(f"Unable to parse shipping date from {text!r}")

    info = ShippingExtractor(today=RUN_DATE, date_parser=failing_parser).extract(["Available on request"])

    assert info.text == "Available on request"
    assert info.date is None


def test_parse_shipping_date_raises_on_unparseable_text() -> None:
    with pytest.raises(DateParseFailure):
        parse_shipping_date("???", RUN_DATE)
