from datetime import date

import pytest

from listing_scraper.errors import FetchError
from listing_scraper.fetchers.document import ListingDocument


BASE_URL = "https://www.magpiehq.com/developer-challenge/smartphones"
RUN_DATE = date(2024, 10, 21)


def _product_card(
    title: str | None = "iPhone 11",
    capacity: str | None = "64GB",
    price: str | None = "£699.99",
    colours: tuple[str, ...] = ("Red",),
    availability: str | None = "Availability: In Stock",
    shipping: str | None = "Delivery by 25 Oct 2024",
    image: str | None = "../images/iphone-11.png",
) -> str:
    parts = ['<div class="product px-4 py-4 md:w-1/2 lg:w-1/3"><div class="bg-white p-4 rounded-md">']
    if image is not None:
        parts.append(f'<img src="{image}" alt="{title or ""}" class="mx-auto mb-8">')
    parts.append('<h3 class="font-semibold text-center">')
    if title is not None:
        parts.append(f'<span class="product-name">{title}</span> ')
    if capacity is not None:
        parts.append(f'<span class="product-capacity">{capacity}</span>')
    parts.append('</h3><div class="my-4"><div class="flex flex-wrap -mx-2">')
    for colour in colours:
        parts.append(f'<div class="px-2"><span class="border border-black rounded-full block" data-colour="{colour}"></span></div>')
    parts.append("</div></div>")
    if price is not None:
        parts.append(f'<div class="my-8 block text-center text-lg">{price}</div>')
    if availability is not None:
        parts.append(f'<div class="my-4 text-sm block text-center">{availability}</div>')
    if shipping is not None:
        parts.append(f'<div class="my-4 text-sm block text-center">{shipping}</div>')
    parts.append("</div></div>")
    return "".join(parts)


def _listing_html(cards: list[str], page_count: int = 2) -> str:
    links = "".join(
        f'<a href="?page={page}" class="inline-block px-4 py-2 border rounded-md">{page}</a>'
        for page in range(1, page_count + 1)
    )
    return (
        "<html><head><title>Smartphones</title></head><body>"
        f'<div id="products" class="flex flex-wrap -mx-4">{"".join(cards)}</div>'
        f'<div id="pages"><div class="flex flex-wrap justify-center">{links}</div></div>'
        "</body></html>"
    )


class FakeFetcher:
    def __init__(self, pages: dict[str, str]) -> None:
        self.pages = pages
        self.requested: list[str] = []

    def fetch(self, url: str) -> ListingDocument:
        self.requested.append(url)
        if url not in self.pages:
            raise FetchError(f"HTTP 404 fetching {url}", details={"url": url, "status": 404})
        return ListingDocument.from_html(url, self.pages[url])


class MemorySink:
    def __init__(self) -> None:
        self.payloads: list[bytes] = []

    def write(self, payload: bytes) -> None:
        self.payloads.append(payload)


@pytest.fixture()
def product_card():
    return _product_card


@pytest.fixture()
def listing_html():
    return _listing_html


@pytest.fixture()
def page_document(product_card, listing_html):
    def build(*cards: str, page: int = 1) -> ListingDocument:
        html = listing_html(list(cards) or [product_card()])
        return ListingDocument.from_html(f"{BASE_URL}/?page={page}", html)

    return build


@pytest.fixture()
def memory_sink() -> MemorySink:
    return MemorySink()


@pytest.fixture()
def fake_fetcher_factory():
    return FakeFetcher
