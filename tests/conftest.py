"""
Shared fixtures: HTML builders for directory cards and an in-memory stand-in
for the Playwright Page/Locator API.
"""

from typing import Dict, List, Optional

import pytest
from bs4 import BeautifulSoup
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from src.ABC import config
from src.ABC.config import ScraperSettings
from src.ABC.models import QueryParameter


def build_card(
    name: str = "Jane Doe, CPO",
    location: str = "Dover, DE",
    contact: Optional[List[str]] = None,
    extra: Optional[List[str]] = None,
) -> str:
    """One directory card; ``contact`` fills the body's first div, ``extra`` follows it."""
    if contact is None:
        contact = ["Acme Orthotics", "1 Main St", "Dover, DE 19901"]
    if extra is None:
        extra = [
            "<b>Phone:</b> 302-555-0100",
            "<b>Fax:</b> 302-555-0101",
            "ABC certified Orthotist, certification expires 12/31/2026",
        ]
    contact_html = "".join(f"<p>{text}</p>" for text in contact)
    extra_html = "".join(f"<p>{text}</p>" for text in extra)
    return (
        '<div class="flex-item flex-item--half">'
        '<div class="bg-accent">'
        f'<p class="text-lg font-bold">{name}</p>'
        f'<p class="text-xs italic">{location}</p>'
        '</div>'
        '<div class="directory-card__body">'
        f'<div>{contact_html}</div>'
        f'{extra_html}'
        '</div>'
        '</div>'
    )


def build_results_page(cards: List[str]) -> str:
    return (
        "<html><body>"
        '<div class="directory-results-list">'
        f'{"".join(cards)}'
        "</div>"
        "</body></html>"
    )


class FakeLocator:
    def __init__(self, page: "FakePage", selector: str, index: Optional[int] = None):
        self.page = page
        self.selector = selector
        self.index = index

    @property
    def first(self) -> "FakeLocator":
        return FakeLocator(self.page, self.selector, 0)

    @property
    def last(self) -> "FakeLocator":
        return FakeLocator(self.page, self.selector, -1)

    def nth(self, index: int) -> "FakeLocator":
        return FakeLocator(self.page, self.selector, index)

    def count(self) -> int:
        return self.page.count(self.selector)

    def select_option(self, value=None, **kwargs):
        self.page.selected_state = value

    def click(self, **kwargs):
        self.page.click(self.selector, self.index)

    def text_content(self, **kwargs) -> Optional[str]:
        soup = BeautifulSoup(self.page.content(), "html.parser")
        element = soup.select_one(self.selector)
        return element.get_text() if element else None


class FakePage:
    """
    Serves canned result pages per state code.

    Args:
        results: state code -> list of result page HTML (page 1 first)
        fail_on: state code -> 0-based page index whose pagination click raises
        broken_states: state codes whose search submission raises
    """

    def __init__(
        self,
        results: Dict[str, List[str]],
        fail_on: Optional[Dict[str, int]] = None,
        broken_states: Optional[List[str]] = None,
    ):
        self.results = results
        self.fail_on = fail_on or {}
        self.broken_states = broken_states or []
        self.selected_state: Optional[str] = None
        self.current_page: Optional[int] = None
        self.visits: List[str] = []
        self.searches: List[str] = []
        self.pagination_clicks: List[int] = []
        self.function_waits = 0
        self.closed = False

    def goto(self, url, **kwargs):
        self.visits.append(url)
        self.selected_state = None
        self.current_page = None

    def wait_for_timeout(self, timeout):
        pass

    def wait_for_selector(self, selector, **kwargs):
        if self.count(selector) == 0:
            raise PlaywrightTimeoutError(f"Timeout waiting for {selector}")

    def wait_for_function(self, expression, arg=None, **kwargs):
        self.function_waits += 1

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, selector)

    def _pages(self) -> List[str]:
        return self.results.get(self.selected_state, [])

    def content(self) -> str:
        pages = self._pages()
        if self.current_page is None or not pages:
            return build_results_page([])
        return pages[self.current_page]

    def count(self, selector: str) -> int:
        if selector == config.CARD_SELECTOR:
            soup = BeautifulSoup(self.content(), "html.parser")
            return len(soup.select(selector))
        if selector == config.PAGINATION_SELECTOR:
            pages = self._pages()
            if self.current_page is None or len(pages) < 2:
                return 0
            return len(pages)
        return 1

    def click(self, selector: str, index: Optional[int]):
        if selector == config.SEARCH_BUTTON_SELECTOR:
            if self.selected_state in self.broken_states:
                raise RuntimeError(f"Search failed for {self.selected_state}")
            self.searches.append(self.selected_state)
            self.current_page = 0
        elif selector == config.PAGINATION_SELECTOR:
            if self.fail_on.get(self.selected_state) == index:
                raise RuntimeError(f"Pagination failed on page {index + 1}")
            self.pagination_clicks.append(index)
            self.current_page = index

    def close(self):
        self.closed = True


@pytest.fixture
def make_card():
    return build_card


@pytest.fixture
def make_results_page():
    return build_results_page


@pytest.fixture
def fake_page():
    return FakePage


@pytest.fixture
def settings_for(tmp_path):
    def _settings(*states: QueryParameter, **overrides) -> ScraperSettings:
        values = dict(
            states=tuple(states),
            output_file=tmp_path / "abc-directory-test.csv",
            headless=True,
            max_pages=None,
            results_timeout=10,
            settle_delay=0,
        )
        values.update(overrides)
        return ScraperSettings(**values)
    return _settings
