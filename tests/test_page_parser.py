"""
Tests for the single page parser and scraper
"""

import json

import pytest

from src.PAGE import page_scraper
from src.PAGE.parser import parse_page

HTML = """
<html>
  <head><title> Example Domain </title></head>
  <body>
    <h1>Example Domain</h1>
    <p>This domain is for use in examples.</p>
    <a href="https://www.iana.org/domains/example">More information...</a>
    <a href="/about">About</a>
    <a name="anchor-only">No href</a>
  </body>
</html>
"""


def test_title_and_content():
    result = parse_page(HTML, "https://example.com/")

    assert result['url'] == "https://example.com/"
    assert result['title'] == "Example Domain"
    assert "This domain is for use in examples." in result['content']


def test_links_are_resolved():
    result = parse_page(HTML, "https://example.com/index.html")

    assert result['links'] == [
        {'text': "More information...", 'href': "https://www.iana.org/domains/example"},
        {'text': "About", 'href': "https://example.com/about"},
    ]


def test_empty_document():
    result = parse_page("", "https://example.com/")

    assert result['title'] == ""
    assert result['content'] == ""
    assert result['links'] == []


class FakeSinglePage:

    def __init__(self, html, fail=False):
        self.html = html
        self.fail = fail
        self.url = None

    def goto(self, url, **kwargs):
        if self.fail:
            raise RuntimeError("net::ERR_NAME_NOT_RESOLVED")
        self.url = url

    def content(self):
        return self.html


def _fake_playwright(page, browsers):
    class FakeBrowser:
        closed = False

        def new_context(self):
            return self

        def new_page(self):
            return page

        def close(self):
            self.closed = True

    class FakeChromium:
        def launch(self, headless=True):
            browser = FakeBrowser()
            browsers.append(browser)
            return browser

    class FakePlaywright:
        chromium = FakeChromium()

        def __enter__(self):
            return self

        def __exit__(self, *exc):
            return False

    return FakePlaywright


def test_scrape_page(monkeypatch):
    browsers = []
    monkeypatch.setattr(page_scraper, 'sync_playwright', _fake_playwright(FakeSinglePage(HTML), browsers))

    result = page_scraper.scrape_page("https://example.com/")

    assert result['title'] == "Example Domain"
    assert len(result['links']) == 2
    assert browsers[0].closed


def test_scrape_page_failure_closes_browser(monkeypatch):
    browsers = []
    monkeypatch.setattr(page_scraper, 'sync_playwright', _fake_playwright(FakeSinglePage(HTML, fail=True), browsers))

    with pytest.raises(RuntimeError):
        page_scraper.scrape_page("https://invalid.example/")

    assert browsers[0].closed


def test_main_prints_json(monkeypatch, capsys):
    monkeypatch.setattr(page_scraper, 'scrape_page', lambda url, headless=True: {'url': url, 'title': "T", 'content': "", 'links': []})

    assert page_scraper.main(["https://example.com/"]) == 0
    assert json.loads(capsys.readouterr().out)['url'] == "https://example.com/"


def test_main_exits_non_zero_on_failure(monkeypatch):
    def broken(url, headless=True):
        raise RuntimeError("boom")

    monkeypatch.setattr(page_scraper, 'scrape_page', broken)

    with pytest.raises(SystemExit) as exc_info:
        page_scraper.main(["https://example.com/"])

    assert exc_info.value.code == 1
