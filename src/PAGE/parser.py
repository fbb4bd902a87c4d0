"""
HTML parsing functions for the single page scraper
"""

from typing import Dict, Any, List
from urllib.parse import urljoin
from bs4 import BeautifulSoup


def parse_links(soup: BeautifulSoup, base_url: str) -> List[Dict[str, str]]:
    """All anchors with an href, resolved against ``base_url``."""
    links = []
    for anchor in soup.find_all('a', href=True):
        links.append({
            'text': anchor.get_text(),
            'href': urljoin(base_url, anchor['href']),
        })
    return links


def parse_page(html_content: str, base_url: str) -> Dict[str, Any]:
    """
    Extract title, body text and links from a rendered page.

    Returns:
        Dict with url, title, content and links
    """
    soup = BeautifulSoup(html_content, 'html.parser')

    title = soup.title.get_text(strip=True) if soup.title else ""
    body = soup.body
    content = body.get_text() if body else ""

    return {
        'url': base_url,
        'title': title,
        'content': content,
        'links': parse_links(soup, base_url),
    }
