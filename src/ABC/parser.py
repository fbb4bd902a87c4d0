"""
HTML parsing functions for the ABC practitioner directory

Each directory card looks like::

    <div class="flex-item flex-item--half">
      <div class="bg-accent">
        <p class="text-lg font-bold">Jane Doe, CPO</p>
        <p class="text-xs italic">Dover, DE</p>
      </div>
      <div class="directory-card__body">
        <div>
          <p>Organization or "Not Available"</p>
          <p>Address line 1</p>
          <p>Address line 2</p>
        </div>
        <p><b>Phone:</b> 302-555-0100</p>
        <p><b>Fax:</b> 302-555-0101</p>
        <p>ABC certified Prosthetist, certification expires 12/31/2026</p>
      </div>
    </div>
"""

import re
import logging
from typing import Optional, List, Union
from bs4 import BeautifulSoup, Tag

from .config import CARD_SELECTOR
from .models import DirectoryRecord

logger = logging.getLogger(__name__)

NAME_SELECTOR = '.bg-accent p.text-lg.font-bold'
LOCATION_SELECTOR = '.bg-accent p.text-xs.italic'
BODY_SELECTOR = '.directory-card__body'


def clean_text(text: Optional[str]) -> str:
    """Collapse whitespace runs to a single space and strip."""
    if not text:
        return ""
    return re.sub(r'\s+', ' ', text).strip()


def _select_text(card: Tag, selector: str) -> str:
    element = card.select_one(selector)
    return element.get_text().strip() if element else ""


def _first_child_paragraphs(body: Tag) -> List[Tag]:
    """Paragraphs of the body block's first child container."""
    first_child = body.find(True, recursive=False)
    if first_child is None or first_child.name == 'p':
        return []
    return first_child.find_all('p')


def _find_labelled_paragraph(paragraphs: List[Tag], label: str) -> Optional[Tag]:
    """First paragraph with a bold label such as 'Phone:'."""
    for p in paragraphs:
        for bold in p.find_all(['b', 'strong']):
            if bold.get_text().strip() == label:
                return p
    return None


def _labelled_value(paragraphs: List[Tag], label: str) -> Optional[str]:
    p = _find_labelled_paragraph(paragraphs, label)
    if p is None:
        return None
    return p.get_text().replace(label, '', 1).strip()


def _find_certification(paragraphs: List[Tag]) -> Optional[str]:
    for p in paragraphs:
        text = p.get_text()
        if 'certified' in text and 'expire' in text:
            return text.strip()
    return None


def parse_card(card: Tag) -> DirectoryRecord:
    """
    Extract one practitioner from a directory card.

    Missing sub-elements leave their field empty instead of failing the card.
    Text is only stripped here; whitespace is normalized at export time.

    Args:
        card: The ``.flex-item--half`` card element

    Returns:
        DirectoryRecord for the card
    """
    record = DirectoryRecord(
        name=_select_text(card, NAME_SELECTOR),
        header_location=_select_text(card, LOCATION_SELECTOR),
    )

    body = card.select_one(BODY_SELECTOR)
    if not body:
        return record

    paragraphs = _first_child_paragraphs(body)
    if len(paragraphs) >= 1:
        record.organization = paragraphs[0].get_text().strip()
    if len(paragraphs) >= 2:
        record.address_line_1 = paragraphs[1].get_text().strip()
    if len(paragraphs) >= 3:
        record.address_line_2 = paragraphs[2].get_text().strip()

    all_paragraphs = body.find_all('p')
    record.phone = _labelled_value(all_paragraphs, 'Phone:')
    record.fax = _labelled_value(all_paragraphs, 'Fax:')
    record.certification_details = _find_certification(all_paragraphs)

    return record


def parse_cards(html_content: Union[str, BeautifulSoup]) -> List[DirectoryRecord]:
    """
    Parse every directory card on a rendered results page, in DOM order.

    A card that fails to parse is logged and left out; its siblings are still parsed.
    """
    soup = html_content if isinstance(html_content, BeautifulSoup) else BeautifulSoup(html_content, 'html.parser')

    records = []
    for card in soup.select(CARD_SELECTOR):
        try:
            records.append(parse_card(card))
        except Exception as e:
            logger.error(f"Error extracting individual: {e}")
            continue

    return records
