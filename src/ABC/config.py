"""
Configuration for the ABC practitioner directory scraper
"""

import os
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv

from .models import QueryParameter

# Paths
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
load_dotenv(PROJECT_ROOT / ".env")

# Base URLs
BASE_URL = "https://www.abcop.org"
DIRECTORY_URL = f"{BASE_URL}/abc-directory"

# Selectors
STATE_SELECT_SELECTOR = 'label:has-text("State") select'
SEARCH_BUTTON_SELECTOR = 'button:has-text("Search")'
CARD_SELECTOR = '.directory-results-list .flex-item.flex-item--half'
PAGINATION_SELECTOR = r'.bg-accent.hover\:bg-accent-alt.text-lg.w-10.h-10.font-bold.mx-1'


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    value = os.getenv(name)
    if not value:
        return default
    return int(value)


# Browser settings
HEADLESS = _env_bool("ABC_HEADLESS", True)
PAGE_TIMEOUT = 30000  # Navigation timeout in milliseconds
RESULTS_TIMEOUT = _env_int("ABC_RESULTS_TIMEOUT", 15000)  # Max wait for cards to render (ms)
SETTLE_DELAY = 1000  # Milliseconds to let the page settle after navigation

# Scraper settings
MAX_PAGES = _env_int("ABC_MAX_PAGES", None)  # None scrapes every page
TEST_MAX_PAGES = 2

# Data directories
DATA_DIR = Path(os.getenv("ABC_OUTPUT_DIR") or PROJECT_ROOT / "data" / "ABC")
LOG_DIR = PROJECT_ROOT / "logs" / "ABC"

# US states and territories, in dropdown order
STATES: Tuple[QueryParameter, ...] = tuple(QueryParameter(code, name) for code, name in [
    ('AL', 'Alabama'),
    ('AK', 'Alaska'),
    ('AS', 'American Samoa'),
    ('AZ', 'Arizona'),
    ('AR', 'Arkansas'),
    ('CA', 'California'),
    ('CO', 'Colorado'),
    ('CT', 'Connecticut'),
    ('DE', 'Delaware'),
    ('DC', 'District Of Columbia'),
    ('FM', 'Federated States Of Micronesia'),
    ('FL', 'Florida'),
    ('GA', 'Georgia'),
    ('GU', 'Guam'),
    ('HI', 'Hawaii'),
    ('ID', 'Idaho'),
    ('IL', 'Illinois'),
    ('IN', 'Indiana'),
    ('IA', 'Iowa'),
    ('KS', 'Kansas'),
    ('KY', 'Kentucky'),
    ('LA', 'Louisiana'),
    ('ME', 'Maine'),
    ('MH', 'Marshall Islands'),
    ('MD', 'Maryland'),
    ('MA', 'Massachusetts'),
    ('MI', 'Michigan'),
    ('MN', 'Minnesota'),
    ('MS', 'Mississippi'),
    ('MO', 'Missouri'),
    ('MT', 'Montana'),
    ('NE', 'Nebraska'),
    ('NV', 'Nevada'),
    ('NH', 'New Hampshire'),
    ('NJ', 'New Jersey'),
    ('NM', 'New Mexico'),
    ('NY', 'New York'),
    ('NC', 'North Carolina'),
    ('ND', 'North Dakota'),
    ('MP', 'Northern Mariana Islands'),
    ('OH', 'Ohio'),
    ('OK', 'Oklahoma'),
    ('OR', 'Oregon'),
    ('PW', 'Palau'),
    ('PA', 'Pennsylvania'),
    ('PR', 'Puerto Rico'),
    ('RI', 'Rhode Island'),
    ('SC', 'South Carolina'),
    ('SD', 'South Dakota'),
    ('TN', 'Tennessee'),
    ('TX', 'Texas'),
    ('UT', 'Utah'),
    ('VT', 'Vermont'),
    ('VI', 'Virgin Islands'),
    ('VA', 'Virginia'),
    ('WA', 'Washington'),
    ('WV', 'West Virginia'),
    ('WI', 'Wisconsin'),
    ('WY', 'Wyoming'),
])

# Small states for a quick smoke run
TEST_STATES: Tuple[QueryParameter, ...] = (
    QueryParameter('DE', 'Delaware'),
    QueryParameter('VT', 'Vermont'),
)

STATES_BY_CODE = {state.code: state for state in STATES}


@dataclass(frozen=True)
class ScraperSettings:
    """Everything a single run needs, passed explicitly into the scrape loop"""
    states: Tuple[QueryParameter, ...]
    output_file: Path
    headless: bool = HEADLESS
    max_pages: Optional[int] = MAX_PAGES
    page_timeout: int = PAGE_TIMEOUT
    results_timeout: int = RESULTS_TIMEOUT
    settle_delay: int = SETTLE_DELAY
    log_sample: bool = False  # Log the first record of every state


def default_settings() -> ScraperSettings:
    """Full run: every state, dated output file."""
    filename = f"abc-directory-{date.today().isoformat()}.csv"
    return ScraperSettings(states=STATES, output_file=DATA_DIR / filename)


def smoke_settings() -> ScraperSettings:
    """Smoke run: two small states, visible browser, first pages only."""
    return ScraperSettings(
        states=TEST_STATES,
        output_file=DATA_DIR / "abc-directory-test.csv",
        headless=False,
        max_pages=TEST_MAX_PAGES,
        log_sample=True,
    )
