"""
ABC Practitioner Directory Scraper

Scrapes certified practitioners from https://www.abcop.org/abc-directory,
one State search at a time, and saves them to a single CSV file.
"""

import sys
import json
import time
import logging
import argparse
from dataclasses import replace
from pathlib import Path
from datetime import datetime
from typing import List, Optional, Tuple
from playwright.sync_api import sync_playwright, Page, TimeoutError as PlaywrightTimeoutError

from . import config, parser, export
from .config import ScraperSettings
from .models import QueryParameter, DirectoryRecord, ABCScrapingMetadata

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def setup_logging() -> logging.FileHandler:
    """
    Log to a timestamped file under logs/ABC, and to the console unless a
    caller (e.g. the batch runner) has already configured it.
    """
    config.LOG_DIR.mkdir(parents=True, exist_ok=True)
    log_file = config.LOG_DIR / f"abc_scraper_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(
            level=logging.INFO,
            format=LOG_FORMAT,
            handlers=[logging.StreamHandler()]
        )
    if root.getEffectiveLevel() > logging.INFO:
        root.setLevel(logging.INFO)

    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(file_handler)
    return file_handler


def close_logging(file_handler: logging.FileHandler) -> None:
    logging.getLogger().removeHandler(file_handler)
    file_handler.close()


def wait_for_results(page: Page, timeout: int) -> bool:
    """
    Wait until the first result card has rendered.

    Returns:
        False if no card showed up within ``timeout`` milliseconds
    """
    try:
        page.wait_for_selector(config.CARD_SELECTOR, state='attached', timeout=timeout)
        return True
    except PlaywrightTimeoutError:
        return False


def wait_for_page_change(page: Page, previous_text: Optional[str], timeout: int) -> bool:
    """Wait until the first card no longer shows ``previous_text``."""
    try:
        page.wait_for_function(
            """([selector, previous]) => {
                const card = document.querySelector(selector);
                return card !== null && card.textContent !== previous;
            }""",
            arg=[config.CARD_SELECTOR, previous_text],
            timeout=timeout,
        )
        return True
    except PlaywrightTimeoutError:
        logger.warning(f"Results did not change within {timeout} ms, extracting anyway")
        return False


def search_state(page: Page, state: QueryParameter, settings: ScraperSettings) -> None:
    """Load the directory fresh, pick the state and submit the search."""
    page.goto(config.DIRECTORY_URL, wait_until="networkidle", timeout=settings.page_timeout)
    page.wait_for_timeout(settings.settle_delay)

    state_select = page.locator(config.STATE_SELECT_SELECTOR).first
    state_select.select_option(value=state.code)

    search_button = page.locator(config.SEARCH_BUTTON_SELECTOR).last
    search_button.click()

    wait_for_results(page, settings.results_timeout)


def count_results(page: Page) -> int:
    return page.locator(config.CARD_SELECTOR).count()


def count_pages(page: Page) -> int:
    """Number of result pages; a single page has no pagination buttons."""
    return max(1, page.locator(config.PAGINATION_SELECTOR).count())


def click_page(page: Page, page_index: int, settings: ScraperSettings) -> bool:
    """
    Click the pagination button for ``page_index`` (0-based) and wait for the new cards.

    Returns:
        False if there is no button at that index
    """
    buttons = page.locator(config.PAGINATION_SELECTOR)
    if page_index >= buttons.count():
        logger.warning(f"No pagination button for page {page_index + 1}")
        return False

    previous_text = page.locator(config.CARD_SELECTOR).first.text_content(timeout=settings.results_timeout)
    buttons.nth(page_index).click()
    wait_for_page_change(page, previous_text, settings.results_timeout)
    return True


def extract_page(page: Page) -> List[DirectoryRecord]:
    """Parse every card currently rendered on the page."""
    return parser.parse_cards(page.content())


def scrape_state(
    page: Page,
    state: QueryParameter,
    settings: ScraperSettings,
    records: List[DirectoryRecord]
) -> int:
    """
    Search one state and walk all of its result pages.

    Records are appended to ``records`` page by page, so whatever was
    extracted before a failure stays in the accumulator.

    Args:
        page: Playwright page object
        state: State to search
        settings: Run settings
        records: Accumulator shared across the whole run

    Returns:
        Number of records extracted for this state
    """
    search_state(page, state, settings)

    if count_results(page) == 0:
        logger.info(f"No results found for {state.name}")
        return 0

    logger.info(f"Found results for {state.name}")

    total_pages = count_pages(page)
    logger.info(f"Total pages: {total_pages}")

    pages_to_scrape = total_pages
    if settings.max_pages is not None:
        pages_to_scrape = min(total_pages, settings.max_pages)
        if pages_to_scrape < total_pages:
            logger.info(f"Limiting to first {pages_to_scrape} pages")

    state_start = len(records)

    individuals = extract_page(page)
    logger.info(f"Page 1: Extracted {len(individuals)} individuals")
    records.extend(individuals)

    for page_index in range(1, pages_to_scrape):
        logger.info(f"Processing page {page_index + 1}...")
        click_page(page, page_index, settings)

        individuals = extract_page(page)
        logger.info(f"Page {page_index + 1}: Extracted {len(individuals)} individuals")
        records.extend(individuals)

    state_total = len(records) - state_start
    logger.info(f"{state.name} complete: {state_total} total individuals")

    if settings.log_sample and state_total > 0:
        logger.info("Sample individual:")
        logger.info(json.dumps(records[state_start].to_dict(), indent=2, ensure_ascii=False))

    return state_total


def scrape_directory(page: Page, settings: ScraperSettings) -> Tuple[List[DirectoryRecord], ABCScrapingMetadata]:
    """
    Run the state-by-state scrape on an already open page.

    A state that raises is logged and skipped; the run carries on with the next one.
    """
    start_time = time.time()
    records: List[DirectoryRecord] = []
    metadata = ABCScrapingMetadata(states_searched=[state.code for state in settings.states])

    for i, state in enumerate(settings.states, 1):
        logger.info("")
        logger.info(f"[{i}/{len(settings.states)}] Processing {state.name} ({state.code})")

        try:
            count = scrape_state(page, state, settings, records)
            if count:
                metadata.states_with_results.append(state.code)
            else:
                metadata.states_without_results.append(state.code)
        except Exception as e:
            error_msg = f"Error processing {state.name}: {e}"
            logger.error(error_msg)
            metadata.states_failed.append(state.code)
            metadata.errors.append(error_msg)

    metadata.records_extracted = len(records)
    metadata.duration_seconds = time.time() - start_time
    return records, metadata


def save_metadata(metadata: ABCScrapingMetadata, directory: Path) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    metadata_file = directory / f"metadata_{datetime.now().strftime('%Y%m%d_%H%M%S')}.json"
    with open(metadata_file, 'w', encoding='utf-8') as f:
        json.dump(metadata.to_dict(), f, indent=2, ensure_ascii=False)
    return metadata_file


def run_scraper(settings: ScraperSettings, save_json: bool = False) -> List[DirectoryRecord]:
    """Launch the browser, scrape every configured state and write the output files."""
    logger.info("=" * 80)
    logger.info("ABC Directory Scraper")
    logger.info("=" * 80)
    logger.info(f"Started: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    logger.info(f"Target: {config.DIRECTORY_URL}")
    logger.info(f"States: {len(settings.states)}")
    page_limit = settings.max_pages if settings.max_pages is not None else 'none'
    logger.info(f"Page limit: {page_limit}")
    logger.info(f"Headless: {settings.headless}")
    logger.info(f"Output: {settings.output_file}")
    logger.info("")

    with sync_playwright() as p:
        browser = p.chromium.launch(headless=settings.headless)
        page = browser.new_page()

        try:
            records, metadata = scrape_directory(page, settings)
        finally:
            browser.close()
            logger.info("Browser closed")

    export.save_csv(records, settings.output_file)
    if save_json:
        export.save_json(records, settings.output_file.with_suffix('.json'))
    metadata_file = save_metadata(metadata, settings.output_file.parent)

    logger.info("")
    logger.info("=" * 80)
    logger.info("Scraping Complete")
    logger.info("=" * 80)
    logger.info(f"Duration: {metadata.duration_seconds:.1f} seconds")
    logger.info(f"States with results: {len(metadata.states_with_results)}")
    logger.info(f"States without results: {len(metadata.states_without_results)}")
    logger.info(f"States failed: {len(metadata.states_failed)}")
    logger.info(f"Total individuals extracted: {len(records)}")
    logger.info(f"Metadata saved to: {metadata_file}")
    logger.info("=" * 80)

    return records


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return number


def build_settings(args: argparse.Namespace) -> ScraperSettings:
    settings = config.smoke_settings() if args.test else config.default_settings()

    if args.states:
        settings = replace(settings, states=tuple(config.STATES_BY_CODE[code] for code in args.states))
    if args.max_pages is not None:
        settings = replace(settings, max_pages=args.max_pages)
    if args.headful:
        settings = replace(settings, headless=False)
    if args.output:
        settings = replace(settings, output_file=Path(args.output))

    return settings


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line entry point."""
    arg_parser = argparse.ArgumentParser(
        description='Scrape the ABC practitioner directory to CSV',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Scrape every state
  python -m src.ABC.abc_scraper

  # Quick run on two small states with a visible browser
  python -m src.ABC.abc_scraper --test

  # Selected states, first page only
  python -m src.ABC.abc_scraper --states DE VT --max-pages 1
        """
    )
    arg_parser.add_argument('--test', '-t', action='store_true',
                            help='Smoke run: Delaware and Vermont, visible browser, 2 pages max')
    arg_parser.add_argument('--states', '-s', nargs='+', choices=sorted(config.STATES_BY_CODE),
                            metavar='CODE', help='State codes to scrape (default: all)')
    arg_parser.add_argument('--max-pages', type=positive_int, help='Maximum result pages per state')
    arg_parser.add_argument('--headful', action='store_true', help='Show the browser window')
    arg_parser.add_argument('--output', '-o', help='CSV file to write')
    arg_parser.add_argument('--json', action='store_true', help='Also save the records as JSON')

    args = arg_parser.parse_args(argv)
    settings = build_settings(args)

    file_handler = setup_logging()
    logger.info(f"Log file: {file_handler.baseFilename}")

    try:
        run_scraper(settings, save_json=args.json)
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        sys.exit(1)
    finally:
        close_logging(file_handler)

    return 0


if __name__ == "__main__":
    sys.exit(main())
