"""
Single Page Scraper

Loads one URL in a headless browser and dumps its title, text and links as JSON.
"""

import sys
import json
import logging
import argparse
from typing import Dict, Any, List, Optional
from playwright.sync_api import sync_playwright

from . import config, parser

logger = logging.getLogger(__name__)


def scrape_page(url: str, headless: bool = config.HEADLESS) -> Dict[str, Any]:
    """
    Scrape a single page.

    Args:
        url: Page to load
        headless: Hide the browser window

    Returns:
        Dict with url, title, content and links
    """
    with sync_playwright() as p:
        browser = p.chromium.launch(headless=headless)
        context = browser.new_context()
        page = context.new_page()

        try:
            logger.info(f"Navigating to: {url}")
            page.goto(url, wait_until="networkidle", timeout=config.PAGE_TIMEOUT)

            result = parser.parse_page(page.content(), page.url)
            logger.info(f"Page title: {result['title']}")
            logger.info(f"Found {len(result['links'])} links")
            return result

        except Exception as e:
            logger.error(f"Error scraping page: {e}")
            raise
        finally:
            browser.close()


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line entry point."""
    arg_parser = argparse.ArgumentParser(description='Scrape a single page to JSON')
    arg_parser.add_argument('url', nargs='?', default=config.DEFAULT_URL, help='Page to scrape')
    arg_parser.add_argument('--headful', action='store_true', help='Show the browser window')
    args = arg_parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stderr)]
    )

    try:
        result = scrape_page(args.url, headless=not args.headful)
    except Exception as e:
        logger.error(f"Script failed: {e}")
        sys.exit(1)

    logger.info("Scrape complete!")
    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
