"""
Firecrawl Scraper

Scrapes a single page, or crawls a site up to a page limit, through the
Firecrawl API instead of a local browser.
"""

import sys
import logging
import argparse
from typing import Any, List, Optional
from firecrawl import FirecrawlApp, ScrapeOptions

from . import config

logger = logging.getLogger(__name__)


def get_firecrawl_client(api_key: Optional[str] = None) -> FirecrawlApp:
    """
    Create and return a Firecrawl client.

    Raises:
        ValueError: If no API key is configured
    """
    api_key = api_key or config.FIRECRAWL_API_KEY
    if not api_key:
        raise ValueError(
            "Firecrawl API key not found. Please set the FIRECRAWL_API_KEY "
            "environment variable or add it to .env.\n\n"
            "Example:\n"
            "export FIRECRAWL_API_KEY='fc-...'\n"
        )
    return FirecrawlApp(api_key=api_key)


def document_url(document: Any) -> Optional[str]:
    """Source URL of a crawled document."""
    metadata = getattr(document, 'metadata', None)
    if isinstance(metadata, dict) and (metadata.get('sourceURL') or metadata.get('url')):
        return metadata.get('sourceURL') or metadata.get('url')
    return getattr(document, 'url', None)


def preview(markdown: Optional[str], length: int = config.PREVIEW_CHARS) -> str:
    return (markdown or "")[:length] + '...'


def scrape_page(url: str, app: Optional[FirecrawlApp] = None):
    """
    Scrape one page as markdown and HTML.

    Returns:
        The Firecrawl scrape response
    """
    app = app or get_firecrawl_client()

    try:
        logger.info(f"Scraping: {url}")
        result = app.scrape_url(url, formats=config.FORMATS)
        logger.info("Scrape successful!")
        return result
    except Exception as e:
        logger.error(f"Error scraping page: {e}")
        raise


def crawl_website(url: str, limit: int = config.DEFAULT_CRAWL_LIMIT, app: Optional[FirecrawlApp] = None):
    """
    Crawl a site starting at ``url``, fetching at most ``limit`` pages.

    Returns:
        The Firecrawl crawl response; its ``data`` holds one document per page
    """
    app = app or get_firecrawl_client()

    try:
        logger.info(f"Crawling: {url} (limit {limit})")
        result = app.crawl_url(
            url,
            limit=limit,
            scrape_options=ScrapeOptions(formats=config.FORMATS),
        )
    except Exception as e:
        logger.error(f"Error crawling website: {e}")
        raise

    documents = result.data or []
    logger.info(f"Crawled {len(documents)} pages")
    for i, document in enumerate(documents, 1):
        logger.info(f"--- Page {i}: {document_url(document)} ---")
        logger.info(preview(document.markdown))

    return result


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return number


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line entry point."""
    arg_parser = argparse.ArgumentParser(
        description='Scrape or crawl pages through the Firecrawl API',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m src.FIRECRAWL.firecrawl_scraper scrape https://example.com
  python -m src.FIRECRAWL.firecrawl_scraper crawl https://example.com 5
        """
    )
    commands = arg_parser.add_subparsers(dest='command', required=True)

    scrape_cmd = commands.add_parser('scrape', help='Scrape a single page')
    scrape_cmd.add_argument('url', nargs='?', default=config.DEFAULT_URL)

    crawl_cmd = commands.add_parser('crawl', help='Crawl a site')
    crawl_cmd.add_argument('url', nargs='?', default=config.DEFAULT_URL)
    crawl_cmd.add_argument('limit', nargs='?', type=positive_int, default=config.CLI_CRAWL_LIMIT,
                           help='Maximum pages to crawl')

    args = arg_parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stderr)]
    )

    try:
        if args.command == 'scrape':
            result = scrape_page(args.url)
            print(result.markdown or "")
        else:
            crawl_website(args.url, limit=args.limit)
    except Exception as e:
        logger.error(f"Script failed: {e}")
        sys.exit(1)

    return 0


if __name__ == "__main__":
    sys.exit(main())
