"""
Configuration for the Firecrawl scrape/crawl scripts
"""

import os
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
load_dotenv(PROJECT_ROOT / ".env")

FIRECRAWL_API_KEY = os.getenv("FIRECRAWL_API_KEY")

DEFAULT_URL = "https://example.com"
FORMATS = ['markdown', 'html']

# Crawl settings
DEFAULT_CRAWL_LIMIT = 10  # Pages per crawl when the caller gives no limit
CLI_CRAWL_LIMIT = 5  # Default for the command line
PREVIEW_CHARS = 200
