"""
Configuration for the single page scraper
"""

DEFAULT_URL = "https://example.com"

# Browser settings
HEADLESS = True
PAGE_TIMEOUT = 30000  # Navigation timeout in milliseconds
