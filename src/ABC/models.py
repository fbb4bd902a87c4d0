"""
Data models for the ABC practitioner directory scraper
"""

from dataclasses import dataclass, field, asdict
from typing import Optional, List
from datetime import datetime


@dataclass(frozen=True)
class QueryParameter:
    """One value of the directory's State dropdown"""
    code: str  # e.g., "DE"
    name: str  # e.g., "Delaware"


@dataclass
class DirectoryRecord:
    """One practitioner card from the directory results"""
    name: str = ""
    header_location: str = ""  # e.g., "Dover, DE"

    # Body block
    organization: Optional[str] = None  # "Not Available" is a real value
    address_line_1: Optional[str] = None
    address_line_2: Optional[str] = None
    phone: Optional[str] = None
    fax: Optional[str] = None
    certification_details: Optional[str] = None

    def to_dict(self):
        """Convert to dictionary"""
        return asdict(self)


@dataclass
class ABCScrapingMetadata:
    """Metadata about the scraping session"""
    scrape_date: str = field(default_factory=lambda: datetime.now().isoformat())
    states_searched: List[str] = field(default_factory=list)
    states_with_results: List[str] = field(default_factory=list)
    states_without_results: List[str] = field(default_factory=list)
    states_failed: List[str] = field(default_factory=list)
    records_extracted: int = 0
    errors: List[str] = field(default_factory=list)
    duration_seconds: float = 0.0

    def to_dict(self):
        """Convert to dictionary"""
        return asdict(self)
