from dataclasses import dataclass
from typing import Dict, List


@dataclass
class SearchResultDto:
    videos: List[Dict]
    total_results: int
    total_pages: int
    current_page: int
    has_next_page: bool
    has_prev_page: bool
