# temu_seller/utils/pagination.py
from typing import Tuple

def parse_response_total(current_page: int, page_size: int, total: int) -> Tuple[int, int, bool]:
    """Derive paging info from a list response.

    Args:
        current_page (int): Requested page, 1-based. 0 is treated as 1.
        page_size (int): Items per page.
        total (int): Total item count reported upstream.

    Returns:
        Tuple[int, int, bool]: (total, total_pages, is_last_page).
    """
    if current_page == 0:
        current_page = 1
    if page_size <= 0:
        raise ValueError("page_size must be positive")

    # Exact multiples of page_size report one trailing empty page.
    total_pages = total // page_size + 1
    return total, total_pages, current_page >= total_pages
