"""Zero-based page slicing shared by the record stores."""

import math
from typing import Sequence


def paginate(items: Sequence, page: int, size: int) -> dict:
    """
    Slice an already-sorted sequence into one page.

    Returns:
        dict: content, page, size, totalElements, totalPages, first, last

    Raises:
        ValueError: If page is negative or size is not positive
    """
    if page < 0:
        raise ValueError(f"Page number must be >= 0, received: {page}")
    if size <= 0:
        raise ValueError(f"Page size must be > 0, received: {size}")

    total = len(items)
    total_pages = math.ceil(total / size)
    start = page * size
    return {
        "content": list(items[start:start + size]),
        "page": page,
        "size": size,
        "totalElements": total,
        "totalPages": total_pages,
        "first": page == 0,
        "last": total_pages <= 1 or page >= total_pages - 1,
    }
