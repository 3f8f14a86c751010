from typing import Any, List, Optional


def build_page(data: List[Any], next_offset: Optional[int], total_num: int) -> dict:
    """
    Build a paginated payload

    @param data: items of the current page
    @param next_offset: offset of the next page, None on the last page
    @param total_num: total number of items
    @return: page dict
    """
    return {
        "data": data,
        "total_num": total_num,
        "next_offset": next_offset,
    }


def get_next_offset(offset: int, limit: int, total_num: int) -> Optional[int]:
    """
    Offset of the page after [offset, offset + limit), None if there is none
    """
    end = offset + limit
    return end if end < total_num else None
