# utils/pagination.py
import math
from typing import Any, List, Tuple

from sqlalchemy.orm import Query


def paginate(query: Query, page: int, limit: int) -> Tuple[List[Any], int, int]:
     """
     Run a page of ``query``.

     Returns:
          (items, total, total_pages); total_pages is 0 for an empty result
     """
     total = query.order_by(None).count()
     items = query.offset((page - 1) * limit).limit(limit).all()
     total_pages = math.ceil(total / limit) if limit else 0
     return items, total, total_pages


def page_payload(data: list, total: int, page: int, total_pages: int) -> dict:
     """List envelope: {success, data, total, page, totalPages}."""
     return {
          "success": True,
          "data": data,
          "total": total,
          "page": page,
          "totalPages": total_pages,
     }
