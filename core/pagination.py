import math
from collections import namedtuple

from django.conf import settings

PageInfo = namedtuple('PageInfo', ['page', 'limit', 'total', 'pages'])


def as_int(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def paginate(qs, page, limit, default_limit):
    """Slice a queryset by page/limit; page and limit below 1 clamp to 1, limit is capped."""
    page = max(as_int(page) or 1, 1)
    limit = as_int(limit) or default_limit
    limit = min(max(limit, 1), settings.SWAP_MAX_PAGE_SIZE)
    total = qs.count()
    offset = (page - 1) * limit
    items = list(qs[offset:offset + limit])
    return items, PageInfo(page=page, limit=limit, total=total, pages=math.ceil(total / limit))
