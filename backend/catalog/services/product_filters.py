"""
商品查询构造 - 过滤条件、排序与分页计算
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from pymongo import ASCENDING, DESCENDING

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
# keeps skip within the store's int64 range
MAX_PAGE = 1_000_000_000

SORTABLE_FIELDS = {'_id', 'name', 'price', 'category', 'gender', 'created_at', 'updated_at'}

_LEADING_INT = re.compile(r'\s*([+-]?\d+)')


def parse_positive_int(raw_value: Any, default: int, maximum: Optional[int] = None) -> int:
    """Parse the leading integer of a query param ("2.5" -> 2, "12abc" -> 12).

    Values without a leading integer, or that are not positive, fall back to default.
    """
    if raw_value is None:
        return default
    match = _LEADING_INT.match(str(raw_value))
    if not match:
        return default
    parsed = int(match.group(1))
    if parsed <= 0:
        return default
    if maximum is not None:
        parsed = min(parsed, maximum)
    return parsed


def _clean(value: Any) -> str:
    if value is None:
        return ''
    return str(value).strip()


def build_product_filter(owner_id: str, category: Optional[str] = None,
                         gender: Optional[str] = None,
                         name: Optional[str] = None) -> Dict[str, Any]:
    """
    构造 MongoDB 过滤条件

    owner_id 永远存在; category/gender 为精确匹配（不校验枚举）;
    name 为不区分大小写的子串匹配，用户输入按字面处理。
    """
    query: Dict[str, Any] = {'owner_id': owner_id}

    category = _clean(category)
    if category:
        query['category'] = category

    gender = _clean(gender)
    if gender:
        query['gender'] = gender

    name = _clean(name)
    if name:
        query['name'] = {'$regex': re.escape(name), '$options': 'i'}

    return query


def build_sort(sort_field: Optional[str], order: Optional[str] = None) -> Optional[List[Tuple[str, int]]]:
    """Single-key sort spec, or None to leave ordering to the store (unspecified)."""
    sort_field = _clean(sort_field)
    if not sort_field or sort_field not in SORTABLE_FIELDS:
        return None
    direction = DESCENDING if _clean(order).lower() == 'desc' else ASCENDING
    return [(sort_field, direction)]


def compute_offset(page: int, page_size: int) -> int:
    return (page - 1) * page_size


def compute_total_pages(total_items: int, page_size: int) -> int:
    if total_items <= 0:
        return 0
    return math.ceil(total_items / page_size)


@dataclass
class ProductQuery:
    """List request: optional filters plus pagination."""
    category: Optional[str] = None
    gender: Optional[str] = None
    name: Optional[str] = None
    sort: Optional[str] = None
    order: Optional[str] = None
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE

    @classmethod
    def from_args(cls, args, max_page_size: Optional[int] = None,
                  default_page_size: int = DEFAULT_PAGE_SIZE) -> 'ProductQuery':
        return cls(
            category=args.get('category'),
            gender=args.get('gender'),
            name=args.get('name'),
            sort=args.get('sort'),
            order=args.get('order'),
            page=parse_positive_int(args.get('page'), DEFAULT_PAGE, maximum=MAX_PAGE),
            page_size=parse_positive_int(args.get('pageSize'), default_page_size, maximum=max_page_size),
        )

    def to_filter(self, owner_id: str) -> Dict[str, Any]:
        return build_product_filter(owner_id, self.category, self.gender, self.name)

    def to_sort(self) -> Optional[List[Tuple[str, int]]]:
        return build_sort(self.sort, self.order)

    @property
    def offset(self) -> int:
        return compute_offset(self.page, self.page_size)
