"""
List query normalization.

Folds the pagination and filter dialects the admin frontends send into one
ListQuery:

  pagination   current=1&pageSize=30  |  _start=0&_end=30  |  page=1&per_page=30
  filters      filters[0][field]=name&filters[0][value]=Ann
               filter[name]=Ann
               filter={"name": "Ann"}
               _search=ann
  sorting      sortBy=name&sortOrder=desc
"""
import json
import re
from collections.abc import Mapping
from typing import Any, Optional

from core.errors import ValidationError
from models.records import ListQuery, SEARCH_KEY

DEFAULT_PAGE = 1

_FILTERS_ITEM = re.compile(r"^filters\[(\d+)\]\[(\w+)\]$")
_FILTER_FIELD = re.compile(r"^filter\[(.+)\]$")


def _positive_int(value: Any, default: int) -> int:
    try:
        n = int(value)
    except (TypeError, ValueError):
        return default
    return n if n >= 1 else default


def _non_negative_int(value: Any, default: int) -> int:
    try:
        n = int(value)
    except (TypeError, ValueError):
        return default
    return n if n >= 0 else default


def parse_pagination(params: Mapping[str, Any], default_limit: int = 30) -> tuple[int, int]:
    """Return (page, limit), both ≥ 1."""
    if params.get("current") and params.get("pageSize"):
        return (
            _positive_int(params["current"], DEFAULT_PAGE),
            _positive_int(params["pageSize"], default_limit),
        )

    if params.get("_start") is not None and params.get("_end") is not None:
        start = _non_negative_int(params["_start"], 0)
        end = _non_negative_int(params["_end"], default_limit)
        limit = end - start
        if limit < 1:
            limit = default_limit
        return start // limit + 1, limit

    return (
        _positive_int(params.get("page"), DEFAULT_PAGE),
        _positive_int(params.get("per_page"), default_limit),
    )


def _check_scalar(field: str, value: Any) -> None:
    if isinstance(value, (dict, list)):
        raise ValidationError(f"Filter value for '{field}' must be a scalar")


def parse_filters(params: Mapping[str, Any]) -> tuple[dict[str, Any], Optional[str]]:
    """Return (equality filters, search text).

    A `_search` key in any dialect sets the search text; it never becomes an
    equality filter.
    """
    filters: dict[str, Any] = {}
    search: Optional[str] = None

    def add(field: str, value: Any) -> None:
        nonlocal search
        _check_scalar(field, value)
        if field == SEARCH_KEY:
            if value not in (None, ""):
                search = str(value)
        else:
            filters[field] = value

    for key in params:
        m = _FILTERS_ITEM.match(key)
        if not m or m.group(2) != "field":
            continue
        value = params.get(f"filters[{m.group(1)}][value]")
        if not value:
            continue
        add(params[key], value)

    for key in params:
        m = _FILTER_FIELD.match(key)
        if m:
            add(m.group(1), params[key])

    raw = params.get("filter")
    if raw:
        try:
            nested = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValidationError(f"filter must be a JSON object: {e.msg}") from e
        if not isinstance(nested, dict):
            raise ValidationError("filter must be a JSON object")
        for field, value in nested.items():
            add(field, value)

    if params.get(SEARCH_KEY):
        search = params[SEARCH_KEY]

    return filters, search


def normalize_list_query(params: Mapping[str, Any], default_limit: int = 30) -> ListQuery:
    page, limit = parse_pagination(params, default_limit)
    filters, search = parse_filters(params)
    return ListQuery(
        page=page,
        limit=limit,
        filters=filters,
        search=search,
        sort_by=params.get("sortBy") or None,
        sort_order=params.get("sortOrder") or None,
    )
