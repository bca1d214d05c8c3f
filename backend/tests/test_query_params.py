import pytest

from core.errors import ValidationError
from core.query_params import normalize_list_query, parse_filters, parse_pagination


@pytest.mark.parametrize("params, expected", [
    ({}, (1, 30)),
    ({"current": "2", "pageSize": "10"}, (2, 10)),
    ({"_start": "20", "_end": "30"}, (3, 10)),
    ({"_start": "0", "_end": "30"}, (1, 30)),
    ({"page": "4", "per_page": "25"}, (4, 25)),
    ({"page": "abc", "per_page": "-5"}, (1, 30)),
    ({"page": "0"}, (1, 30)),
    ({"_start": "10", "_end": "5"}, (1, 30)),
])
def test_parse_pagination(params, expected):
    assert parse_pagination(params) == expected


def test_current_page_size_takes_precedence():
    params = {"current": "3", "pageSize": "5", "_start": "0", "_end": "50", "page": "9", "per_page": "9"}
    assert parse_pagination(params) == (3, 5)


def test_default_limit_is_configurable():
    assert parse_pagination({}, default_limit=50) == (1, 50)


def test_refine_array_filters():
    params = {
        "filters[0][field]": "department",
        "filters[0][operator]": "eq",
        "filters[0][value]": "Physics",
        "filters[1][field]": "_search",
        "filters[1][value]": "doe",
        "filters[2][field]": "name",
        "filters[2][value]": "",
    }
    filters, search = parse_filters(params)
    assert filters == {"department": "Physics"}
    assert search == "doe"


def test_bracket_and_json_filters():
    filters, search = parse_filters({"filter[name]": "Ann", "filter": '{"reg_no": "R1"}'})
    assert filters == {"name": "Ann", "reg_no": "R1"}
    assert search is None


def test_invalid_json_filter():
    with pytest.raises(ValidationError):
        parse_filters({"filter": "not json"})
    with pytest.raises(ValidationError):
        parse_filters({"filter": "[1, 2]"})


def test_search_key_in_any_filter_dialect_sets_search():
    filters, search = parse_filters({"filter[_search]": "doe"})
    assert filters == {}
    assert search == "doe"

    filters, search = parse_filters({"filter": '{"_search": "smith", "name": "Ann"}'})
    assert filters == {"name": "Ann"}
    assert search == "smith"


@pytest.mark.parametrize("raw", [
    '{"name": {"a": 1}}',
    '{"name": ["Ann", "Bob"]}',
    '{"_search": {"columns": ["name"]}}',
])
def test_non_scalar_filter_values_rejected(raw):
    with pytest.raises(ValidationError):
        parse_filters({"filter": raw})


def test_plain_search_param():
    _, search = parse_filters({"_search": "ann"})
    assert search == "ann"


def test_normalize_list_query():
    q = normalize_list_query({
        "_start": "10", "_end": "20",
        "filter[department]": "Maths",
        "sortBy": "name", "sortOrder": "desc",
    })
    assert q.page == 2
    assert q.limit == 10
    assert q.filters == {"department": "Maths"}
    assert q.sort_by == "name"
    assert q.sort_order == "desc"
