"""Tests for pagination helpers and the list envelope."""

import math

import pytest

from blogcms.normalizers.pagination import normalize_pagination
from blogcms.utils.pagination import clamp_pagination, total_pages


@pytest.mark.parametrize("total", [0, 1, 19, 20, 21, 99, 100, 101, 1000])
@pytest.mark.parametrize("limit", [1, 7, 20, 100])
def test_total_pages_is_ceiling(total, limit):
    assert total_pages(total, limit) == math.ceil(total / limit)


def test_clamp_pagination_defaults_and_bounds(app):
    assert clamp_pagination(None, None) == (1, 20)
    assert clamp_pagination(0, 0) == (1, 20)
    assert clamp_pagination(-3, 5) == (1, 5)
    assert clamp_pagination(2, 1000) == (2, 100)


def test_envelope_flags():
    result = {"items": [1, 2], "total": 5, "page": 2, "limit": 2, "total_pages": 3}

    envelope = normalize_pagination(result, lambda x: {"n": x})

    assert envelope["items"] == [{"n": 1}, {"n": 2}]
    assert envelope["pagination"] == {
        "page": 2,
        "limit": 2,
        "total": 5,
        "totalPages": 3,
        "hasNext": True,
        "hasPrev": True,
    }


def test_empty_envelope():
    result = {"items": [], "total": 0, "page": 1, "limit": 20, "total_pages": 0}

    envelope = normalize_pagination(result, dict)

    assert envelope["items"] == []
    assert envelope["pagination"]["hasNext"] is False
    assert envelope["pagination"]["hasPrev"] is False
