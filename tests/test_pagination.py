import pytest

from promptchat.modules.common.pagination import PageRequest, Pagination


@pytest.mark.parametrize(
    ("page", "limit", "total", "returned", "expected"),
    [
        (1, 10, 0, 0, (0, False, False)),
        (1, 10, 10, 10, (1, False, False)),
        (1, 10, 11, 10, (2, True, False)),
        (2, 10, 11, 1, (2, False, True)),
        (3, 5, 40, 5, (8, True, True)),
    ],
)
def test_build(page, limit, total, returned, expected):
    pagination = Pagination.build(PageRequest(page=page, limit=limit), total, returned)
    assert (pagination.pages, pagination.has_next, pagination.has_prev) == expected
    assert (pagination.page, pagination.limit, pagination.total) == (page, limit, total)


def test_offset():
    assert PageRequest(page=1, limit=10).offset == 0
    assert PageRequest(page=4, limit=25).offset == 75
