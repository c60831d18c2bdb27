from __future__ import annotations

import pytest

from src.user_directory.user_directory.users.model import UNSET, Pagination, User, UserUpdate


@pytest.mark.parametrize(
    "total,limit,pages",
    [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (10**18 + 1, 3, (10**18 + 3) // 3)],
)
def test_total_pages_uses_integer_division(total, limit, pages):
    page = Pagination.from_window(limit=limit, offset=0, total=total)

    assert page.total_pages == pages
    assert isinstance(page.total_pages, int)


def test_update_assignments_skip_unset_fields():
    changes = UserUpdate(email=None, is_active=0)

    assert [(a.column, a.value) for a in changes.assignments()] == [("email", None), ("is_active", False)]
    assert UserUpdate().is_empty()
    assert not UNSET


def test_public_dict_has_no_hash():
    user = User(user_id=1, username="alice", password_hash="secret-hash")

    assert "passwordHash" not in user.to_public_dict()
    assert "secret-hash" not in repr(user)
    assert user.without_credentials().password_hash is None
