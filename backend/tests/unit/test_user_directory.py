"""
Unit Tests for UserDirectory

Tests member record storage, soft delete and search.
"""

import json
import uuid

import pytest

from memberhub.middleware import DuplicateEmailError, UserNotFoundError
from memberhub.services import UserDirectory


@pytest.fixture
def directory(tmp_path):
    return UserDirectory(base_path=str(tmp_path))


def test_create_user_writes_json_document(directory):
    user = directory.create_user("Ada Lovelace", "ada@example.org")

    path = directory.users_path / f"{user.id}.json"
    assert path.is_file()
    document = json.loads(path.read_text())
    assert document["id"] == user.id
    assert document["name"] == "Ada Lovelace"
    assert document["email"] == "ada@example.org"
    assert document["avatarPath"] is None
    assert document["deletedAt"] is None


def test_duplicate_email_is_rejected_case_insensitively(directory):
    directory.create_user("Ada Lovelace", "ada@example.org")
    with pytest.raises(DuplicateEmailError):
        directory.create_user("Ada Again", "ADA@example.org")


def test_email_can_be_reused_after_soft_delete(directory):
    first = directory.create_user("Ada Lovelace", "ada@example.org")
    directory.soft_delete_user(first.id)

    second = directory.create_user("Ada Lovelace", "ada@example.org")
    assert second.id != first.id


def test_get_user(directory):
    user = directory.create_user("Grace Hopper", "grace@example.org")
    assert directory.get_user(user.id) == user
    assert directory.get_user(str(uuid.uuid4())) is None
    assert directory.get_user("not-a-uuid") is None


def test_soft_deleted_user_is_hidden_but_kept(directory):
    user = directory.create_user("Grace Hopper", "grace@example.org")
    deleted = directory.soft_delete_user(user.id)

    assert deleted.deletedAt is not None
    assert directory.get_user(user.id) is None
    assert (directory.users_path / f"{user.id}.json").exists()

    with pytest.raises(UserNotFoundError):
        directory.soft_delete_user(user.id)


def test_set_avatar_path(directory):
    user = directory.create_user("Grace Hopper", "grace@example.org")

    updated = directory.set_avatar_path(user.id, f"avatars/{user.id}")
    assert directory.get_user(user.id).avatarPath == f"avatars/{user.id}"
    assert updated.updatedAt >= user.updatedAt

    directory.set_avatar_path(user.id, None)
    assert directory.get_user(user.id).avatarPath is None


def test_set_avatar_path_unknown_user(directory):
    with pytest.raises(UserNotFoundError):
        directory.set_avatar_path(str(uuid.uuid4()), "avatars/x")


class TestSearch:
    """Tests for search_users."""

    @pytest.fixture
    def populated(self, directory):
        directory.create_user("Charlie Brown", "charlie@peanuts.example")
        directory.create_user("alice Liddell", "alice@wonderland.example")
        directory.create_user("Bob Builder", "bob@site.example")
        gone = directory.create_user("Alice Deleted", "deleted@wonderland.example")
        directory.soft_delete_user(gone.id)
        return directory

    def test_empty_query_returns_all_live_sorted(self, populated):
        result = populated.search_users()
        names = [u.name for u in result["content"]]
        assert names == ["alice Liddell", "Bob Builder", "Charlie Brown"]
        assert result["totalElements"] == 3

    def test_case_insensitive_name_match(self, populated):
        result = populated.search_users("ALICE")
        assert [u.email for u in result["content"]] == ["alice@wonderland.example"]

    def test_email_substring_match(self, populated):
        result = populated.search_users("PEANUTS")
        assert [u.name for u in result["content"]] == ["Charlie Brown"]

    def test_no_match(self, populated):
        result = populated.search_users("zed")
        assert result["content"] == []
        assert result["totalPages"] == 0
        assert result["first"] and result["last"]

    def test_pagination(self, populated):
        first_page = populated.search_users(page=0, size=2)
        second_page = populated.search_users(page=1, size=2)

        assert len(first_page["content"]) == 2
        assert first_page["totalPages"] == 2
        assert first_page["first"] and not first_page["last"]
        assert [u.name for u in second_page["content"]] == ["Charlie Brown"]
        assert second_page["last"] and not second_page["first"]

    def test_invalid_paging(self, directory):
        with pytest.raises(ValueError):
            directory.search_users(page=-1)
        with pytest.raises(ValueError):
            directory.search_users(size=0)


def test_list_avatar_owners(directory):
    with_avatar = directory.create_user("Has Picture", "pic@example.org")
    directory.create_user("No Picture", "nopic@example.org")
    directory.set_avatar_path(with_avatar.id, f"avatars/{with_avatar.id}")

    assert directory.list_avatar_owners() == {with_avatar.id: f"avatars/{with_avatar.id}"}
