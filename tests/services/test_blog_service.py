"""Tests for the blog create/remove sagas and the read-side queries."""

from uuid import uuid4

import pytest
from pydantic import SecretStr
from structlog.testing import capture_logs

from blog_api.errors import (
    BlogNotFoundError,
    BlogPersistenceFailedError,
    ClientInputError,
    InvalidIdentifierError,
    OwnershipSyncFailedError,
    RemovalFailedError,
    UnauthorizedError,
)
from blog_api.models import UserDB
from blog_api.schemas.auth import SignUp
from blog_api.schemas.blog import BlogCreate, BlogUpdate
from blog_api.services import AuthService, BlogService, SagaState
from fakes import InMemoryBlogStore, InMemoryUserDirectory


def new_blog(
    title: str = "Intro to asyncio",
    content: str = "Event loops.",
    category: str = "python",
) -> BlogCreate:
    return BlogCreate(title=title, content=content, category=category)


class TestCreate:
    async def test_persists_and_links(
        self,
        blog_service: BlogService,
        blog_store: InMemoryBlogStore,
        ann: UserDB,
        blog_in: BlogCreate,
        calls: list[str],
    ) -> None:
        blog = await blog_service.create(blog_in, ann.id)

        assert blog.owner_id == ann.id
        assert blog.id in blog_store.blogs
        assert ann.owned_blog_ids == [str(blog.id)]
        assert calls == ["blog.create", "user.add"]

    async def test_links_keep_creation_order(
        self,
        blog_service: BlogService,
        ann: UserDB,
    ) -> None:
        first = await blog_service.create(new_blog("First"), ann.id)
        second = await blog_service.create(new_blog("Second"), ann.id)

        assert ann.owned_blog_ids == [str(first.id), str(second.id)]

    async def test_persist_failure(
        self,
        blog_service: BlogService,
        blog_store: InMemoryBlogStore,
        ann: UserDB,
        blog_in: BlogCreate,
        calls: list[str],
    ) -> None:
        blog_store.fail_create = True

        with pytest.raises(BlogPersistenceFailedError) as exc_info:
            await blog_service.create(blog_in, ann.id)

        assert exc_info.value.status_code == 500
        assert calls == ["blog.create"]
        assert ann.owned_blog_ids == []

    async def test_link_failure_is_compensated(
        self,
        blog_service: BlogService,
        blog_store: InMemoryBlogStore,
        user_store: InMemoryUserDirectory,
        ann: UserDB,
        blog_in: BlogCreate,
        calls: list[str],
    ) -> None:
        user_store.fail_add = True

        with capture_logs() as cap_logs, pytest.raises(OwnershipSyncFailedError):
            await blog_service.create(blog_in, ann.id)

        assert calls == ["blog.create", "user.add", "blog.delete"]
        assert blog_store.blogs == {}
        assert ann.owned_blog_ids == []
        states = [entry.get("state") for entry in cap_logs if entry["event"] == "blog_create"]
        assert SagaState.LINK_FAILED in states
        assert SagaState.COMPENSATED in states

    async def test_missing_owner_is_compensated(
        self,
        blog_service: BlogService,
        blog_store: InMemoryBlogStore,
        blog_in: BlogCreate,
    ) -> None:
        with pytest.raises(OwnershipSyncFailedError):
            await blog_service.create(blog_in, uuid4())

        assert blog_store.blogs == {}

    async def test_compensation_failure_is_reported(
        self,
        blog_service: BlogService,
        blog_store: InMemoryBlogStore,
        user_store: InMemoryUserDirectory,
        ann: UserDB,
        blog_in: BlogCreate,
    ) -> None:
        user_store.fail_add = True
        blog_store.fail_delete = True

        with capture_logs() as cap_logs, pytest.raises(OwnershipSyncFailedError) as exc_info:
            await blog_service.create(blog_in, ann.id)

        assert exc_info.value.detail == "Failed to update user blogs"
        [orphan] = blog_store.blogs.values()
        assert str(orphan.id) not in ann.owned_blog_ids
        failures = [
            entry for entry in cap_logs if entry["event"] == "blog_create_compensation_failed"
        ]
        assert len(failures) == 1
        assert failures[0]["log_level"] == "critical"
        assert failures[0]["state"] == SagaState.COMPENSATION_FAILED
        assert failures[0]["blog_id"] == str(orphan.id)


class TestRemove:
    async def test_deletes_then_unlinks(
        self,
        blog_service: BlogService,
        blog_store: InMemoryBlogStore,
        ann: UserDB,
        blog_in: BlogCreate,
        calls: list[str],
    ) -> None:
        blog = await blog_service.create(blog_in, ann.id)
        calls.clear()

        await blog_service.remove(blog.id, ann.id)

        assert calls == ["blog.delete", "user.remove"]
        assert blog.id not in blog_store.blogs
        assert ann.owned_blog_ids == []

    async def test_missing_blog(
        self,
        blog_service: BlogService,
        ann: UserDB,
        calls: list[str],
    ) -> None:
        with pytest.raises(BlogNotFoundError) as exc_info:
            await blog_service.remove(uuid4(), ann.id)

        assert exc_info.value.status_code == 404
        assert calls == ["blog.delete"]

    async def test_delete_failure_keeps_reference(
        self,
        blog_service: BlogService,
        blog_store: InMemoryBlogStore,
        ann: UserDB,
        blog_in: BlogCreate,
    ) -> None:
        blog = await blog_service.create(blog_in, ann.id)
        blog_store.fail_delete = True

        with pytest.raises(RemovalFailedError):
            await blog_service.remove(blog.id, ann.id)

        assert blog.id in blog_store.blogs
        assert ann.owned_blog_ids == [str(blog.id)]

    async def test_unlink_failure_leaves_dangling_reference(
        self,
        blog_service: BlogService,
        blog_store: InMemoryBlogStore,
        user_store: InMemoryUserDirectory,
        ann: UserDB,
        blog_in: BlogCreate,
    ) -> None:
        blog = await blog_service.create(blog_in, ann.id)
        user_store.fail_remove = True

        with capture_logs() as cap_logs, pytest.raises(RemovalFailedError) as exc_info:
            await blog_service.remove(blog.id, ann.id)

        assert exc_info.value.detail == "Failed to remove blog"
        assert blog.id not in blog_store.blogs
        assert ann.owned_blog_ids == [str(blog.id)]
        assert any(entry["event"] == "blog_remove_unlink_failed" for entry in cap_logs)
        # The dangling id no longer resolves
        assert await blog_service.owned_blogs(ann) == []


class TestFindById:
    async def test_with_owner_summary(
        self,
        blog_service: BlogService,
        ann: UserDB,
        blog_in: BlogCreate,
    ) -> None:
        blog = await blog_service.create(blog_in, ann.id)

        found = await blog_service.find_by_id(str(blog.id))

        assert found.id == blog.id
        assert found.title == blog_in.title
        assert found.owner is not None
        assert found.owner.email == ann.email
        assert found.updated_at == "No updates"

    async def test_malformed_id(self, blog_service: BlogService) -> None:
        with pytest.raises(InvalidIdentifierError) as exc_info:
            await blog_service.find_by_id("not-an-id")

        assert exc_info.value.status_code == 400

    async def test_missing_blog(self, blog_service: BlogService) -> None:
        with pytest.raises(BlogNotFoundError):
            await blog_service.find_by_id(uuid4())


class TestAuthorizeOwnerAction:
    async def test_owner(self, blog_service: BlogService, ann: UserDB, blog_in: BlogCreate) -> None:
        blog = await blog_service.create(blog_in, ann.id)

        assert await blog_service.authorize_owner_action(blog.id, ann.id) is True

    async def test_other_user(
        self,
        blog_service: BlogService,
        ann: UserDB,
        bob: UserDB,
        blog_in: BlogCreate,
    ) -> None:
        blog = await blog_service.create(blog_in, ann.id)

        assert await blog_service.authorize_owner_action(blog.id, bob.id) is False

    @pytest.mark.parametrize("blog_id", ["not-an-id", str(uuid4())])
    async def test_unresolvable_blog(
        self,
        blog_service: BlogService,
        ann: UserDB,
        blog_id: str,
    ) -> None:
        with pytest.raises(UnauthorizedError) as exc_info:
            await blog_service.authorize_owner_action(blog_id, ann.id)

        assert exc_info.value.status_code == 401

    async def test_anonymous_requester(
        self,
        blog_service: BlogService,
        ann: UserDB,
        blog_in: BlogCreate,
    ) -> None:
        blog = await blog_service.create(blog_in, ann.id)

        with pytest.raises(UnauthorizedError):
            await blog_service.authorize_owner_action(blog.id, None)

    async def test_store_error(
        self,
        blog_service: BlogService,
        blog_store: InMemoryBlogStore,
        ann: UserDB,
        blog_in: BlogCreate,
    ) -> None:
        blog = await blog_service.create(blog_in, ann.id)
        blog_store.fail_get = True

        with pytest.raises(UnauthorizedError):
            await blog_service.authorize_owner_action(blog.id, ann.id)


class TestQueries:
    async def test_paginate(self, blog_service: BlogService, ann: UserDB) -> None:
        for n in range(15):
            await blog_service.create(new_blog(f"Post {n:02d}"), ann.id)

        page = await blog_service.paginate(page=2, limit=10)

        assert page.total == 15
        assert len(page.data) == 5
        # Newest first: page two holds the five oldest posts
        assert [blog.title for blog in page.data] == [f"Post {n:02d}" for n in range(4, -1, -1)]

    async def test_paginate_past_the_end(self, blog_service: BlogService, ann: UserDB) -> None:
        await blog_service.create(new_blog(), ann.id)

        page = await blog_service.paginate(page=3, limit=10)

        assert page.data == []
        assert page.total == 1

    @pytest.mark.parametrize(("page", "limit"), [(0, 10), (1, 0), (-1, 5)])
    async def test_paginate_rejects_non_positive(
        self,
        blog_service: BlogService,
        page: int,
        limit: int,
    ) -> None:
        with pytest.raises(ClientInputError):
            await blog_service.paginate(page=page, limit=limit)

    async def test_list_all_attaches_owners(
        self,
        blog_service: BlogService,
        ann: UserDB,
        bob: UserDB,
    ) -> None:
        await blog_service.create(new_blog("By Ann"), ann.id)
        await blog_service.create(new_blog("By Bob"), bob.id)

        blogs = await blog_service.list_all()

        assert {blog.title: blog.owner.name for blog in blogs if blog.owner} == {
            "By Ann": "Ann",
            "By Bob": "Bob",
        }

    async def test_search_is_case_insensitive(self, blog_service: BlogService, ann: UserDB) -> None:
        await blog_service.create(new_blog("Python tips", "Use generators."), ann.id)
        await blog_service.create(new_blog("Rust notes", "Borrowing and PYTHON interop."), ann.id)
        await blog_service.create(new_blog("Cooking", "Pasta and sauces."), ann.id)

        found = await blog_service.search("  python ")

        assert {blog.title for blog in found} == {"Python tips", "Rust notes"}

    @pytest.mark.parametrize("keyword", [None, "", "   "])
    async def test_search_requires_keyword(
        self,
        blog_service: BlogService,
        keyword: str | None,
    ) -> None:
        with pytest.raises(ClientInputError, match="Keyword is required"):
            await blog_service.search(keyword)

    async def test_filter(self, blog_service: BlogService, ann: UserDB, bob: UserDB) -> None:
        await blog_service.create(new_blog("Ann 1", category="python"), ann.id)
        await blog_service.create(new_blog("Ann 2", category="rust"), ann.id)
        await blog_service.create(new_blog("Bob 1", category="python"), bob.id)

        by_category = await blog_service.filter_by(category="python")
        by_owner = await blog_service.filter_by(owner=str(ann.id))
        by_both = await blog_service.filter_by(category="python", owner=str(bob.id))
        unfiltered = await blog_service.filter_by()

        assert {blog.title for blog in by_category} == {"Ann 1", "Bob 1"}
        assert {blog.title for blog in by_owner} == {"Ann 1", "Ann 2"}
        assert [blog.title for blog in by_both] == ["Bob 1"]
        assert len(unfiltered) == 3

    async def test_filter_rejects_malformed_owner(self, blog_service: BlogService) -> None:
        with pytest.raises(InvalidIdentifierError, match="Invalid owner ID"):
            await blog_service.filter_by(owner="nope")

    async def test_update(
        self,
        blog_service: BlogService,
        ann: UserDB,
        blog_in: BlogCreate,
    ) -> None:
        blog = await blog_service.create(blog_in, ann.id)

        updated = await blog_service.update(blog.id, BlogUpdate(title="Renamed"))

        assert updated.title == "Renamed"
        assert updated.content == blog_in.content
        assert updated.updated_at != "No updates"

    async def test_update_missing_blog(self, blog_service: BlogService) -> None:
        with pytest.raises(BlogNotFoundError):
            await blog_service.update(uuid4(), BlogUpdate(title="Renamed"))

    async def test_owned_blogs_follow_reference_order(
        self,
        blog_service: BlogService,
        ann: UserDB,
    ) -> None:
        first = await blog_service.create(new_blog("First"), ann.id)
        second = await blog_service.create(new_blog("Second"), ann.id)
        ann.owned_blog_ids = [str(second.id), str(uuid4()), str(first.id)]

        owned = await blog_service.owned_blogs(ann)

        assert [blog.id for blog in owned] == [second.id, first.id]


async def test_signup_create_remove_flow(
    auth_service: AuthService,
    blog_service: BlogService,
    user_store: InMemoryUserDirectory,
    blog_store: InMemoryBlogStore,
) -> None:
    # The password (one digit) and title (two characters) sit below the HTTP
    # validation rules, so the request models are built without validation
    body = SignUp.model_construct(name="Ann", email="ann@x.com", password=SecretStr("Str0ng!!Pw"))
    blog_in = BlogCreate.model_construct(title="T1", content="0123456789", category="c")

    token = await auth_service.sign_up(body)
    ann = await auth_service.resolve_identity(token.access_token)
    assert ann is not None

    blog = await blog_service.create(blog_in, ann.id)
    assert blog.owner_id == ann.id
    assert (await user_store.get_by_id(ann.id)).owned_blog_ids == [str(blog.id)]

    found = await blog_service.find_by_id(blog.id)
    assert found.id == blog.id
    assert found.owner is not None
    assert found.owner.model_dump() == {"id": ann.id, "name": "Ann", "email": "ann@x.com"}

    await blog_service.remove(blog.id, ann.id)
    assert blog_store.blogs == {}
    assert str(blog.id) not in (await user_store.get_by_id(ann.id)).owned_blog_ids
    with pytest.raises(BlogNotFoundError):
        await blog_service.find_by_id(blog.id)
