"""
Tests for the account and video services.
"""

import asyncio

import pytest

from vidshare.auth.context import AuthContext
from vidshare.auth.passwords import CredentialHasher
from vidshare.auth.tokens import TokenConfig, TokenService
from vidshare.core.errors import (
    ConfigurationError,
    DuplicateField,
    Forbidden,
    InvalidCredentials,
    NotFound,
    Unauthenticated,
    WeakPassword,
)
from vidshare.core.models import SignupRequest, SortField, SortOrder, VideoCreate, VideoUpdate
from vidshare.services import AccountService, VideoService
from vidshare.storage import create_local_storage

SECRET = "test-secret-that-is-long-enough-for-hs256"


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def storage():
    return create_local_storage()


@pytest.fixture
def tokens():
    return TokenService(TokenConfig(secret_key=SECRET))


@pytest.fixture
def accounts(storage, tokens):
    return AccountService(storage, tokens, CredentialHasher(rounds=4))


@pytest.fixture
def videos(storage):
    return VideoService(storage)


async def signup(accounts, username, email, password="Abcdef12"):
    result = await accounts.signup(SignupRequest(username=username, email=email, password=password))
    return AuthContext(user_id=result.account.id, username=result.account.username)


# =============================================================================
# Signup / Login
# =============================================================================


class TestSignup:
    @pytest.mark.asyncio
    async def test_signup_returns_redacted_account_and_token(self, accounts, storage, tokens):
        result = await accounts.signup(
            SignupRequest(username="alice", email="a@x.com", password="Abcdef12")
        )

        assert "password_hash" not in result.account.model_dump()
        assert tokens.verify(result.token).username == "alice"

        stored = await storage.accounts.get_by_username("alice")
        assert stored.password_hash != "Abcdef12"
        assert accounts.hasher.verify("Abcdef12", stored.password_hash)

    @pytest.mark.asyncio
    async def test_duplicate_email(self, accounts):
        await signup(accounts, "alice", "a@x.com")

        with pytest.raises(DuplicateField) as exc:
            await signup(accounts, "alice2", "A@X.com")
        assert exc.value.fields == ["email"]

    @pytest.mark.asyncio
    async def test_weak_password_not_stored(self, accounts, storage):
        with pytest.raises(WeakPassword):
            await signup(accounts, "alice", "a@x.com", password="abc")
        assert await storage.accounts.list() == []

    @pytest.mark.asyncio
    async def test_concurrent_signups_one_wins(self, accounts, storage):
        results = await asyncio.gather(
            signup(accounts, "alice", "a@x.com"),
            signup(accounts, "alice", "a@x.com"),
            return_exceptions=True,
        )
        assert sum(isinstance(r, DuplicateField) for r in results) == 1
        assert len(await storage.accounts.list()) == 1

    @pytest.mark.asyncio
    async def test_unconfigured_secret_writes_nothing(self, storage):
        service = AccountService(storage, TokenService(TokenConfig(secret_key="")), CredentialHasher(rounds=4))

        with pytest.raises(ConfigurationError):
            await signup(service, "alice", "a@x.com")
        assert await storage.accounts.list() == []


class TestLogin:
    @pytest.mark.asyncio
    async def test_login_by_username_or_email(self, accounts):
        await signup(accounts, "alice", "a@x.com")

        assert (await accounts.login("alice", "Abcdef12")).account.username == "alice"
        assert (await accounts.login("a@x.com", "Abcdef12")).account.username == "alice"

    @pytest.mark.asyncio
    async def test_failures_look_the_same(self, accounts):
        await signup(accounts, "alice", "a@x.com")

        with pytest.raises(InvalidCredentials) as wrong_password:
            await accounts.login("alice", "wrong")
        with pytest.raises(InvalidCredentials) as unknown_user:
            await accounts.login("nobody", "Abcdef12")

        assert wrong_password.value.to_dict() == unknown_user.value.to_dict()
        assert await accounts.authenticate("alice", "wrong") is None
        assert await accounts.authenticate("nobody", "Abcdef12") is None

    @pytest.mark.asyncio
    async def test_email_match_wins_over_username(self, accounts):
        await signup(accounts, "carol", "c@x.com", password="Carol1234")
        await signup(accounts, "c@x.com", "other@x.com", password="Other1234")

        result = await accounts.authenticate("c@x.com", "Carol1234")
        assert result.account.username == "carol"
        assert await accounts.authenticate("c@x.com", "Other1234") is None


# =============================================================================
# Account self-service
# =============================================================================


class TestAccountMutations:
    @pytest.mark.asyncio
    async def test_change_own_password(self, accounts):
        alice = await signup(accounts, "alice", "a@x.com")

        view = await accounts.change_password(alice, alice.user_id, "NewPass99")
        assert view.username == "alice"
        assert await accounts.authenticate("alice", "Abcdef12") is None
        assert await accounts.authenticate("alice", "NewPass99") is not None

    @pytest.mark.asyncio
    async def test_cannot_change_someone_elses_password(self, accounts):
        alice = await signup(accounts, "alice", "a@x.com")
        bob = await signup(accounts, "bob", "b@x.com")

        with pytest.raises(Forbidden):
            await accounts.change_password(bob, alice.user_id, "NewPass99")
        with pytest.raises(Unauthenticated):
            await accounts.change_password(AuthContext.anonymous(), alice.user_id, "NewPass99")

    @pytest.mark.asyncio
    async def test_ownership_checked_before_strength(self, accounts):
        alice = await signup(accounts, "alice", "a@x.com")
        bob = await signup(accounts, "bob", "b@x.com")

        with pytest.raises(Forbidden):
            await accounts.change_password(bob, alice.user_id, "weak")
        with pytest.raises(WeakPassword):
            await accounts.change_password(alice, alice.user_id, "weak")

    @pytest.mark.asyncio
    async def test_delete_own_account_removes_videos(self, accounts, videos, storage):
        alice = await signup(accounts, "alice", "a@x.com")
        bob = await signup(accounts, "bob", "b@x.com")
        await videos.create_video(alice, VideoCreate(title="Mine"))
        await videos.create_video(bob, VideoCreate(title="Bob's"))

        with pytest.raises(Forbidden):
            await accounts.delete_account(bob, alice.user_id)

        await accounts.delete_account(alice, alice.user_id)
        with pytest.raises(NotFound):
            await accounts.get_account(alice.user_id)
        assert [v.title for v in await storage.videos.list()] == ["Bob's"]

    @pytest.mark.asyncio
    async def test_second_delete_is_not_found(self, accounts):
        alice = await signup(accounts, "alice", "a@x.com")
        await accounts.delete_account(alice, alice.user_id)

        with pytest.raises(NotFound):
            await accounts.delete_account(alice, alice.user_id)

    @pytest.mark.asyncio
    async def test_list_accounts_redacted(self, accounts):
        await signup(accounts, "alice", "a@x.com")
        await signup(accounts, "bob", "b@x.com")

        listed = await accounts.list_accounts()
        assert [a.username for a in listed] == ["alice", "bob"]
        assert all("password_hash" not in a.model_dump() for a in listed)


# =============================================================================
# Videos
# =============================================================================


class TestVideoVisibility:
    @pytest.mark.asyncio
    async def test_private_video_scenario(self, accounts, videos):
        alice = await signup(accounts, "alice", "a@x.com")
        bob = await signup(accounts, "bob", "b@x.com")
        video = await videos.create_video(alice, VideoCreate(title="Secret", is_private=True))

        assert video.owner_id == alice.user_id
        assert video.likes == 0
        assert (await videos.get_video(alice, video.id)).title == "Secret"

        with pytest.raises(Forbidden):
            await videos.get_video(AuthContext.anonymous(), video.id)
        with pytest.raises(Forbidden):
            await videos.get_video(bob, video.id)
        with pytest.raises(NotFound):
            await videos.get_video(alice, "no-such-video")

    @pytest.mark.asyncio
    async def test_list_videos(self, accounts, videos):
        alice = await signup(accounts, "alice", "a@x.com")
        bob = await signup(accounts, "bob", "b@x.com")
        await videos.create_video(alice, VideoCreate(title="B public"))
        await videos.create_video(alice, VideoCreate(title="A private", is_private=True))
        await videos.create_video(bob, VideoCreate(title="C bob private", is_private=True))

        anonymous = await videos.list_videos(AuthContext.anonymous())
        assert [v.title for v in anonymous] == ["B public"]

        mine = await videos.list_videos(alice, sort=SortField.TITLE)
        assert [v.title for v in mine] == ["A private", "B public"]

        theirs = await videos.list_videos(bob, sort=SortField.TITLE, order=SortOrder.DESC)
        assert [v.title for v in theirs] == ["C bob private", "B public"]

    @pytest.mark.asyncio
    async def test_list_account_videos(self, accounts, videos):
        alice = await signup(accounts, "alice", "a@x.com")
        bob = await signup(accounts, "bob", "b@x.com")
        await videos.create_video(alice, VideoCreate(title="Public"))
        await videos.create_video(alice, VideoCreate(title="Private", is_private=True))

        assert len(await videos.list_account_videos(alice, alice.user_id)) == 2
        assert len(await videos.list_account_videos(bob, alice.user_id)) == 1
        with pytest.raises(NotFound):
            await videos.list_account_videos(bob, "no-such-user")


class TestVideoMutations:
    @pytest.mark.asyncio
    async def test_create_requires_identity(self, videos):
        with pytest.raises(Unauthenticated):
            await videos.create_video(AuthContext.anonymous(), VideoCreate(title="Nope"))

    @pytest.mark.asyncio
    async def test_create_rejects_deleted_account(self, accounts, videos):
        alice = await signup(accounts, "alice", "a@x.com")
        await accounts.delete_account(alice, alice.user_id)

        with pytest.raises(Unauthenticated):
            await videos.create_video(alice, VideoCreate(title="Ghost"))

    @pytest.mark.asyncio
    async def test_account_deleted_mid_create_leaves_no_video(self, accounts, videos, storage, monkeypatch):
        alice = await signup(accounts, "alice", "a@x.com")
        original_create = storage.videos.create

        async def create_during_delete(video):
            # the whole delete_account runs after the existence check passed
            await accounts.delete_account(alice, alice.user_id)
            return await original_create(video)

        monkeypatch.setattr(storage.videos, "create", create_during_delete)

        with pytest.raises(Unauthenticated):
            await videos.create_video(alice, VideoCreate(title="Orphan"))
        assert await storage.videos.list() == []

    @pytest.mark.asyncio
    async def test_owner_updates(self, accounts, videos):
        alice = await signup(accounts, "alice", "a@x.com")
        video = await videos.create_video(alice, VideoCreate(title="Old", credits="me"))

        updated = await videos.update_video(
            alice, video.id, VideoUpdate(title="New", is_private=True, credits=None)
        )
        assert updated.title == "New"
        assert updated.is_private
        assert updated.credits is None
        assert updated.owner_id == alice.user_id
        assert updated.uploaded_at == video.uploaded_at

    @pytest.mark.asyncio
    async def test_null_title_is_ignored(self, accounts, videos):
        alice = await signup(accounts, "alice", "a@x.com")
        video = await videos.create_video(alice, VideoCreate(title="Keep"))

        updated = await videos.update_video(alice, video.id, VideoUpdate(title=None))
        assert updated.title == "Keep"

    @pytest.mark.asyncio
    async def test_update_checks(self, accounts, videos):
        alice = await signup(accounts, "alice", "a@x.com")
        bob = await signup(accounts, "bob", "b@x.com")
        video = await videos.create_video(alice, VideoCreate(title="Mine"))

        with pytest.raises(Unauthenticated):
            await videos.update_video(AuthContext.anonymous(), video.id, VideoUpdate(title="X"))
        with pytest.raises(NotFound):
            await videos.update_video(bob, "no-such-video", VideoUpdate(title="X"))
        with pytest.raises(Forbidden):
            await videos.update_video(bob, video.id, VideoUpdate(title="X"))

    @pytest.mark.asyncio
    async def test_delete(self, accounts, videos):
        alice = await signup(accounts, "alice", "a@x.com")
        bob = await signup(accounts, "bob", "b@x.com")
        video = await videos.create_video(alice, VideoCreate(title="Mine"))

        with pytest.raises(Forbidden):
            await videos.delete_video(bob, video.id)

        await videos.delete_video(alice, video.id)
        with pytest.raises(NotFound):
            await videos.delete_video(alice, video.id)


class TestLikes:
    @pytest.mark.asyncio
    async def test_like_then_unlike_restores_count(self, accounts, videos):
        alice = await signup(accounts, "alice", "a@x.com")
        video = await videos.create_video(alice, VideoCreate(title="Mine"))

        assert (await videos.like_video(video.id)).likes == 1
        assert (await videos.like_video(video.id)).likes == 2
        assert (await videos.unlike_video(video.id)).likes == 1

    @pytest.mark.asyncio
    async def test_unlike_floors_at_zero(self, accounts, videos):
        alice = await signup(accounts, "alice", "a@x.com")
        video = await videos.create_video(alice, VideoCreate(title="Mine"))

        assert (await videos.unlike_video(video.id)).likes == 0
        assert (await videos.like_video(video.id)).likes == 1

    @pytest.mark.asyncio
    async def test_concurrent_likes_all_count(self, accounts, videos):
        alice = await signup(accounts, "alice", "a@x.com")
        video = await videos.create_video(alice, VideoCreate(title="Mine"))

        await asyncio.gather(*(videos.like_video(video.id) for _ in range(20)))
        assert (await videos.get_video(alice, video.id)).likes == 20

    @pytest.mark.asyncio
    async def test_unknown_video(self, videos):
        with pytest.raises(NotFound):
            await videos.like_video("no-such-video")
        with pytest.raises(NotFound):
            await videos.unlike_video("no-such-video")
