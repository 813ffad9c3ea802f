from datetime import datetime, timedelta, timezone

import pytest

from app.core.exceptions import NotFoundError
from app.db.models import Comment, Follow
from app.services.user_profile import UserProfileService

BASE_TIME = datetime(2025, 4, 1, 8, 0, 0, tzinfo=timezone.utc)


def follow(db, follower, followed, minutes=0):
    db.add(Follow(
        follower_id=follower.id,
        followed_user_id=followed.id,
        followed_at=BASE_TIME + timedelta(minutes=minutes),
    ))
    db.commit()


class TestGetProfile:
    def test_counts_and_flags(self, db, make_user, make_post):
        owner = make_user(name="Owner", bio="Writes about history")
        fan = make_user()
        other = make_user()
        follow(db, fan, owner)
        follow(db, other, owner)
        follow(db, owner, fan)
        make_post(user=owner)

        profile = UserProfileService(db).get_profile(owner.id, fan.id)

        assert profile.name == "Owner"
        assert profile.bio == "Writes about history"
        assert profile.followers_count == 2
        assert profile.following_count == 1
        assert profile.posts_count == 1
        assert profile.is_current_user is False
        assert profile.is_following is True

    def test_own_profile(self, db, make_user):
        owner = make_user()
        profile = UserProfileService(db).get_profile(owner.id, owner.id)
        assert profile.is_current_user is True
        assert profile.is_following is False

    def test_anonymous_viewer(self, db, make_user):
        owner = make_user()
        profile = UserProfileService(db).get_profile(owner.id)
        assert profile.is_current_user is False
        assert profile.is_following is False

    def test_recent_posts_capped_at_five(self, db, make_user, make_post):
        owner = make_user()
        commenter = make_user()
        posts = [
            make_post(user=owner, question=f"Q{i}", created_at=BASE_TIME + timedelta(hours=i))
            for i in range(7)
        ]
        db.add(Comment(post_id=posts[6].id, user_id=commenter.id, content="nice"))
        db.commit()

        profile = UserProfileService(db).get_profile(owner.id)

        assert profile.posts_count == 7
        assert [p.question for p in profile.posts] == ["Q6", "Q5", "Q4", "Q3", "Q2"]
        assert profile.posts[0].comments_count == 1

    def test_unknown_user(self, db):
        with pytest.raises(NotFoundError):
            UserProfileService(db).get_profile(999)

    def test_deactivated_user(self, db, make_user):
        gone = make_user(is_active=False)
        with pytest.raises(NotFoundError):
            UserProfileService(db).get_profile(gone.id)


class TestListings:
    def test_followers_page(self, db, make_user):
        owner = make_user()
        fans = [make_user(name=f"Fan {i}") for i in range(3)]
        for i, fan in enumerate(fans):
            follow(db, fan, owner, minutes=i)

        page = UserProfileService(db).get_followers(owner.id, page=0, size=2)

        assert page.total_elements == 3
        assert page.total_pages == 2
        assert [u.name for u in page.content] == ["Fan 2", "Fan 1"]

    def test_following_page(self, db, make_user):
        owner = make_user()
        idol = make_user(name="Idol")
        follow(db, owner, idol)

        page = UserProfileService(db).get_following(owner.id)

        assert page.total_elements == 1
        assert page.content[0].name == "Idol"
        assert page.size == 20

    def test_deactivated_followers_are_hidden(self, db, make_user):
        owner = make_user()
        active = make_user(name="Active")
        gone = make_user(name="Gone", is_active=False)
        follow(db, active, owner)
        follow(db, gone, owner)

        service = UserProfileService(db)

        assert [u.name for u in service.get_followers(owner.id).content] == ["Active"]
        assert service.get_profile(owner.id).followers_count == 1

    def test_posts_page(self, db, make_user, make_post):
        owner = make_user()
        for i in range(3):
            make_post(user=owner, question=f"Q{i}", created_at=BASE_TIME + timedelta(hours=i))

        page = UserProfileService(db).get_posts(owner.id, page=0, size=2)

        assert page.total_elements == 3
        assert [p.question for p in page.content] == ["Q2", "Q1"]

    @pytest.mark.parametrize("listing", ["get_posts", "get_followers", "get_following"])
    def test_unknown_user_gets_empty_page(self, db, listing):
        page = getattr(UserProfileService(db), listing)(999, page=0, size=5)
        assert page.content == []
        assert page.total_elements == 0
        assert page.total_pages == 0
