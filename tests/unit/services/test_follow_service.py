import pytest

from app.core.exceptions import InvalidOperationError, NotFoundError
from app.db.models import Follow, Notification, NotificationType
from app.models.follow import FollowAction
from app.services.follow_service import FollowService


class TestToggleFollow:
    def test_follow_then_unfollow(self, db, make_user):
        alice = make_user(name="Alice")
        bob = make_user(name="Bob")
        service = FollowService(db)

        assert service.toggle_follow(alice.id, bob.id) == FollowAction.FOLLOWED
        assert service.is_following(alice.id, bob.id) is True
        assert db.query(Follow).count() == 1

        assert service.toggle_follow(alice.id, bob.id) == FollowAction.UNFOLLOWED
        assert service.is_following(alice.id, bob.id) is False
        assert db.query(Follow).count() == 0

    def test_toggle_alternates_and_keeps_at_most_one_edge(self, db, make_user):
        alice = make_user()
        bob = make_user()
        service = FollowService(db)

        actions = [service.toggle_follow(alice.id, bob.id) for _ in range(5)]

        assert actions == [
            FollowAction.FOLLOWED,
            FollowAction.UNFOLLOWED,
            FollowAction.FOLLOWED,
            FollowAction.UNFOLLOWED,
            FollowAction.FOLLOWED,
        ]
        assert db.query(Follow).count() == 1

    def test_follow_is_directional(self, db, make_user):
        alice = make_user()
        bob = make_user()
        service = FollowService(db)

        service.toggle_follow(alice.id, bob.id)

        assert service.is_following(alice.id, bob.id) is True
        assert service.is_following(bob.id, alice.id) is False

    def test_self_follow_is_rejected(self, db, make_user, caplog):
        alice = make_user()
        with caplog.at_level("WARNING"):
            with pytest.raises(InvalidOperationError):
                FollowService(db).toggle_follow(alice.id, alice.id)
        assert "follow themselves" in caplog.text
        assert db.query(Follow).count() == 0

    def test_self_follow_is_rejected_even_for_unknown_user(self, db):
        with pytest.raises(InvalidOperationError):
            FollowService(db).toggle_follow(999, 999)

    def test_unknown_target(self, db, make_user):
        alice = make_user()
        with pytest.raises(NotFoundError):
            FollowService(db).toggle_follow(alice.id, 999)

    def test_unknown_follower(self, db, make_user):
        bob = make_user()
        with pytest.raises(NotFoundError):
            FollowService(db).toggle_follow(999, bob.id)

    def test_deactivated_target(self, db, make_user):
        alice = make_user()
        gone = make_user(is_active=False)
        with pytest.raises(NotFoundError):
            FollowService(db).toggle_follow(alice.id, gone.id)

    def test_follow_notifies_target(self, db, make_user):
        alice = make_user(name="Alice")
        bob = make_user(name="Bob")
        service = FollowService(db)

        service.toggle_follow(alice.id, bob.id)
        service.toggle_follow(alice.id, bob.id)

        notifications = db.query(Notification).all()
        assert len(notifications) == 1
        assert notifications[0].user_id == bob.id
        assert notifications[0].type == NotificationType.FOLLOW
        assert notifications[0].message == "Alice started following you"
