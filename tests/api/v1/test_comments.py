import pytest
import logging

from app.db.models import Notification, NotificationType

# Configure logger
logger = logging.getLogger(__name__)


@pytest.fixture
def comment(client, make_user, make_post):
    commenter = make_user(name="Commenter")
    post = make_post()
    response = client.post(
        f"/api/posts/{post.id}/comments",
        json={"userId": commenter.id, "content": "This is a valid comment."}
    )
    assert response.status_code == 201
    return response.json()


def test_create_comment_notifies_post_author(client, db, comment):
    """
    Commenting on someone else's post leaves a notification for the post's author.
    """
    logger.info("Starting test: test_create_comment_notifies_post_author")

    notifications = db.query(Notification).all()

    assert comment["content"] == "This is a valid comment."
    assert comment["isEdited"] is False
    assert len(notifications) == 1
    assert notifications[0].type == NotificationType.COMMENT
    assert notifications[0].message == "Commenter commented on your post"

    logger.info("Completed test: test_create_comment_notifies_post_author")


def test_own_post_comment_does_not_notify(client, db, make_post):
    post = make_post()
    client.post(f"/api/posts/{post.id}/comments", json={"userId": post.user_id, "content": "note to self"})
    assert db.query(Notification).count() == 0


def test_create_comment_post_not_found(client, make_user):
    """
    Test POST with non-existent post: expect 404 Not Found.
    """
    commenter = make_user()
    response = client.post("/api/posts/999/comments", json={"userId": commenter.id, "content": "Hello"})
    assert response.status_code == 404


def test_get_comment(client, comment):
    response = client.get(f"/api/comments/{comment['id']}")
    assert response.status_code == 200
    assert response.json()["postId"] == comment["postId"]


def test_update_comment_marks_edited(client, comment):
    response = client.put(f"/api/comments/{comment['id']}", json={"content": "Edited text"})
    assert response.status_code == 200
    assert response.json()["content"] == "Edited text"
    assert response.json()["isEdited"] is True


def test_delete_comment(client, comment):
    assert client.delete(f"/api/comments/{comment['id']}").status_code == 204
    assert client.get(f"/api/comments/{comment['id']}").status_code == 404


def test_unknown_comment(client, db):
    response = client.put("/api/comments/999", json={"content": "x"})
    assert response.status_code == 404
    assert response.content == b""
