from typing import Optional, Dict, Any, List, Tuple
from sqlalchemy.orm import Session
from app.core.exceptions import InvalidOperationError, NotFoundError
from app.db.models import User
from app.db.store import EntityStore
from app.models.user import UserCreate, UserUpdate
import logging

logger = logging.getLogger(__name__)

class UserService:
    """Service for handling user-related operations in the database."""

    def __init__(self, db: Session):
        """Initialize the UserService with a request-scoped database session.

        Args:
            db: SQLAlchemy database session.
        """
        self.db = db
        self.store = EntityStore(db, User)

    def get_user(self, user_id: int) -> User:
        """Return an active user.

        Raises:
            NotFoundError: If the user does not exist or has been deactivated.
        """
        user = self.store.find_by_id(user_id)
        if user is None or not user.is_active:
            raise NotFoundError(f"User with id {user_id} not found")
        return user

    def list_users(self) -> List[User]:
        return self.store.find_by(is_active=True)

    def find_user_by_email(self, email: str) -> Optional[User]:
        return self.store.find_first(email=email)

    def find_user_by_firebase_uid(self, firebase_uid: str) -> Optional[User]:
        """Find a user by the uid of their verified identity.

        Args:
            firebase_uid: The unique ID from the identity provider.

        Returns:
            The User object if found, None otherwise.
        """
        return self.store.find_first(firebase_uid=firebase_uid)

    def create_user(self, user_data: UserCreate, firebase_uid: Optional[str] = None) -> User:
        """Create a new user in the database.

        Args:
            user_data: Validated profile fields; ``email`` must be unused.
            firebase_uid: Optional identity link set on sign-in.

        Returns:
            The newly created User object.

        Raises:
            InvalidOperationError: If the email is already registered.
        """
        if self.find_user_by_email(user_data.email) is not None:
            logger.warning(f"Attempt to register duplicate email {user_data.email}")
            raise InvalidOperationError(f"Email {user_data.email} is already registered")

        db_user = User(
            **user_data.model_dump(),
            firebase_uid=firebase_uid,
            is_active=True
        )
        db_user = self.store.save(db_user)
        logger.info(f"Created new user {db_user.id}")
        return db_user

    def update_user(self, user_id: int, user_data: UserUpdate) -> User:
        """Apply a partial update to an active user."""
        user = self.get_user(user_id)
        changes = user_data.model_dump(exclude_unset=True)

        new_email = changes.get("email")
        if new_email and new_email != user.email:
            existing = self.find_user_by_email(new_email)
            if existing is not None and existing.id != user.id:
                raise InvalidOperationError(f"Email {new_email} is already registered")

        for field, value in changes.items():
            setattr(user, field, value)
        user = self.store.save(user)
        logger.info(f"Updated user {user_id}: {sorted(changes)}")
        return user

    def delete_user(self, user_id: int) -> User:
        """Soft delete a user by deactivating their account.

        Args:
            user_id: The unique ID of the user to delete.

        Returns:
            The updated User object with is_active=False

        Raises:
            NotFoundError: If no active user with the given ID exists
        """
        user = self.get_user(user_id)
        user.is_active = False
        user = self.store.save(user)
        logger.info(f"User account deleted (deactivated): {user_id}")
        return user

    def sign_in(self, identity: Dict[str, Any]) -> Tuple[User, bool]:
        """Resolve a verified identity to a local user, creating one when needed.

        The user is looked up by identity uid first, then by email; an account
        found by email gets linked to the uid.

        Args:
            identity: Output of ``IdentityVerifier.verify_identity``.

        Returns:
            Tuple of the user and whether it was created by this call.

        Raises:
            InvalidOperationError: If the identity carries no email or the
                matching account has been deactivated.
        """
        uid = identity["uid"]
        user = self.find_user_by_firebase_uid(uid)

        if user is None and identity.get("email"):
            user = self.find_user_by_email(identity["email"])
            if user is not None:
                logger.info(f"Linking identity {uid} to existing user {user.id}")
                user.firebase_uid = uid
                user = self.store.save(user)

        if user is not None:
            if not user.is_active:
                raise InvalidOperationError("Account has been deactivated", error_code="ACCOUNT_DEACTIVATED")
            return user, False

        email = identity.get("email")
        if not email:
            raise InvalidOperationError("Identity token carries no email address")

        name = identity.get("name") or email.split("@")[0]
        user = self.create_user(
            UserCreate(name=name[:100], email=email, avatar=identity.get("picture")),
            firebase_uid=uid,
        )
        return user, True
