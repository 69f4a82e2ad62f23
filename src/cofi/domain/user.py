"""User domain service."""

from cofi.config import HouseholdConfig
from cofi.database.base import Database
from cofi.domain.entities import User
from cofi.domain.errors import NotFoundOrForbidden, ValidationError, user_not_found
from cofi.logger import get_logger

logger = get_logger(__name__)


class UserService:
    """Service for the household user registry."""

    def __init__(self, db: Database):
        """Initialize user service.

        Args:
            db: Database instance
        """
        self.db = db

    def sync_users(self, config: HouseholdConfig) -> list[str]:
        """Register every configured user that does not exist yet.

        Returns:
            Names of the users that were created
        """
        created = []
        for username in config.users:
            if self.db.get_user_by_name(username) is not None:
                continue
            self.db.create_user(username)
            created.append(username)
        if created:
            logger.info("users_registered", users=created)
        return created

    def create_user(self, username: str) -> User:
        """Create a single user.

        Raises:
            ValidationError: If the name is empty or already taken
        """
        username = (username or "").strip()
        if not username:
            raise ValidationError("Username is required")
        if self.db.get_user_by_name(username) is not None:
            raise ValidationError(f"User '{username}' already exists")
        self.db.create_user(username)
        logger.info("user_created", username=username)
        return self.db.get_user_by_name(username)

    def require_user(self, username: str) -> User:
        """Get a user by name.

        Raises:
            NotFoundOrForbidden: If no such user exists
        """
        user = self.db.get_user_by_name(username)
        if user is None:
            raise NotFoundOrForbidden(user_not_found(username))
        return user

    def list_users(self) -> list[User]:
        return self.db.get_users()
