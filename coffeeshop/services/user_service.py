import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError

from coffeeshop.models.database import db, User, UserRole
from coffeeshop.models.schemas import CreateUserSchema
from coffeeshop.services.exceptions import DuplicateEmailError

logger = logging.getLogger(__name__)

user_input = CreateUserSchema()


class UserService:
    """Handles customer and admin registration."""

    @staticmethod
    def create_user(email: str, name: str, role=UserRole.CUSTOMER) -> User:
        """Register a new user; emails are unique.

        Malformed input raises ``marshmallow.ValidationError``.
        """
        data = user_input.load({
            "email": email,
            "name": name,
            "role": role.value if isinstance(role, UserRole) else role,
        })

        if User.query.filter_by(email=data["email"]).first():
            raise DuplicateEmailError(f"User with email {email} already exists")

        user = User(**data)
        db.session.add(user)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise DuplicateEmailError(f"User with email {email} already exists")

        logger.info("Registered user %s (%s)", user.id, data["role"].value)
        return user

    @staticmethod
    def get_user(user_id: int) -> Optional[User]:
        return db.session.get(User, user_id)
