from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from src.models import User, UserRole
from src.auth.schemas import UserCreate, Role, CurrentUser, User as UserSchema
from src.auth.utils import get_password_hash, verify_password
from src.logger import setup_logger
from typing import List, Optional

logger = setup_logger(__name__)

class UserService:
    @staticmethod
    def get_user_by_email(db: Session, email: str) -> Optional[User]:
        """Get user by email"""
        return db.query(User).filter(User.email == email).first()

    @staticmethod
    def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
        """Get user by ID"""
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def create_user(db: Session, user: UserCreate, role: Role = Role.CUSTOMER) -> User:
        """Create a new user with a single role"""
        db_user = User(
            email=user.email,
            full_name=user.full_name,
            phone=user.phone,
            password=get_password_hash(user.password)
        )

        try:
            db.add(db_user)
            db.flush()

            if role != Role.NONE:
                db.add(UserRole(user_id=db_user.id, role=role.value))

            db.commit()
            db.refresh(db_user)
            logger.info(f"Registered user {db_user.id} with role {role.value}")
            return db_user

        except IntegrityError:
            db.rollback()
            raise ValueError("Email already registered")

    @staticmethod
    def authenticate_user(db: Session, email: str, password: str) -> Optional[User]:
        """Authenticate user with email and password"""
        user = UserService.get_user_by_email(db, email)
        if not user:
            return None
        if not verify_password(password, user.password):
            return None
        return user

    @staticmethod
    def get_user_role(db: Session, user_id: int) -> Role:
        """Get the user's role, 'none' if no role row exists"""
        user_role = db.query(UserRole).filter(UserRole.user_id == user_id).first()
        if not user_role:
            return Role.NONE
        try:
            return Role(user_role.role)
        except ValueError:
            logger.error(f"User {user_id} has unknown role {user_role.role!r}")
            return Role.NONE

    @staticmethod
    def set_user_role(db: Session, user_id: int, role: Role) -> Role:
        """Update the user's role, inserting the row if missing"""
        user_role = db.query(UserRole).filter(UserRole.user_id == user_id).first()

        if role == Role.NONE:
            if user_role:
                db.delete(user_role)
        elif user_role:
            user_role.role = role.value
        else:
            db.add(UserRole(user_id=user_id, role=role.value))

        db.commit()
        logger.info(f"Role of user {user_id} set to {role.value}")
        return role

    @staticmethod
    def to_schema(db: Session, user: User) -> UserSchema:
        """Build the user response including the role"""
        return UserSchema(
            id=user.id,
            email=user.email,
            full_name=user.full_name,
            phone=user.phone,
            role=UserService.get_user_role(db, user.id),
            created_at=user.created_at
        )

    @staticmethod
    def to_current_user(db: Session, user: User) -> CurrentUser:
        """Build the identity context passed to handlers"""
        return CurrentUser(
            id=user.id,
            email=user.email,
            full_name=user.full_name,
            role=UserService.get_user_role(db, user.id)
        )

    @staticmethod
    def list_users(db: Session) -> List[UserSchema]:
        """List all profiles with their roles, newest first"""
        users = db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()
        return [UserService.to_schema(db, user) for user in users]
