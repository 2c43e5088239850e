"""Business logic services used by HTTP controllers.

This module holds small service classes that coordinate repositories,
hashing and token issuing. Services are intentionally thin: they
perform validation, enforce ownership and persist aggregates via
repositories. Failures are raised as `bloglist.errors` exceptions.
"""

import logging
from typing import List
from passlib.context import CryptContext
from sqlmodel import Session
from . import models, repositories
from .auth import TokenIdentity, issue_token
from .config import Settings
from .errors import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from .schemas import BlogIn

PWD_CTX = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
logger = logging.getLogger("bloglist.services")


class AuthService:
    """Authentication related operations (register + login)."""
    def __init__(self, session: Session, settings: Settings):
        self.session = session
        self.settings = settings
        self.user_repo = repositories.UserRepository(session)

    def register(self, username: str, name: str | None, password: str) -> models.User:
        """Create a new user with a hashed password.

        Length rules are enforced by the request schema; this method
        rejects taken usernames. Returns the persisted `User` instance.
        """
        if self.user_repo.get_by_username(username):
            raise ValidationError("username must be unique")
        hashed = PWD_CTX.hash(password)
        u = models.User(username=username, name=name, password_hash=hashed)
        user = self.user_repo.create(u)
        logger.info("user registered id=%s username=%s", user.id, user.username)
        return user

    def login(self, username: str, password: str) -> dict:
        """Verify credentials and return a signed token with user details.

        Raises `AuthenticationError` for an unknown username or a wrong
        password without telling the two apart.
        """
        user = self.user_repo.get_by_username(username)
        if not user or not PWD_CTX.verify(password, user.password_hash):
            logger.info("login rejected username=%s", username)
            raise AuthenticationError("invalid username or password")
        token = issue_token(user.id, user.username, self.settings)
        return {"token": token, "username": user.username, "name": user.name}


class UserService:
    def __init__(self, session: Session):
        self.user_repo = repositories.UserRepository(session)

    def list_users(self) -> List[models.User]:
        return self.user_repo.list_all()


class BlogService:
    """Blog CRUD with ownership checks on deletion."""
    def __init__(self, session: Session):
        self.session = session
        self.blog_repo = repositories.BlogRepository(session)
        self.user_repo = repositories.UserRepository(session)

    def list_blogs(self) -> List[models.Blog]:
        return self.blog_repo.list_all()

    def get_blog(self, blog_id: int) -> models.Blog:
        if not 1 <= blog_id <= models.MAX_DB_INT:
            raise NotFoundError("blog not found")
        blog = self.blog_repo.get(blog_id)
        if not blog:
            raise NotFoundError("blog not found")
        return blog

    def create_blog(self, identity: TokenIdentity, payload: BlogIn) -> models.Blog:
        """Persist a new blog owned by the token's user.

        The owner must still exist; a token for a removed user is
        rejected as unauthenticated.
        """
        owner = self.user_repo.get(identity.user_id)
        if not owner:
            raise AuthenticationError("user not found")
        blog = models.Blog(
            title=payload.title,
            author=payload.author,
            url=payload.url,
            likes=payload.likes,
            user_id=owner.id,
        )
        blog = self.blog_repo.save(blog)
        logger.info("blog created id=%s user_id=%s", blog.id, owner.id)
        return blog

    def update_blog(self, blog_id: int, payload: BlogIn) -> models.Blog:
        """Replace title/author/url/likes of an existing blog.

        Any caller may update any blog (this backs the public like
        action). The owner reference is left untouched.
        """
        blog = self.get_blog(blog_id)
        blog.title = payload.title
        blog.author = payload.author
        blog.url = payload.url
        blog.likes = payload.likes
        return self.blog_repo.save(blog)

    def delete_blog(self, identity: TokenIdentity, blog_id: int):
        """Delete a blog if the caller owns it.

        Existence is checked before ownership, so deleting an unknown or
        already deleted id is a 404 for everyone.
        """
        blog = self.get_blog(blog_id)
        if blog.user_id != identity.user_id:
            raise AuthorizationError("only the creator can delete a blog")
        self.blog_repo.delete(blog)
        logger.info("blog deleted id=%s user_id=%s", blog_id, identity.user_id)
