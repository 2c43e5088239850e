"""Repository classes encapsulating database operations.

Each repository is small and focused on a single aggregate (users,
blogs). Repositories return SQLModel objects and perform
commits/refreshes where appropriate. Any SQLAlchemy failure is rolled
back and re-raised as `StoreError`; nothing is retried here.
"""

import logging
from contextlib import contextmanager
from typing import List, Optional
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import selectinload
from sqlmodel import Session, select
from . import models
from .errors import StoreError, ValidationError

logger = logging.getLogger("bloglist.repositories")


@contextmanager
def _store_call(session: Session, action: str):
    try:
        yield
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("store failure during %s", action)
        raise StoreError() from exc


class UserRepository:
    """CRUD operations for `User` objects."""
    def __init__(self, session: Session):
        self.session = session

    def create(self, user: models.User) -> models.User:
        """Persist a new user and return the managed instance.

        A unique-constraint violation (two registrations racing for the
        same username) is reported as a `ValidationError`.
        """
        try:
            self.session.add(user)
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ValidationError("username must be unique") from exc
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("store failure during user create")
            raise StoreError() from exc
        with _store_call(self.session, "user refresh"):
            self.session.refresh(user)
            user.blogs  # load eagerly inside the guarded call
        return user

    def get_by_username(self, username: str) -> Optional[models.User]:
        """Return a `User` by username or `None` if not found."""
        stmt = select(models.User).where(models.User.username == username)
        with _store_call(self.session, "user lookup"):
            return self.session.exec(stmt).first()

    def get(self, user_id: int) -> Optional[models.User]:
        """Get a `User` by primary key."""
        with _store_call(self.session, "user lookup"):
            return self.session.get(models.User, user_id)

    def list_all(self) -> List[models.User]:
        stmt = select(models.User).options(selectinload(models.User.blogs)).order_by(models.User.id)
        with _store_call(self.session, "user list"):
            return self.session.exec(stmt).all()


class BlogRepository:
    """CRUD operations for `Blog` records."""
    def __init__(self, session: Session):
        self.session = session

    def list_all(self) -> List[models.Blog]:
        """Return every blog ordered by id (full scan, no paging)."""
        stmt = select(models.Blog).options(selectinload(models.Blog.user)).order_by(models.Blog.id)
        with _store_call(self.session, "blog list"):
            return self.session.exec(stmt).all()

    def get(self, blog_id: int) -> Optional[models.Blog]:
        """Fetch a blog by id."""
        with _store_call(self.session, "blog lookup"):
            return self.session.get(models.Blog, blog_id, options=[selectinload(models.Blog.user)])

    def save(self, blog: models.Blog) -> models.Blog:
        """Insert or update `blog` in a single commit and refresh it."""
        with _store_call(self.session, "blog save"):
            self.session.add(blog)
            self.session.commit()
            self.session.refresh(blog)
            blog.user  # load eagerly inside the guarded call
        return blog

    def delete(self, blog: models.Blog):
        with _store_call(self.session, "blog delete"):
            self.session.delete(blog)
            self.session.commit()


def reset_all(session: Session):
    """Remove every blog and user. Used by the test-only reset route."""
    with _store_call(session, "reset"):
        for model in (models.Blog, models.User):
            for row in session.exec(select(model)).all():
                session.delete(row)
            session.flush()
        session.commit()
