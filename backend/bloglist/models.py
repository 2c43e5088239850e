"""SQLModel data models.

This module defines the application's database tables using SQLModel.
Each class maps to a table and uses relationships where appropriate.
"""

from typing import List, Optional
from sqlmodel import SQLModel, Field, Relationship

# Largest value an INTEGER column holds (signed 64-bit).
MAX_DB_INT = 2**63 - 1


class User(SQLModel, table=True):
    """A registered user.

    Fields:
    - `username`: unique login name, at least 3 characters
    - `name`: display name shown next to the user's blogs
    - `password_hash`: hashed password string (never store plaintext)
    """
    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(index=True, nullable=False, unique=True)
    name: Optional[str] = None
    password_hash: str
    blogs: List['Blog'] = Relationship(back_populates='user')


class Blog(SQLModel, table=True):
    """A blog link owned by the user who created it.

    `user_id` is set once on creation and never reassigned.
    """
    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    author: Optional[str] = None
    url: str
    likes: int = 0
    user_id: int = Field(foreign_key='user.id', nullable=False, index=True)
    user: Optional[User] = Relationship(back_populates='blogs')
