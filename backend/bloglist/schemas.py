"""Pydantic request/response schemas used by the API.

Schemas keep API input/output shapes stable and provide validation for
controller handlers and tests. Request bodies are validated before any
model is constructed; a failure is reported as 400 by the app.
"""

from pydantic import BaseModel, Field
from typing import List, Optional

from . import models


class RegisterIn(BaseModel):
    """Payload for user registration."""
    username: str = Field(min_length=3)
    name: Optional[str] = None
    password: str = Field(min_length=3)


class LoginIn(BaseModel):
    """Credentials exchanged for a token."""
    username: str
    password: str


class TokenOut(BaseModel):
    """Authentication response containing a bearer token."""
    token: str
    username: str
    name: Optional[str] = None


class BlogIn(BaseModel):
    """Body for creating a blog and for the wholesale replace on update.

    Unknown fields (such as a client echoing back `id` or `user`) are
    ignored, so the owner can never be changed through this schema.
    """
    title: str = Field(min_length=1)
    author: Optional[str] = None
    url: str = Field(min_length=1)
    likes: int = Field(default=0, ge=0, le=models.MAX_DB_INT)


class OwnerOut(BaseModel):
    id: int
    username: str
    name: Optional[str] = None


class BlogOut(BaseModel):
    id: int
    title: str
    author: Optional[str] = None
    url: str
    likes: int
    user: Optional[OwnerOut] = None

    @classmethod
    def from_model(cls, blog: models.Blog) -> "BlogOut":
        owner = None
        if blog.user is not None:
            owner = OwnerOut(id=blog.user.id, username=blog.user.username, name=blog.user.name)
        return cls(id=blog.id, title=blog.title, author=blog.author, url=blog.url, likes=blog.likes, user=owner)


class UserBlogOut(BaseModel):
    """Blog summary nested inside a user listing."""
    id: int
    title: str
    author: Optional[str] = None
    url: str
    likes: int


class UserOut(BaseModel):
    """Public user fields. The password hash is never part of this shape."""
    id: int
    username: str
    name: Optional[str] = None
    blogs: List[UserBlogOut] = []

    @classmethod
    def from_model(cls, user: models.User) -> "UserOut":
        blogs = [
            UserBlogOut(id=b.id, title=b.title, author=b.author, url=b.url, likes=b.likes)
            for b in user.blogs
        ]
        return cls(id=user.id, username=user.username, name=user.name, blogs=blogs)
