"""
User MongoDB Schema

Defines the User document model for the 'users' collection.

Schema Fields:
- _id: ObjectId (MongoDB auto-generated)
- email: Login email (unique)
- name: Display name
- avatar_path: Optional avatar image path
- password_hash: HMAC-SHA256 digest of the salted password
- created_at, updated_at: Timestamps

Indexes:
- email (unique)
"""

from typing import Optional

from beanie import Indexed

from whattowatch.database.base import BaseDocument


class User(BaseDocument):
    """Registered catalog user."""

    email: Indexed(str, unique=True)
    name: str
    avatar_path: Optional[str] = None
    password_hash: str

    class Settings(BaseDocument.Settings):
        name = "users"
