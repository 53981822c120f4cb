from tokenauth.models.article import Article
from tokenauth.models.user import Role, User, UserRecord, normalize_email

__all__ = [
    "Article",
    "Role",
    "User",
    "UserRecord",
    "normalize_email",
]
