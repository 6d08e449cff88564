from .user import User
from .category import Category
from .media_item import MediaItem
from .page import Page
from .page_revision import PageRevision
from .post import Post
from .comment import Comment
from .newsletter_subscriber import NewsletterSubscriber
from .activity_log import ActivityLog

__all__ = [
    "User",
    "Category",
    "MediaItem",
    "Page",
    "PageRevision",
    "Post",
    "Comment",
    "NewsletterSubscriber",
    "ActivityLog",
]
