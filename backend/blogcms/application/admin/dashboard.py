from typing import Dict

from blogcms.domain.lifecycle import PUBLISHED
from blogcms.domain.policy import Actor, require
from blogcms.models.category import Category
from blogcms.models.comment import Comment
from blogcms.models.media_item import MediaItem
from blogcms.models.newsletter_subscriber import NewsletterSubscriber
from blogcms.models.page import Page
from blogcms.models.post import Post
from blogcms.models.user import User


def dashboard_stats(*, actor: Actor) -> Dict[str, int]:
    """Headline counts for the admin dashboard. Trashed rows are excluded."""
    require(actor, "dashboard", "view")

    posts = Post.query
    pages = Page.active()

    return {
        "totalUsers": User.query.count(),
        "activeUsers": User.query.filter(User.is_active.is_(True)).count(),
        "totalPosts": posts.count(),
        "publishedPosts": posts.filter(Post.status == PUBLISHED).count(),
        "draftPosts": posts.filter(Post.status != PUBLISHED).count(),
        "totalPages": pages.count(),
        "publishedPages": pages.filter(Page.status == PUBLISHED).count(),
        "totalMedia": MediaItem.active().count(),
        "totalCategories": Category.query.count(),
        "totalComments": Comment.query.count(),
        "pendingComments": Comment.query.filter(Comment.is_approved.is_(False)).count(),
        "newsletterSubscribers": NewsletterSubscriber.query.filter(
            NewsletterSubscriber.is_active.is_(True)
        ).count(),
    }
