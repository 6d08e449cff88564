from typing import Any, Dict, Optional

from flask import current_app

from blogcms.domain.exceptions import NotFoundError, ValidationError
from blogcms.domain.lifecycle import PUBLISHED
from blogcms.domain.policy import Actor, require
from blogcms.extensions import db
from blogcms.models.base import utcnow
from blogcms.models.comment import Comment
from blogcms.models.post import Post
from blogcms.utils.activity import log_action
from blogcms.utils.pagination import ListResult, paginate
from blogcms.utils.transaction import transactional
from ..validation import optional_str

MAX_COMMENT_LENGTH = 2000


def _content(data: Dict[str, Any]) -> str:
    content = optional_str(data, "content")
    if content is None or not content.strip():
        raise ValidationError("Content is required", errors={"content": "required"})
    content = content.strip()
    if len(content) > MAX_COMMENT_LENGTH:
        raise ValidationError(f"Content cannot exceed {MAX_COMMENT_LENGTH} characters")
    return content


def _get_comment(comment_id: str) -> Comment:
    comment = db.session.get(Comment, comment_id)
    if not comment:
        raise NotFoundError("Comment not found")
    return comment


def list_post_comments(post_id: str, *, page: int = 1, limit: int = 20) -> ListResult:
    """Approved comments on a published post, oldest first."""
    post = db.session.get(Post, post_id)
    if not post or post.status != PUBLISHED:
        raise NotFoundError("Post not found")

    query = (
        Comment.query
        .filter_by(post_id=post_id, is_approved=True)
        .order_by(Comment.created_at.asc(), Comment.id.asc())
    )
    return paginate(query, page=page, limit=limit)


def list_comments_for_moderation(
    *,
    actor: Actor,
    post_id: Optional[str] = None,
    status: Optional[str] = None,
    page: int = 1,
    limit: int = 20,
) -> ListResult:
    require(actor, "comment", "moderate")

    query = Comment.query
    if post_id:
        query = query.filter(Comment.post_id == post_id)
    if status == "approved":
        query = query.filter(Comment.is_approved.is_(True))
    elif status == "pending":
        query = query.filter(Comment.is_approved.is_(False))
    elif status:
        raise ValidationError("status must be 'approved' or 'pending'")

    query = query.order_by(Comment.created_at.desc(), Comment.id.desc())
    return paginate(query, page=page, limit=limit)


def create_comment(*, actor: Actor, data: Dict[str, Any]) -> Comment:
    require(actor, "comment", "create")

    content = _content(data)
    post_id = optional_str(data, "postId")
    if not post_id:
        raise ValidationError("postId is required", errors={"postId": "required"})

    post = db.session.get(Post, post_id)
    if not post or post.status != PUBLISHED:
        raise NotFoundError("Post not found")
    if not post.allow_comments:
        raise ValidationError("Comments are disabled for this post")

    comment = Comment()
    comment.post_id = post.id
    comment.user_id = actor.id
    comment.content = content
    comment.is_approved = bool(current_app.config.get("COMMENTS_AUTO_APPROVE", True))

    with transactional():
        db.session.add(comment)
        db.session.flush()

        log_action(
            action="comment.create",
            entity_type="comment",
            entity_id=comment.id,
            actor_id=actor.id,
            payload={"post_id": post.id},
        )

    return comment


def update_comment(*, actor: Actor, comment_id: str, data: Dict[str, Any]) -> Comment:
    content = _content(data)
    comment = _get_comment(comment_id)
    require(actor, "comment", "edit", owner_id=comment.user_id)

    with transactional():
        comment.content = content
        comment.updated_at = utcnow()

        log_action(
            action="comment.update",
            entity_type="comment",
            entity_id=comment.id,
            actor_id=actor.id,
        )

    return comment


def delete_comment(*, actor: Actor, comment_id: str) -> None:
    comment = _get_comment(comment_id)
    require(actor, "comment", "delete", owner_id=comment.user_id)

    with transactional():
        for reply in Comment.query.filter_by(parent_id=comment.id).all():
            reply.parent_id = None

        db.session.delete(comment)

        log_action(
            action="comment.delete",
            entity_type="comment",
            entity_id=comment_id,
            actor_id=actor.id,
            payload={"original_user_id": comment.user_id},
        )


def set_comment_approval(*, actor: Actor, comment_id: str, approved: bool) -> Comment:
    require(actor, "comment", "moderate")
    comment = _get_comment(comment_id)

    with transactional():
        comment.is_approved = approved

        log_action(
            action="comment.approve" if approved else "comment.unapprove",
            entity_type="comment",
            entity_id=comment.id,
            actor_id=actor.id,
        )

    return comment


def reply_to_comment(*, actor: Actor, comment_id: str, data: Dict[str, Any]) -> Comment:
    """Staff reply on the parent's post. Replies are approved immediately."""
    require(actor, "comment", "moderate")
    content = _content(data)
    parent = _get_comment(comment_id)

    reply = Comment()
    reply.post_id = parent.post_id
    reply.parent_id = parent.id
    reply.user_id = actor.id
    reply.content = content
    reply.is_approved = True

    with transactional():
        db.session.add(reply)
        db.session.flush()

        log_action(
            action="comment.reply",
            entity_type="comment",
            entity_id=reply.id,
            actor_id=actor.id,
            payload={"parent_id": parent.id, "post_id": parent.post_id},
        )

    return reply
