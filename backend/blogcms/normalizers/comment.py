from . import iso


def normalize_comment(comment, admin=False):
    author = comment.author
    data = {
        "id": comment.id,
        "postId": comment.post_id,
        "parentId": comment.parent_id,
        "content": comment.content,
        "isApproved": comment.is_approved,
        "createdAt": iso(comment.created_at),
        "updatedAt": iso(comment.updated_at),
        "user": {
            "id": comment.user_id,
            "name": author.name if author else "",
            "specialization": author.specialization if author else None,
        },
    }

    if admin:
        data["status"] = "approved" if comment.is_approved else "pending"
        data["user"]["email"] = author.email if author else None
        data["postTitle"] = comment.post.title if comment.post else None

    return data
