from . import iso


def normalize_post(post):
    author = post.author
    return {
        "id": post.id,
        "title": post.title,
        "content": post.content,
        "summary": post.summary,
        "imageUrl": post.image_url,
        "userId": post.user_id,
        "userName": author.name if author else "",
        "categoryId": post.category_id,
        "categoryName": post.category.name if post.category else None,
        "tags": post.tags or [],
        "type": post.type,
        "status": post.status,
        "publishedAt": iso(post.published_at),
        "createdAt": iso(post.created_at),
        "updatedAt": iso(post.updated_at),
        "featured": post.featured,
        "allowComments": post.allow_comments,
        "viewCount": post.view_count,
        "likeCount": post.like_count,
        "shareCount": post.share_count,
        "externalUrl": post.external_url,
        "externalSource": post.external_source,
    }
