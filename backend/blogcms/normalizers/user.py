from . import iso


def normalize_user(user, private=False):
    """
    Public profile by default; `private` adds the fields only the user
    themselves and administrators may see.
    """
    data = {
        "id": user.id,
        "name": user.name,
        "firstName": user.first_name,
        "lastName": user.last_name,
        "bio": user.bio,
        "website": user.website,
        "twitter": user.twitter,
        "linkedIn": user.linkedin,
        "specialization": user.specialization,
        "role": user.role,
        "postsCount": user.posts_count,
        "totalViews": user.total_views,
        "joinedAt": iso(user.created_at),
        "lastActive": iso(user.last_active),
    }

    if private:
        data["email"] = user.email
        data["isActive"] = user.is_active

    return data
