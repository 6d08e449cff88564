from . import iso


def normalize_category(category):
    return {
        "id": category.id,
        "name": category.name,
        "slug": category.slug,
        "description": category.description,
        "createdAt": iso(category.created_at),
    }
