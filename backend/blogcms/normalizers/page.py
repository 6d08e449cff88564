from . import iso


def normalize_page(page):
    return {
        "id": page.id,
        "title": page.title,
        "slug": page.slug,
        "content": page.content,
        "excerpt": page.excerpt,
        "status": page.status,
        "publishedAt": iso(page.published_at),
        "createdAt": iso(page.created_at),
        "updatedAt": iso(page.updated_at),
        "parentId": page.parent_id,
        "menuOrder": page.menu_order,
        "template": page.template,
        "authorId": page.author_id,
        "featuredMediaId": page.featured_media_id,
        "seoTitle": page.seo_title,
        "seoDescription": page.seo_description,
        "metaJson": page.meta_json,
    }
