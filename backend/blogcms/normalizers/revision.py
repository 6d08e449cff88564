from . import iso


def normalize_revision(revision, include_content=False):
    data = {
        "id": revision.id,
        "pageId": revision.page_id,
        "version": revision.version,
        "title": revision.title,
        "excerpt": revision.excerpt,
        "changeSummary": revision.change_summary,
        "createdByUserId": revision.created_by,
        "createdAt": iso(revision.created_at),
    }

    if include_content:
        data["content"] = revision.content

    return data
