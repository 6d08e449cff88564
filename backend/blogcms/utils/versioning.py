from blogcms.extensions import db


def next_version(page_id):
    from blogcms.models.page_revision import PageRevision

    last = (
        db.session.query(db.func.max(PageRevision.version))
        .filter(PageRevision.page_id == page_id)
        .scalar()
    )
    return (last or 0) + 1


def snapshot_page(page, *, version, actor_id, change_summary):
    """
    Build the next immutable revision from the page's current content.
    The caller owns the session and the transaction.
    """
    from blogcms.models.page_revision import PageRevision

    revision = PageRevision()
    revision.page_id = page.id
    revision.version = version
    revision.title = page.title
    revision.content = page.content
    revision.excerpt = page.excerpt
    revision.change_summary = change_summary
    revision.created_by = actor_id

    db.session.add(revision)
    return revision
