from . import iso


def normalize_media(media):
    return {
        "id": media.id,
        "url": media.url,
        "thumbnailUrl": media.thumbnail_url,
        "fileName": media.filename,
        "originalFileName": media.original_filename,
        "mimeType": media.mime_type,
        "size": media.size,
        "width": media.width,
        "height": media.height,
        "title": media.title,
        "altText": media.alt_text,
        "caption": media.caption,
        "description": media.description,
        "uploadedByUserId": media.uploaded_by,
        "createdAt": iso(media.created_at),
        "updatedAt": iso(media.updated_at),
        "isDeleted": media.is_deleted,
        "deletedAt": iso(media.deleted_at),
    }
