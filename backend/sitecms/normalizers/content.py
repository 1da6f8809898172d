from sitecms.utils.timestamps import isoformat_or_none


def normalize_content(item):
    data = {
        "id": item.id,
        "site_id": item.tenant_id,
        "kind": item.kind,
        "title": item.title,
        "body": item.body,
        "author_id": item.author_id,
        "created_at": isoformat_or_none(item.created_at),
    }

    if item.kind == "project":
        data["progress"] = item.progress

    return data
