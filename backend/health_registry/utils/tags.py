"""Comma-separated tag columns (hospital specialties, packages)."""


def split_tags(value: str | None) -> list[str]:
    """Split a comma-separated tag string into ordered, unique, trimmed tags."""
    if not value:
        return []
    tags: list[str] = []
    for tag in value.split(","):
        tag = tag.strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def join_tags(tags: list[str] | str | None) -> str:
    if tags is None:
        return ""
    if isinstance(tags, str):
        return ",".join(split_tags(tags))
    return ",".join(tag.strip() for tag in tags if tag.strip())
