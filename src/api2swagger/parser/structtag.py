"""Parser for raw struct tag strings such as `json:"name,optional" validate:"min=1"`."""

import re

TAG_PATTERN = re.compile(r'([A-Za-z_][\w-]*):"((?:[^"\\]|\\.)*)"')


def parse_struct_tag(raw: str) -> list[dict]:
    """Split a raw struct tag into {key, name, options} dicts, in declaration order.

    The value of each key is split on commas: the first item is the tag name,
    the remaining items are its options.
    """
    raw = raw.strip().strip("`")
    tags = []
    for match in TAG_PATTERN.finditer(raw):
        key, value = match.group(1), match.group(2).replace('\\"', '"')
        name, *options = value.split(",")
        tags.append({
            "key": key,
            "name": name.strip(),
            "options": [o.strip() for o in options if o.strip()],
        })
    return tags
