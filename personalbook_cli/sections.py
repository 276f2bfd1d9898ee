"""
Declarative profile section schema

Each section is data: its wire name, a display label, the editable fields
and whether it is a singleton (`about`) or a list of items. Commands and
renderers look sections up here instead of branching on names.

List items carry an integer `id` unique within their list; new items get
max(existing ids) + 1.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Tuple


@dataclass(frozen=True)
class SectionSchema:
    name: str
    label: str
    fields: Tuple[str, ...]
    singleton: bool = False


SECTION_SCHEMAS: Dict[str, SectionSchema] = {
    "about": SectionSchema("about", "About", ("name", "bio", "image"), singleton=True),
    "education": SectionSchema("education", "Education", ("level", "name", "year", "grade")),
    "projects": SectionSchema("projects", "Projects", ("name", "stack", "desc", "image")),
    "learnings": SectionSchema("learnings", "Learnings", ("title", "issuer", "date")),
    "interests": SectionSchema("interests", "Interests", ("text",)),
    "wishlist": SectionSchema("wishlist", "Wishlist", ("text", "image")),
    "tours": SectionSchema("tours", "Tours", ("place", "date", "desc", "image")),
    "bestPics": SectionSchema("bestPics", "Best Pics", ("image", "caption")),
}

LIST_SECTION_NAMES = tuple(name for name, schema in SECTION_SCHEMAS.items() if not schema.singleton)

_ALIASES = {
    "best_pics": "bestPics",
    "best-pics": "bestPics",
    "bestpics": "bestPics",
}


def get_schema(section: str) -> SectionSchema:
    """Look up a section by wire name (or a snake/kebab alias)"""
    name = _ALIASES.get(section, section)
    try:
        return SECTION_SCHEMAS[name]
    except KeyError:
        raise ValueError(
            f"Unknown section '{section}'. Choose from: {', '.join(SECTION_SCHEMAS)}"
        ) from None


def get_list_schema(section: str) -> SectionSchema:
    schema = get_schema(section)
    if schema.singleton:
        raise ValueError(f"'{schema.name}' is not a list section")
    return schema


def _check_fields(schema: SectionSchema, values: Dict[str, Any]) -> None:
    unknown = sorted(set(values) - set(schema.fields))
    if unknown:
        raise ValueError(
            f"Unknown field(s) for {schema.name}: {', '.join(unknown)}. "
            f"Allowed: {', '.join(schema.fields)}"
        )


def next_item_id(items: Iterable[Dict[str, Any]]) -> int:
    return max((int(item["id"]) for item in items), default=0) + 1


def make_item(section: str, items: List[Dict[str, Any]], values: Dict[str, Any]) -> Dict[str, Any]:
    """Build a new item for `section`; does not modify `items`"""
    schema = get_list_schema(section)
    _check_fields(schema, values)

    item: Dict[str, Any] = {"id": next_item_id(items)}
    for field_name in schema.fields:
        item[field_name] = values.get(field_name, "")
    return item


def _find_index(schema: SectionSchema, items: List[Dict[str, Any]], item_id: int) -> int:
    for index, item in enumerate(items):
        if int(item["id"]) == item_id:
            return index
    raise ValueError(f"No item with id {item_id} in {schema.name}")


def update_item(section: str, items: List[Dict[str, Any]], item_id: int,
                values: Dict[str, Any]) -> Dict[str, Any]:
    """Set fields on the item with `item_id` in place and return it"""
    schema = get_list_schema(section)
    _check_fields(schema, values)

    item = items[_find_index(schema, items, item_id)]
    item.update(values)
    return item


def remove_item(section: str, items: List[Dict[str, Any]], item_id: int) -> List[Dict[str, Any]]:
    """Return `items` without the item with `item_id`"""
    schema = get_list_schema(section)
    _find_index(schema, items, item_id)
    return [item for item in items if int(item["id"]) != item_id]


def update_about(about: Dict[str, Any], values: Dict[str, Any]) -> Dict[str, Any]:
    schema = SECTION_SCHEMAS["about"]
    _check_fields(schema, values)
    return {**about, **values}


def parse_assignments(pairs: Iterable[str]) -> Dict[str, str]:
    """Parse ["field=value", ...] from the command line"""
    values: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Expected field=value, got '{pair}'")
        values[key.strip()] = value
    return values
