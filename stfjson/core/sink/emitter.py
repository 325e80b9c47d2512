"""
Walks document models and builds the output tree through a TreeSink.

Field names follow the stfjson JSON layout. Optional
fields that were never set are left out rather than emitted as null.
"""

from typing import Any

from stfjson.core.sink.base import TreeSink
from stfjson.models.document import Category, ConditionSet, Document, FileRecord, Item
from stfjson.models.link import CategoryLink


def _strings(sink: TreeSink, values: list[str]) -> Any:
    array = sink.new_array()
    for value in values:
        sink.append(array, sink.new_string(value))
    return array


def _set_optional(sink: TreeSink, obj: Any, key: str, value: str | None) -> None:
    if value is not None:
        sink.set_field(obj, key, sink.new_string(value))


def emit_condition_set(sink: TreeSink, conditions: ConditionSet) -> Any:
    obj = sink.new_object()
    sink.set_field(obj, "include", _strings(sink, conditions.include))
    sink.set_field(obj, "exclude", _strings(sink, conditions.exclude))
    return obj


def emit_category(sink: TreeSink, category: Category) -> Any:
    obj = sink.new_object()
    sink.set_field(obj, "name", sink.new_string(category.name))
    sink.set_field(obj, "attributes", _strings(sink, category.attributes))
    _set_optional(sink, obj, "note", category.note)
    if category.conditions is not None:
        sink.set_field(obj, "conditions", emit_condition_set(sink, category.conditions))
    if category.actions is not None:
        sink.set_field(obj, "actions", emit_condition_set(sink, category.actions))
    return obj


def emit_link(sink: TreeSink, link: CategoryLink) -> Any:
    obj = sink.new_object()
    sink.set_field(obj, "type", sink.new_string(link.type.value))
    sink.set_field(obj, "name", sink.new_string(link.name))
    _set_optional(sink, obj, "shortname", link.shortname)
    if link.alsomatch is not None:
        sink.set_field(obj, "alsomatch", _strings(sink, link.alsomatch))
    _set_optional(sink, obj, "value", link.value)
    return obj


def emit_item(sink: TreeSink, item: Item) -> Any:
    obj = sink.new_object()
    links = sink.new_array()
    for link in item.categories:
        sink.append(links, emit_link(sink, link))
    sink.set_field(obj, "categories", links)
    _set_optional(sink, obj, "text", item.text)
    _set_optional(sink, obj, "note", item.note)
    return obj


def emit_file_record(sink: TreeSink, record: FileRecord) -> Any:
    obj = sink.new_object()
    sink.set_field(obj, "timestamp", sink.new_string(record.timestamp))

    categories = sink.new_array()
    for category in record.categories:
        sink.append(categories, emit_category(sink, category))
    sink.set_field(obj, "categories", categories)

    items = sink.new_array()
    for item in record.items:
        sink.append(items, emit_item(sink, item))
    sink.set_field(obj, "items", items)
    return obj


def emit_document(document: Document, sink: TreeSink) -> Any:
    """
    Build the output tree for a document.

    Args:
        document: Converted document
        sink: Sink that creates the tree nodes

    Returns:
        Root array node, one object per STF file
    """
    root = sink.new_array()
    for record in document.files:
        sink.append(root, emit_file_record(sink, record))
    return root
