import pytest

from lxml import etree as ET

from listnest.core.models import DocumentContext
from listnest.core.nodes import (
    get_first_child,
    get_last_child,
    get_list_tag,
    get_next_siblings,
    get_previous_siblings,
    insert_after,
    insert_before,
    is_empty,
    is_list,
    is_list_item,
    is_nested_list_item,
    is_same_node,
    remove_node,
    replace_node,
)


@pytest.fixture
def ctx():
    return DocumentContext()


@pytest.mark.parametrize("value", [None, "list", 3, object()])
def test_predicates_reject_non_elements(value):
    assert is_list(value) is False
    assert is_list_item(value) is False
    assert is_nested_list_item(value) is False


def test_predicates_classify_by_tag(ctx):
    lst = ctx.create_list("ol")
    li = ctx.create_list_item()
    assert is_list(lst) and not is_list_item(lst)
    assert is_list_item(li) and not is_list(li)
    assert get_list_tag(lst) == "ol"


def test_comment_is_not_a_list_item():
    assert is_list_item(ET.Comment("listitem")) is False


def test_nested_list_item_requires_list_as_first_child(ctx):
    wrapper = ctx.create_list_item()
    assert is_nested_list_item(wrapper) is False
    wrapper.append(ctx.create_list())
    assert is_nested_list_item(wrapper) is True

    content_first = ctx.create_list_item()
    content_first.append(ctx.create_text("x"))
    content_first.append(ctx.create_list())
    assert is_nested_list_item(content_first) is False


def test_empty_nested_list_still_counts_as_wrapper(ctx):
    wrapper = ctx.create_list_item()
    wrapper.append(ctx.create_list())
    assert is_nested_list_item(wrapper)
    assert is_empty(wrapper[0])


def test_sibling_reads_keep_document_order(ctx):
    lst = ctx.create_list()
    items = [ctx.create_list_item() for _ in range(4)]
    for li in items:
        lst.append(li)

    assert get_first_child(lst) is items[0]
    assert get_last_child(lst) is items[-1]
    assert get_previous_siblings(items[2]) == items[:2]
    assert get_next_siblings(items[1]) == items[2:]
    assert get_previous_siblings(items[0]) == []
    assert get_next_siblings(items[-1]) == []
    assert get_first_child(ctx.create_list()) is None


def test_is_same_node_uses_element_identity(ctx):
    li = ctx.create_list_item()
    other = ctx.create_list_item()
    lst = ctx.create_list()
    lst.append(li)
    # Same element reached through its parent
    assert is_same_node(li, lst[0])
    assert not is_same_node(li, other)
    assert not is_same_node(li, None)
    assert not is_same_node(None, None)


def test_is_same_node_ignores_shared_keys(ctx):
    first = ctx.create_list_item()
    second = ctx.create_list_item()
    second.set("key", first.get("key"))
    assert not is_same_node(first, second)


def test_insert_moves_node_between_parents(ctx):
    source = ctx.create_list()
    target = ctx.create_list()
    a, b, c = (ctx.create_list_item() for _ in range(3))
    source.append(a)
    target.append(b)
    target.append(c)

    insert_before(c, a)
    assert len(source) == 0
    assert list(target) == [b, a, c]

    insert_after(c, b)
    assert list(target) == [a, c, b]


def test_remove_node_detaches(ctx):
    lst = ctx.create_list()
    li = ctx.create_list_item()
    lst.append(li)
    remove_node(li)
    assert li.getparent() is None
    assert is_empty(lst)
    # Detached node: nothing to do
    remove_node(li)


def test_replace_node_with_own_descendant(ctx):
    outer = ctx.create_list()
    wrapper = ctx.create_list_item()
    inner = ctx.create_list()
    target = ctx.create_list_item()
    outer.append(wrapper)
    wrapper.append(inner)
    inner.append(target)

    replace_node(wrapper, target)

    assert list(outer) == [target]
    assert wrapper.getparent() is None
    assert is_empty(inner)


def test_replace_node_without_parent_raises(ctx):
    with pytest.raises(ValueError):
        replace_node(ctx.create_list_item(), ctx.create_list_item())
