from typing import Callable, Optional

from .exceptions import ValidationError


def assert_no_cycle(
    node_id: Optional[str],
    new_parent_id: Optional[str],
    parent_of: Callable[[str], Optional[str]],
) -> None:
    """
    Reject a parent assignment that would turn the page forest into a graph
    with a cycle. Walks ancestors of the proposed parent up to a root.
    """
    if new_parent_id is None or node_id is None:
        return

    if new_parent_id == node_id:
        raise ValidationError("A page cannot be its own parent")

    visited = set()
    current: Optional[str] = new_parent_id
    while current is not None:
        if current == node_id:
            raise ValidationError("Parent assignment would create a cycle")
        if current in visited:
            # Pre-existing cycle above the proposed parent
            raise ValidationError("Page hierarchy already contains a cycle")
        visited.add(current)
        current = parent_of(current)
