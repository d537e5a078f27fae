"""
WBS hierarchy with activity rollups.

Builds a tree of WBS nodes with activities attached as leaves, computes
date, duration and progress rollups bottom-up, prunes WBS nodes left
without children, and sorts siblings WBS-first in natural code order.

Parent links that would close a cycle are cut: the offending node becomes
a root and its id is reported in ``WBSHierarchy.cyclic_ids``.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterator, Optional

from chronos.utils.helpers import natural_sort_key
from .critical_path import is_critical

logger = logging.getLogger(__name__)


@dataclass
class WBSNodeView:
    """One row of the hierarchy: a WBS node or an activity."""

    id: str
    code: str
    name: str
    is_wbs: bool
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    duration: float = 0.0
    progress: float = 0.0              # 0-1
    is_milestone: bool = False
    is_critical: bool = False
    status: str = 'WBS'
    level: int = 0
    parent_id: Optional[str] = None
    children: list['WBSNodeView'] = field(default_factory=list)

    def sort_key(self):
        return (0 if self.is_wbs else 1, natural_sort_key(self.code or self.name))


@dataclass
class WBSHierarchy:
    """Pruned, sorted WBS forest."""

    roots: list[WBSNodeView] = field(default_factory=list)
    nodes: dict[str, WBSNodeView] = field(default_factory=dict)
    cyclic_ids: list[str] = field(default_factory=list)
    pruned_ids: list[str] = field(default_factory=list)

    def get(self, wbs_id: str) -> Optional[WBSNodeView]:
        return self.nodes.get(wbs_id)

    def walk(self) -> Iterator[WBSNodeView]:
        """Depth-first, pre-order traversal of every remaining row."""
        stack = list(reversed(self.roots))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def count_activities(self) -> int:
        return sum(1 for node in self.walk() if not node.is_wbs)


def _closes_cycle(node_id: str, parent_id: str, parents: dict[str, Optional[str]]) -> bool:
    """True if linking node_id under parent_id would make node_id its own ancestor."""
    visited = set()
    current = parent_id
    while current is not None and current not in visited:
        if current == node_id:
            return True
        visited.add(current)
        current = parents.get(current)
    return False


def _activity_view(activity) -> WBSNodeView:
    return WBSNodeView(
        id=activity.id,
        code=activity.code,
        name=activity.name,
        is_wbs=False,
        start_date=activity.early_start or activity.actual_start,
        end_date=activity.early_end or activity.actual_end,
        duration=activity.duration_hours,
        progress=activity.percent_complete / 100,
        is_milestone=activity.is_milestone(),
        is_critical=is_critical(activity),
        status=activity.status_code,
    )


def _rollup(node: WBSNodeView) -> None:
    """Compute a WBS node's dates, duration and progress from its children."""
    for child in node.children:
        if child.is_wbs:
            _rollup(child)

    dated = [c for c in node.children if c.start_date and c.end_date]
    if not dated:
        node.start_date = None
        node.end_date = None
        node.duration = 0.0
        node.progress = 0.0
        return

    node.start_date = min(c.start_date for c in dated)
    node.end_date = max(c.end_date for c in dated)
    node.duration = sum(c.duration for c in dated)
    if node.duration > 0:
        node.progress = sum(c.duration * c.progress for c in dated) / node.duration
    else:
        node.progress = 0.0


def _prune(items: list[WBSNodeView], pruned: list[str]) -> list[WBSNodeView]:
    kept = []
    for item in items:
        if item.is_wbs:
            item.children = _prune(item.children, pruned)
            if not item.children:
                pruned.append(item.id)
                continue
        kept.append(item)
    return kept


def _assign_levels_and_sort(items: list[WBSNodeView], level: int) -> None:
    items.sort(key=WBSNodeView.sort_key)
    for item in items:
        item.level = level
        _assign_levels_and_sort(item.children, level + 1)


def build_wbs_hierarchy(model, project_id: Optional[str] = None) -> WBSHierarchy:
    """
    Build the WBS tree for a project.

    Args:
        model: ScheduleModel to read
        project_id: Restrict WBS nodes and activities to one project

    Returns:
        WBSHierarchy whose roots are top-level WBS nodes and any activities
        whose WBS node is unknown
    """
    hierarchy = WBSHierarchy()

    wbs_nodes = [w for w in model.wbs_nodes if project_id is None or w.project_id == project_id]
    views: dict[str, WBSNodeView] = {}
    for wbs in wbs_nodes:
        views.setdefault(wbs.id, WBSNodeView(
            id=wbs.id,
            code=wbs.short_name or wbs.id,
            name=wbs.name,
            is_wbs=True,
        ))

    # Link WBS parents, refusing links that would close a cycle
    parents: dict[str, Optional[str]] = {}
    roots: list[WBSNodeView] = []
    for wbs in wbs_nodes:
        view = views[wbs.id]
        if wbs.id in parents:
            continue
        parent_id = wbs.parent_id
        if parent_id and parent_id in views:
            if _closes_cycle(wbs.id, parent_id, parents):
                logger.warning(f"WBS cycle at node {wbs.id} (parent {parent_id}); treating as root")
                hierarchy.cyclic_ids.append(wbs.id)
                parents[wbs.id] = None
                roots.append(view)
                continue
            parents[wbs.id] = parent_id
            view.parent_id = parent_id
            views[parent_id].children.append(view)
        else:
            parents[wbs.id] = None
            roots.append(view)

    orphans = 0
    for activity in model.get_activities_by_project(project_id):
        item = _activity_view(activity)
        parent = views.get(activity.wbs_id) if activity.wbs_id else None
        if parent is not None:
            item.parent_id = parent.id
            parent.children.append(item)
        else:
            orphans += 1
            roots.append(item)
    if orphans:
        logger.debug(f"{orphans} activities without a known WBS node placed at root")

    for root in roots:
        if root.is_wbs:
            _rollup(root)

    roots = _prune(roots, hierarchy.pruned_ids)
    _assign_levels_and_sort(roots, 0)

    hierarchy.roots = roots
    hierarchy.nodes = {node.id: node for node in hierarchy.walk() if node.is_wbs}
    return hierarchy


def print_wbs_tree(hierarchy: WBSHierarchy, max_depth: Optional[int] = None) -> None:
    """Print the hierarchy as an indented tree with rollups."""
    for node in hierarchy.walk():
        if max_depth is not None and node.level > max_depth:
            continue
        indent = '  ' * node.level
        start = node.start_date.strftime('%Y-%m-%d') if node.start_date else '-'
        end = node.end_date.strftime('%Y-%m-%d') if node.end_date else '-'
        marker = '+' if node.is_wbs else ('*' if node.is_critical else '-')
        label = f"{indent}{marker} {node.code} {node.name}"
        print(f"{label[:70]:70s} {start:>10s} {end:>10s} {node.duration/8:8.1f}d {node.progress*100:5.1f}%")

    if hierarchy.cyclic_ids:
        print(f"\nWARNING: cyclic WBS parent links cut at: {', '.join(hierarchy.cyclic_ids)}")
