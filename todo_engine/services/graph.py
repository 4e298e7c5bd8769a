"""
Dependency graph operations.

This module handles:
- Cycle detection for dependency validation (plain reachability search
  over the store, no graph copy)
- NetworkX views of the dependency graph for ordering and traversal

Edge direction: a task that depends on another is "blocked by" it. The
NetworkX views use dependency -> dependent edges so that a topological
order lists blockers first.
"""

from collections.abc import Iterable, Mapping

import networkx as nx

from todo_engine.exceptions import CycleDetectedError
from todo_engine.models.task import Task


def would_create_cycle(
    tasks: Mapping[int, Task],
    task_id: int,
    depends_on_id: int,
) -> bool:
    """
    Check if adding the edge (task_id depends on depends_on_id) would close a cycle.

    Algorithm:
    1. A self-loop is always a cycle
    2. Depth-first search from depends_on_id following existing depends_on edges
    3. If task_id is reachable, the new edge would close a cycle

    Ids that no longer exist in the store (dangling edges) are skipped.
    The visited set guarantees termination even on corrupted input.

    Returns True if a cycle would be created, False otherwise.
    """
    if task_id == depends_on_id:
        return True

    visited: set[int] = set()
    stack = [depends_on_id]

    while stack:
        current = stack.pop()
        if current == task_id:
            return True
        if current in visited:
            continue
        visited.add(current)

        task = tasks.get(current)
        if task is None:
            continue
        stack.extend(dep for dep in task.depends_on if dep not in visited)

    return False


def build_dependency_graph(tasks: Iterable[Task]) -> nx.DiGraph:
    """
    Build a NetworkX DiGraph from the tasks of a store.

    Returns a graph where:
    - Nodes are task IDs (with the task under the "task" attribute)
    - Edges go from dependency -> dependent
    - Dangling dependency ids are left out
    """
    graph = nx.DiGraph()

    task_list = list(tasks)
    for task in task_list:
        graph.add_node(task.id, task=task)

    for task in task_list:
        for dep_id in task.depends_on:
            if dep_id in graph:
                graph.add_edge(dep_id, task.id)

    return graph


def execution_order(tasks: Iterable[Task]) -> list[int]:
    """
    Order task ids so that every task comes after all of its dependencies.

    Among tasks that are ready, the lowest id goes first. Raises CycleDetectedError if the
    data contains a cycle (only possible with hand-edited storage files).
    """
    graph = build_dependency_graph(tasks)

    try:
        return list(nx.lexicographical_topological_sort(graph))
    except nx.NetworkXUnfeasible:
        dep_id, task_id = nx.find_cycle(graph)[0][:2]
        raise CycleDetectedError(task_id, dep_id)


def transitive_dependencies(tasks: Iterable[Task], task_id: int) -> set[int]:
    """All existing tasks that task_id waits on, directly or indirectly."""
    graph = build_dependency_graph(tasks)

    if task_id not in graph:
        return set()

    return set(nx.ancestors(graph, task_id))


def transitive_dependents(tasks: Iterable[Task], task_id: int) -> set[int]:
    """All existing tasks blocked by task_id, directly or indirectly."""
    graph = build_dependency_graph(tasks)

    if task_id not in graph:
        return set()

    return set(nx.descendants(graph, task_id))
