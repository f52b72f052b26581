"""Table processing order derived from reference relationships.

A table that reads a reference depends on every table that remembers it.
The resulting graph is sorted topologically, keeping the declared order
wherever the dependencies allow it.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import networkx as nx

from dbsampler.errors import ConfigurationError, DependencyCycleError, UnknownReferenceError
from dbsampler.logging import get_logger
from dbsampler.samplers import SamplerRegistry, sampler_registry
from dbsampler.spec import ORDER_DECLARED, MigrationSet

logger = get_logger(__name__)


class TableDependencyGraph:
    """Directed graph of tables; an edge runs from producer to consumer."""

    def __init__(self):
        self.graph = nx.DiGraph()
        self.node_attributes: Dict[str, Dict[str, object]] = {}

    def add_table(self, table: str, **attrs) -> None:
        self.graph.add_node(table)
        self.node_attributes[table] = attrs

    def add_dependency(self, producer: str, consumer: str, reference: str) -> None:
        if self.graph.has_edge(producer, consumer):
            self.graph.edges[producer, consumer]["references"].append(reference)
        else:
            self.graph.add_edge(producer, consumer, references=[reference])

    def get_node_attributes(self, table: str) -> Dict[str, object]:
        return self.node_attributes.get(table, {})

    def get_predecessors(self, table: str) -> List[str]:
        return list(self.graph.predecessors(table))

    def get_successors(self, table: str) -> List[str]:
        return list(self.graph.successors(table))

    def find_cycle(self) -> Optional[List[str]]:
        """Return the tables forming a cycle, or None if the graph is acyclic."""
        try:
            return [u for u, v in nx.find_cycle(self.graph)]
        except nx.NetworkXNoCycle:
            return None

    def get_topological_sort(self) -> List[str]:
        """Topological order, ties broken by declaration index."""
        cycle = self.find_cycle()
        if cycle:
            raise DependencyCycleError(cycle)
        return list(
            nx.lexicographical_topological_sort(
                self.graph, key=lambda table: self.node_attributes[table]["index"]
            )
        )


@dataclass
class TablePlan:
    """Processing order for a migration set and how it was derived."""

    order: List[str]
    graph: TableDependencyGraph
    unresolved: Dict[str, List[str]] = field(default_factory=dict)

    def dependencies(self, table: str) -> List[str]:
        return self.graph.get_predecessors(table)


def build_dependency_graph(
    migration_set: MigrationSet, registry: Optional[SamplerRegistry] = None
) -> TablePlan:
    """Build the dependency graph for a set without ordering it yet."""
    registry = registry or sampler_registry
    graph = TableDependencyGraph()

    producers: Dict[str, List[str]] = {}
    for index, (table, spec) in enumerate(migration_set.tables.items()):
        graph.add_table(table, index=index, sampler=spec.sampler)
        for name in spec.remembered_names:
            producers.setdefault(name, []).append(table)

    unresolved: Dict[str, List[str]] = {}
    for table, spec in migration_set.tables.items():
        sampler_class = registry.validate(spec)
        for reference in sampler_class.references(spec):
            sources = [p for p in producers.get(reference, []) if p != table]
            if not sources:
                unresolved.setdefault(table, []).append(reference)
            for producer in sources:
                graph.add_dependency(producer, table, reference)

    return TablePlan(order=[], graph=graph, unresolved=unresolved)


def plan_table_order(
    migration_set: MigrationSet, registry: Optional[SamplerRegistry] = None
) -> TablePlan:
    """Work out the order in which a set's tables must be processed.

    Raises:
        ConfigurationError: For invalid sampler configuration
        UnknownReferenceError: In strict mode, for references nobody remembers
        DependencyCycleError: If tables depend on each other in a loop
    """
    plan = build_dependency_graph(migration_set, registry)
    strict = migration_set.strict_references

    for table, references in plan.unresolved.items():
        for reference in references:
            if strict:
                raise UnknownReferenceError(
                    reference,
                    table=table,
                    sampler=migration_set.tables[table].sampler,
                )
            logger.warning(
                f"{migration_set.name}: table '{table}' reads reference "
                f"'{reference}' which no other table remembers; it will sample no rows"
            )

    declared = list(migration_set.tables)
    if migration_set.order == ORDER_DECLARED:
        _check_declared_order(migration_set.name, declared, plan.graph, strict)
        plan.order = declared
    else:
        plan.order = plan.graph.get_topological_sort()
        if plan.order != declared:
            logger.info(
                f"{migration_set.name}: reordered tables by dependency: "
                + ", ".join(plan.order)
            )

    return plan


def _check_declared_order(
    set_name: str, declared: List[str], graph: TableDependencyGraph, strict: bool
) -> None:
    position = {table: index for index, table in enumerate(declared)}
    for producer, consumer in graph.graph.edges():
        if position[producer] < position[consumer]:
            continue
        message = (
            f"table '{consumer}' is declared before '{producer}', "
            "whose remembered values it reads"
        )
        if strict:
            raise ConfigurationError(f"{set_name}: {message}", table=consumer)
        logger.warning(f"{set_name}: {message}")
