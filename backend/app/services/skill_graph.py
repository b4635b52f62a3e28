"""
Skill Graph Service - Prerequisite Graph and Learning Order

Builds a directed graph of "requires" relationships between skills and
groups skills into learning layers: a skill's layer always comes after the
layers of all the skills it requires.

Graph Structure:
- Nodes: Skill ids (with a name attribute)
- Edges: skill -> prerequisite, relation "requires"

Layering Rules:
1. Layer 1 holds skills with no prerequisites inside the graph
2. Layer k+1 holds skills whose prerequisites all sit in layers 1..k
3. Within a layer, skills keep the order they were added in
4. If a cycle blocks progress, every remaining skill goes into one
   final layer

Usage:
    graph = SkillGraph()
    graph.add_skill("kubernetes", name="Kubernetes")
    graph.add_skill("docker", name="Docker")
    graph.add_relationship("kubernetes", "docker", relation_type="requires")

    graph.learning_layers()
    # Returns [["docker"], ["kubernetes"]]
"""

from dataclasses import dataclass
from typing import List, Set
import logging

import networkx as nx

logger = logging.getLogger(__name__)


@dataclass
class SkillRelation:
    """
    Represents a relationship between two skills.

    Attributes:
        source: Skill id that has the requirement
        target: Skill id being required
        relation_type: Type of relationship (requires)
    """
    source: str
    target: str
    relation_type: str = "requires"


class SkillGraph:
    """
    Directed prerequisite graph over skill ids.

    Attributes:
        _graph: NetworkX DiGraph, edges point from a skill to its prerequisite
        _order: Insertion order of skills, used to order layer members
    """

    def __init__(self) -> None:
        """Initialize empty skill graph."""
        self._graph = nx.DiGraph()
        self._order: List[str] = []

    def add_skill(self, skill_id: str, name: str = "") -> None:
        """
        Add a skill node to the graph.

        Args:
            skill_id: Canonical skill id
            name: Display name, used in log messages
        """
        if skill_id not in self._graph:
            self._order.append(skill_id)
        self._graph.add_node(skill_id, name=name or skill_id)

    def has_skill(self, skill_id: str) -> bool:
        """Check if a skill exists in the graph."""
        return skill_id in self._graph

    def add_relationship(
        self,
        source: str,
        target: str,
        relation_type: str = "requires"
    ) -> None:
        """
        Add a relationship between two skills already in the graph.

        Self-references are ignored.

        Args:
            source: Skill id that has the requirement
            target: Skill id being required
            relation_type: Type of relationship
        """
        if source == target:
            return
        for skill_id in (source, target):
            if skill_id not in self._graph:
                self.add_skill(skill_id)
        self._graph.add_edge(source, target, relation=relation_type)

    def get_relationships(self, skill_id: str) -> List[SkillRelation]:
        """
        Get all outgoing relationships from a skill.

        Args:
            skill_id: Skill to get relationships for

        Returns:
            List of SkillRelation objects
        """
        if skill_id not in self._graph:
            return []
        return [
            SkillRelation(
                source=skill_id,
                target=target,
                relation_type=self._graph.edges[skill_id, target].get("relation", "requires"),
            )
            for target in self._graph.successors(skill_id)
        ]

    def prerequisites_of(self, skill_id: str) -> Set[str]:
        """Direct prerequisites of a skill."""
        return {
            rel.target for rel in self.get_relationships(skill_id)
            if rel.relation_type == "requires"
        }

    def has_cycle(self) -> bool:
        return not nx.is_directed_acyclic_graph(self._graph)

    def learning_layers(self) -> List[List[str]]:
        """
        Group skills into prerequisite-respecting layers.

        Returns:
            Layers in learning order; each layer lists skill ids in
            insertion order
        """
        layers: List[List[str]] = []
        placed: Set[str] = set()
        remaining = list(self._order)

        while remaining:
            layer = [
                skill_id for skill_id in remaining
                if self.prerequisites_of(skill_id) <= placed
            ]
            if not layer:
                names = [self._graph.nodes[s].get("name", s) for s in remaining]
                logger.warning(
                    f"Prerequisite cycle among {', '.join(names)}; grouping them in one phase"
                )
                layer = remaining
            layers.append(layer)
            placed.update(layer)
            remaining = [s for s in remaining if s not in placed]

        return layers

    def get_skill_count(self) -> int:
        """Return number of skills in graph."""
        return self._graph.number_of_nodes()

    def get_relationship_count(self) -> int:
        """Return number of relationships in graph."""
        return self._graph.number_of_edges()
