#!/usr/bin/env python3
"""
Hierarchical chunking strategy.

Builds a section tree from the headers found by the language profile and
emits chunks that carry their position in that tree: heading depth, the id of
the enclosing section's first chunk and the slash-joined path of heading
titles.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import ClassVar

from lingochunk.domain.value_objects.chunk_options import ChunkOptions
from lingochunk.languages.base import LanguageProfile, SectionHeader
from lingochunk.languages.registry import LanguageProfileRegistry
from lingochunk.strategies.base import BaseChunkingStrategy, ChunkSegment
from lingochunk.strategies.sentence_strategy import SentenceChunkingStrategy
from lingochunk.types import ChunkingStrategy

logger = logging.getLogger(__name__)

SECTION_PATH_SEPARATOR = "/"


@dataclass
class SectionNode:
    """
    A node of the section tree.

    Nodes live in an arena (a list in document order) and refer to each other
    by index. ``start``/``end`` delimit the node's own text: its header line
    and body up to the next header of any level.
    """

    index: int
    level: int
    title: str | None
    start: int
    body_start: int
    end: int
    parent: int | None = None
    children: list[int] = field(default_factory=list)
    path: str = ""
    merged: bool = False  # folded into its previous sibling
    first_chunk_id: str | None = None

    @property
    def is_leaf(self) -> bool:
        return not self.children


class SectionTree:
    """Arena of section nodes with index-based parent/child links."""

    def __init__(self) -> None:
        self.nodes: list[SectionNode] = []

    def add(self, level: int, title: str | None, start: int, body_start: int, end: int) -> SectionNode:
        node = SectionNode(len(self.nodes), level, title, start, body_start, end)
        self.nodes.append(node)
        return node

    def link(self) -> None:
        """Assign parents and section paths from the heading levels."""
        stack: list[int] = []
        for node in self.nodes:
            if node.level == 0:
                continue
            while stack and self.nodes[stack[-1]].level >= node.level:
                stack.pop()
            if stack:
                parent = self.nodes[stack[-1]]
                node.parent = parent.index
                parent.children.append(node.index)
                node.path = f"{parent.path}{SECTION_PATH_SEPARATOR}{node.title}"
            else:
                node.path = node.title or ""
            stack.append(node.index)

    def siblings_after(self, node: SectionNode) -> SectionNode | None:
        """Next live sibling with the same parent and level."""
        for candidate in self.nodes[node.index + 1 :]:
            if candidate.merged:
                continue
            if candidate.level < node.level or (candidate.level == node.level and candidate.parent != node.parent):
                return None
            if candidate.level == node.level and candidate.parent == node.parent:
                return candidate
        return None

    def ancestor_chunk_id(self, node: SectionNode) -> str | None:
        """First chunk id of the closest ancestor that produced a chunk."""
        parent = node.parent
        while parent is not None:
            if self.nodes[parent].first_chunk_id:
                return self.nodes[parent].first_chunk_id
            parent = self.nodes[parent].parent
        return None

    def live_nodes(self) -> list[SectionNode]:
        return [node for node in self.nodes if not node.merged]


class HierarchicalChunkingStrategy(BaseChunkingStrategy):
    """
    Document-structure chunking strategy.

    Each section produces at least one chunk. Sections over the maximum size
    are split by sentences into sibling chunks sharing the section's tree
    position. Leaf sections under the minimum size are merged into the next
    sibling leaf at the same level.
    """

    strategy_type: ClassVar[ChunkingStrategy] = ChunkingStrategy.HIERARCHICAL

    def __init__(self, registry: LanguageProfileRegistry | None = None) -> None:
        """
        Initialize the hierarchical chunking strategy.

        Args:
            registry: Language registry used to resolve profiles
        """
        super().__init__(registry)
        self._sentences = SentenceChunkingStrategy(self.registry)

    def build_tree(self, text: str, headers: list[SectionHeader]) -> SectionTree:
        """
        Build the section tree of a text.

        Args:
            text: Full text
            headers: Section headers ordered by position

        Returns:
            Linked section tree; content before the first header becomes a
            level 0 node
        """
        tree = SectionTree()
        first_header = headers[0].start if headers else len(text)
        if text[:first_header].strip():
            tree.add(0, None, 0, 0, first_header)

        for i, header in enumerate(headers):
            end = headers[i + 1].start if i + 1 < len(headers) else len(text)
            tree.add(header.level, header.text, header.start, header.end, end)

        tree.link()
        return tree

    def merge_small_leaves(self, text: str, tree: SectionTree, options: ChunkOptions, profile: LanguageProfile) -> None:
        """Fold undersized leaf sections into their next sibling leaf."""
        for node in tree.nodes:
            if node.merged or not node.is_leaf or node.level == 0:
                continue
            while profile.estimate_token_count(text[node.start : node.end]) < options.min_chunk_size:
                sibling = tree.siblings_after(node)
                if sibling is None or not sibling.is_leaf or sibling.start != node.end:
                    break
                combined = profile.estimate_token_count(text[node.start : sibling.end])
                if combined > options.max_chunk_size:
                    break
                logger.debug(f"Merging section '{sibling.title}' into '{node.title}'")
                node.end = sibling.end
                sibling.merged = True
                if node.parent is not None:
                    tree.nodes[node.parent].children.remove(sibling.index)

    async def plan_segments(
        self,
        text: str,
        options: ChunkOptions,
        profile: LanguageProfile,
    ) -> list[ChunkSegment]:
        tree = self.build_tree(text, profile.find_section_headers(text))
        self.merge_small_leaves(text, tree, options, profile)
        await asyncio.sleep(0)

        logger.debug(f"Built section tree with {len(tree.live_nodes())} sections")

        segments: list[ChunkSegment] = []
        node_segments: dict[int, list[ChunkSegment]] = {}

        for node in tree.live_nodes():
            start = node.start if options.preserve_section_headers else node.body_start
            region = text[start : node.end]
            if not region.strip():
                continue

            if profile.estimate_token_count(region) > options.max_chunk_size:
                await asyncio.sleep(0)
                pieces = self._sentences.plan_region(text, start, node.end, options, profile)
            else:
                pieces = [ChunkSegment(start=start, end=node.end)]

            parent_id = tree.ancestor_chunk_id(node)
            for piece in pieces:
                piece.hierarchy_level = node.level
                piece.parent_id = parent_id
                piece.section_path = node.path
                piece.section_title = node.title
                piece.quality_score = max(0.5, 1.0 - 0.1 * node.level)

            if pieces:
                node.first_chunk_id = pieces[0].chunk_id
                node_segments[node.index] = pieces
                segments.extend(pieces)

        for node in tree.live_nodes():
            pieces = node_segments.get(node.index)
            if not pieces:
                continue
            pieces[0].child_ids = [
                node_segments[child][0].chunk_id for child in node.children if child in node_segments
            ]

        return segments

    def estimate_chunk_count(self, text: str | None, options: ChunkOptions) -> int:
        """At least one chunk per section, more when the text is large."""
        if not text or not text.strip():
            return 0
        profile = self.resolve_profile(text, options)
        headers = profile.find_section_headers(text)
        by_size = options.estimate_chunks(profile.estimate_token_count(text))
        if not headers:
            return by_size
        preamble = 1 if text[: headers[0].start].strip() else 0
        return max(len(headers) + preamble, by_size)
