"""Move solution call-outs into the solutions appendix.

Exercises in the book are followed by ``::: solution`` divs. This filter pulls
each of them out of the main flow and appends it, under a copy of the nearest
preceding heading, to the ``::: solutions`` div near the end of the book.
"""

from dataclasses import dataclass, replace

from loguru import logger

from bookfilters.config import SOLUTION_CLASS, SOLUTIONS_CLASS
from bookfilters.core.tree.walk import walk_blocks_top_down, walk_top_down
from bookfilters.errors import SolutionBeforeHeaderError
from bookfilters.models.document import Block, Div, Document, Header
from bookfilters.protocols import BlockRewrite, Finished, StatefulPassThrough


@dataclass(frozen=True)
class SolutionState:
    """What the walk has seen so far, in document order."""

    last_header: Header | None = None
    solutions: tuple[tuple[Header, tuple[Block, ...]], ...] = ()
    # Number of solutions already spliced into the container.
    placed: int = 0
    container_seen: bool = False

    @property
    def unplaced(self) -> int:
        return len(self.solutions) - self.placed


def _header_text(header: Header) -> str:
    return header.attr.identifier or f"level-{header.level} heading"


class SolutionRelocation(StatefulPassThrough):
    """Top-down rules collecting solution divs and filling the appendix."""

    def rewrite_block(
        self, block: Block, state: SolutionState
    ) -> tuple[BlockRewrite, SolutionState]:
        match block:
            case Header():
                return None, replace(state, last_header=block)
            case Div(attr=attr) if attr.has_class(SOLUTION_CLASS):
                if state.last_header is None:
                    msg = (
                        f"Solution {attr.identifier or '(no id)'} appears before any "
                        "heading; move it below the exercise it answers"
                    )
                    raise SolutionBeforeHeaderError(msg)
                header = state.last_header
                logger.debug("Collected solution under {}", _header_text(header))
                # Nested solutions are collected here, after their parent in
                # order. Headings inside a solution move with it and do not label
                # later solutions.
                index = len(state.solutions)
                content, inner = walk_blocks_top_down(block.content, self, state)
                solutions = (*inner.solutions[:index], (header, content), *inner.solutions[index:])
                return Finished(()), replace(inner, last_header=header, solutions=solutions)
            case Div(attr=attr) if attr.has_class(SOLUTIONS_CLASS):
                if state.container_seen:
                    logger.warning(
                        "Ignoring extra solutions container {}", attr.identifier or "(no id)"
                    )
                    return None, state
                original, state = walk_blocks_top_down(block.content, self, state)
                appended: list[Block] = []
                for header, content in state.solutions:
                    appended.append(header)
                    appended.extend(content)
                logger.debug("Placing {} solutions in the appendix", len(state.solutions))
                # Relocated content was already walked where it was found.
                container = replace(block, content=(*original, *appended))
                return Finished((container,)), replace(
                    state, placed=len(state.solutions), container_seen=True
                )
        return None, state


def relocate_solutions(doc: Document) -> Document:
    """Move every solution div into the first solutions container.

    Raises:
        SolutionBeforeHeaderError: If a solution precedes every heading.
    """
    result, state = walk_top_down(doc, SolutionRelocation(), SolutionState())
    if state.unplaced:
        where = "after the solutions container" if state.container_seen else "with no container"
        logger.warning("Dropped {} solution(s) found {}", state.unplaced, where)
    return result
