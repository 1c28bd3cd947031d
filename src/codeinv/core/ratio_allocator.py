"""
Page allocation across directories by ratio.

Each directory receives a line quota proportional to its ratio. Code is
taken in whole files: a file is never split, so the last file taken may
overshoot the quota. Directories with less code than their quota hand the
surplus to the others.
"""

import math
from dataclasses import dataclass, field
from typing import Sequence


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


@dataclass
class FileLines:
    """Cleaned lines of one file."""

    name: str
    lines: list[str]

    @property
    def line_count(self) -> int:
        return len(self.lines)


@dataclass
class DirectorySlice:
    """
    A selected directory and its processed files, in export order.

    Attributes:
        path: Directory path
        ratio: Relative share of the page budget
        files: Processed files in the order they should be taken
    """

    path: str
    ratio: float
    files: list[FileLines] = field(default_factory=list)

    @property
    def total_lines(self) -> int:
        return sum(f.line_count for f in self.files)


@dataclass
class DirectoryAllocation:
    """What one directory contributed to the listing."""

    path: str
    ratio: float
    allocated_pages: int
    allocated_lines: int
    allocated_files: int
    total_files: int
    total_lines: int


@dataclass
class AllocationResult:
    """
    Outcome of an allocation.

    Attributes:
        lines: Concatenated listing lines, directory by directory
        total_pages: Pages needed for lines at the requested page size
        is_truncated: True if any file was left out
        allocations: Per-directory breakdown, in input order
    """

    lines: list[str] = field(default_factory=list)
    total_pages: int = 0
    is_truncated: bool = False
    allocations: list[DirectoryAllocation] = field(default_factory=list)


@dataclass
class _DirectoryState:
    source: DirectorySlice
    total_lines: int
    quota: int = 0
    collected: list[str] = field(default_factory=list)
    collected_files: int = 0


def _assign_quotas(states: list[_DirectoryState], max_total_lines: int) -> None:
    total_ratio = sum(s.source.ratio for s in states)

    for state in states:
        state.quota = _round_half_up(max_total_lines * state.source.ratio / total_ratio)

    # Rounding drift goes to the directory with the largest ratio
    drift = max_total_lines - sum(s.quota for s in states)
    if drift:
        largest = max(states, key=lambda s: s.source.ratio)
        largest.quota += drift

    surplus = 0
    sufficient: list[_DirectoryState] = []
    for state in states:
        if state.total_lines <= state.quota:
            surplus += state.quota - state.total_lines
            state.quota = state.total_lines
        else:
            sufficient.append(state)

    if surplus <= 0 or not sufficient:
        return

    sufficient_ratio = sum(s.source.ratio for s in sufficient)
    distributed = 0
    for i, state in enumerate(sufficient):
        if i == len(sufficient) - 1:
            state.quota += surplus - distributed
        else:
            extra = _round_half_up(surplus * state.source.ratio / sufficient_ratio)
            state.quota += extra
            distributed += extra
        state.quota = min(state.quota, state.total_lines)


def allocate_code_by_ratio(
    directories: Sequence[DirectorySlice],
    lines_per_page: int,
    max_pages: int,
) -> AllocationResult:
    """
    Distribute a page budget across directories and collect whole files.

    Args:
        directories: Directories with their processed files
        lines_per_page: Lines printed on one page
        max_pages: Page budget for the whole listing

    Returns:
        AllocationResult with the collected lines and per-directory breakdown

    Raises:
        ValueError: If lines_per_page is not positive
    """
    if lines_per_page <= 0:
        raise ValueError(f"lines_per_page must be positive, got {lines_per_page}")

    if not directories or sum(d.ratio for d in directories) == 0:
        return AllocationResult()

    states = [_DirectoryState(source=d, total_lines=d.total_lines) for d in directories]
    _assign_quotas(states, max_pages * lines_per_page)

    all_lines: list[str] = []
    is_truncated = False

    for state in states:
        taken = 0
        for file in state.source.files:
            if taken >= state.quota:
                is_truncated = True
                break
            state.collected.extend(file.lines)
            taken += file.line_count
            state.collected_files += 1
        all_lines.extend(state.collected)

    return AllocationResult(
        lines=all_lines,
        total_pages=math.ceil(len(all_lines) / lines_per_page),
        is_truncated=is_truncated,
        allocations=[
            DirectoryAllocation(
                path=s.source.path,
                ratio=s.source.ratio,
                allocated_pages=math.ceil(len(s.collected) / lines_per_page),
                allocated_lines=len(s.collected),
                allocated_files=s.collected_files,
                total_files=len(s.source.files),
                total_lines=s.total_lines,
            )
            for s in states
        ],
    )
