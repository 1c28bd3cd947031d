"""
Property-based tests for ratio allocation and smart sorting.
"""

from hypothesis import given
from hypothesis import strategies as st

from codeinv.core.file_sorter import smart_sort_files
from codeinv.core.ratio_allocator import DirectorySlice, FileLines, allocate_code_by_ratio


@st.composite
def directory_slices(draw):
    """Generate 1-4 directories with a few files of 1-20 lines each."""
    count = draw(st.integers(min_value=1, max_value=4))
    slices = []
    for d in range(count):
        sizes = draw(st.lists(st.integers(min_value=1, max_value=20), max_size=8))
        files = [
            FileLines(name=f"d{d}/f{i}", lines=[f"d{d}f{i}l{n}" for n in range(size)])
            for i, size in enumerate(sizes)
        ]
        ratio = draw(st.integers(min_value=1, max_value=5))
        slices.append(DirectorySlice(path=f"d{d}", ratio=ratio, files=files))
    return slices


@given(
    slices=directory_slices(),
    lines_per_page=st.integers(min_value=1, max_value=30),
    max_pages=st.integers(min_value=0, max_value=10),
)
def test_allocation_takes_whole_file_prefixes(slices, lines_per_page, max_pages):
    """Each directory contributes a prefix of its files, never a partial file."""
    result = allocate_code_by_ratio(slices, lines_per_page, max_pages)

    expected_lines = []
    for source, allocation in zip(slices, result.allocations):
        taken = source.files[: allocation.allocated_files]
        assert allocation.allocated_lines == sum(f.line_count for f in taken)
        for f in taken:
            expected_lines.extend(f.lines)

    assert result.lines == expected_lines
    assert result.is_truncated == any(
        a.allocated_files < a.total_files for a in result.allocations
    )
    assert result.total_pages == -(-len(result.lines) // lines_per_page)


@given(
    slices=directory_slices(),
    lines_per_page=st.integers(min_value=1, max_value=30),
    max_pages=st.integers(min_value=0, max_value=10),
)
def test_single_directory_fits_when_budget_allows(slices, lines_per_page, max_pages):
    """A lone directory within the page budget is listed in full."""
    source = slices[0]
    result = allocate_code_by_ratio([source], lines_per_page, max_pages)

    if source.total_lines <= lines_per_page * max_pages:
        assert not result.is_truncated
        assert len(result.lines) == source.total_lines


paths = st.lists(
    st.from_regex(r"(src/|tests/|lib/)?[a-z]{1,6}\.(py|ts|json|md|css)", fullmatch=True),
    unique=True,
    max_size=20,
)


@given(paths=paths)
def test_smart_sort_is_a_permutation(paths):
    """Sorting never adds or drops files and is deterministic."""
    files = [
        {"relative_path": p, "name": p.rsplit("/", 1)[-1], "ext": "." + p.rsplit(".", 1)[-1]}
        for p in paths
    ]

    ordered = smart_sort_files(files)

    assert sorted(f["relative_path"] for f in ordered) == sorted(paths)
    assert smart_sort_files(list(reversed(files))) == ordered
