import pytest

from chunker import chunk_document, recommend_chunk_size


def test_returns_a_single_chunk_for_short_input():
    result = chunk_document("  hello world  ", 100, 10)

    assert len(result) == 1
    assert result[0].text == "hello world"
    assert result[0].chunk_index == 0
    assert result[0].chunk_total == 1
    assert result[0].original_size == len("hello world")


def test_splits_long_input_with_overlap_and_updates_totals():
    text = "\n".join([
        "Intro line", "",
        "Paragraph one text.", "",
        "Paragraph two text.", "",
        "Paragraph three text.",
    ])
    chunks = chunk_document(text, 40, 5)

    assert len(chunks) == 3
    for index, chunk in enumerate(chunks):
        assert chunk.chunk_index == index
        assert chunk.chunk_total == len(chunks)
        assert chunk.original_size == len(text.strip())
        assert len(chunk.text) > 0

    assert chunks[0].text == "Intro line\n\nParagraph one text."
    overlap = chunks[0].text[-5:]
    assert chunks[1].text.startswith(f"{overlap}\n\n")
    assert chunks[1].text == "text.\n\nParagraph two text."
    assert chunks[2].text == "text.\n\nParagraph three text."


def _prose(paragraphs=60):
    return "\n\n".join(
        f"Paragraph {i}. " + "Lorem ipsum dolor sit amet, consectetur. " * 4
        for i in range(paragraphs)
    )


def test_overlap_is_taken_from_previous_final_text():
    text = _prose()
    chunks = chunk_document(text, 1000, 120)

    assert len(chunks) > 2
    for prev, nxt in zip(chunks, chunks[1:]):
        assert nxt.text.startswith(prev.text[-120:] + "\n\n")
    assert {c.chunk_total for c in chunks} == {len(chunks)}
    assert [c.chunk_index for c in chunks] == list(range(len(chunks)))
    assert {c.original_size for c in chunks} == {len(text.strip())}


def test_breaks_prefer_paragraph_boundaries():
    text = _prose()
    chunks = chunk_document(text, 1000, 0)
    for chunk in chunks[:-1]:
        assert chunk.text.rstrip().endswith("consectetur.")


def test_falls_back_to_single_newlines():
    text = "\n".join("line %03d " % i + "x" * 40 for i in range(100))
    chunks = chunk_document(text, 500, 0)
    for chunk in chunks:
        body = chunk.text.split("\n\n", 1)[-1]
        assert body.startswith("line ")


def test_hard_breaks_when_no_newline_exists():
    chunks = chunk_document("x" * 12000, 5000, 200)
    assert len(chunks) == 3
    assert len(chunks[0].text) == 5000
    assert len(chunks[1].text) == 200 + 2 + 5000
    assert len(chunks[2].text) == 200 + 2 + 2000


def test_zero_overlap_still_separates_with_blank_line():
    chunks = chunk_document("a" * 30 + "\n\n" + "b" * 30, 40, 0)
    assert [c.text for c in chunks] == ["a" * 30, "\n\n" + "b" * 30]


@pytest.mark.parametrize("size,overlap", [(0, 10), (-5, 0), (100, -1)])
def test_invalid_sizes_fail_fast(size, overlap):
    with pytest.raises(ValueError):
        chunk_document("text", size, overlap)


def test_prefers_smaller_chunks_for_structured_content():
    text = "\n".join(["# H1", "## H2", "### H3", "#### H4", "##### H5", "###### H6"])
    assert recommend_chunk_size(text, 2000, 5000) == 2000


def test_prefers_larger_chunks_for_dense_content():
    text = "\n".join("x" * 120 for _ in range(6))
    assert recommend_chunk_size(text, 2000, 5000) == 5000


def test_dense_wins_over_structure():
    text = "\n".join("# " + "y" * 120 for _ in range(8))
    assert recommend_chunk_size(text) == 5000


def test_defaults_to_midpoint_for_mixed_content():
    text = "\n".join(["# Heading", "Normal line", "Another line"])
    assert recommend_chunk_size(text, 2000, 5000) == 3500
    assert recommend_chunk_size(text, 1, 2) == 2


def test_invalid_bounds_fail_fast():
    with pytest.raises(ValueError):
        recommend_chunk_size("x", 5000, 2000)
