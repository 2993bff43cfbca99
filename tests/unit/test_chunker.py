from summarization.chunker import chunk_text, split_sentences
from tests.conftest import make_article


def test_split_sentences_drops_delimiters_and_empty_pieces():
    assert split_sentences("Hi there!! How are you? Fine.") == ["Hi there", "How are you", "Fine"]


def test_text_within_budget_is_one_chunk():
    text = make_article(1800)
    chunks = chunk_text(text, 2000)
    assert len(chunks) == 1
    assert chunks[0].index == 0
    assert chunks[0].content == text


def test_long_text_is_split_within_budget():
    text = make_article(6500)
    chunks = chunk_text(text, 2000)

    assert len(chunks) >= 4
    assert [c.index for c in chunks] == list(range(len(chunks)))
    assert all(len(c.content) <= 2000 for c in chunks)


def test_chunks_keep_sentence_order():
    text = make_article(6500)
    chunks = chunk_text(text, 2000)
    rejoined = [s for c in chunks for s in split_sentences(c.content)]
    assert rejoined == split_sentences(text)


def test_oversized_sentence_becomes_its_own_chunk():
    text = "A" * 30 + ". " + "B" * 10
    chunks = chunk_text(text, 20)
    assert [c.content for c in chunks] == ["A" * 30, "B" * 10]


def test_delimiters_only_returns_whole_text():
    chunks = chunk_text("...!!!???", 3)
    assert [c.content for c in chunks] == ["...!!!???"]
