from pathlib import Path

import pytest

from sms_categorizer.classifiers.tokenizer import MAX_LEN, EncodedInput, tokenize
from sms_categorizer.classifiers.vocabulary import Vocabulary


def test_tokenize_known_words(vocabulary: Vocabulary) -> None:
    encoded = tokenize(vocabulary, "Sent Rs.500 to Swiggy")

    assert encoded.ids[:6] == (2, 4, 7, 8, 10, 3)
    assert set(encoded.ids[6:]) == {0}
    assert encoded.mask == (1,) * 6 + (0,) * (MAX_LEN - 6)


def test_tokenize_is_deterministic(vocabulary: Vocabulary) -> None:
    text = "Received Rs.250 from ACME salary"
    assert tokenize(vocabulary, text) == tokenize(vocabulary, text)


def test_output_length_is_fixed(vocabulary: Vocabulary) -> None:
    for text in ["", "sent", "sent " * 10, "word " * 500]:
        encoded = tokenize(vocabulary, text)
        assert len(encoded.ids) == MAX_LEN
        assert len(encoded.mask) == MAX_LEN


def test_token_count_matches_word_count(vocabulary: Vocabulary) -> None:
    words = ["sent", "to", "swiggy", "dinner", "from", "acme"]
    encoded = tokenize(vocabulary, " ".join(words))
    # minus [CLS] and [SEP]
    assert encoded.token_count - 2 == len(words)


def test_unknown_words_use_unk(vocabulary: Vocabulary) -> None:
    encoded = tokenize(vocabulary, "sent   to\tnobody")
    assert encoded.ids[:5] == (2, 4, 8, 1, 3)


def test_fallback_ids_without_reserved_tokens() -> None:
    vocabulary = Vocabulary.from_lines(["hello", "world"])
    encoded = tokenize(vocabulary, "World unknown")
    assert encoded.ids[:4] == (101, 1, 100, 102)


def test_long_text_is_cut_before_sep(vocabulary: Vocabulary) -> None:
    encoded = tokenize(vocabulary, "dinner " * 200)

    assert encoded.ids[0] == 2
    assert encoded.ids[-1] == 3
    assert encoded.ids[1:-1] == (12,) * (MAX_LEN - 2)
    assert all(encoded.mask)


def test_custom_max_len(vocabulary: Vocabulary) -> None:
    encoded = tokenize(vocabulary, "sent to swiggy dinner", max_len=4)
    assert encoded.ids == (2, 4, 8, 3)


def test_zero_id_token_looks_like_padding() -> None:
    # Known approximation: a real token with id 0 is masked out.
    vocabulary = Vocabulary.from_lines(["hello", "[CLS]", "[SEP]", "[UNK]"])
    encoded = tokenize(vocabulary, "hello")
    assert encoded.ids[:3] == (1, 0, 2)
    assert encoded.mask[:3] == (1, 0, 1)


def test_encoded_input_from_ids_pads() -> None:
    encoded = EncodedInput.from_ids([5, 6], max_len=4)
    assert encoded.ids == (5, 6, 0, 0)
    assert encoded.mask == (1, 1, 0, 0)


def test_vocabulary_last_duplicate_wins() -> None:
    vocabulary = Vocabulary.from_lines(["a", "b", "a"])
    assert vocabulary.get("a") == 2
    assert vocabulary.get("b") == 1


def test_vocabulary_trims_lines_and_keeps_blank(tmp_path: Path) -> None:
    vocab_file = tmp_path / "vocab.txt"
    vocab_file.write_text("[PAD]\n  sent \n\nto\n", encoding="utf-8")

    vocabulary = Vocabulary.from_file(vocab_file)

    assert len(vocabulary) == 4
    assert vocabulary.get("sent") == 1
    assert vocabulary.get("") == 2
    assert vocabulary.get("to") == 3


def test_vocabulary_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        Vocabulary.from_file(tmp_path / "missing.txt")


def test_vocabulary_replaces_undecodable_bytes(tmp_path: Path) -> None:
    vocab_file = tmp_path / "vocab.txt"
    vocab_file.write_bytes(b"[PAD]\n[UNK]\ncaf\xe9\nsent\n")

    vocabulary = Vocabulary.from_file(vocab_file)

    assert len(vocabulary) == 4
    assert vocabulary.get("sent") == 3
    assert vocabulary.get("caf\ufffd") == 2
