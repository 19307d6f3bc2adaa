from dataclasses import dataclass

from sms_categorizer.classifiers.vocabulary import CLS_TOKEN, SEP_TOKEN, UNK_TOKEN, Vocabulary

MAX_LEN = 64

# Standard BERT ids, used when the vocabulary lacks the reserved tokens.
FALLBACK_CLS_ID = 101
FALLBACK_SEP_ID = 102
FALLBACK_UNK_ID = 100
PAD_ID = 0


@dataclass(frozen=True)
class EncodedInput:
    ids: tuple[int, ...]
    mask: tuple[int, ...]

    @classmethod
    def from_ids(cls, ids: list[int], max_len: int = MAX_LEN) -> "EncodedInput":
        padded = tuple(ids[:max_len]) + (PAD_ID,) * max(0, max_len - len(ids))
        # A real token with id 0 cannot be told apart from padding here.
        mask = tuple(1 if token_id != PAD_ID else 0 for token_id in padded)
        return cls(ids=padded, mask=mask)

    @property
    def token_count(self) -> int:
        return sum(self.mask)


def tokenize(vocabulary: Vocabulary, text: str, max_len: int = MAX_LEN) -> EncodedInput:
    """Encode ``text`` as ``[CLS] word... [SEP] [PAD]...`` of exactly ``max_len`` ids."""
    unk_id = vocabulary.get(UNK_TOKEN, FALLBACK_UNK_ID)
    tokens = [vocabulary.get(CLS_TOKEN, FALLBACK_CLS_ID)]

    for word in text.lower().split():
        tokens.append(vocabulary.get(word, unk_id))
        # keep one slot for [SEP]
        if len(tokens) >= max_len - 1:
            break

    tokens.append(vocabulary.get(SEP_TOKEN, FALLBACK_SEP_ID))
    return EncodedInput.from_ids(tokens, max_len=max_len)
