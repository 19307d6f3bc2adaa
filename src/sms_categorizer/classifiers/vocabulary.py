import os
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from sms_categorizer.logger import get_logger

logger = get_logger(__name__)

CLS_TOKEN = "[CLS]"
SEP_TOKEN = "[SEP]"
UNK_TOKEN = "[UNK]"
PAD_TOKEN = "[PAD]"


class Vocabulary:
    """
    Whole-word vocabulary: line ``i`` of the source file is token id ``i``.

    Lines are stripped before keying. A token listed twice keeps the id of its
    last occurrence. Blank lines are tokens like any other.
    """

    def __init__(self, token_to_id: Mapping[str, int]):
        self._token_to_id = MappingProxyType(dict(token_to_id))

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "Vocabulary":
        token_to_id: dict[str, int] = {}
        for index, line in enumerate(lines):
            token_to_id[line.strip()] = index
        return cls(token_to_id)

    @classmethod
    def from_file(cls, path: str | os.PathLike[str]) -> "Vocabulary":
        # OSError propagates; callers decide whether that is fatal.
        # undecodable bytes become U+FFFD instead of failing the load
        with open(path, encoding="utf-8", errors="replace") as handle:
            vocabulary = cls.from_lines(handle)
        logger.info("Loaded vocabulary with %d tokens from %s", len(vocabulary), path)
        return vocabulary

    @property
    def token_to_id(self) -> Mapping[str, int]:
        return self._token_to_id

    def get(self, token: str, default: int | None = None) -> int | None:
        return self._token_to_id.get(token, default)

    def __contains__(self, token: object) -> bool:
        return token in self._token_to_id

    def __len__(self) -> int:
        return len(self._token_to_id)
