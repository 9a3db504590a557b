"""Passive-voice detection.

Analyzers depend on the PassiveVoiceDetector protocol. The default
implementation part-of-speech tags each sentence with nltk and flags a
form of "to be" or "to get" followed by a past participle (VBN), with
any adverbs in between ("was quickly fixed", "was not approved").
"""

import threading
from collections.abc import Callable, Sequence
from typing import Protocol

import nltk
import structlog
from nltk.tokenize import NLTKWordTokenizer

logger = structlog.get_logger(__name__)

Tagger = Callable[[list[str]], list[tuple[str, str]]]

PASSIVE_AUXILIARIES = frozenset(
    [
        "am", "is", "are", "was", "were", "be", "been", "being",
        "get", "gets", "got", "gotten", "getting",
    ]
)
ADVERB_TAGS = frozenset(["RB", "RBR", "RBS"])
PARTICIPLE_TAG = "VBN"

# (nltk.data path, download id) of the model behind nltk.pos_tag
TAGGER_RESOURCE = ("taggers/averaged_perceptron_tagger_eng", "averaged_perceptron_tagger_eng")

_resource_lock = threading.Lock()
_resource_ready = False


def ensure_tagger_model() -> None:
    """Download the perceptron tagger model if it is not installed yet."""
    global _resource_ready
    with _resource_lock:
        if _resource_ready:
            return
        path, package = TAGGER_RESOURCE
        try:
            nltk.data.find(path)
        except LookupError:
            logger.info("nltk_resource_download", resource=package)
            nltk.download(package, quiet=True)
        _resource_ready = True


def nltk_tagger(tokens: list[str]) -> list[tuple[str, str]]:
    ensure_tagger_model()
    return nltk.pos_tag(tokens)


def has_passive(tagged: Sequence[tuple[str, str]]) -> bool:
    """Check tagged tokens for an auxiliary followed by a past participle."""
    for index, (word, _) in enumerate(tagged):
        if word.lower() not in PASSIVE_AUXILIARIES:
            continue
        for _, tag in tagged[index + 1 :]:
            if tag in ADVERB_TAGS:
                continue
            if tag == PARTICIPLE_TAG:
                return True
            break
    return False


class PassiveVoiceDetector(Protocol):
    """Counts passive constructions."""

    def is_passive(self, sentence: str) -> bool: ...

    def count_passive(self, sentences: Sequence[str]) -> int: ...


class TaggerPassiveDetector:
    """Detects passive voice from part-of-speech tags."""

    def __init__(self, tagger: Tagger | None = None):
        """
        Args:
            tagger: Token list to (token, Penn tag) pairs; nltk's perceptron tagger by default
        """
        self._tagger = tagger or nltk_tagger
        self._tokenizer = NLTKWordTokenizer()

    def is_passive(self, sentence: str) -> bool:
        tokens = self._tokenizer.tokenize(sentence)
        if not tokens:
            return False
        return has_passive(self._tagger(tokens))

    def count_passive(self, sentences: Sequence[str]) -> int:
        return sum(1 for sentence in sentences if self.is_passive(sentence))
