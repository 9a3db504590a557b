"""Main-content text extraction and readability statistics."""

import html as html_lib
import re
from dataclasses import dataclass

import numpy as np
from bs4 import BeautifulSoup

from aeo_audit.extraction.dom import PARSER

# Tags to completely remove (including content)
REMOVE_TAGS = frozenset(["script", "style", "noscript", "iframe"])

# Containers preferred over <body>, in order
MAIN_CONTENT_SELECTORS = ("main", "article", ".content")

VOWELS = "aeiouy"

_WHITESPACE = re.compile(r"\s+")
_NON_WORD = re.compile(r"[^\w\s]")
_SENTENCE_END = re.compile(r"[.!?]+")
_NON_LETTER = re.compile(r"[^a-z]")
_VOWEL_GROUP = re.compile(rf"[{VOWELS}]+")


def clean_text(text: str) -> str:
    """Decode leftover entities and collapse whitespace."""
    return _WHITESPACE.sub(" ", html_lib.unescape(text)).strip()


def extract_main_text(html: str) -> str:
    """
    Extract readable text from the main content area.

    Script, style, noscript and iframe content is dropped. The first of
    main, article or .content wins; otherwise the body is used.
    """
    soup = BeautifulSoup(html, PARSER)
    for tag in soup.find_all(REMOVE_TAGS):
        tag.decompose()

    container = None
    for selector in MAIN_CONTENT_SELECTORS:
        container = soup.select_one(selector)
        if container is not None:
            break
    if container is None:
        container = soup.body or soup

    return clean_text(container.get_text(" "))


def split_words(text: str) -> list[str]:
    """Lowercased words with punctuation removed."""
    return _NON_WORD.sub("", text.lower()).split()


def split_sentences(text: str) -> list[str]:
    """Non-empty sentences split on terminal punctuation."""
    return [s.strip() for s in _SENTENCE_END.split(text) if s.strip()]


def count_syllables(word: str) -> int:
    """Heuristic vowel-group syllable count with silent trailing e."""
    word = _NON_LETTER.sub("", word.lower())
    if len(word) <= 3:
        return 1
    count = len(_VOWEL_GROUP.findall(word))
    if word.endswith("e"):
        count -= 1
    return max(1, count)


def flesch_level(score: float) -> str:
    """Conventional label for a Flesch Reading Ease score."""
    if score >= 90:
        return "Very Easy"
    if score >= 80:
        return "Easy"
    if score >= 70:
        return "Fairly Easy"
    if score >= 60:
        return "Standard"
    if score >= 50:
        return "Fairly Difficult"
    if score >= 30:
        return "Difficult"
    return "Very Difficult"


@dataclass
class TextStatistics:
    """Word, sentence and syllable statistics for a block of text."""

    word_count: int
    sentence_count: int
    syllable_count: int
    unique_words: int
    avg_sentence_length: float
    sentence_length_std: float
    avg_syllables_per_word: float

    @property
    def flesch_reading_ease(self) -> float:
        """Flesch Reading Ease clamped to [0, 100]."""
        if self.word_count == 0 or self.sentence_count == 0:
            return 0.0
        score = (
            206.835
            - 1.015 * (self.word_count / self.sentence_count)
            - 84.6 * self.avg_syllables_per_word
        )
        return float(min(100.0, max(0.0, score)))

    @property
    def vocabulary_diversity(self) -> float:
        return self.unique_words / self.word_count if self.word_count else 0.0

    def to_dict(self) -> dict:
        return {
            "wordCount": self.word_count,
            "sentenceCount": self.sentence_count,
            "syllableCount": self.syllable_count,
            "uniqueWords": self.unique_words,
            "avgSentenceLength": round(self.avg_sentence_length, 1),
            "sentenceLengthStd": round(self.sentence_length_std, 1),
            "avgSyllablesPerWord": round(self.avg_syllables_per_word, 2),
        }


def analyze_text(text: str) -> TextStatistics:
    """Compute statistics for text."""
    words = split_words(text)
    sentences = split_sentences(text)
    lengths = np.array([len(split_words(s)) for s in sentences], dtype=np.float64)
    syllables = sum(count_syllables(w) for w in words)

    return TextStatistics(
        word_count=len(words),
        sentence_count=len(sentences),
        syllable_count=syllables,
        unique_words=len(set(words)),
        avg_sentence_length=float(lengths.mean()) if lengths.size else 0.0,
        sentence_length_std=float(lengths.std()) if lengths.size else 0.0,
        avg_syllables_per_word=syllables / len(words) if words else 0.0,
    )
