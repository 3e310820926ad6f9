"""Sentence-case normalization and code language sniffing."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Tuple


DEFAULT_PROPER_NOUNS: Tuple[str, ...] = (
    # Days of the week
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
    # Months
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
    # Company suffixes
    "Inc", "Corp", "LLC", "Ltd", "Co",
    # Technical terms
    "API", "HTML", "CSS", "JavaScript", "TypeScript", "React", "Vue", "Angular",
    "Node.js", "Python", "Java", "C#", "PHP", "JSON", "XML", "UI", "UX",
    # Brands
    "Google", "Microsoft", "Apple", "Amazon", "Facebook", "Twitter", "LinkedIn",
    "YouTube", "GitHub", "GitLab", "Contentful", "WordPress",
)

_SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")
_TRAILING_PUNCTUATION = re.compile(r"[.,;:!?]$")


def build_proper_noun_table(nouns: Iterable[str]) -> Dict[str, str]:
    """Map lower-cased spellings to their canonical capitalization."""
    return {noun.lower(): noun for noun in nouns if noun}


DEFAULT_PROPER_NOUN_TABLE: Dict[str, str] = build_proper_noun_table(DEFAULT_PROPER_NOUNS)


def load_proper_nouns(path: str | Path, base: Optional[Iterable[str]] = None) -> Dict[str, str]:
    """Load extra proper nouns (one per line) on top of ``base``.

    Blank lines and lines starting with ``#`` are ignored.
    """
    nouns: List[str] = list(DEFAULT_PROPER_NOUNS if base is None else base)
    for line in Path(path).read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            nouns.append(line)
    return build_proper_noun_table(nouns)


def find_proper_nouns(
    sentence: str, proper_nouns: Optional[Mapping[str, str]] = None
) -> List[str]:
    """Return proper noun spellings found in a case-folded sentence.

    Table entries are looked up case-insensitively and returned in their
    canonical form. Any other token that still starts with an uppercase letter
    is returned as-is, which after folding is usually just the first word.
    """
    table = DEFAULT_PROPER_NOUN_TABLE if proper_nouns is None else proper_nouns
    found: List[str] = []
    for word in sentence.split():
        if len(word) <= 1:
            continue
        clean = _TRAILING_PUNCTUATION.sub("", word)
        canonical = table.get(clean.lower())
        if canonical is not None:
            found.append(canonical)
        elif word[0].isupper():
            found.append(clean)
    return found


def _restore(sentence: str, noun: str) -> str:
    """Replace every whole-word, case-insensitive match of ``noun`` with ``noun``."""
    pattern = re.compile(r"(?<!\w)" + re.escape(noun) + r"(?!\w)", re.IGNORECASE)
    return pattern.sub(lambda _m: noun, sentence)


def _fold_sentence(sentence: str, proper_nouns: Optional[Mapping[str, str]]) -> str:
    if sentence:
        sentence = sentence[0].upper() + sentence[1:].lower()
    for noun in find_proper_nouns(sentence, proper_nouns):
        sentence = _restore(sentence, noun)
    return sentence


def to_sentence_case(text: str, proper_nouns: Optional[Mapping[str, str]] = None) -> str:
    """Convert ``text`` to sentence case, keeping known proper nouns.

    Sentences are split after ``.``, ``!`` or ``?`` followed by whitespace and
    rejoined with a single space.
    """
    if not text:
        return text
    sentences = _SENTENCE_BOUNDARY.split(text)
    return " ".join(_fold_sentence(s, proper_nouns) for s in sentences)


def _contains_any(*needles: str) -> Callable[[str], bool]:
    return lambda code: any(n in code for n in needles)


def _contains_all(*needles: str) -> Callable[[str], bool]:
    return lambda code: all(n in code for n in needles)


# Evaluated in order, first match wins.
LANGUAGE_CHECKS: Tuple[Tuple[str, Callable[[str], bool]], ...] = (
    (
        "jsx",
        lambda c: _contains_any("import react", "react.component", "const [")(c)
        or _contains_all("jsx", "export default")(c),
    ),
    ("go", _contains_all("func ", "package main")),
    ("python", lambda c: "def " in c and _contains_any("import ", "print(")(c)),
    (
        "javascript",
        lambda c: _contains_any("function ", "=>")(c) and _contains_any("const ", "let ")(c),
    ),
    ("typescript", lambda c: "interface " in c or _contains_all("class ", ":")(c)),
    ("java", _contains_any("public class ", "private ", "protected ")),
    ("c", _contains_any("#include <", "int main(")),
    ("cpp", _contains_any("using namespace", "std::")),
    ("php", _contains_any("<?php")),
    ("html", _contains_any("<html", "<!doctype html")),
    ("css", lambda c: "@media" in c or _contains_all("{", ":", ";")(c)),
)


def identify_code_language(code: str) -> str:
    """Guess the language of a code snippet, or ``"plain"`` when nothing matches."""
    normalized = code.strip().lower()
    for language, check in LANGUAGE_CHECKS:
        if check(normalized):
            return language
    return "plain"
