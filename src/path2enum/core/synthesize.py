"""Identifier synthesis — turn a logical path into a readable symbol name.

The transform, per ``/``-separated segment:

1. substitute ``&`` with ``And``; under ``DotPolicy.MARKER`` replace ``.``
   with the dot marker,
2. split into words on ``-``, ``_``, space (and ``.`` under
   ``DotPolicy.SEPARATOR``) as well as on any other character that cannot
   appear in an identifier,
3. raise the first character of every word and concatenate,
4. compose to NFC, then prefix ``_`` when the result is empty or does not
   start with a letter or underscore.

Segments are joined with the directory marker.  Examples with the
default policy::

    arrow-left.svg          -> ArrowLeftSvg
    nested_dir/icon.svg     -> NestedDirノIconSvg
    11-test/11.svg          -> _11Testノ_11Svg

The function is total: it never raises, and ``""`` maps to ``"_"``.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass

from path2enum.errors import MalformedConfigurationError
from path2enum.model import CasingMode, DotPolicy

# Katakana NO is a letter, so joined names stay valid identifiers.
DIRECTORY_MARKER = "\u30ce"  # ノ
# Katakana middle dot: reserved for extension boundaries in MARKER policy.
DOT_MARKER = "\u30fb"  # ・

WORD_SEPARATORS = frozenset("-_ ")

SUBSTITUTIONS: tuple[tuple[str, str], ...] = (("&", "And"),)


@dataclass(frozen=True)
class SynthesisPolicy:
    """Knobs of the transform.  The defaults are the documented behaviour."""

    dot_policy: DotPolicy = DotPolicy.SEPARATOR
    casing: CasingMode = CasingMode.UNICODE
    directory_marker: str = DIRECTORY_MARKER
    dot_marker: str = DOT_MARKER

    def __post_init__(self) -> None:
        for option, marker in (
            ("directory_marker", self.directory_marker),
            ("dot_marker", self.dot_marker),
        ):
            if len(marker) != 1:
                raise MalformedConfigurationError(
                    f"must be a single character, got {marker!r}", option=option
                )
            if marker in WORD_SEPARATORS or marker in "./&":
                raise MalformedConfigurationError(
                    f"{marker!r} is reserved", option=option
                )
        if self.directory_marker == self.dot_marker:
            raise MalformedConfigurationError(
                "directory and dot markers must differ", option="dot_marker"
            )

    def to_dict(self) -> dict[str, str]:
        return {
            "dot_policy": self.dot_policy.value,
            "casing": self.casing.value,
            "directory_marker": self.directory_marker,
            "dot_marker": self.dot_marker,
        }


DEFAULT_POLICY = SynthesisPolicy()


def is_identifier_start(ch: str) -> bool:
    """A letter (any script, letter numbers included) or underscore."""
    category = unicodedata.category(ch)
    return ch == "_" or category[0] == "L" or category == "Nl"


def is_word_char(ch: str) -> bool:
    """Letters, letter numbers, combining marks, decimal digits and
    connector punctuation other than ``_``.

    Marks are kept so decomposed (NFD) names such as macOS produces stay
    in one word until the segment is composed.
    """
    if ch == "_":
        return False
    category = unicodedata.category(ch)
    return category[0] in ("L", "M") or category in ("Nd", "Nl", "Pc")


def upper_first(word: str, casing: CasingMode = CasingMode.UNICODE) -> str:
    """Raise the first character of *word*, leave the rest unchanged."""
    if not word:
        return word
    first, rest = word[0], word[1:]
    if casing is CasingMode.ASCII:
        if first.isascii():
            first = first.upper()
        return first + rest
    # str.upper may expand one character into several ("ß" -> "SS").
    return first.upper() + rest


def split_words(text: str, policy: SynthesisPolicy = DEFAULT_POLICY) -> list[str]:
    """Split a substituted segment into non-empty words."""
    keep_dot_marker = policy.dot_policy is DotPolicy.MARKER
    words: list[str] = []
    current: list[str] = []
    for ch in text:
        if is_word_char(ch) or (keep_dot_marker and ch == policy.dot_marker):
            current.append(ch)
            continue
        if current:
            words.append("".join(current))
            current = []
    if current:
        words.append("".join(current))
    return words


def _guard_start(text: str) -> str:
    if not text or not is_identifier_start(text[0]):
        return "_" + text
    return text


def synthesize_segment(segment: str, policy: SynthesisPolicy = DEFAULT_POLICY) -> str:
    """Transform one path segment (no ``/``) into an identifier fragment."""
    replaced = segment
    for needle, replacement in SUBSTITUTIONS:
        replaced = replaced.replace(needle, replacement)
    if policy.dot_policy is DotPolicy.MARKER:
        replaced = replaced.replace(".", policy.dot_marker)

    pascal = "".join(upper_first(w, policy.casing) for w in split_words(replaced, policy))
    # NFC: decomposed accents compose, so the name survives the parser.
    return _guard_start(unicodedata.normalize("NFC", pascal))


def synthesize(logical_path: str, policy: SynthesisPolicy = DEFAULT_POLICY) -> str:
    """Return the identifier for *logical_path*.  Pure, total, deterministic."""
    segments = [synthesize_segment(part, policy) for part in logical_path.split("/")]
    return _guard_start(policy.directory_marker.join(segments))
