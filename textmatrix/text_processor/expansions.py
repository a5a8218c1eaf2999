# textmatrix/text_processor/expansions.py
"""
Expansion Tables

Default surface-form tables for abbreviation, contraction and symbol
expansion, a compiled longest-match-first replacer, and a converter that
spells digit runs out as English words.
"""
import re
from typing import Dict, Mapping, Optional

DEFAULT_ABBREVIATIONS = {
    "Mr.": "Mister",
    "Mrs.": "Misses",
    "Ms.": "Miss",
    "Dr.": "Doctor",
    "Jr.": "Junior",
    "Sr.": "Senior",
    "St.": "Saint",
    "vs.": "versus",
    "etc.": "et cetera",
    "e.g.": "for example",
    "i.e.": "that is",
    "et al.": "et al",
    "www.": "www dot ",
    "A.D.": "AD",
    "B.C.": "BC",
    "A.M.": "AM",
    "P.M.": "PM",
}

DEFAULT_CONTRACTIONS = {
    "ain't": "am not",
    "aren't": "are not",
    "can't": "cannot",
    "couldn't": "could not",
    "didn't": "did not",
    "doesn't": "does not",
    "don't": "do not",
    "hadn't": "had not",
    "hasn't": "has not",
    "haven't": "have not",
    "he'd": "he would",
    "he'll": "he will",
    "he's": "he is",
    "i'd": "i would",
    "i'll": "i will",
    "i'm": "i am",
    "i've": "i have",
    "isn't": "is not",
    "it'd": "it would",
    "it'll": "it will",
    "it's": "it is",
    "let's": "let us",
    "mightn't": "might not",
    "mustn't": "must not",
    "shan't": "shall not",
    "she'd": "she would",
    "she'll": "she will",
    "she's": "she is",
    "shouldn't": "should not",
    "that's": "that is",
    "there's": "there is",
    "they'd": "they would",
    "they'll": "they will",
    "they're": "they are",
    "they've": "they have",
    "wasn't": "was not",
    "we'd": "we would",
    "we'll": "we will",
    "we're": "we are",
    "we've": "we have",
    "weren't": "were not",
    "what's": "what is",
    "where's": "where is",
    "who's": "who is",
    "won't": "will not",
    "wouldn't": "would not",
    "you'd": "you would",
    "you'll": "you will",
    "you're": "you are",
    "you've": "you have",
}

DEFAULT_SYMBOLS = {
    "$": "dollar",
    "%": "percent",
    "#": "number",
    "@": "at",
    "&": "and",
    "+": "plus",
    "=": "equals",
    "w/o": "without",
    "w/": "with",
}

_ONES = ["zero", "one", "two", "three", "four", "five", "six", "seven", "eight", "nine",
         "ten", "eleven", "twelve", "thirteen", "fourteen", "fifteen", "sixteen",
         "seventeen", "eighteen", "nineteen"]
_TENS = ["", "", "twenty", "thirty", "forty", "fifty", "sixty", "seventy", "eighty", "ninety"]
_SCALES = [(10 ** 12, "trillion"), (10 ** 9, "billion"), (10 ** 6, "million"), (1000, "thousand")]

# Standalone digit runs with optional thousands separators and a decimal part;
# digits attached to letters (abc123, 6am) are left alone
NUMBER_PATTERN = re.compile(r"(?<!\w)(?:\d{1,3}(?:,\d{3})+(?:\.\d+)?|\d+(?:\.\d+)?)(?!\w)")


def _below_thousand(n: int) -> str:
    words = []
    if n >= 100:
        words.append(f"{_ONES[n // 100]} hundred")
        n %= 100
    if n >= 20:
        words.append(_TENS[n // 10] if n % 10 == 0 else f"{_TENS[n // 10]} {_ONES[n % 10]}")
    elif n or not words:
        words.append(_ONES[n])
    return " ".join(words)


def integer_to_words(n: int) -> str:
    """Spell out a non-negative integer, e.g. 1250 -> 'one thousand two hundred fifty'."""
    if n < 0:
        raise ValueError(f"Expected a non-negative integer, got {n}")
    if n < 1000:
        return _below_thousand(n)

    words = []
    for scale, name in _SCALES:
        if n >= scale:
            words.append(f"{integer_to_words(n // scale)} {name}")
            n %= scale
    if n:
        words.append(_below_thousand(n))
    return " ".join(words)


def number_to_words(number: str) -> str:
    """
    Spell out a number written with digits.

    Thousands separators are dropped; digits after a decimal point are read
    one by one ('3.14' -> 'three point one four').
    """
    integer_part, _, fraction = number.replace(",", "").partition(".")
    words = integer_to_words(int(integer_part))
    if fraction:
        words += " point " + " ".join(_ONES[int(d)] for d in fraction)
    return words


class Replacer:
    """
    Table-driven find-and-replace.

    Surface forms are tried longest first so that overlapping entries
    ("w/o" and "w/") resolve to the longer match. Forms that begin or end
    with a word character only match on word boundaries.

    Attributes:
        table (dict): Surface form to expansion mapping
        ignore_case (bool): Match surface forms case-insensitively
        pad (bool): Surround each expansion with spaces
    """
    def __init__(self, table: Mapping[str, str], ignore_case: bool = True, pad: bool = False):
        self.table = dict(table)
        self.ignore_case = ignore_case
        self.pad = pad
        self._lookup = {self._key(k): v for k, v in self.table.items()}
        self._pattern = self._compile()

    def _key(self, form: str) -> str:
        return form.lower() if self.ignore_case else form

    def _compile(self) -> Optional[re.Pattern]:
        if not self.table:
            return None
        alternatives = []
        for form in sorted(self.table, key=lambda f: (-len(f), f)):
            piece = re.escape(form)
            if re.match(r"\w", form):
                piece = r"(?<!\w)" + piece
            if re.search(r"\w$", form):
                piece = piece + r"(?!\w)"
            alternatives.append(piece)
        flags = re.IGNORECASE if self.ignore_case else 0
        return re.compile("|".join(alternatives), flags)

    def _substitute(self, match: re.Match) -> str:
        expansion = self._lookup[self._key(match.group(0))]
        return f" {expansion} " if self.pad else expansion

    def replace(self, text: str) -> str:
        if self._pattern is None:
            return text
        return self._pattern.sub(self._substitute, text)

    def matches(self, text: str) -> bool:
        return self._pattern is not None and self._pattern.search(text) is not None

    def __getstate__(self):
        return {"table": self.table, "ignore_case": self.ignore_case, "pad": self.pad}

    def __setstate__(self, state):
        self.__init__(state["table"], state["ignore_case"], state["pad"])


def merge_tables(default: Dict[str, str], override: Optional[Mapping[str, str]]) -> Dict[str, str]:
    """Return the default table, or the caller's table when one is given."""
    return dict(default) if override is None else dict(override)
