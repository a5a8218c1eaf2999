"""
Pipeline Configuration

PipelineConfig is the explicit, immutable configuration surface of the
package: step list and order, stopwords, punctuation/number/whitespace
options, expansion tables, stemming, completion, tokenizer, orientation,
term order and sparsity threshold. It is passed into every run; there are no
process-wide mutable defaults.
"""
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, List, Mapping, Optional, Tuple

from textmatrix.errors import ConfigurationError
from textmatrix.matrix.reducer import validate_threshold
from textmatrix.matrix.sparse_matrix import check_orientation
from textmatrix.matrix.term_index import TERM_ORDERS
from textmatrix.stemming import ALGORITHMS, POLICIES, CompletionDictionary, StemCompleter, Stemmer
from textmatrix.text_processor.steps import (CaseFold, CompleteStems, ExpandAbbreviations, ExpandContractions,
                                             ExpandNumbers, ExpandSymbols, NormalizationStep, RemoveStopwords,
                                             StemWords, StepKind, StripNumbers, StripPunctuation, StripWhitespace)
from textmatrix.text_processor.stopwords import StopwordSet
from textmatrix.text_processor.pipeline import Pipeline
from textmatrix.text_processor.tokenizer import TOKENIZERS, create_tokenizer

STEP_NAMES = tuple(kind.value for kind in StepKind if kind is not StepKind.CUSTOM)

# Keys of the JSON config file that only the command-line driver reads
CLI_KEYS = ("documents", "log_dir")


def _freeze_table(table: Optional[Mapping[str, str]]):
    return None if table is None else tuple(sorted(table.items()))


@dataclass(frozen=True)
class PipelineConfig:
    steps: Tuple[str, ...] = ("case_fold", "expand_contractions", "strip_punctuation",
                              "strip_numbers", "remove_stopwords", "strip_whitespace")
    case_fold_mode: str = "ascii"
    punctuation: Optional[str] = None
    unicode_punctuation: bool = False
    preserve_intra_word_contractions: bool = False
    preserve_intra_word_dashes: bool = False
    number_removal: str = "substring"
    abbreviations: Optional[Tuple[Tuple[str, str], ...]] = None
    contractions: Optional[Tuple[Tuple[str, str], ...]] = None
    symbols: Optional[Tuple[Tuple[str, str], ...]] = None
    expansion_ignore_case: bool = True
    stopwords_language: Optional[str] = "english"
    extra_stopwords: Tuple[str, ...] = ()
    stopwords_file: Optional[str] = None
    stemmer: str = "snowball"
    stemmer_language: str = "english"
    completion_dictionary_file: Optional[str] = None
    completion_policy: str = "first"
    tokenizer: str = "whitespace"
    ngram_size: int = 1
    orientation: str = "term-document"
    term_order: str = "first_seen"
    min_word_length: int = 1
    max_word_length: Optional[int] = None
    bounds: Optional[Tuple[Optional[int], Optional[int]]] = None
    max_sparsity: Optional[float] = None
    processing_mode: str = "auto"
    parallel_threshold: int = 5000

    def __post_init__(self):
        # Lists and dicts from JSON are frozen so equal configurations compare equal
        object.__setattr__(self, "steps", tuple(self.steps))
        object.__setattr__(self, "extra_stopwords", tuple(self.extra_stopwords))
        for key in ("abbreviations", "contractions", "symbols"):
            table = getattr(self, key)
            if isinstance(table, Mapping):
                object.__setattr__(self, key, _freeze_table(table))
        if self.bounds is not None:
            object.__setattr__(self, "bounds", tuple(self.bounds))

        unknown = [s for s in self.steps if s not in STEP_NAMES]
        if unknown:
            raise ConfigurationError(f"Unknown pipeline steps {unknown}; expected names from {STEP_NAMES}")
        if self.stemmer not in ALGORITHMS:
            raise ConfigurationError(f"Unknown stemming algorithm {self.stemmer!r}")
        if self.completion_policy not in POLICIES:
            raise ConfigurationError(f"Unknown completion policy {self.completion_policy!r}")
        if self.tokenizer not in TOKENIZERS:
            raise ConfigurationError(f"Unknown tokenizer {self.tokenizer!r}")
        if self.term_order not in TERM_ORDERS:
            raise ConfigurationError(f"Unknown term order {self.term_order!r}")
        if self.processing_mode not in ("auto", "standard", "parallel"):
            raise ConfigurationError(f"Unknown processing mode {self.processing_mode!r}")
        check_orientation(self.orientation)
        if self.max_sparsity is not None:
            validate_threshold(self.max_sparsity)

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> "PipelineConfig":
        """
        Build a configuration from a plain mapping such as a loaded JSON file.

        Raises:
            ConfigurationError: For keys that are not configuration options
        """
        known = {f.name for f in fields(cls)}
        unknown = [k for k in values if k not in known and k not in CLI_KEYS]
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {unknown}")

        return cls(**{k: v for k, v in values.items() if k in known})

    def to_dict(self) -> Dict[str, Any]:
        values = asdict(self)
        for key in ("abbreviations", "contractions", "symbols"):
            if values[key] is not None:
                values[key] = dict(values[key])
        values["steps"] = list(self.steps)
        values["extra_stopwords"] = list(self.extra_stopwords)
        return values

    def build_stopwords(self) -> StopwordSet:
        if self.stopwords_file:
            return StopwordSet.from_file(self.stopwords_file, self.extra_stopwords, language=self.stopwords_language)
        if self.stopwords_language:
            return StopwordSet.for_language(self.stopwords_language, self.extra_stopwords)
        return StopwordSet(self.extra_stopwords)

    def build_stemmer(self) -> Stemmer:
        return Stemmer(self.stemmer, self.stemmer_language)

    def build_tokenizer(self):
        return create_tokenizer(self.tokenizer, self.ngram_size)

    def build_completer(self, dictionary: Optional[CompletionDictionary] = None) -> StemCompleter:
        if dictionary is None:
            if not self.completion_dictionary_file:
                raise ConfigurationError("complete_stems needs a completion dictionary")
            dictionary = CompletionDictionary.from_file(self.completion_dictionary_file)
        return StemCompleter(dictionary, self.build_stemmer(), self.completion_policy)

    def build_step(self, name: str, dictionary: Optional[CompletionDictionary] = None):
        if name == "case_fold":
            return CaseFold(self.case_fold_mode)
        if name == "strip_punctuation":
            return StripPunctuation(self.punctuation, self.unicode_punctuation,
                                    self.preserve_intra_word_contractions, self.preserve_intra_word_dashes)
        if name == "strip_numbers":
            return StripNumbers(self.number_removal)
        if name == "strip_whitespace":
            return StripWhitespace()
        if name == "expand_abbreviations":
            return ExpandAbbreviations(_table(self.abbreviations), self.expansion_ignore_case)
        if name == "expand_contractions":
            return ExpandContractions(_table(self.contractions), self.expansion_ignore_case)
        if name == "expand_symbols":
            return ExpandSymbols(_table(self.symbols), self.expansion_ignore_case)
        if name == "expand_numbers":
            return ExpandNumbers()
        if name == "remove_stopwords":
            return RemoveStopwords(self.build_stopwords())
        if name == "stem_words":
            return StemWords(self.build_stemmer())
        if name == "complete_stems":
            return CompleteStems(self.build_completer(dictionary))
        raise ConfigurationError(f"Unknown pipeline step {name!r}")

    def build_steps(self, dictionary: Optional[CompletionDictionary] = None, start: int = 0,
                    stop: Optional[int] = None) -> List[NormalizationStep]:
        """
        Turn step names into step objects, keeping their order.

        Args:
            dictionary (CompletionDictionary, optional): Used by 'complete_stems'
                                                         instead of completion_dictionary_file
            start (int): First step position to build
            stop (int, optional): Position after the last step to build
        """
        return [self.build_step(name, dictionary) for name in self.steps[start:stop]]

    def build_pipeline(self, dictionary: Optional[CompletionDictionary] = None, start: int = 0,
                       stop: Optional[int] = None) -> Pipeline:
        return Pipeline(self.build_steps(dictionary, start, stop))


def _table(frozen) -> Optional[Dict[str, str]]:
    return None if frozen is None else dict(frozen)
