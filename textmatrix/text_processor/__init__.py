from textmatrix.text_processor.tokenizer import (BaseTokenizer, NGramTokenizer, WhitespaceTokenizer,
                                                 WordTokenizer, create_tokenizer)
from textmatrix.text_processor.stopwords import StopwordSet
from textmatrix.text_processor.steps import (CaseFold, CompleteStems, CustomStep, ExpandAbbreviations,
                                             ExpandContractions, ExpandNumbers, ExpandSymbols,
                                             NormalizationStep, RemoveStopwords, StemWords, StepKind,
                                             StripNumbers, StripPunctuation, StripWhitespace)
from textmatrix.text_processor.pipeline import Pipeline, apply_pipeline, normalize_text
from textmatrix.text_processor.base import BaseTextProcessor
from textmatrix.text_processor.standard_processor import StandardTextProcessor
from textmatrix.text_processor.parallel_processor import ParallelTextProcessor
from textmatrix.text_processor.factory import TextProcessorFactory

__all__ = [
    'BaseTokenizer',
    'WhitespaceTokenizer',
    'NGramTokenizer',
    'WordTokenizer',
    'create_tokenizer',
    'StopwordSet',
    'StepKind',
    'NormalizationStep',
    'CaseFold',
    'StripPunctuation',
    'StripNumbers',
    'StripWhitespace',
    'ExpandAbbreviations',
    'ExpandContractions',
    'ExpandSymbols',
    'ExpandNumbers',
    'RemoveStopwords',
    'StemWords',
    'CompleteStems',
    'CustomStep',
    'Pipeline',
    'apply_pipeline',
    'normalize_text',
    'BaseTextProcessor',
    'StandardTextProcessor',
    'ParallelTextProcessor',
    'TextProcessorFactory'
]
