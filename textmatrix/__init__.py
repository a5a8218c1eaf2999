"""
textmatrix: configurable text normalization and sparse term-document matrices.
"""
from textmatrix.errors import (ConfigurationError, InputShapeError, PipelineOrderWarning, TextMatrixError,
                               ThresholdOutOfRangeError)
from textmatrix.corpus import Corpus, CorpusBuilder, Document
from textmatrix.profiler import Profiler
from textmatrix.text_processor import (NGramTokenizer, Pipeline, StopwordSet, WhitespaceTokenizer,
                                       WordTokenizer, apply_pipeline, normalize_text)
from textmatrix.stemming import CompletionDictionary, StemCompleter, Stemmer, complete
from textmatrix.matrix import (DOCUMENT_TERM, TERM_DOCUMENT, SparseMatrix, TermIndex, build_matrix,
                               remove_sparse_terms, weight_matrix)
from textmatrix.config import PipelineConfig
from textmatrix.workflow import TextMatrixWorkflow, WorkflowResult, build_text_matrix

__version__ = "0.1.0"

__all__ = [
    'TextMatrixError',
    'InputShapeError',
    'ThresholdOutOfRangeError',
    'ConfigurationError',
    'PipelineOrderWarning',
    'Document',
    'Corpus',
    'CorpusBuilder',
    'Profiler',
    'WhitespaceTokenizer',
    'NGramTokenizer',
    'WordTokenizer',
    'StopwordSet',
    'Pipeline',
    'apply_pipeline',
    'normalize_text',
    'Stemmer',
    'CompletionDictionary',
    'StemCompleter',
    'complete',
    'TERM_DOCUMENT',
    'DOCUMENT_TERM',
    'TermIndex',
    'SparseMatrix',
    'build_matrix',
    'remove_sparse_terms',
    'weight_matrix',
    'PipelineConfig',
    'TextMatrixWorkflow',
    'WorkflowResult',
    'build_text_matrix'
]
