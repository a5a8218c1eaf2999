"""
Text Matrix Workflow

Runs the complete sequence for one corpus: normalize and tokenize it, count
terms into a sparse matrix, then drop sparse terms when a threshold is
configured. Processor and builder implementations are chosen through their
factories, so large corpora are handled by the parallel variants.

When the configured steps include 'complete_stems' and no completion
dictionary file is given, the dictionary is taken from the corpus as it stands
just before the first 'stem_words' step.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from textmatrix.config import PipelineConfig
from textmatrix.corpus import Corpus
from textmatrix.matrix import MatrixBuilderFactory, SparseMatrix, remove_sparse_terms
from textmatrix.stemming import CompletionDictionary
from textmatrix.text_processor import TextProcessorFactory

logger = logging.getLogger('textmatrix.workflow')


@dataclass(frozen=True)
class WorkflowResult:
    """
    Attributes:
        corpus (Corpus): The normalized, tokenized corpus
        counts (SparseMatrix): The full count matrix
        matrix (SparseMatrix): The count matrix after sparse-term removal
                               (the same object as counts without a threshold)
    """
    corpus: Corpus
    counts: SparseMatrix
    matrix: SparseMatrix


class TextMatrixWorkflow:
    def __init__(self, config: Optional[PipelineConfig] = None, profiler=None):
        self.config = config or PipelineConfig()
        self.profiler = profiler

    def _completion_dictionary(self, corpus: Corpus) -> Optional[CompletionDictionary]:
        steps = self.config.steps
        if "complete_stems" not in steps or self.config.completion_dictionary_file:
            return None
        position = min(steps.index(name) for name in ("stem_words", "complete_stems") if name in steps)
        # trace() skips diagnostics; the full pass in process() reports order warnings once
        stages = self.config.build_pipeline(stop=position).trace(corpus)
        before_stemming = stages[-1][1] if stages else corpus
        logger.info(f"Completion dictionary taken from the corpus before step {position} ({steps[position]})")
        return CompletionDictionary.from_corpus(before_stemming)

    def process(self, corpus: Corpus) -> Corpus:
        """
        Normalize and tokenize the corpus with the configured steps.

        Returns:
            Corpus: A new, tokenized corpus; the input is left untouched
        """
        pipeline = self.config.build_pipeline(self._completion_dictionary(corpus))
        processor = TextProcessorFactory.create_processor(
            pipeline=pipeline,
            tokenizer=self.config.build_tokenizer(),
            profiler=self.profiler,
            mode=self.config.processing_mode,
            doc_count=len(corpus),
            parallel_threshold=self.config.parallel_threshold
        )
        return processor.process(corpus)

    def build(self, corpus: Corpus) -> SparseMatrix:
        """Count terms of a corpus into a matrix (tokenizing it when needed)."""
        builder = MatrixBuilderFactory.create_builder(
            mode=self.config.processing_mode,
            doc_count=len(corpus),
            parallel_threshold=self.config.parallel_threshold,
            profiler=self.profiler,
            orientation=self.config.orientation,
            term_order=self.config.term_order,
            min_word_length=self.config.min_word_length,
            max_word_length=self.config.max_word_length,
            bounds=self.config.bounds,
            tokenizer=self.config.build_tokenizer()
        )
        return builder.build(corpus)

    def run(self, corpus: Corpus) -> WorkflowResult:
        processed = self.process(corpus)
        counts = self.build(processed)

        matrix = counts
        if self.config.max_sparsity is not None:
            matrix = remove_sparse_terms(counts, self.config.max_sparsity, profiler=self.profiler)

        return WorkflowResult(corpus=processed, counts=counts, matrix=matrix)


def build_text_matrix(corpus: Corpus, config: Optional[PipelineConfig] = None, profiler=None) -> SparseMatrix:
    """Normalize, tokenize and count a corpus, returning the (pruned) matrix."""
    return TextMatrixWorkflow(config, profiler).run(corpus).matrix
