# textmatrix/text_processor/base.py
from abc import ABC, abstractmethod

from textmatrix.text_processor.pipeline import Pipeline
from textmatrix.text_processor.tokenizer import WhitespaceTokenizer


class BaseTextProcessor(ABC):
    """
    Runs a normalization pipeline and a tokenizer over a corpus.

    Attributes:
        pipeline (Pipeline): Ordered normalization steps
        tokenizer (BaseTokenizer): Splits each normalized text into tokens
        profiler (Profiler, optional): Performance profiler for timing operations
    """
    def __init__(self, pipeline=None, tokenizer=None, profiler=None):
        if pipeline is None:
            pipeline = Pipeline()
        elif not isinstance(pipeline, Pipeline):
            pipeline = Pipeline(pipeline)
        self.pipeline = pipeline
        self.tokenizer = tokenizer or WhitespaceTokenizer()
        self.profiler = profiler

    @abstractmethod
    def process(self, corpus): ...

    def _process_single_text(self, text):
        text, changed = self.pipeline.run_text(text)
        return text, self.tokenizer.tokenize(text), changed
