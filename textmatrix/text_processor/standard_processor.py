# textmatrix/text_processor/standard_processor.py
from textmatrix.text_processor.base import BaseTextProcessor


class StandardTextProcessor(BaseTextProcessor):
    def process(self, corpus):
        """
        Normalize and tokenize every document sequentially.

        Returns:
            Corpus: A new corpus with normalized texts and tokens
        """
        if self.profiler:
            with self.profiler.timer("Sequential Text Processing"):
                corpus = self.pipeline.apply(corpus, profiler=self.profiler)
            with self.profiler.timer("Tokenization"):
                return corpus.tokenize(self.tokenizer)

        corpus = self.pipeline.apply(corpus)
        return corpus.tokenize(self.tokenizer)
