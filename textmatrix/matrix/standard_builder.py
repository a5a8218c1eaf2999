# textmatrix/matrix/standard_builder.py
from textmatrix.matrix.base import BaseMatrixBuilder, count_terms


class StandardMatrixBuilder(BaseMatrixBuilder):
    def _count_documents(self, token_lists):
        timer_label = "Sequential Term Counting"

        if self.profiler:
            with self.profiler.timer(timer_label):
                return self._count_all(token_lists)
        return self._count_all(token_lists)

    def _count_all(self, token_lists):
        return [count_terms(tokens, self.min_word_length, self.max_word_length)
                for tokens in token_lists]


def build_matrix(corpus, orientation="term-document", **options):
    """Build a count matrix with the sequential builder."""
    return StandardMatrixBuilder(orientation=orientation, **options).build(corpus)
