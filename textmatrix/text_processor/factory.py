# textmatrix/text_processor/factory.py
from textmatrix.errors import ConfigurationError
from textmatrix.utils import check_multiprocessing


class TextProcessorFactory:

    DEFAULT_PARALLEL_DOC_THRESHOLD = 5000

    @staticmethod
    def create_processor(pipeline=None, tokenizer=None, profiler=None,
                         mode='auto', doc_count=None, parallel_threshold=None):
        """
        Create a sequential or parallel text processor.

        Args:
            pipeline (Pipeline): Normalization steps to run
            tokenizer (BaseTokenizer, optional): Tokenizer to run after the pipeline
            profiler (Profiler, optional): Performance profiler
            mode (str): 'auto', 'standard' or 'parallel'
            doc_count (int, optional): Corpus size used by 'auto'
            parallel_threshold (int, optional): Size at which 'auto' goes parallel

        Returns:
            BaseTextProcessor: The selected processor
        """
        from textmatrix.text_processor.standard_processor import StandardTextProcessor
        from textmatrix.text_processor.parallel_processor import ParallelTextProcessor

        if mode not in ('auto', 'standard', 'parallel'):
            raise ConfigurationError(f"Unknown processing mode {mode!r}")

        if parallel_threshold is None:
            parallel_threshold = TextProcessorFactory.DEFAULT_PARALLEL_DOC_THRESHOLD

        if mode == 'auto':
            # Parallel pays off only for large collections
            if doc_count and doc_count >= parallel_threshold and check_multiprocessing():
                mode = 'parallel'
            else:
                mode = 'standard'
            if profiler:
                profiler.log_message(f"Auto-selected text processing mode: {mode} "
                                     f"(doc_count={doc_count}, threshold={parallel_threshold})")

        if mode == 'parallel':
            return ParallelTextProcessor(pipeline, tokenizer, profiler)
        return StandardTextProcessor(pipeline, tokenizer, profiler)
