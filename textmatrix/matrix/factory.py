# textmatrix/matrix/factory.py
"""
Matrix Builder Factory

Selects the sequential or the parallel matrix builder based on corpus size,
multiprocessing availability and the caller's preference. Both produce
identical matrices; the choice only affects speed.
"""
from textmatrix.errors import ConfigurationError
from textmatrix.utils import check_multiprocessing


class MatrixBuilderFactory:

    DEFAULT_PARALLEL_DOC_THRESHOLD = 5000

    BUILDER_CLASSES = {
        "parallel": "parallel_builder.ParallelMatrixBuilder",  # For large collections with multiprocessing
        "standard": "standard_builder.StandardMatrixBuilder"   # Single process
    }

    @staticmethod
    def create_builder(mode='auto', doc_count=None, parallel_threshold=None, profiler=None, **options):
        """
        Create and return the appropriate matrix builder.

        Args:
            mode (str): 'auto', 'standard' or 'parallel'
            doc_count (int, optional): Corpus size used by 'auto'
            parallel_threshold (int, optional): Size at which 'auto' goes parallel
            profiler (Profiler, optional): Performance profiler
            **options: Builder options (orientation, term_order, word lengths, bounds, tokenizer)

        Returns:
            BaseMatrixBuilder: An instance of the selected builder
        """
        if mode not in ('auto', 'standard', 'parallel'):
            raise ConfigurationError(f"Unknown processing mode {mode!r}")

        if parallel_threshold is None:
            parallel_threshold = MatrixBuilderFactory.DEFAULT_PARALLEL_DOC_THRESHOLD

        has_multiprocessing = check_multiprocessing() if mode != 'standard' else False

        if mode == 'auto':
            if has_multiprocessing and doc_count and doc_count >= parallel_threshold:
                mode = 'parallel'
            else:
                mode = 'standard'
            if profiler:
                profiler.log_message(f"Auto-selected matrix builder: {mode} "
                                     f"(doc_count={doc_count}, threshold={parallel_threshold}, "
                                     f"multiprocessing={'available' if has_multiprocessing else 'unavailable'})")
        elif mode == 'parallel' and not has_multiprocessing:
            if profiler:
                profiler.log_message("Warning: Parallel builder requested but multiprocessing "
                                     "not available. Using standard builder.")
            mode = 'standard'

        module_name, class_name = MatrixBuilderFactory.BUILDER_CLASSES[mode].rsplit(".", 1)
        module = __import__(f"textmatrix.matrix.{module_name}", fromlist=[class_name])
        return getattr(module, class_name)(profiler=profiler, **options)
