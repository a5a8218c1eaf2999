"""
Command-line driver.

Reads a corpus from a directory of .txt files or from a file holding one
document per line, runs the configured normalization pipeline, builds the
sparse count matrix, prunes sparse terms and prints matrix statistics.

    python -m textmatrix --documents corpus/ --max_sparsity 0.9 --stats
"""
import argparse
import logging
import os
import sys

from textmatrix.config import PipelineConfig
from textmatrix.corpus import CorpusBuilder
from textmatrix.errors import TextMatrixError
from textmatrix.profiler import Profiler
from textmatrix.utils import (display_detailed_statistics, display_vocabulary_statistics, load_config,
                              setup_logging)
from textmatrix.workflow import TextMatrixWorkflow

logger = logging.getLogger('textmatrix')


def parse_arguments(argv=None):
    """
    Parse command-line arguments; values not given on the command line come
    from the configuration file.

    Returns:
        Tuple[argparse.Namespace, dict]: The parsed arguments and the merged configuration
    """
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument('--config', default='config.json')
    known, _ = pre_parser.parse_known_args(argv)
    config = load_config(known.config)

    parser = argparse.ArgumentParser(description='Build a sparse term-document matrix from a text corpus.',
                                     parents=[pre_parser])
    parser.add_argument('--documents', default=config['documents'],
                        help=f"Directory of .txt files or a file with one document per line "
                             f"(default: {config['documents']})")
    parser.add_argument('--steps', nargs='+', default=config['steps'],
                        help=f"Normalization steps, in order (default: {' '.join(config['steps'])})")
    parser.add_argument('--stopwords_language', default=config['stopwords_language'],
                        help=f"Language of the base stopword list (default: {config['stopwords_language']})")
    parser.add_argument('--stopwords_file', default=config['stopwords_file'],
                        help='File with one stopword per line, used instead of the language list')
    parser.add_argument('--stemmer', choices=['snowball', 'porter', 'lancaster'], default=config['stemmer'],
                        help=f"Stemming algorithm (default: {config['stemmer']})")
    parser.add_argument('--completion_dictionary_file', default=config['completion_dictionary_file'],
                        help='Word list used to complete stems')
    parser.add_argument('--tokenizer', choices=['whitespace', 'ngram', 'word'], default=config['tokenizer'],
                        help=f"Tokenizer (default: {config['tokenizer']})")
    parser.add_argument('--ngram_size', type=int, default=config['ngram_size'],
                        help=f"Window size of the n-gram tokenizer (default: {config['ngram_size']})")
    parser.add_argument('--orientation', choices=['term-document', 'document-term'],
                        default=config['orientation'],
                        help=f"Matrix orientation (default: {config['orientation']})")
    parser.add_argument('--term_order', choices=['first_seen', 'lexicographic'], default=config['term_order'],
                        help=f"Term id order (default: {config['term_order']})")
    parser.add_argument('--max_sparsity', type=float, default=config['max_sparsity'],
                        help='Remove terms with sparsity above this threshold, in [0, 1)')
    parser.add_argument('--processing_mode', choices=['auto', 'standard', 'parallel'],
                        default=config['processing_mode'],
                        help=f"Processing implementation to use (default: {config['processing_mode']})")
    parser.add_argument('--parallel_threshold', type=int, default=config['parallel_threshold'],
                        help=f"Document count at which 'auto' goes parallel "
                             f"(default: {config['parallel_threshold']})")
    parser.add_argument('--top_n', type=int, default=10,
                        help='Number of most frequent terms to display (default: 10)')
    parser.add_argument('--export_json', default=None,
                        help='Export the matrix to a JSON file (specify filename)')
    parser.add_argument('--report', default=None,
                        help='Write the timing report to a file (specify filename)')
    parser.add_argument('--stats', action='store_true',
                        help='Display detailed matrix statistics')
    parser.add_argument('--log_dir', default=config['log_dir'],
                        help='Directory for log files')
    parser.add_argument('--verbose', action='store_true',
                        help='Log debug messages')

    args = parser.parse_args(argv)

    # Command-line values override the file
    for key in config:
        if hasattr(args, key):
            config[key] = getattr(args, key)
    return args, config


def load_corpus(path):
    if os.path.isdir(path):
        return CorpusBuilder.from_directory(path)
    return CorpusBuilder.from_lines(path)


def main(argv=None):
    args, config = parse_arguments(argv)
    setup_logging(args.log_dir, level=logging.DEBUG if args.verbose else logging.INFO)

    profiler = Profiler()
    profiler.start_global_timer()

    try:
        pipeline_config = PipelineConfig.from_dict(config)
        with profiler.timer("Corpus Loading"):
            corpus = load_corpus(args.documents)
        profiler.log_message(f"Loaded {len(corpus)} documents from {args.documents}")

        result = TextMatrixWorkflow(pipeline_config, profiler).run(corpus)
    except (TextMatrixError, OSError, UnicodeDecodeError) as e:
        logger.error(str(e))
        return 1

    matrix = result.matrix
    if matrix is not result.counts:
        print(f"Removed {result.counts.n_terms - matrix.n_terms} sparse terms "
              f"(max_sparsity={pipeline_config.max_sparsity})")

    display_vocabulary_statistics(matrix, top_n=args.top_n)

    if args.stats:
        display_detailed_statistics(matrix)

    if args.export_json:
        with profiler.timer("JSON Export"):
            matrix.export_json(args.export_json)
        print(f"Matrix exported to {args.export_json}")

    profiler.pause_global_timer()
    report = profiler.generate_report(doc_count=matrix.n_docs, vocab_size=matrix.n_terms, filename=args.report)
    if args.verbose:
        print(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
