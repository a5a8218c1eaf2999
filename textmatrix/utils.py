"""
Utility Functions

This module provides helpers for loading and saving the JSON configuration
file, configuring logging, checking for multiprocessing support and displaying
matrix statistics.
"""
import json
import logging
import os
import time
from typing import Dict

logger = logging.getLogger('textmatrix')

# Every configurable option lives here; nothing else carries a hidden default
DEFAULT_CONFIG = {
    "documents": "documents",
    "steps": ["case_fold", "expand_contractions", "strip_punctuation",
              "strip_numbers", "remove_stopwords", "strip_whitespace"],
    "case_fold_mode": "ascii",
    "punctuation": None,
    "unicode_punctuation": False,
    "preserve_intra_word_contractions": False,
    "preserve_intra_word_dashes": False,
    "number_removal": "substring",
    "abbreviations": None,
    "contractions": None,
    "symbols": None,
    "expansion_ignore_case": True,
    "stopwords_language": "english",
    "extra_stopwords": [],
    "stopwords_file": None,
    "stemmer": "snowball",
    "stemmer_language": "english",
    "completion_dictionary_file": None,
    "completion_policy": "first",
    "tokenizer": "whitespace",
    "ngram_size": 1,
    "orientation": "term-document",
    "term_order": "first_seen",
    "min_word_length": 1,
    "max_word_length": None,
    "bounds": None,
    "max_sparsity": None,
    "processing_mode": "auto",
    "parallel_threshold": 5000,
    "log_dir": None
}


def load_config(config_file='config.json') -> Dict:
    """
    Load configuration from a JSON file, falling back to defaults if not found.

    Args:
        config_file (str): Path to the configuration file

    Returns:
        dict: The file's values merged over DEFAULT_CONFIG
    """
    if not config_file or not os.path.exists(config_file):
        return dict(DEFAULT_CONFIG)

    with open(config_file, 'r', encoding='utf-8') as f:
        config = json.load(f)

    # Merge with defaults to ensure all keys exist
    return {**DEFAULT_CONFIG, **config}


def save_config(config: Dict, config_file='config.json'):
    """
    Save the current configuration to a JSON file.

    Args:
        config (dict): The configuration to save
        config_file (str): Path to the configuration file
    """
    with open(config_file, 'w', encoding='utf-8') as f:
        json.dump(config, f, indent=2)


def setup_logging(log_dir=None, level=logging.INFO):
    """
    Configure root logging with a stream handler and, when log_dir is given,
    a timestamped log file.

    Returns:
        str or None: Path of the log file, if one was created
    """
    handlers = [logging.StreamHandler()]
    log_file = None
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        log_file = os.path.join(log_dir, f"textmatrix_{time.strftime('%Y%m%d_%H%M%S')}.log")
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )
    return log_file


def check_multiprocessing() -> bool:
    """
    Check if multiprocessing is available and functional on the system.

    Returns:
        bool: True if a process pool can be created, False otherwise
    """
    try:
        import multiprocessing
        with multiprocessing.Pool(1) as _:
            pass
        return True
    except (ImportError, OSError, ValueError):
        return False


def format_memory_size(value: int) -> str:
    """
    Format memory size to a human-readable format.

    Args:
        value (int): Memory size in bytes

    Returns:
        str: Formatted memory size with units
    """
    if value > 1024 ** 3:
        return f"{value / (1024 ** 3):.2f} GB"
    elif value > 1024 ** 2:
        return f"{value / (1024 ** 2):.2f} MB"
    elif value > 1024:
        return f"{value / 1024:.2f} KB"
    else:
        return f"{value:,} bytes"


def display_vocabulary_statistics(matrix, top_n=10):
    """
    Display the number of terms and the most frequent ones.

    Args:
        matrix (SparseMatrix): The matrix to describe
        top_n (int): Number of frequent terms to list
    """
    print(f"The number of unique terms is: {matrix.n_terms}")
    print(f"The top {top_n} most frequent terms are:")
    for i, (term, freq) in enumerate(matrix.most_frequent_terms(n=top_n), 1):
        print(f"    {i}. {term} ({freq:,})")
    print("=" * 55)


def display_detailed_statistics(matrix):
    """
    Display detailed statistics about a matrix.

    Args:
        matrix (SparseMatrix): The matrix to analyze
    """
    stats = matrix.get_statistics()

    print(f"\n=== Matrix Statistics ({stats['orientation']}) ===")
    print(f"Total Documents: {stats['document_count']:,}")
    print(f"Vocabulary Size: {stats['vocabulary_size']:,}")
    print(f"Non-zero Entries: {stats['nonzero_entries']:,}")
    print(f"Sparsity: {stats['sparsity']:.2%}")
    print(f"Average Document Length: {stats['avg_doc_length']:.2f} terms")
    print(f"Max Document Length: {stats['max_doc_length']:,} terms")
    print(f"Average Document Frequency: {stats['avg_doc_freq']:.2f}")

    print("\n=== Memory Usage ===")
    for key, value in stats['memory_usage'].items():
        print(f"{key}: {format_memory_size(value)}")

    print("\n" + "=" * 56)
