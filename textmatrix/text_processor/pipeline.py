# textmatrix/text_processor/pipeline.py
"""
Normalization Pipeline

A Pipeline is an immutable, ordered tuple of normalization steps. Applying it
to a corpus runs each step over every document in corpus order and yields a
new Corpus; steps are never reordered or fused.

A step that changed no document although an earlier step is known to remove
its input (number expansion after number removal, symbol expansion after
punctuation removal, ...) completes as a no-op and is reported with a
PipelineOrderWarning. This is expected behaviour, not an error.
"""
import logging
import warnings
from typing import Iterable, List, Sequence, Tuple

from textmatrix.corpus import Corpus
from textmatrix.errors import PipelineOrderWarning
from textmatrix.text_processor.steps import NormalizationStep, as_step

logger = logging.getLogger('textmatrix.pipeline')


class Pipeline:
    def __init__(self, steps: Iterable = ()):
        self._steps = tuple(as_step(s) for s in steps)

    @property
    def steps(self) -> Tuple[NormalizationStep, ...]:
        return self._steps

    @property
    def names(self) -> List[str]:
        return [s.name for s in self._steps]

    def __len__(self):
        return len(self._steps)

    def __iter__(self):
        return iter(self._steps)

    def __repr__(self):
        return f"Pipeline({', '.join(self.names)})"

    def then(self, *steps) -> "Pipeline":
        """Return a new pipeline with the given steps appended."""
        return Pipeline(self._steps + tuple(steps))

    def run_text(self, text: str) -> Tuple[str, Tuple[bool, ...]]:
        """
        Run every step over one text.

        Returns:
            Tuple[str, Tuple[bool, ...]]: The normalized text and, per step,
                                          whether that step changed the text
        """
        changed = []
        for step in self._steps:
            result = step.transform(text)
            changed.append(result != text)
            text = result
        return text, tuple(changed)

    def apply(self, corpus: Corpus, profiler=None) -> Corpus:
        """
        Apply the steps, in order, to every document of the corpus.

        Args:
            corpus (Corpus): The corpus to normalize
            profiler (Profiler, optional): Records a timing per step

        Returns:
            Corpus: A new corpus holding the normalized texts
        """
        changed = []
        for step in self._steps:
            if profiler:
                with profiler.timer(f"Step: {step.name}"):
                    result = step.apply(corpus)
            else:
                result = step.apply(corpus)
            changed.append(any(before.text != after.text for before, after in zip(corpus, result)))
            corpus = result

        self.diagnose(changed, doc_count=len(corpus))
        return corpus

    def trace(self, corpus: Corpus) -> List[Tuple[str, Corpus]]:
        """
        Apply the pipeline and keep every intermediate corpus.

        Returns:
            List[Tuple[str, Corpus]]: (step name, corpus after that step) pairs
        """
        stages = []
        for step in self._steps:
            corpus = step.apply(corpus)
            stages.append((step.name, corpus))
        return stages

    def diagnose(self, changed: Sequence[bool], doc_count: int) -> List[str]:
        """
        Report steps that changed nothing.

        Args:
            changed: Per step, whether it changed at least one document
            doc_count (int): Number of documents processed

        Returns:
            List[str]: Messages for the PipelineOrderWarnings that were issued
        """
        messages = []
        if not doc_count:
            return messages

        for position, (step, did_change) in enumerate(zip(self._steps, changed)):
            if did_change:
                continue
            blockers = [earlier.name for earlier in self._steps[:position] if earlier.kind in step.blocked_by]
            if blockers:
                message = (f"Step '{step.name}' (position {position}) changed no document; "
                           f"it runs after {', '.join(repr(b) for b in blockers)}, which removes its input")
                logger.warning(message)
                warnings.warn(message, PipelineOrderWarning, stacklevel=3)
                messages.append(message)
            else:
                logger.debug(f"Step '{step.name}' (position {position}) changed no document")
        return messages


def apply_pipeline(corpus: Corpus, steps: Iterable, profiler=None) -> Corpus:
    """Apply an ordered sequence of steps to a corpus."""
    pipeline = steps if isinstance(steps, Pipeline) else Pipeline(steps)
    return pipeline.apply(corpus, profiler=profiler)


def normalize_text(text: str, steps: Iterable) -> str:
    """Run an ordered sequence of steps over a single string."""
    pipeline = steps if isinstance(steps, Pipeline) else Pipeline(steps)
    return pipeline.run_text(text)[0]
