from __future__ import annotations

from .dictionary import DictionaryStore
from .models import Classification, Document
from .tree import iter_words


def classify_document(document: Document, store: DictionaryStore) -> Document:
    """
    Resolve every undecided word of ``document`` against ``store``.

    The verdict is written into the shared TokenStats, so each unique word is
    looked up once and every occurrence sees the result. Already classified
    words are left untouched.
    """
    for token in iter_words(document):
        stats = token.stats
        if stats is not None and stats.classification is Classification.UNDECIDED:
            stats.classification = store.classify(stats.word)
    return document
