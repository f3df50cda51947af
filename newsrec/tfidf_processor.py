"""
TF-IDF processing for content-based recommendations.

Each article is encoded over a shared, lexicographically sorted vocabulary:

    tf(t, d)  = count(t, d) / total_terms(d)      (0 for empty documents)
    idf(t)    = ln(N / (df(t) + 1))
    tfidf     = tf * idf

The +1 smoothing makes idf negative for a term present in every document,
which down-weights ubiquitous terms below zero.
"""

import logging
from typing import Dict, List, Optional, Sequence

import numpy as np
from sklearn.feature_extraction.text import CountVectorizer

from .config import Config
from .models import Article, TfIdfModel
from .text_processor import build_vocabulary, preprocess_text

logger = logging.getLogger(__name__)


def _pretokenized(tokens: List[str]) -> List[str]:
    return tokens


class TfIdfProcessor:
    """
    Builds and serves TF-IDF vectors for an article corpus.

    The model is rebuilt wholesale on every call to ``build_model``; the new
    model replaces the old one only once it is complete.
    """

    def __init__(self, config=Config):
        self.config = config
        self.model: Optional[TfIdfModel] = None

    def build_model(self, articles: Sequence[Article]) -> TfIdfModel:
        """
        Build the TF-IDF model from articles.

        Args:
            articles: Full article corpus

        Returns:
            The new model (also kept as ``self.model``)
        """
        documents = [
            preprocess_text(article.text, self.config.MIN_TOKEN_LENGTH)
            for article in articles
        ]
        vocabulary = build_vocabulary(documents)

        matrix = self._tfidf_matrix(documents, vocabulary)

        article_vectors: Dict[int, np.ndarray] = {}
        for article, row in zip(articles, matrix):
            if article.id in article_vectors:
                logger.warning(f"Duplicate article id {article.id}; keeping the last occurrence")
            vector = row.copy()
            vector.setflags(write=False)
            article_vectors[article.id] = vector

        self.model = TfIdfModel(
            vocabulary=tuple(vocabulary),
            article_vectors=article_vectors,
        )

        logger.info(
            f"TF-IDF model built: {len(articles)} articles, "
            f"{len(vocabulary)} terms"
        )
        return self.model

    @staticmethod
    def _tfidf_matrix(documents: List[List[str]], vocabulary: List[str]) -> np.ndarray:
        """TF-IDF matrix of shape (num_documents, len(vocabulary))."""
        n_docs = len(documents)
        if not vocabulary:
            return np.zeros((n_docs, 0))

        # Fixed vocabulary keeps column order identical to the sorted terms
        vectorizer = CountVectorizer(analyzer=_pretokenized, vocabulary=vocabulary)
        counts = vectorizer.fit_transform(documents).toarray().astype(float)

        doc_lengths = counts.sum(axis=1, keepdims=True)
        tf = np.divide(
            counts, doc_lengths,
            out=np.zeros_like(counts),
            where=doc_lengths > 0,
        )

        doc_freq = (counts > 0).sum(axis=0)
        idf = np.log(n_docs / (doc_freq + 1))

        return tf * idf

    def get_article_vector(self, article_id: int) -> Optional[np.ndarray]:
        """Vector for an article, or None if unknown or no model is built."""
        if self.model is None:
            return None
        return self.model.article_vectors.get(article_id)

    def get_vocabulary(self) -> List[str]:
        if self.model is None:
            return []
        return list(self.model.vocabulary)

    @property
    def vocabulary_size(self) -> int:
        return 0 if self.model is None else self.model.vocabulary_size

    def is_model_ready(self) -> bool:
        return self.model is not None
