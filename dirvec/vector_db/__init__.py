"""Vector index adapters."""

from dirvec.vector_db.base import SearchResult, VectorDocument, VectorIndex
from dirvec.vector_db.faiss_index import DOCSTORE_FILENAME, INDEX_FILENAME, FaissVectorIndex

__all__ = [
    "DOCSTORE_FILENAME",
    "INDEX_FILENAME",
    "FaissVectorIndex",
    "SearchResult",
    "VectorDocument",
    "VectorIndex",
]
