# dirvec/__init__.py
"""
dirvec - incremental vector search over a working directory.

Files in the current directory are fingerprinted, embedded and stored in a
local FAISS index. A metadata ledger remembers what has already been embedded
so that repeated searches only re-embed files whose content changed.

Usage:
    from dirvec import DirvecConfig, run_search

    outcome = asyncio.run(run_search("refund policy", DirvecConfig()))
    for result in outcome.results:
        print(result.id, result.score)
"""

from dirvec.config import DirvecConfig
from dirvec.sync.search import SearchOutcome, run_search

__version__ = "0.1.0"

__all__ = [
    "DirvecConfig",
    "SearchOutcome",
    "run_search",
    "__version__",
]
