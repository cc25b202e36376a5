# =============================================================================
# Case Study Corpus - Static Reference Text for Gap Analysis
# =============================================================================
#
# The LLM grounds its findings in a fixed set of GCP inspection case
# studies. The corpus is a plain UTF-8 text file (bundled default:
# app/data/case_studies.txt, override with CASE_STUDIES_PATH).
#
# The file is read once per path and cached for the life of the process.
# =============================================================================

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from app.config import settings

logger = logging.getLogger(__name__)


def load_case_studies(path: str | None = None) -> str:
    """
    Return the reference case study text.

    Args:
        path: Corpus file to read. Defaults to settings.case_studies_path.

    Raises:
        FileNotFoundError: If the corpus file does not exist.
    """
    return _read_corpus(path or settings.case_studies_path)


@lru_cache(maxsize=8)
def _read_corpus(path: str) -> str:
    corpus_path = Path(path)
    if not corpus_path.is_file():
        raise FileNotFoundError(f"Case study corpus not found: {path}")

    text = corpus_path.read_text(encoding="utf-8").strip()
    logger.info("Loaded case study corpus: %s (%d characters)", corpus_path.name, len(text))
    return text
