# =============================================================================
# API Dependencies - FastAPI Dependency Injection
# =============================================================================
#
# get_analyzer() hands route handlers a shared Analyzer. The LLM provider
# behind it is created lazily on the first LLM call, so uploads that fail
# validation never need an API key.
#
# Tests swap the analyzer through dependency_overrides:
#   app.dependency_overrides[get_analyzer] = lambda: Analyzer(llm=FakeLLM())
# =============================================================================

from __future__ import annotations

from functools import lru_cache

from app.services.analyzer import Analyzer


@lru_cache
def get_analyzer() -> Analyzer:
    """FastAPI dependency returning the process-wide Analyzer."""
    return Analyzer()
