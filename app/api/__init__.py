# =============================================================================
# API Package - FastAPI Route Handlers
# =============================================================================
#   - analyze.py: PDF upload → streamed or buffered gap analysis
#   - deps.py: Dependency providers (shared Analyzer)
# =============================================================================
