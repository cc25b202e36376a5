# =============================================================================
# GCP Gap Analyzer
# =============================================================================
# Upload a clinical trial PDF, get a GCP (Good Clinical Practice)
# compliance-gap analysis from an LLM, streamed back as it is generated.
#
# Package structure:
#   app/
#   ├── api/          → FastAPI route handlers (POST /api/analyze)
#   ├── data/         → Bundled reference case study corpus
#   ├── models/       → Pydantic V2 response schemas and stream events
#   ├── services/     → Business logic (PDF extraction, prompts, LLM
#   │                    providers, stream relay, analyzer)
#   ├── config.py     → Pydantic Settings
#   ├── exceptions.py → Error taxonomy mapped to HTTP responses
#   └── main.py       → FastAPI app, logging, exception handlers
# =============================================================================
