# =============================================================================
# Models Package - Pydantic V2 Schemas
# =============================================================================
# Defines what crosses the wire:
#   - requests.py: response mode selector
#   - responses.py: JSON bodies (analysis, health, errors)
#   - events.py: StreamEvent frames of a streamed analysis
# =============================================================================
