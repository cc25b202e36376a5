# =============================================================================
# Services Package - Business Logic
# =============================================================================
# Contains the core business logic, separated from API handlers:
#   - extractor.py: PDF text extraction with Docling
#   - case_studies.py: Reference case study corpus loader
#   - prompts.py: Fixed GCP system prompt + per-document user prompt
#   - llm.py: Multi-provider LLM abstraction (OpenAI-compatible, Anthropic)
#   - relay.py: Upstream fragments → StreamEvents with a hard timeout
#   - analyzer.py: The analysis operation (buffered run / streamed stream)
#   - stream_reader.py: Client-side reassembly of streamed frames
# =============================================================================
