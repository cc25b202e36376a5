# =============================================================================
# Shared Test Fixtures - Fake LLM and Fake Docling Converter
# =============================================================================
#
# No API keys, network calls, or Docling model downloads are needed:
#   - FakeLLM implements the LLMProvider protocol with canned fragments
#   - FakeConverter stands in for docling's DocumentConverter and returns
#     a document with the given text items
# =============================================================================

from __future__ import annotations

import asyncio
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from app.services.llm import LLMResponse

SAMPLE_ANALYSIS_FRAGMENTS = (
    "# Key Findings\n",
    "- Consent form lacks the signature of the person obtaining consent\n\n",
    "# Analysis by Domain\n",
    "## Informed Consent\n",
    "The signed consent form is incomplete.\n\n",
    "# Recommendations\n",
    "- **High**: Re-consent the subject using the current form ✓\n",
)


class FakeLLM:
    """LLMProvider test double that replays fixed fragments."""

    def __init__(
        self,
        fragments: tuple[str, ...] = SAMPLE_ANALYSIS_FRAGMENTS,
        error: Exception | None = None,
        hang: bool = False,
        delay: float = 0.0,
        repeat_forever: bool = False,
    ) -> None:
        self.fragments = fragments
        self.error = error
        self.hang = hang
        self.delay = delay
        self.repeat_forever = repeat_forever
        self.calls: list[dict] = []
        self.stream_closed = False

    @property
    def text(self) -> str:
        return "".join(self.fragments)

    async def complete(self, messages, system=None, temperature=None, max_tokens=None):
        self.calls.append({"mode": "complete", "messages": messages, "system": system})
        if self.error is not None:
            raise self.error
        return LLMResponse(
            content=self.text, model="fake-model", input_tokens=100, output_tokens=50,
        )

    async def stream(self, messages, system=None, temperature=None, max_tokens=None):
        self.calls.append({"mode": "stream", "messages": messages, "system": system})
        try:
            while True:
                for fragment in self.fragments:
                    await asyncio.sleep(self.delay)
                    yield fragment
                if not self.repeat_forever:
                    break
            if self.error is not None:
                raise self.error
            if self.hang:
                await asyncio.sleep(3600)
        finally:
            self.stream_closed = True


def make_item(text: str, page_no: int, label: str = "text") -> SimpleNamespace:
    """A docling-like text item with provenance on one page."""
    return SimpleNamespace(text=text, label=label, prov=[SimpleNamespace(page_no=page_no)])


class FakeConverter:
    """Stand-in for docling's DocumentConverter."""

    def __init__(self, items=(), pages=None, error: Exception | None = None) -> None:
        self.items = list(items)
        self.pages = pages
        self.error = error
        self.sources: list = []

    def convert(self, source):
        self.sources.append(source)
        if self.error is not None:
            raise self.error
        page_numbers = self.pages
        if page_numbers is None:
            page_numbers = sorted({item.prov[0].page_no for item in self.items})
        document = SimpleNamespace(
            iterate_items=lambda: [(item, 1) for item in self.items],
            pages={page_no: SimpleNamespace(page_no=page_no) for page_no in page_numbers},
        )
        return SimpleNamespace(document=document)


def use_converter(converter: FakeConverter):
    """Patch the Docling singleton with a fake converter."""
    return patch("app.services.extractor._get_converter", return_value=converter)


@pytest.fixture
def fake_llm() -> FakeLLM:
    return FakeLLM()


@pytest.fixture
def consent_pdf_converter():
    """Two-page document: 'Subject consent form' / 'missing signature.'"""
    converter = FakeConverter(items=[
        make_item("Subject consent form", 1),
        make_item("missing signature.", 2),
    ])
    with use_converter(converter):
        yield converter
