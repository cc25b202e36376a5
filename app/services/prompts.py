# =============================================================================
# Analysis Prompt - GCP Gap Analysis Instructions
# =============================================================================
#
# The system instruction is fixed: it never depends on the uploaded
# document. It pins the model to:
#   - six GCP analysis domains (only the relevant ones are reported)
#   - three top-level output sections, in this order:
#       # Key Findings / # Analysis by Domain / # Recommendations
#   - bold priority levels on each recommendation
#
# The user instruction interpolates the extracted document text and the
# reference case studies.
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass

ANALYSIS_DOMAINS: tuple[str, ...] = (
    "IP Management",
    "Informed Consent",
    "Study Staff & Training",
    "Protocol Compliance",
    "Data Management",
    "Safety Reporting",
)

OUTPUT_SECTIONS: tuple[str, ...] = (
    "Key Findings",
    "Analysis by Domain",
    "Recommendations",
)

PRIORITY_LEVELS: tuple[str, ...] = ("High", "Medium", "Low")


def _build_system_prompt() -> str:
    domain_headings = "\n".join(f"## {domain}" for domain in ANALYSIS_DOMAINS)
    priorities = ", ".join(f"**{level}**" for level in PRIORITY_LEVELS)
    key_findings, by_domain, recommendations = OUTPUT_SECTIONS

    return (
        "You are an expert document reviewer specializing in GCP (Good "
        "Clinical Practice) inspections and clinical trial documentation.\n"
        "Analyze the provided document and identify gaps based on the "
        "case studies.\n\n"
        "Format your response in markdown with the following sections:\n\n"
        f"# {key_findings}\n"
        "- Use markdown bullet points for gaps and non-compliances\n\n"
        f"# {by_domain}\n"
        f"{domain_headings}\n"
        "(Include only relevant domains)\n\n"
        f"# {recommendations}\n"
        "- Use markdown bullet points for actionable steps\n"
        f"- Include priority levels in bold ({priorities})\n\n"
        "Use markdown features like **bold**, *italic*, `code`, and > quotes "
        "for emphasis."
    )


SYSTEM_PROMPT = _build_system_prompt()

USER_PROMPT_CLOSING = (
    "Please analyze the document, identify gaps, and provide next steps "
    "based on the case studies and GCP requirements."
)


@dataclass(frozen=True)
class AnalysisPrompt:
    """System + user instruction pair sent to the LLM."""

    system: str
    user: str

    def as_messages(self) -> list[dict[str, str]]:
        """User turn only; providers place the system prompt themselves."""
        return [{"role": "user", "content": self.user}]


def build_prompt(document_text: str, case_studies: str) -> AnalysisPrompt:
    """
    Assemble the gap-analysis prompt for one document.

    Example user instruction:
        Document content: Subject consent form missing signature.

        Reference Case Studies:
        GCP INSPECTION CASE STUDIES ...

        Please analyze the document, identify gaps, ...
    """
    user = (
        f"Document content: {document_text}\n\n"
        f"Reference Case Studies:\n{case_studies}\n\n"
        f"{USER_PROMPT_CLOSING}"
    )
    return AnalysisPrompt(system=SYSTEM_PROMPT, user=user)
