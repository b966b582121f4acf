"""
Prompt construction engine.

Turns normalized document text plus the user's ProcessingOptions into the
instruction sent to the summarization model, and defines the JSON schema the
model must answer with.
"""

from __future__ import annotations

from loguru import logger

from config import MAX_TEXT_CHARS
from modules.models import ProcessingOptions

# Gemini responseSchema for a NoteResult.
NOTE_SCHEMA: dict = {
    "type": "OBJECT",
    "properties": {
        "title": {
            "type": "STRING",
            "description": "A suitable title for the notes based on the document content.",
        },
        "sections": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "heading": {
                        "type": "STRING",
                        "description": (
                            "The section heading (e.g., Introduction, Summary, "
                            "or a specific Keyword topic)."
                        ),
                    },
                    "content": {
                        "type": "STRING",
                        "description": "The extracted or summarized content for this section.",
                    },
                },
                "required": ["heading", "content"],
            },
        },
        "keywordsFound": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": (
                "List of relevant keywords or topics actually found and "
                "extracted from the text."
            ),
        },
    },
    "required": ["title", "sections", "keywordsFound"],
}


def truncate(text: str, max_chars: int = MAX_TEXT_CHARS) -> str:
    """Keep the first *max_chars* characters; the rest is never summarized."""
    if len(text) <= max_chars:
        return text
    logger.info(f"Truncating document from {len(text)} to {max_chars} chars")
    return text[:max_chars]


def _keyword_block(custom_keywords: str) -> str:
    return (
        "- **HIGHEST PRIORITY: Contextual Keyword Extraction**:\n"
        f'  - The user is specifically interested in these topics: "{custom_keywords}".\n'
        "  - **Deep Search**: You must read through the entire text to find mentions "
        "of these topics, regardless of the section they appear in.\n"
        "  - **No Headers Required**: Do not expect standard headings for these topics. "
        "Extract content even if it's inside a paragraph with a generic heading like "
        '"Introduction" or "Discussion".\n'
        "  - **Structure**: Create a distinct section for each user-provided topic/keyword "
        "and synthesize all relevant information found in the document into that section.\n"
        "  - **Emphasis**: If the document discusses these topics, ensure they are the "
        "most detailed parts of the notes.\n"
    )


def _level_block(level: str) -> str:
    line = f'\n3. **Summarization Level**: The user requested a "{level}" summary. '
    if level == "brief":
        return line + "Keep descriptions short and bulleted."
    return line + "Provide detailed paragraphs and comprehensive explanations."


# ── public builders ──────────────────────────────────────────────────────────

def build_notes_prompt(
    text: str,
    options: ProcessingOptions,
    max_chars: int = MAX_TEXT_CHARS,
) -> str:
    """Return the note-taking instruction for *text* under *options*."""
    parts: list[str] = [
        "You are an expert academic note-taker. Your task is to process the "
        "provided text from a PDF document and create structured, clean notes "
        "based on specific requirements.\n\n",
        "**Source Text:**\n",
        truncate(text, max_chars),
        " ... (Text truncated if too long, focus on the available content)\n\n",
        "**Requirements:**\n",
        "1. **Preprocessing**: Ignore headers, footers, page numbers, and "
        "irrelevant noise in the source text.\n",
        "2. **Extraction & Summarization**:\n",
    ]

    if options.custom_keywords.strip():
        parts.append(_keyword_block(options.custom_keywords.strip()))
    if options.extract_introduction:
        parts.append("- Extract and summarize the **Introduction** section. Make it clear and concise.\n")
    if options.extract_summary:
        parts.append("- Extract the document's **Abstract** or **Executive Summary** if present.\n")
    if options.extract_conclusion:
        parts.append("- Extract and summarize the **Conclusion** or **Future Scope** section.\n")

    parts.append(_level_block(options.summarization_level))
    parts.append("\n\n**Output Format**: Return the result purely as JSON matching the provided schema.")
    return "".join(parts)
