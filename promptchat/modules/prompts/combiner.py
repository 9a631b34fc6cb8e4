"""Combine a stored template with sanitized user input into a single prompt.

The template body is appended as context under its own heading. Bodies are
written with a ``{data}`` placeholder, but it is never substituted: the user
input goes in a separate ``USER QUERY`` section and the placeholder stays
inert. ``PromptCombination.metadata["placeholder_inert"]`` records when that
is the case.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from promptchat.modules.templates.models import PromptTemplate

ANTI_HALLUCINATION_REMINDER = (
    "IMPORTANT: Only answer with information you can verify or logically deduce "
    "from the provided context."
)


@dataclass(slots=True, frozen=True)
class CombineOptions:
    max_response_length: int = 500
    response_style: str = "concise and direct"
    language: str = "English"
    prevent_hallucination: bool = True


@dataclass(slots=True, frozen=True)
class PromptCombination:
    system_message: str
    combined_prompt: str
    metadata: dict[str, Any] = field(default_factory=dict)


def _preamble(options: CombineOptions) -> str:
    return (
        "You are a specialized and precise AI assistant. "
        f"Your goal is to provide {options.response_style} answers in {options.language}.\n"
        "\n"
        "STRICT RULES:\n"
        "- Answer ONLY based on the information provided\n"
        "- If you do not have enough information, clearly state what is missing\n"
        f"- Maximum {options.max_response_length} characters in your answer\n"
        "- Structure your answer clearly and directly\n"
        "- Do NOT invent information or data you do not have\n"
        "- Focus on being useful and accurate"
    )


def _template_block(template: PromptTemplate) -> str:
    return (
        "SPECIFIC CONTEXT:\n"
        f"{template.system_instructions}\n"
        "\n"
        "WORKING TEMPLATE:\n"
        f"{template.template}"
    )


def _user_section(sanitized_input: str) -> str:
    return f"USER QUERY:\n{sanitized_input.strip()}"


def _output_directive(options: CombineOptions) -> str:
    return (
        "REQUIRED RESPONSE FORMAT:\n"
        "- Straight to the point\n"
        "- No unnecessary introductions\n"
        f"- Maximum {options.max_response_length} characters\n"
        "- Where it helps, use numbering or bullets for clarity\n"
        "- Close with a practical recommendation if relevant"
    )


def _join(sections: list[str]) -> str:
    return "\n".join(section.strip() for section in sections if section and section.strip())


def combine(
    template: PromptTemplate,
    sanitized_input: str,
    options: CombineOptions = CombineOptions(),
) -> PromptCombination:
    preamble = _preamble(options)
    template_block = _template_block(template)

    combined_prompt = _join(
        [
            preamble,
            template_block,
            _user_section(sanitized_input),
            ANTI_HALLUCINATION_REMINDER if options.prevent_hallucination else "",
            _output_directive(options),
        ]
    )

    return PromptCombination(
        system_message=_join([preamble, template_block]),
        combined_prompt=combined_prompt,
        metadata={
            "template_id": template.id,
            "template_name": template.name,
            "user_prompt_length": len(sanitized_input),
            "max_response_length": options.max_response_length,
            "response_style": options.response_style,
            "language": options.language,
            "prevent_hallucination": options.prevent_hallucination,
            "placeholder_inert": template.has_placeholder,
        },
    )
