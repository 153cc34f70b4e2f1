from __future__ import annotations

from ..schemas import ChatRequest


CHAT_FORMATTING_RULES = """IMPORTANT FORMATTING RULES:
- Use proper markdown formatting with **bold** for emphasis
- Use ## for main headings and ### for subheadings
- Use bullet points with - for lists
- Add relevant emojis to make responses more engaging
- Structure your response with clear sections
- Keep paragraphs concise and well-organized"""


def build_chat_prompt(request: ChatRequest) -> str:
    return (
        "You are a helpful AI Climate Assistant. You help users with climate-related "
        "questions, sustainability tips, and environmental guidance. \n\n"
        f"{CHAT_FORMATTING_RULES}\n\n"
        f"User question: {request.message}\n\n"
        "Provide a helpful, informative response about climate and environmental topics. "
        "Keep it conversational and practical. Use proper formatting with headings, bold "
        "text, bullet points, and emojis to make it visually appealing and easy to read."
    )
