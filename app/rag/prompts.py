SYSTEM_PROMPT = (
    "You are a friendly assistant for the CS 61A course. "
    "Keep your responses concise and helpful."
)


def build_context_suffix(context: str) -> str:
    """Framing appended to the system prompt when retrieval produced context."""
    if not context:
        return ""
    return (
        "\n\nIMPORTANT: Use the following course information to answer the user's question. "
        "If the information is relevant to their question, base your answer on this context:"
        f"\n\n{context}\n\n"
        "When answering, reference specific details from the provided course information when applicable."
    )
