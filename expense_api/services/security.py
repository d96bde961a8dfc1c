import bleach


def sanitize_text(text: str | None) -> str | None:
    """Strip HTML from user-supplied text so it is safe to echo back."""
    if text is None:
        return None
    return bleach.clean(text, tags=[], attributes={}, strip=True).strip()
