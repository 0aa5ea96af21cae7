import re

# "[update]", "(video)" and the whitespace in front of them
_ANNOTATION_RE = re.compile(r"\s*\[[^\]]*\]|\s*\([^)]*\)")
# trailing " - Source" / " | Source"
_SOURCE_SUFFIX_RE = re.compile(r"\s*[-|]\s*[^-|]+$")


def clean_headline(text: str) -> str:
    """Strip bracketed notes and the trailing source name from a wire headline."""
    if not text:
        return ""
    cleaned = _ANNOTATION_RE.sub("", text)
    cleaned = _SOURCE_SUFFIX_RE.sub("", cleaned)
    return cleaned.strip()
