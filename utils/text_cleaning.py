"""Text cleaning and keyword matching utilities."""
import re
from typing import Iterable, List


def clean_text(text: str) -> str:
    """
    Basic text cleaning: strip HTML tags and entities, normalize whitespace.

    Args:
        text: Raw text

    Returns:
        Cleaned text
    """
    if not text:
        return ""

    text = re.sub(r'<[^>]+>', ' ', text)
    text = text.replace('&nbsp;', ' ').replace('&amp;', '&').replace('&bull;', '•')
    # Replace multiple whitespace with single space
    text = re.sub(r'\s+', ' ', text)
    return text.strip()


def find_keywords(text: str, keywords: Iterable[str]) -> List[str]:
    """
    Case-insensitive substring match of a keyword vocabulary against text.

    Keywords are returned in vocabulary order, each at most once. Matching is
    plain substring containment, so "java" also matches inside "javascript".

    Args:
        text: Text to search
        keywords: Vocabulary of terms to look for

    Returns:
        List of vocabulary terms found in the text
    """
    if not text:
        return []

    text_lower = text.lower()
    found = []
    for keyword in keywords:
        if keyword.lower() in text_lower and keyword not in found:
            found.append(keyword)
    return found


def title_case_skill(skill: str) -> str:
    """Capitalize the first character of a skill name, leaving the rest untouched."""
    return skill[:1].upper() + skill[1:] if skill else skill
