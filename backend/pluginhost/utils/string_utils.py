from typing import List, Optional


def is_blank(text: Optional[str]) -> bool:
    """True for ``None``, the empty string and whitespace-only strings."""
    return text is None or not text.strip()


def split_list(raw: Optional[str], separator: str) -> List[str]:
    """Split ``raw`` on the exact separator without trimming tokens.

    Inner empty tokens are kept and trailing empty tokens are dropped:
    ``"a;;b;"`` -> ``["a", "", "b"]``. ``None`` gives an empty list.

    Args:
        raw: The delimited string, or ``None``.
        separator: Literal separator (no regex semantics).

    Returns:
        The tokens in order of appearance.
    """
    if raw is None:
        return []
    parts = raw.split(separator)
    while parts and parts[-1] == '':
        parts.pop()
    return parts
