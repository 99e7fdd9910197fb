"""Pull informal ``@Name`` character mentions out of free text."""

import re

from ..data_models.entities import RelationRef

_NAME_WORD = r"[A-Z][\w'-]*"
# Not preceded by a word character, so addresses like x@Corp.com are skipped
MENTION_PATTERN = re.compile(rf"(?<![\w@])@({_NAME_WORD}(?:[ \t]+{_NAME_WORD})?)")


def parse_mentions(*texts: str | None) -> list[RelationRef]:
    """
    Find character mentions across one or more texts.

    Each distinct name is returned once, in order of first appearance, as a
    reference with no backing page id.
    """
    names: dict[str, None] = {}
    for text in texts:
        for match in MENTION_PATTERN.finditer(text or ""):
            names.setdefault(match.group(1), None)
    return [RelationRef(id=None, name=name) for name in names]
