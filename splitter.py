"""Split a bilingual tutor reply into its English body and Chinese translation."""
from typing import Tuple

from log import get_logger
from models import TRANSLATION_OPEN, TRANSLATION_CLOSE, FALLBACK_TRANSLATION

logger = get_logger("tutor.splitter")


def split_content(content: str) -> Tuple[str, str]:
    """Return ``(english, translation)`` for a raw assistant reply.

    Best-effort, in this order:
    1. text around the first ``<div class="translation">`` marker
       (the first ``</div>`` after it is dropped);
    2. otherwise the last line is the translation, when there is more than one;
    3. otherwise the whole reply is English and the translation is
       ``FALLBACK_TRANSLATION``.

    Single-line bilingual replies land in branch 3; that is known and kept.
    """
    if TRANSLATION_OPEN in content:
        english, _, rest = content.partition(TRANSLATION_OPEN)
        logger.debug("Translation extracted from marker", extra={"component": "splitter"})
        return english.strip(), rest.replace(TRANSLATION_CLOSE, "", 1).strip()

    lines = content.split("\n")
    if len(lines) > 1:
        logger.debug("Translation extracted from last line", extra={"component": "splitter"})
        return "\n".join(lines[:-1]).strip(), lines[-1].strip()

    logger.debug("No translation found", extra={"component": "splitter"})
    return content, FALLBACK_TRANSLATION
