"""Card deck builder.

Turns a pool of image keys into a shuffled deck in which every image key
appears an even number of times.
"""

import logging
import random
from collections.abc import Sequence

from memory_match.domain.constants import CARDS_PER_PAIR
from memory_match.domain.entities.card import Card

logger = logging.getLogger(__name__)


class DeckConfigurationError(ValueError):
    """Raised when a deck cannot be built from the given pool and pair count."""

    pass


def _pick_image_keys(
    image_pool: Sequence[str], pair_count: int, rng: random.Random
) -> list[str]:
    """Choose one image key per pair.

    Distinct keys are sampled when the pool is large enough. Otherwise the
    distinct keys are cycled, so a key may back more than one pair.
    """
    distinct = list(dict.fromkeys(image_pool))

    if pair_count <= len(distinct):
        return rng.sample(distinct, pair_count)

    logger.warning(
        f"Pair count {pair_count} exceeds {len(distinct)} distinct images, reusing images"
    )
    repeats, extra = divmod(pair_count, len(distinct))
    return distinct * repeats + rng.sample(distinct, extra)


def build_deck(
    image_pool: Sequence[str],
    pair_count: int,
    rng: random.Random | None = None,
) -> list[Card]:
    """Build a shuffled, paired, indexed deck.

    Args:
        image_pool: Image keys available for the session
        pair_count: Number of pairs to deal (deck size is twice this)
        rng: Random source, defaults to a fresh system-seeded generator

    Returns:
        ``2 * pair_count`` face-down cards in play, ids numbered from 0

    Raises:
        DeckConfigurationError: If pair_count < 1 or the pool is empty
    """
    if pair_count < 1:
        raise DeckConfigurationError(f"pair_count must be at least 1, got {pair_count}")
    if not image_pool:
        raise DeckConfigurationError("image_pool must contain at least one image key")

    rng = rng or random.Random()

    keys = _pick_image_keys(image_pool, pair_count, rng)
    picks = [key for key in keys for _ in range(CARDS_PER_PAIR)]
    rng.shuffle(picks)

    return [Card(id=index, image_key=key) for index, key in enumerate(picks)]
