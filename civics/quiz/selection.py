"""
Question selection for practice and exam sessions.

Draws a uniformly random, duplicate-free subset of the catalog, optionally
restricted to the flagged (asterisk) questions. The random source is
injectable so selection can be made reproducible.
"""
from __future__ import annotations

import hashlib
import random
from collections.abc import Sequence

from loguru import logger

from civics.core.models import Question


class SelectionService:
    """
    Randomized question sampler.

    Handles:
    - Flagged-subset filtering
    - Unbiased shuffling (Fisher-Yates via random.Random.shuffle)
    - Reproducible seeds for deterministic sampling
    """

    def __init__(self, rng: random.Random | None = None, seed: str | int | None = None):
        if rng is not None and seed is not None:
            raise ValueError("Pass either rng or seed, not both")
        if rng is None:
            rng = random.Random(self._create_seed(seed)) if seed is not None else random.Random()
        self.rng = rng

    def sample(
        self,
        pool: Sequence[Question],
        count: int,
        restrict_to_flagged: bool = False,
    ) -> list[Question]:
        """
        Select random questions from a pool.

        Args:
            pool: Candidate questions (not modified)
            count: Number of questions wanted; capped at the pool size
            restrict_to_flagged: Keep only asterisk questions before sampling

        Returns:
            Up to ``count`` distinct questions; empty for count <= 0 or an empty pool
        """
        candidates = [q for q in pool if q.is_asterisk] if restrict_to_flagged else list(pool)

        if count <= 0 or not candidates:
            logger.debug(
                f"Empty selection (count={count}, pool={len(candidates)}, "
                f"flagged_only={restrict_to_flagged})"
            )
            return []

        self.rng.shuffle(candidates)
        selected = candidates[: min(count, len(candidates))]

        if len(selected) < count:
            logger.debug(f"Selection capped at {len(selected)} of {count} requested")

        return selected

    @staticmethod
    def _create_seed(seed: str | int) -> int:
        """Create a reproducible integer seed from string or int."""
        if isinstance(seed, int):
            return seed

        # Hash string to create seed
        hash_bytes = hashlib.sha256(str(seed).encode()).digest()
        return int.from_bytes(hash_bytes[:8], byteorder="big")
