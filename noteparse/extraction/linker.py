"""Link commitments to the deadline that follows them in the text."""

from __future__ import annotations

from typing import List, Sequence

from noteparse.extraction.models import CommitmentEntity, DateEntity

DEFAULT_WINDOW_CHARS = 100


def link_dates_to_commitments(
    commitments: Sequence[CommitmentEntity],
    dates: Sequence[DateEntity],
    text: str,
    *,
    window_chars: int = DEFAULT_WINDOW_CHARS,
) -> List[CommitmentEntity]:
    """Return commitments with ``linked_date`` set from the first following date.

    A date qualifies when it starts strictly after the commitment and less than
    ``window_chars`` characters later. Dates are scanned in their stored order and
    the first qualifying one wins. Commitments without a qualifying date are
    returned as-is; linked ones are new copies.
    """
    linked: List[CommitmentEntity] = []
    for commitment in commitments:
        nearest = next(
            (
                date
                for date in dates
                if date.start_index is not None
                and commitment.start_index is not None
                and 0 < date.start_index - commitment.start_index < window_chars
            ),
            None,
        )
        if nearest is None:
            linked.append(commitment)
            continue

        metadata = commitment.metadata.model_copy(update={"linked_date": nearest.normalized_value})
        linked.append(commitment.model_copy(update={"metadata": metadata}))
    return linked
