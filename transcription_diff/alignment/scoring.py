"""Accuracy scoring from edit distance."""


def score(edit_distance: int, reference_length: int, user_length: int) -> int:
    """Convert an edit distance into a 0-100 accuracy percentage.

    accuracy = round((1 - edit_distance / max(reference_length, user_length)) * 100)

    Rounding is half-up (87.5 -> 88) and done in integer arithmetic so the
    result never depends on float representation. The result is clamped to
    [0, 100]. Two empty strings score 100.

    Args:
        edit_distance: Levenshtein distance of the normalized strings
        reference_length: Length of the normalized reference
        user_length: Length of the normalized learner text

    Returns:
        Accuracy percentage between 0 and 100

    Example:
        >>> score(1, 3, 3)
        67
    """
    longest = max(reference_length, user_length)
    if longest <= 0:
        return 100

    correct = longest - edit_distance
    # floor(100 * correct / longest + 1/2)
    percent = (200 * correct + longest) // (2 * longest)
    return max(0, min(100, percent))
