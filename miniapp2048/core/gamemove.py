"""
Move utilities for the 2048 game: the direction enum and the input mapping for keys and swipe gestures.
"""

from __future__ import annotations

from enum import Enum


class Direction(str, Enum):
    """
    Direction of a move.

    The enum is closed: anything that does not parse into one of these members is ignored by the engine.
    """

    LEFT = 'left'
    UP = 'up'
    RIGHT = 'right'
    DOWN = 'down'

    @classmethod
    def parse(cls, value: object) -> Direction | None:
        """
        Convert a raw value into a direction.

        Parameters
        ----------
        value : object
            A ``Direction`` or its string value (case-insensitive).

        Returns
        -------
        Direction | None
            The matching direction, or None when the value is not a valid direction.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


# ##>: Key names sent by matplotlib and by browsers for the arrow keys.
KEY_BINDINGS: dict[str, Direction] = {
    'left': Direction.LEFT,
    'up': Direction.UP,
    'right': Direction.RIGHT,
    'down': Direction.DOWN,
    'ArrowLeft': Direction.LEFT,
    'ArrowUp': Direction.UP,
    'ArrowRight': Direction.RIGHT,
    'ArrowDown': Direction.DOWN,
}

# ##>: Minimum travel, in pixels, before a drag counts as a swipe.
SWIPE_MIN_DISTANCE = 50.0


def direction_from_key(key: str | None) -> Direction | None:
    """Map a key name onto a direction, None for any other key."""
    if key is None:
        return None
    return KEY_BINDINGS.get(key)


def direction_from_swipe(dx: float, dy: float, min_distance: float = SWIPE_MIN_DISTANCE) -> Direction | None:
    """
    Resolve a swipe gesture into a direction.

    Parameters
    ----------
    dx : float
        Horizontal travel of the gesture, positive to the right.
    dy : float
        Vertical travel of the gesture in screen coordinates, positive downwards.
    min_distance : float, optional
        Minimum travel along the dominant axis (default is 50 pixels).

    Returns
    -------
    Direction | None
        The direction of the swipe, or None when the gesture is too short.

    Notes
    -----
    - The dominant axis wins; a perfectly diagonal swipe counts as vertical.
    """
    if abs(dx) > abs(dy):
        if abs(dx) <= min_distance:
            return None
        return Direction.RIGHT if dx > 0 else Direction.LEFT

    if abs(dy) <= min_distance:
        return None
    return Direction.DOWN if dy > 0 else Direction.UP

