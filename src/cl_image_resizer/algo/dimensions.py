"""Target size computation."""

from ..common.errors import InvalidDimensionsError


def compute_target_size(
    width: int,
    height: int,
    max_width: int | None = None,
    max_height: int | None = None,
    preserve_ratio: bool = True,
) -> tuple[int, int]:
    """
    Compute the output size of an image.

    With no bound the source size is returned unchanged. With
    ``preserve_ratio`` the image is scaled by a single factor so that it fits
    within the given bounds; the scaled sizes are truncated, not rounded.
    Without it the bounds are used literally and an unset bound keeps the
    source dimension.

    Args:
        width: Source width in pixels
        height: Source height in pixels
        max_width: Bounding width (None = unbounded)
        max_height: Bounding height (None = unbounded)
        preserve_ratio: Keep the width:height ratio if True

    Returns:
        (new_width, new_height), each at least 1

    Raises:
        InvalidDimensionsError: If the source size or a bound is not positive
    """
    if width <= 0 or height <= 0:
        raise InvalidDimensionsError(f"Invalid source size: {width}x{height}")
    for bound in (max_width, max_height):
        if bound is not None and bound <= 0:
            raise InvalidDimensionsError(f"Bounds must be positive, got {bound}")

    if max_width is None and max_height is None:
        return width, height

    if not preserve_ratio:
        return (
            max_width if max_width is not None else width,
            max_height if max_height is not None else height,
        )

    # Integer arithmetic, so the bounded side lands exactly on its bound
    if max_height is None or (
        max_width is not None and max_width * height <= max_height * width
    ):
        assert max_width is not None
        new_width, new_height = max_width, height * max_width // width
    else:
        new_width, new_height = width * max_height // height, max_height

    # A sliver image can truncate to zero on its short side
    return max(1, new_width), max(1, new_height)
