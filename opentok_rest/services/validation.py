"""Input checks shared by the request builders."""

from typing import Any, Optional

from ..domain import Layout, LayoutType, Resolution
from ..exceptions import InvalidArgument


def require(value: Any, message: str) -> None:
    """Raise :class:`InvalidArgument` with ``message`` if ``value`` is empty."""
    if not value:
        raise InvalidArgument(message)


def check_layout(layout: Layout) -> None:
    """
    Check the type and stylesheet of a layout.

    Only :attr:`LayoutType.CUSTOM` layouts take a stylesheet, and they must.
    """
    if layout.type not in LayoutType.ALL:
        raise InvalidArgument(f'Invalid layout type: {layout.type}')
    if layout.type == LayoutType.CUSTOM and not layout.stylesheet:
        raise InvalidArgument('Stylesheet of a custom layout cannot be empty')
    if layout.type != LayoutType.CUSTOM and layout.stylesheet:
        raise InvalidArgument('Set a stylesheet only when using a custom'
                              ' layout')


def check_resolution(resolution: Optional[str]) -> None:
    """Check that a resolution, if given, is SD or HD."""
    if resolution and resolution not in Resolution.ALL:
        raise InvalidArgument(f'Invalid resolution: {resolution}')
