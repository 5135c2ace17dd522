"""stackpos public API proxy.

The submodules are loaded explicitly and the symbols listed in their
``__all__`` are forwarded, so ``import stackpos as sp; sp.position_fill()``
works without star-imports.
"""

from __future__ import annotations

from typing import Dict

from . import diagnostics as _diagnostics
from . import io as _io
from . import position as _position
from . import utils as _utils
from . import validation as _validation

__all__ = [  # pyright: ignore[reportUnsupportedDunderAll]
    *getattr(_utils, "__all__", []),
    *getattr(_validation, "__all__", []),
    *getattr(_diagnostics, "__all__", []),
    *getattr(_position, "__all__", []),
    *getattr(_io, "__all__", []),
]


def _export(module: object, namespace: Dict[str, object]) -> None:
    """Export all symbols from a module's __all__ into the given namespace.

    Args:
        module: Module object to export from.
        namespace: Dictionary (typically globals()) to populate with exported symbols.
    """
    for name in getattr(module, "__all__", []):
        namespace[name] = getattr(module, name)


_export(_utils, globals())
_export(_validation, globals())
_export(_diagnostics, globals())
_export(_position, globals())
_export(_io, globals())
