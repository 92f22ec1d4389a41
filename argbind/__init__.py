__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
__title__ = 'argbind'
__author__ = 'The argbind Authors'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.0.0"

from .converters import *
from .faults import *
from .names import *
from .parser import *
from .storage import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

# Placeholder, modified by dynamic-versioning.
version_info = VersionInfo(0, 0, 0, "final", 0, "")

__all__ = (
    "__path__",
    "__title__",
    "__author__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of the parser (ArgumentParser)
__all__ += parser.__all__  # type: ignore[attr-defined]
# Load the exposed API of the storage handles (Ref, Attr, Item)
__all__ += storage.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults and outcomes
__all__ += faults.__all__  # type: ignore[attr-defined]
# Load the exposed API of the name validator
__all__ += names.__all__  # type: ignore[attr-defined]
# Load the exposed API of the value converters
__all__ += converters.__all__  # type: ignore[attr-defined]
