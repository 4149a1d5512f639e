"""Filter type alias.

Python 3.12 PEP 695 type alias syntax.
Path filter: takes canonical path, returns True when the path matches.
"""

from collections.abc import Callable
from pathlib import Path
from typing import TypeAlias

PathFilter: TypeAlias = Callable[[Path], bool]
