
from .base import clone_or_construct

from .oracle import (
	TreeOracle,
	FittedTree,
)

from .library import (
	forest_probability,
	single_tree_probability,
)
