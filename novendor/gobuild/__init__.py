"""Go package metadata resolution: build context, constraints, parsing and lookup."""

from novendor.gobuild.context import BuildContext
from novendor.gobuild.resolver import Resolver, is_local_import, is_standard_import

__all__ = ["BuildContext", "Resolver", "is_local_import", "is_standard_import"]
