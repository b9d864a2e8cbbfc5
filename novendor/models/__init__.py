"""Data models for resolved Go packages."""

from novendor.models.package import GoPackage, ResolveResult

__all__ = ["GoPackage", "ResolveResult"]
