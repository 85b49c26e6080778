"""Helpers for scanning Rust source text and locating the standard library sources."""

__version__ = "0.1.0"
__all__ = ["textutil", "srcpath", "decl"]