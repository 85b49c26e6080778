"""Locating the source tree of the Rust standard library."""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

ENV_VAR = "RUST_SRC_PATH"
DEFAULT_SRC_PATHS = ("/usr/local/src/rust/src", "/usr/src/rust/src")

_EXAMPLE = (
    '"/home/foouser/src/rust/library" '
    '(or "/home/foouser/src/rust/src" in older toolchains)'
)


class RustSrcPathError(Exception):
    """The standard library source could not be located."""


class SrcPathMissing(RustSrcPathError):
    """No candidate location for the source tree was found."""

    def __init__(self) -> None:
        super().__init__(
            f"{ENV_VAR} environment variable must be set to point to the src "
            f"directory of a rust checkout. E.g. {_EXAMPLE}"
        )


class SrcPathDoesNotExist(RustSrcPathError):
    """The configured source path does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(
            f"can't find the directory pointed to by the {ENV_VAR} variable "
            f'"{self.path}". Try using an absolute fully qualified path and '
            f"make sure it points to the src directory of a rust checkout - "
            f"e.g. {_EXAMPLE}."
        )


class NotRustSourceTree(RustSrcPathError):
    """The configured path exists but holds no standard library."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(
            f"Unable to find libstd under {ENV_VAR}. N.B. {ENV_VAR} variable "
            f"needs to point to the *src* directory inside a rust checkout "
            f'e.g. {_EXAMPLE}. Current value "{self.path}"'
        )


def check_rust_sysroot() -> Optional[Path]:
    """Ask ``rustc`` for its sysroot and return the bundled source, if any."""
    try:
        output = subprocess.run(
            ["rustc", "--print", "sysroot"],
            capture_output=True,
            check=False,
        )
    except OSError:
        return None
    stdout = output.stdout
    if isinstance(stdout, bytes):
        try:
            stdout = stdout.decode("utf-8")
        except UnicodeDecodeError:
            return None
    sysroot = Path((stdout or "").strip())
    for sub in ("lib/rustlib/src/rust/library", "lib/rustlib/src/rust/src"):
        candidate = sysroot / sub
        if candidate.exists():
            return candidate
    return None


def validate_rust_src_path(path: os.PathLike[str] | str) -> Path:
    """Return ``path`` if it holds the standard library, else raise."""
    path = Path(path)
    if not path.exists():
        raise SrcPathDoesNotExist(path)
    if (path / "libstd").exists() or (path / "std" / "src").exists():
        return path
    raise NotRustSourceTree(path / "libstd")


def get_rust_src_path() -> Path:
    """Find the standard library source.

    Tries the first entry of ``RUST_SRC_PATH``, then the ``rustc`` sysroot,
    then a couple of conventional install locations.
    """
    logger.debug("Getting rust source path. Trying env var %s.", ENV_VAR)
    srcpaths = os.environ.get(ENV_VAR)
    if srcpaths:
        first = srcpaths.split(os.pathsep)[0]
        return validate_rust_src_path(Path(first))

    logger.debug("Nope. Trying rustc --print sysroot.")
    sysroot_src = check_rust_sysroot()
    if sysroot_src is not None:
        return validate_rust_src_path(sysroot_src)

    logger.debug("Nope. Trying default paths: %s", ", ".join(DEFAULT_SRC_PATHS))
    for default in DEFAULT_SRC_PATHS:
        try:
            return validate_rust_src_path(Path(default))
        except RustSrcPathError:
            continue

    logger.warning("Rust stdlib source path not found!")
    raise SrcPathMissing()