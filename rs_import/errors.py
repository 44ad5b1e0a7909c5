"""Exception hierarchy for rs_import.

Every failure is terminal for the run: none of these are retried or recovered from.
"""


class RsImportError(RuntimeError):
    """Base class for all errors raised by rs_import."""


class NotFoundError(RsImportError):
    """An expected source file, manifest or artifact does not exist."""


class InvalidConfigError(RsImportError):
    """``rsconfig.json`` or the symbol manifest exists but cannot be parsed."""


class InvalidManifestError(RsImportError):
    """A ``Cargo.toml`` does not declare a usable package name."""


class InvalidSourceNameError(RsImportError):
    """A single-file source path cannot be turned into a unit identity."""


class BuildError(RsImportError):
    """Raised when a builder fails to produce the artifact of a unit."""


class ToolchainMissingError(BuildError):
    """The compiler or package manager binary cannot be located on PATH."""


class CompilationFailedError(BuildError):
    """The toolchain process exited with a non-zero status."""

    def __init__(self, message: str, returncode: int) -> None:
        super().__init__(message)
        self.returncode = returncode


class RenameFailedError(BuildError):
    """The toolchain output could not be moved to the canonical artifact path."""


class CacheIOError(RsImportError):
    """A hash record could not be read or written."""


class MissingManifestEntryError(RsImportError):
    """The symbol manifest has no entry for a unit being loaded."""


class LoadError(RsImportError):
    """The compiled library could not be opened or a declared symbol is missing."""
