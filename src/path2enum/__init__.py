"""path2enum — compile directory trees into closed sets of path symbols."""

__all__ = [
    "__version__",
    "compile_paths",
    "compile_manifest",
    "synthesize_identifier",
    "build_enum",
    "render_enum_module",
    "CompiledSet",
    "CompiledEntry",
    "IdentifierCollisionError",
    "MalformedConfigurationError",
]
__version__ = "0.1.0"

# Programmatic entrypoints, see path2enum.api.
from path2enum.api import (  # noqa: E402, F401
    compile_manifest,
    compile_paths,
    synthesize_identifier,
)
from path2enum.emit import build_enum, render_enum_module  # noqa: E402, F401
from path2enum.errors import (  # noqa: E402, F401
    IdentifierCollisionError,
    MalformedConfigurationError,
)
from path2enum.model.compiled_set import CompiledEntry, CompiledSet  # noqa: E402, F401
