"""
path2enum.api
=============

Programmatic entrypoints for build scripts and codegen hooks.

Goals:
  - No argparse / CLI dependencies
  - Deterministic mode support (ci_mode=True)
  - Stable, JSON-friendly outputs that match the compiled-set contract

Usage::

    from path2enum.api import compile_paths, compile_manifest, synthesize_identifier

    result, result_dict = compile_paths("assets", extensions="svg,png", prefix="assets")
    result.compiled.lookup("AssetsノHomeSvg")   # -> "assets/home.svg"
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Optional

from path2enum.core.config import CompileConfig, ManifestConfig, parse_extensions
from path2enum.core.runner import run_compile, run_symbol_set
from path2enum.core.synthesize import DEFAULT_POLICY, SynthesisPolicy, synthesize
from path2enum.model.compiled_set import CompileResult
from path2enum.model.entry import normalize_prefix


def _to_path(p: str | Path) -> Path:
    return p if isinstance(p, Path) else Path(p)


# ── compile_paths ───────────────────────────────────────────────────


def compile_paths(
    root: str | Path = ".",
    *,
    extensions: str | Iterable[str] = ("svg",),
    prefix: str = "",
    policy: Optional[SynthesisPolicy] = None,
    follow_symlinks: bool = False,
    name: str = "Paths",
    ci_mode: bool = False,
) -> tuple[CompileResult, dict[str, Any]]:
    """Compile the symbol set for one directory tree.

    Parameters
    ----------
    root:
        Directory to scan.
    extensions:
        Comma-separated string or iterable of extensions (no dot needed).
    prefix:
        Logical prefix prepended to every canonical path.
    policy:
        Identifier synthesis policy; defaults to ``DEFAULT_POLICY``.
    ci_mode:
        If True, the artifact timestamp is fixed so output is byte-stable.

    Returns
    -------
    ``(CompileResult, artifact_dict)``

    Raises
    ------
    FileNotFoundError
        If *root* does not exist.
    MalformedConfigurationError
        If *extensions* is empty or not strings.
    IdentifierCollisionError
        If two paths synthesize to the same identifier.
    """
    root_p = _to_path(root)
    if not root_p.exists():
        raise FileNotFoundError(f"compile_paths: root does not exist: {root_p}")

    if not isinstance(extensions, str):
        extensions = list(extensions)
    config = CompileConfig(
        root=root_p,
        extensions=parse_extensions(extensions),
        prefix=normalize_prefix(prefix),
        policy=policy or DEFAULT_POLICY,
        follow_symlinks=follow_symlinks,
    )
    result = run_compile(config, name=name, ci_mode=ci_mode)
    return result, result.to_dict()


# ── compile_manifest ────────────────────────────────────────────────


def compile_manifest(
    manifest_path: str | Path,
    *,
    ci_mode: bool = False,
) -> list[CompileResult]:
    """Compile (and write) every set declared in a YAML manifest.

    The whole manifest is parsed before the first scan, so a malformed
    option anywhere aborts without touching the filesystem.
    """
    manifest = ManifestConfig.load(_to_path(manifest_path))
    return [run_symbol_set(s, ci_mode=ci_mode) for s in manifest.sets]


def synthesize_identifier(
    logical_path: str,
    policy: Optional[SynthesisPolicy] = None,
) -> str:
    """Identifier for a single logical path (no filesystem access)."""
    return synthesize(logical_path, policy or DEFAULT_POLICY)
