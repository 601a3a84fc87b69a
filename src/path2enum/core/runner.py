"""Runner — scan, build, validate and optionally write one symbol set."""

from __future__ import annotations

import logging
from pathlib import Path

from path2enum.contracts.load import validate_instance
from path2enum.core.builder import build_compiled_set
from path2enum.core.config import CompileConfig, SymbolSetConfig
from path2enum.core.discover import iter_entries
from path2enum.emit.python_enum import render_enum_module
from path2enum.model import OutputFormat
from path2enum.model.compiled_set import CompileResult
from path2enum.utils.determinism import deterministic_timestamp
from path2enum.utils.json_norm import stable_json_dumps

_logger = logging.getLogger(__name__)


def run_compile(
    config: CompileConfig,
    *,
    name: str = "Paths",
    ci_mode: bool = False,
) -> CompileResult:
    """Compile one symbol set and return the validated artifact.

    This is the **only** entry point that wires scanner → builder →
    contract.  A root that cannot be read yields an empty set, not an
    error; callers that require the root to exist check it first.
    """
    _logger.info(
        "Compiling %s from %s (ext=%s, prefix=%r)",
        name,
        config.root,
        ",".join(config.extensions),
        config.prefix,
    )

    # ── 1. scan ─────────────────────────────────────────────────────
    entries = iter_entries(
        config.root,
        config.extensions,
        config.prefix,
        follow_symlinks=config.follow_symlinks,
    )

    # ── 2. dedup, synthesize, collision-check, sort ─────────────────
    compiled = build_compiled_set(entries, config.policy)

    # ── 3. assemble and validate the artifact ───────────────────────
    result = CompileResult(
        compiled=compiled,
        name=name,
        config=config.to_dict(),
        created_at=deterministic_timestamp(ci_mode),
    )
    validate_instance(result.to_dict())
    _logger.info(
        "%s: %d entries (%d directories)",
        name,
        len(compiled),
        len(compiled.directories()),
    )
    return result


def render_result(result: CompileResult, fmt: OutputFormat) -> str:
    """Serialize *result* as JSON or as a Python enum module."""
    if fmt is OutputFormat.JSON:
        return stable_json_dumps(result.to_dict())
    return render_enum_module(
        result.compiled,
        result.name,
        source=result.config.get("root"),
    )


def write_result(result: CompileResult, out_path: Path, fmt: OutputFormat) -> Path:
    """Render *result* to *out_path*, creating parent directories."""
    text = render_result(result, fmt)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(text, encoding="utf-8")
    _logger.info("Wrote %s (%s)", out_path, fmt.value)
    return out_path


def run_symbol_set(symbol_set: SymbolSetConfig, *, ci_mode: bool = False) -> CompileResult:
    """Compile one manifest set and write it when it names an ``out`` file."""
    result = run_compile(symbol_set.config, name=symbol_set.name, ci_mode=ci_mode)
    if symbol_set.out is not None:
        write_result(result, symbol_set.out, symbol_set.format)
    return result
