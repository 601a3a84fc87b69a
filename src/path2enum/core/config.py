"""Compile configuration — option parsing and YAML manifests.

A manifest declares one or more symbol sets::

    defaults:
      ext: svg
    sets:
      Icons:
        path: assets/icons
        ext: svg,png
        prefix: icons
        out: src/app/icons.py
      Configs:
        path: .
        ext: [toml, yaml]

Every value is checked here, before any scanning begins; anything
unknown or unparseable raises ``MalformedConfigurationError``.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

from path2enum.core.discover import DEFAULT_EXTENSIONS
from path2enum.core.synthesize import DEFAULT_POLICY, SynthesisPolicy
from path2enum.errors import MalformedConfigurationError
from path2enum.model import CasingMode, DotPolicy, OutputFormat
from path2enum.model.entry import normalize_prefix

MANIFEST_NAMES = ("path2enum.yaml", "path2enum.yml", ".path2enum.yaml")

SET_OPTIONS = frozenset(
    {
        "path",
        "ext",
        "prefix",
        "dot_policy",
        "casing",
        "follow_symlinks",
        "out",
        "format",
    }
)
MANIFEST_KEYS = frozenset({"defaults", "sets"})


@dataclass(frozen=True)
class CompileConfig:
    """Immutable inputs of one compilation."""

    root: Path = field(default_factory=lambda: Path("."))
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    prefix: str = ""
    policy: SynthesisPolicy = DEFAULT_POLICY
    follow_symlinks: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "root": self.root.as_posix(),
            "extensions": list(self.extensions),
            "prefix": self.prefix,
            "follow_symlinks": self.follow_symlinks,
            "policy": self.policy.to_dict(),
        }


@dataclass(frozen=True)
class SymbolSetConfig:
    """One named set from a manifest, plus where to write it."""

    name: str
    config: CompileConfig
    out: Path | None = None
    format: OutputFormat = OutputFormat.PYTHON


# ── value parsers ───────────────────────────────────────────────────


def parse_extensions(value: Any, *, option: str = "ext") -> tuple[str, ...]:
    """Parse ``"svg, toml"`` or ``["svg", "toml"]`` into ``("svg", "toml")``.

    Items are trimmed, one leading dot is dropped, empties are skipped and
    duplicates removed keeping first occurrence.
    """
    if isinstance(value, str):
        raw = value.split(",")
    elif isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
        raw = list(value)
    else:
        raise MalformedConfigurationError(
            f"expected a comma-separated string or a list of strings, got {value!r}",
            option=option,
        )
    exts: list[str] = []
    for item in raw:
        ext = item.strip()
        if ext.startswith("."):
            ext = ext[1:]
        if ext and ext not in exts:
            exts.append(ext)
    if not exts:
        raise MalformedConfigurationError(
            "at least one extension is required", option=option
        )
    return tuple(exts)


def _parse_str(value: Any, option: str) -> str:
    if not isinstance(value, str):
        raise MalformedConfigurationError(
            f"expected a string, got {value!r}", option=option
        )
    return value


def _parse_path(value: Any, option: str) -> str:
    text = _parse_str(value, option)
    if not text.strip():
        raise MalformedConfigurationError("must not be empty", option=option)
    return text


def _parse_bool(value: Any, option: str) -> bool:
    if isinstance(value, bool):
        return value
    raise MalformedConfigurationError(f"expected true/false, got {value!r}", option=option)


def _parse_choice(value: Any, enum_cls: type, option: str) -> Any:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        choices = ", ".join(m.value for m in enum_cls)
        raise MalformedConfigurationError(
            f"expected one of {choices}, got {value!r}", option=option
        ) from None


def parse_policy(
    dot_policy: Any = None,
    casing: Any = None,
    *,
    base: SynthesisPolicy = DEFAULT_POLICY,
) -> SynthesisPolicy:
    """Build a ``SynthesisPolicy`` from raw option values (``None`` = keep)."""
    policy = base
    if dot_policy is not None:
        policy = replace(policy, dot_policy=_parse_choice(dot_policy, DotPolicy, "dot_policy"))
    if casing is not None:
        policy = replace(policy, casing=_parse_choice(casing, CasingMode, "casing"))
    return policy


def parse_options(
    options: Mapping[str, Any],
    *,
    base_dir: Path | None = None,
    context: str = "",
) -> tuple[CompileConfig, Path | None, OutputFormat]:
    """Turn one option mapping into a ``CompileConfig`` plus output settings.

    Relative ``path`` and ``out`` values resolve against *base_dir* when
    given.
    """
    label = f"{context}." if context else ""
    unknown = sorted(set(options) - SET_OPTIONS)
    if unknown:
        supported = ", ".join(sorted(SET_OPTIONS))
        raise MalformedConfigurationError(
            f"unknown option(s) {', '.join(unknown)}; supported: {supported}",
            option=f"{label}{unknown[0]}",
        )

    raw_path = options.get("path")
    root = Path(".") if raw_path is None else Path(_parse_path(raw_path, f"{label}path"))
    if base_dir is not None and not root.is_absolute():
        root = base_dir / root

    extensions = DEFAULT_EXTENSIONS
    if "ext" in options:
        extensions = parse_extensions(options["ext"], option=f"{label}ext")

    raw_prefix = options.get("prefix")
    prefix = "" if raw_prefix is None else normalize_prefix(
        _parse_str(raw_prefix, f"{label}prefix")
    )
    policy = parse_policy(options.get("dot_policy"), options.get("casing"))
    follow = _parse_bool(options.get("follow_symlinks", False), f"{label}follow_symlinks")

    out: Path | None = None
    if options.get("out") is not None:
        out = Path(_parse_path(options["out"], f"{label}out"))
        if base_dir is not None and not out.is_absolute():
            out = base_dir / out

    fmt = OutputFormat.PYTHON
    if "format" in options:
        fmt = _parse_choice(options["format"], OutputFormat, f"{label}format")

    config = CompileConfig(
        root=root,
        extensions=extensions,
        prefix=prefix,
        policy=policy,
        follow_symlinks=follow,
    )
    return config, out, fmt


# ── manifests ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class ManifestConfig:
    """All symbol sets declared in one manifest file."""

    path: Path
    sets: tuple[SymbolSetConfig, ...] = ()

    @classmethod
    def load(cls, manifest_path: Path) -> "ManifestConfig":
        """Load and check a YAML manifest."""
        try:
            text = manifest_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise MalformedConfigurationError(
                f"cannot read manifest: {exc}", option=str(manifest_path)
            ) from exc
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            raise MalformedConfigurationError(
                f"invalid YAML: {exc}", option=str(manifest_path)
            ) from exc
        return cls.from_dict(data, base_dir=manifest_path.parent, path=manifest_path)

    @classmethod
    def from_dict(
        cls,
        data: Any,
        *,
        base_dir: Path | None = None,
        path: Path = Path(MANIFEST_NAMES[0]),
    ) -> "ManifestConfig":
        if not isinstance(data, Mapping):
            raise MalformedConfigurationError("manifest must be a mapping", option=str(path))
        unknown = sorted(set(data) - MANIFEST_KEYS)
        if unknown:
            raise MalformedConfigurationError(
                f"unknown top-level key(s) {', '.join(unknown)}; "
                f"supported: defaults, sets",
                option=str(path),
            )

        defaults = data.get("defaults") or {}
        sets = data.get("sets")
        if not isinstance(defaults, Mapping):
            raise MalformedConfigurationError("must be a mapping", option="defaults")
        if not isinstance(sets, Mapping) or not sets:
            raise MalformedConfigurationError(
                "must map at least one set name to its options", option="sets"
            )

        parsed: list[SymbolSetConfig] = []
        for name in sorted(sets):
            options = sets[name] or {}
            if not isinstance(options, Mapping):
                raise MalformedConfigurationError("must be a mapping", option=f"sets.{name}")
            if not str(name).isidentifier():
                raise MalformedConfigurationError(
                    "set name must be a valid class name", option=f"sets.{name}"
                )
            merged = {**defaults, **options}
            config, out, fmt = parse_options(
                merged, base_dir=base_dir, context=f"sets.{name}"
            )
            parsed.append(SymbolSetConfig(name=str(name), config=config, out=out, format=fmt))
        return cls(path=path, sets=tuple(parsed))

    @classmethod
    def discover(cls, root: Path) -> "ManifestConfig | None":
        """Find a manifest in *root*; ``None`` when there is none."""
        for name in MANIFEST_NAMES:
            candidate = root / name
            if candidate.is_file():
                return cls.load(candidate)
        return None
