"""CLI entry-point for path2enum.

Usage:
    python -m path2enum compile --root <dir> [--ext svg,toml] [--prefix P] [--name Paths]
                                [--format python|json] [--out FILE] [--ci]
    python -m path2enum build [--manifest path2enum.yaml] [--ci]
    python -m path2enum ident <logical-path> [<logical-path> ...]
    python -m path2enum validate <instance.json>
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import jsonschema

from path2enum import __version__
from path2enum.core.config import (
    MANIFEST_NAMES,
    CompileConfig,
    ManifestConfig,
    parse_extensions,
    parse_policy,
)
from path2enum.core.runner import (
    render_result,
    run_compile,
    run_symbol_set,
    write_result,
)
from path2enum.core.synthesize import synthesize
from path2enum.contracts.load import validate_file
from path2enum.errors import (
    EmitError,
    IdentifierCollisionError,
    MalformedConfigurationError,
)
from path2enum.model import CasingMode, DotPolicy, OutputFormat
from path2enum.model.entry import normalize_prefix
from path2enum.utils.exit_codes import ExitCode

_logger = logging.getLogger("path2enum")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _add_policy_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--dot-policy",
        dest="dot_policy",
        choices=[m.value for m in DotPolicy],
        default=None,
        help="Render '.' as a word separator (default) or as the reserved marker.",
    )
    p.add_argument(
        "--casing",
        choices=[m.value for m in CasingMode],
        default=None,
        help="Word casing: full Unicode (default) or legacy ASCII-only.",
    )


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--ci",
        "--deterministic",
        dest="ci_mode",
        action="store_true",
        default=False,
        help="Enable deterministic output (fixed artifact timestamp).",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Verbose logging.")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="path2enum",
        description="Compile directory trees into closed sets of path symbols.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    sub = p.add_subparsers(dest="command")

    # ── compile subcommand ──────────────────────────────────────────
    comp_p = sub.add_parser("compile", help="Compile one directory tree.")
    comp_p.add_argument("--root", type=Path, default=Path("."), help="Directory to scan.")
    comp_p.add_argument(
        "--ext",
        default="svg",
        help="Comma-separated list of allowed extensions (default: svg).",
    )
    comp_p.add_argument("--prefix", default="", help="Logical prefix for every path.")
    comp_p.add_argument("--name", default="Paths", help="Name of the generated class.")
    comp_p.add_argument(
        "--format",
        dest="fmt",
        choices=[m.value for m in OutputFormat],
        default=OutputFormat.PYTHON.value,
    )
    comp_p.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Write output here instead of stdout.",
    )
    comp_p.add_argument(
        "--follow-symlinks",
        dest="follow_symlinks",
        action="store_true",
        default=False,
    )
    _add_policy_args(comp_p)
    _add_common_args(comp_p)

    # ── build subcommand ────────────────────────────────────────────
    build_p = sub.add_parser("build", help="Compile every set in a YAML manifest.")
    build_p.add_argument(
        "--manifest",
        type=Path,
        default=None,
        help=f"Manifest file (default: first of {', '.join(MANIFEST_NAMES)}).",
    )
    _add_common_args(build_p)

    # ── ident subcommand ────────────────────────────────────────────
    ident_p = sub.add_parser("ident", help="Print the identifier for logical paths.")
    ident_p.add_argument("paths", nargs="+", help="Logical paths, '/'-separated.")
    _add_policy_args(ident_p)

    # ── validate subcommand ─────────────────────────────────────────
    val_p = sub.add_parser(
        "validate",
        help="Validate a JSON artifact against the compiled-set schema.",
    )
    val_p.add_argument("instance", type=Path, help="Path to the JSON file to validate.")

    return p


def _handle_compile(args: argparse.Namespace) -> int:
    root: Path = args.root
    if not root.is_dir():
        print(f"error: root is not a directory: {root}", file=sys.stderr)
        return ExitCode.ERROR

    config = CompileConfig(
        root=root,
        extensions=parse_extensions(args.ext, option="--ext"),
        prefix=normalize_prefix(args.prefix),
        policy=parse_policy(args.dot_policy, args.casing),
        follow_symlinks=args.follow_symlinks,
    )
    result = run_compile(config, name=args.name, ci_mode=args.ci_mode)

    fmt = OutputFormat(args.fmt)
    if args.out is None:
        sys.stdout.write(render_result(result, fmt))
    else:
        write_result(result, args.out, fmt)
    print(
        f"{args.name}: {len(result.compiled)} symbols "
        f"({len(result.compiled.directories())} directories)",
        file=sys.stderr,
    )
    return ExitCode.SUCCESS


def _handle_build(args: argparse.Namespace) -> int:
    if args.manifest is not None:
        manifest = ManifestConfig.load(args.manifest)
    else:
        manifest = ManifestConfig.discover(Path("."))
        if manifest is None:
            print(
                f"error: no manifest found (looked for {', '.join(MANIFEST_NAMES)})",
                file=sys.stderr,
            )
            return ExitCode.ERROR

    for symbol_set in manifest.sets:
        if not symbol_set.config.root.is_dir():
            print(
                f"error: {symbol_set.name}: root is not a directory: "
                f"{symbol_set.config.root}",
                file=sys.stderr,
            )
            return ExitCode.ERROR

    for symbol_set in manifest.sets:
        result = run_symbol_set(symbol_set, ci_mode=args.ci_mode)
        target = symbol_set.out.as_posix() if symbol_set.out else "(not written)"
        print(f"{symbol_set.name}: {len(result.compiled)} symbols -> {target}", file=sys.stderr)
    return ExitCode.SUCCESS


def _handle_ident(args: argparse.Namespace) -> int:
    policy = parse_policy(args.dot_policy, args.casing)
    for path in args.paths:
        print(synthesize(path, policy))
    return ExitCode.SUCCESS


def _handle_validate(args: argparse.Namespace) -> int:
    # Exit code contract:
    #   1 = schema violation
    #   2 = unreadable file / invalid JSON
    try:
        validate_file(args.instance)
    except jsonschema.ValidationError as e:
        print(f"FAIL: {e.message}", file=sys.stderr)
        return ExitCode.VIOLATION
    except (OSError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return ExitCode.ERROR
    print("OK")
    return ExitCode.SUCCESS


_HANDLERS = {
    "compile": _handle_compile,
    "build": _handle_build,
    "ident": _handle_ident,
    "validate": _handle_validate,
}


def main(argv: list[str] | None = None) -> int:
    """Entry-point — returns an ``ExitCode``."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help(sys.stderr)
        return ExitCode.ERROR

    _configure_logging(bool(getattr(args, "verbose", False)))

    try:
        return _HANDLERS[args.command](args)
    except MalformedConfigurationError as e:
        print(f"error: malformed configuration: {e}", file=sys.stderr)
        return ExitCode.ERROR
    except IdentifierCollisionError as e:
        print(f"error: {e}", file=sys.stderr)
        return ExitCode.VIOLATION
    except EmitError as e:
        print(f"error: {e}", file=sys.stderr)
        return ExitCode.VIOLATION
    except jsonschema.ValidationError as e:
        _logger.debug("Artifact failed its contract", exc_info=True)
        print(f"error: artifact failed schema validation: {e.message}", file=sys.stderr)
        return ExitCode.VIOLATION
    except OSError as e:
        _logger.debug("I/O failure", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return ExitCode.ERROR


if __name__ == "__main__":
    raise SystemExit(main())
