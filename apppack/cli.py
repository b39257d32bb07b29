import argparse
import asyncio
import logging
import sys
from pathlib import Path

from .archive import ArchiveHandle
from .errors import PackagingError
from .extractor import extract_with_grammar
from .file_utils import build_tree, compact_app_name, line_count_from_text, sanitize_path
from .models import PLATFORMS, get_platform
from .packager import package_enhanced_project, package_project
from .persist import DirectorySink
from .version import __version__


log = logging.getLogger(__name__)

KNOWN_COMMANDS = {"package", "list", "help"}


def _build_common_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "input",
        help="File holding the generated text, or '-' to read stdin",
    )
    common.add_argument(
        "--app-name",
        default="App",
        help="App name; whitespace is removed to form the archive name (default: App)",
    )
    common.add_argument(
        "--platform",
        choices=sorted(PLATFORMS),
        default="ios",
        help="Target platform (default: ios)",
    )
    common.add_argument(
        "--log-level",
        default="INFO",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        help="Logging level (default: INFO)",
    )
    return common


def build_parser() -> tuple[argparse.ArgumentParser, dict[str, argparse.ArgumentParser]]:
    parser = argparse.ArgumentParser(
        prog="apppack",
        description="Package AI-generated, file-annotated source text into a project zip",
        formatter_class=argparse.RawTextHelpFormatter,
        epilog="""
Examples:
  apppack package answer.md --app-name "My App" --platform ios
  apppack package answer.md --app-name Notes --platform android --enhanced -o ./out
  cat answer.md | apppack package - --app-name Demo --listing
  apppack list answer.md
  apppack help package
        """,
    )
    parser.add_argument(
        "-V", "--version", action="version", version=f"apppack {__version__}"
    )

    common = _build_common_parser()
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    package_parser = subparsers.add_parser(
        "package",
        parents=[common],
        help="Build <AppName>-<platform>.zip from the annotated text",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    package_parser.add_argument(
        "-o", "--output", default="./apppack_output",
        help="Output directory (default: ./apppack_output)",
    )
    package_parser.add_argument(
        "--enhanced",
        action="store_true",
        help="Add platform scaffolding (.gitignore, gradle.properties, icon assets, ...)",
    )
    package_parser.add_argument(
        "--listing",
        action="store_true",
        help="Also write <AppName>-<platform>_LISTING.pdf next to the zip",
    )

    list_parser = subparsers.add_parser(
        "list",
        parents=[common],
        help="Show the files that would be extracted, without writing anything",
        formatter_class=argparse.RawTextHelpFormatter,
    )

    help_parser = subparsers.add_parser(
        "help",
        help="Show help for commands",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    help_parser.add_argument(
        "topic",
        nargs="?",
        choices=["package", "list"],
        help="Command name",
    )

    commands = {
        "package": package_parser,
        "list": list_parser,
        "help": help_parser,
    }
    return parser, commands


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
        stream=sys.stdout,
    )
    # Keep reportlab quiet unless explicitly debugging.
    logging.getLogger("reportlab").setLevel(logging.WARNING)


def _read_input(source: str) -> str | None:
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        log.error("Error: '%s' is not a file", source)
        return None
    return path.read_text(encoding="utf-8", errors="replace")


def _run_package(args: argparse.Namespace) -> int:
    code = _read_input(args.input)
    if code is None:
        return 2

    sink = DirectorySink(args.output)
    handle = ArchiveHandle()
    workflow = package_enhanced_project if args.enhanced else package_project
    try:
        asyncio.run(workflow(code, args.app_name, args.platform, sink, handle))
    except (PackagingError, ValueError) as exc:
        log.error("Packaging failed: %s", exc)
        return 1

    compact = compact_app_name(args.app_name)
    profile = get_platform(args.platform)
    log.info("Archive: %s", sink.path_for(profile.archive_name(compact)).resolve())

    if args.listing:
        from reportlab.platypus.doctemplate import LayoutError

        from .listing import render_listing

        root = handle.get_folder(profile.root_folder(compact))
        listing_path = sink.path_for(f"{profile.root_folder(compact)}_LISTING.pdf")
        try:
            render_listing(root, listing_path)
        except (OSError, LayoutError) as exc:
            log.error("Listing failed: %s (%s)", listing_path, exc)
            return 1
    return 0


def _run_list(args: argparse.Namespace) -> int:
    code = _read_input(args.input)
    if code is None:
        return 2

    grammar, file_map = extract_with_grammar(code)
    root_name = get_platform(args.platform).root_folder(compact_app_name(args.app_name))
    if not file_map:
        log.info("No file markers recognised; the whole text would be packaged as one file.")
        return 0

    clean = [sanitize_path(p).clean_path for p in file_map]
    log.info("")
    log.info("%s (%d files, %s grammar)", root_name, len(file_map), grammar)
    log.info("")
    log.info("%s", build_tree(clean, root_name, style="unicode"))
    log.info("")
    log.info("%-50s %8s", "File", "Lines")
    log.info("%s", "-" * 59)
    for path, content in zip(clean, file_map.values()):
        log.info("%-50s %8d", path, line_count_from_text(content))
    return 0


def _run_help(
    args: argparse.Namespace,
    parser: argparse.ArgumentParser,
    commands: dict[str, argparse.ArgumentParser],
) -> int:
    if args.topic:
        commands[args.topic].print_help()
    else:
        parser.print_help()
    return 0


def main(argv: list[str] | None = None) -> int:
    raw_args = sys.argv[1:] if argv is None else argv
    parser, commands = build_parser()

    if raw_args and raw_args[0] not in KNOWN_COMMANDS and not raw_args[0].startswith("-"):
        # `apppack answer.md ...` is shorthand for `apppack package answer.md ...`.
        raw_args = ["package", *raw_args]

    args = parser.parse_args(raw_args)
    _configure_logging(getattr(args, "log_level", "INFO"))

    if args.command == "package":
        return _run_package(args)
    if args.command == "list":
        return _run_list(args)
    if args.command == "help":
        return _run_help(args, parser, commands)
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
