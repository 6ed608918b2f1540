"""``vim-prompt`` console script: edit a file or scratch text, print the result."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from vim_prompt.config import EditorConfig
from vim_prompt.runtime import telemetry


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="vim-prompt",
        description="Edit text with Vim-style modal keys and print the saved result.",
    )
    parser.add_argument(
        "file",
        nargs="?",
        help="File whose contents seed the buffer (it is never written back)",
    )
    parser.add_argument(
        "--name",
        help="Name shown in the title line (defaults to FILE)",
    )
    parser.add_argument(
        "--ui",
        choices=("terminal", "textual"),
        default="terminal",
        help="Host the editor in the raw terminal or in a Textual app",
    )
    parser.add_argument(
        "--output",
        help="Write the saved text to this path instead of stdout",
    )
    parser.add_argument(
        "--log-file",
        help="Append telemetry lines to this file for the session",
    )
    return parser.parse_args(argv)


def _load_initial_text(path: Optional[str]) -> str:
    if not path:
        return ""
    source = Path(path)
    if not source.exists():
        return ""
    return source.read_text(encoding="utf-8")


def edit(
    initial_text: str, filename: str, ui: str, config: EditorConfig
) -> Optional[str]:
    if ui == "textual":
        from vim_prompt.adapters.textual.app import EditorApp

        return EditorApp(initial_text, filename, config=config).run()

    from vim_prompt.terminal import edit_text

    return edit_text(initial_text, filename, config=config)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    if args.log_file:
        telemetry.configure(settings=telemetry.LogSettings.from_env().with_file(args.log_file))
    filename = args.name or args.file or ""
    initial_text = _load_initial_text(args.file)
    result = edit(initial_text, filename, args.ui, EditorConfig.from_env())

    if result is None:
        telemetry.record_event("cli.discarded", data={"filename": filename})
        print("Edits discarded.", file=sys.stderr)
        return 1

    if args.output:
        Path(args.output).write_text(result, encoding="utf-8")
    else:
        sys.stdout.write(result)
        if not result.endswith("\n"):
            sys.stdout.write("\n")
    return 0


if __name__ == "__main__":  # pragma: no cover - manual entry point
    sys.exit(main())
