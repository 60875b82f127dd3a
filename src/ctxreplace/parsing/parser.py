# ctxreplace/parsing/parser.py
from __future__ import annotations

import argparse

from ctxreplace.constants import DEFAULT_TEMPLATE


def _build_parser() -> argparse.ArgumentParser:
    """
    Build the CLI argument parser.

    Notes:
        - Either a rule file (-r) or at least one --open/--close pair is required;
          the check happens after parsing so that both errors share one message.
        - --open/--close are repeatable and paired by position.
    """
    p = argparse.ArgumentParser(
        prog="ctxreplace",
        formatter_class=argparse.RawTextHelpFormatter,
        usage="%(prog)s [FILE …] (-r RULES | --open O --close C …) [OPTIONS]",
        description=(
            "ctxreplace – rewrite delimiter-bounded blocks in text, honoring\n"
            "backslash escapes, scope sections and // or /* */ comments."
        ),
    )

    g_in = p.add_argument_group("Input & output")
    g_blk = p.add_argument_group("Blocks")
    g_scp = p.add_argument_group("Scope")
    g_misc = p.add_argument_group("Miscellaneous")

    g_in.add_argument(
        "files",
        metavar="FILE",
        nargs="*",
        help="Files to process. No FILE, or '-', reads standard input.",
    )
    g_in.add_argument(
        "-o",
        "--output",
        metavar="OUT",
        dest="output",
        help="Write the concatenated result to OUT instead of standard output.",
    )
    g_in.add_argument(
        "-i",
        "--in-place",
        action="store_true",
        dest="in_place",
        help="Rewrite every FILE in place (not allowed with stdin or -o).",
    )

    g_blk.add_argument(
        "-r",
        "--rules",
        metavar="RULES",
        dest="rules",
        help=(
            "JSON rule table (list of scope rules with self_replace, inner_scopes\n"
            "and token_replace). Overrides --open/--close/--pattern."
        ),
    )
    g_blk.add_argument(
        "--open",
        metavar="O",
        action="append",
        dest="open",
        default=[],
        help="Opening delimiter, literal or /regex/flags. Repeatable.",
    )
    g_blk.add_argument(
        "--close",
        metavar="C",
        action="append",
        dest="close",
        default=[],
        help="Closing delimiter paired with the --open at the same position. Repeatable.",
    )
    g_blk.add_argument(
        "-p",
        "--pattern",
        metavar="TPL",
        dest="pattern",
        default=DEFAULT_TEMPLATE,
        help="Replacement template with a single %%s for the inner text (default: %%s).",
    )

    g_scp.add_argument(
        "--scope-start",
        metavar="S",
        dest="scope_start",
        help="Only rewrite inside sections opened by S (requires --scope-end).",
    )
    g_scp.add_argument(
        "--scope-end",
        metavar="E",
        dest="scope_end",
        help="Section end marker; appended when a section is never closed.",
    )

    g_misc.add_argument(
        "--json-logs",
        action="store_true",
        dest="json_logs",
        help="Emit logs as JSON lines (also CTXREPLACE_JSON_LOGS=1).",
    )
    g_misc.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        dest="verbose",
        help="Enable debug logging.",
    )
    return p
