from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Callable, List, NoReturn, Optional, Sequence, TextIO, Tuple

from ctxreplace.constants import ENV_JSON_LOGS
from ctxreplace.contextual import apply_contexts
from ctxreplace.core.errors import ConfigurationError
from ctxreplace.core.interfaces.logging import LoggerFactoryProtocol
from ctxreplace.engine import replace, scoped_replace_all
from ctxreplace.logging.factory import DefaultLoggerFactory
from ctxreplace.logging.helpers import get_logger
from ctxreplace.parsing.parser import _build_parser
from ctxreplace.rules.loader import load_rules

logger = get_logger('ctxreplace')


def _configure_logging(enable_json: bool, verbose: bool = False) -> None:
    """Configure process-wide logging once per (json, verbose) mode."""
    mode = (bool(enable_json), bool(verbose))
    prev = getattr(_configure_logging, '_configured_mode', None)
    if prev == mode:
        return
    level = logging.DEBUG if verbose else logging.INFO
    factory: LoggerFactoryProtocol = DefaultLoggerFactory(json_logs=enable_json, level=level)
    lg = factory.get_logger('ctxreplace')
    global logger
    logger = lg
    setattr(_configure_logging, '_configured_mode', mode)


def _fatal(msg: str, code: int = 1) -> NoReturn:
    """Exit the process with a logged error."""
    logger.error(msg)
    sys.exit(code)


def _make_transform(ns: argparse.Namespace) -> Callable[[str], str]:
    """Select the engine entry point according to CLI flags."""
    if ns.rules:
        rules_path = Path(ns.rules)
        if not rules_path.exists():
            _fatal(f'rule file {rules_path} not found')
        rules = load_rules(rules_path)
        return lambda text: apply_contexts(text, rules)

    if not ns.open and not ns.close:
        _fatal('either --rules or --open/--close is required')
    if bool(ns.scope_start) != bool(ns.scope_end):
        _fatal('--scope-start and --scope-end must be given together')

    if ns.scope_start:
        return lambda text: scoped_replace_all(
            text, ns.scope_start, ns.scope_end, ns.open, ns.close, ns.pattern
        )
    return lambda text: replace(text, ns.open, ns.close, ns.pattern)


def _read_inputs(files: Sequence[str], stdin: TextIO) -> List[Tuple[Optional[Path], str]]:
    if not files or list(files) == ['-']:
        return [(None, stdin.read())]
    inputs: List[Tuple[Optional[Path], str]] = []
    for name in files:
        if name == '-':
            inputs.append((None, stdin.read()))
            continue
        path = Path(name)
        if not path.is_file():
            _fatal(f'input file {path} not found')
        inputs.append((path, path.read_text(encoding='utf-8')))
    return inputs


class CtxReplace:
    """Top-level façade for command-style execution."""

    @staticmethod
    def run(
        argv: Sequence[str],
        *,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ) -> str:
        """Run the tool with an argv-like sequence and return the rewritten text."""
        ns = _build_parser().parse_args(list(argv))
        json_logs = ns.json_logs or os.getenv(ENV_JSON_LOGS) == '1'
        _configure_logging(json_logs, ns.verbose)

        if ns.in_place and (ns.output or not ns.files or '-' in ns.files):
            _fatal('--in-place needs FILE arguments and cannot be combined with stdin or -o')

        try:
            transform = _make_transform(ns)
            inputs = _read_inputs(ns.files, stdin or sys.stdin)
            results = [(path, transform(text)) for path, text in inputs]
        except ConfigurationError as exc:
            _fatal(f'invalid configuration: {exc}')

        if ns.in_place:
            for path, text in results:
                path.write_text(text, encoding='utf-8')
                logger.info('✔ rewrote %s', path)

        output = ''.join(text for _, text in results)
        if ns.output:
            Path(ns.output).write_text(output, encoding='utf-8')
            logger.info('✔ output written to %s', ns.output)
        elif not ns.in_place:
            (stdout or sys.stdout).write(output)
        return output


def main() -> NoReturn:
    """Entry point for the `ctxreplace` console script."""
    try:
        CtxReplace.run(sys.argv[1:])
        raise SystemExit(0)
    except KeyboardInterrupt:
        logger.error('Interrupted by user.')
        raise SystemExit(130)
    except BrokenPipeError:
        raise SystemExit(0)
    except Exception as exc:
        if os.getenv('DEBUG') == '1':
            raise
        logger.error('Unexpected error: %s', exc)
        raise SystemExit(1)


if __name__ == '__main__':
    main()
