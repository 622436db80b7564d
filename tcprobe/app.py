"""
Command line front end for tcprobe.

Parses options, merges them with the configuration defaults, resolves
the target once and hands it to the ProbeRunner.
"""
from __future__ import annotations
import argparse
import logging
import sys
from typing import Any, Dict, List, Optional

from . import configuration
from .errors import ConfigurationError, TcprobeError
from .models import IpFamily, ProbePlan
from .network import resolve
from .probe_manager import ProbeRunner

VERSION = "0.1.0"

_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tcprobe",
        description="Measure TCP connect latency to a host and port.",
    )
    parser.add_argument('-c', '--count', type=int, default=None,
                        help="number of pings to send (default: 4)")
    parser.add_argument('-t', '--forever', action='store_true',
                        help="ping until interrupted")
    parser.add_argument('-i', '--interval', type=float, default=None,
                        help="seconds between pings (default: 1)")
    parser.add_argument('-w', '--timeout', type=float, default=None,
                        help="seconds to wait for each connection (default: 2)")
    parser.add_argument('-4', dest='ipv4', action='store_true', help="use IPv4 only")
    parser.add_argument('-6', dest='ipv6', action='store_true', help="use IPv6 only")
    parser.add_argument('--config', default=None,
                        help=f"YAML file with default settings (or set {configuration.CONFIG_ENV_VAR})")
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help="log progress to stderr; repeat for debug output")
    parser.add_argument('--version', action='version', version=f"%(prog)s {VERSION}")
    parser.add_argument('hostname', help="hostname or IP address, optionally with :port or [ipv6]:port")
    parser.add_argument('port', nargs='?', default=None, help="port number (default: 80)")
    return parser


def _setup_logging(verbose: int):
    level = logging.DEBUG if verbose > 1 else logging.INFO if verbose == 1 else logging.WARNING
    logging.basicConfig(level=level, format='%(asctime)s - %(levelname)s - %(message)s')


def _apply_config_log_level(config: Dict[str, Any], verbose: int):
    level_name = str(config['log_level']).upper()
    if level_name not in _LOG_LEVELS:
        raise ConfigurationError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
    if not verbose:
        logging.getLogger().setLevel(getattr(logging, level_name))


def build_plan(args: argparse.Namespace, config: Dict[str, Any]) -> ProbePlan:
    """Combines command line values with the configured defaults into a ProbePlan."""
    if args.forever and args.count is not None:
        raise ConfigurationError("count and forever cannot be specified at same time")
    count = None if args.forever else (args.count if args.count is not None else config['count'])
    interval = args.interval if args.interval is not None else config['interval_seconds']
    timeout = args.timeout if args.timeout is not None else config['timeout_seconds']
    return ProbePlan(count=count, interval=interval, timeout=timeout)


def select_family(args: argparse.Namespace, config: Dict[str, Any]) -> IpFamily:
    if args.ipv4 or args.ipv6:
        return IpFamily.from_flags(args.ipv4, args.ipv6)
    return IpFamily.from_name(config['ip_family'])


def main(argv: Optional[List[str]] = None) -> int:
    """Runs tcprobe and returns the process exit status."""
    args = build_parser().parse_args(argv)
    _setup_logging(args.verbose)

    try:
        config = configuration.load_config(args.config)
        _apply_config_log_level(config, args.verbose)
        plan = build_plan(args, config)
        family = select_family(args, config)
        port = args.port if args.port is not None else config['port']
        target = resolve(args.hostname, port, family)
    except TcprobeError as e:
        logging.debug("Aborting before probing: %r", e)
        print(e, file=sys.stderr)
        return 1

    try:
        ProbeRunner(target, plan).run()
    except KeyboardInterrupt:
        logging.debug("Interrupted by user.")
        return 130
    return 0
