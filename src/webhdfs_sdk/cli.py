"""
Command-line interface for the WebHDFS Python SDK
Runs single WebHDFS operations against a namenode and prints the JSON result
"""

import argparse
import json
import logging
import sys
from typing import Dict, List, Optional

from . import __version__
from .client import WebHdfsClient
from .config import Configuration, StatusPolicy
from .exceptions import WebHdfsError
from .operations import Operation


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog='webhdfs-cli',
        description='WebHDFS command-line interface for namenode operations'
    )
    
    parser.add_argument(
        '--version',
        action='version',
        version=f'WebHDFS Python SDK {__version__}'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='count',
        default=0,
        help='Increase log verbosity (-v info, -vv debug)'
    )
    
    subparsers = parser.add_subparsers(dest='command', help='Available commands')
    
    setup_call_parser(subparsers)
    subparsers.add_parser('operations', help='List supported operation codes')
    
    return parser


def add_connection_arguments(parser: argparse.ArgumentParser) -> None:
    """Add namenode connection flags."""
    parser.add_argument('--addr', required=True, help='Namenode address as host:port')
    parser.add_argument('--base-path', default='', help='Path prefix after /webhdfs/v1')
    parser.add_argument('--user', default='', help='User name (defaults to the OS user)')
    parser.add_argument('--password', default='', help='Password for the authentication handshake')
    parser.add_argument('--https', action='store_true', help='Connect over https')
    parser.add_argument('--insecure', action='store_true', help='Skip TLS certificate verification')
    parser.add_argument('--auth', action='store_true', help='Enable cookie session authentication')
    parser.add_argument(
        '--strict-status',
        action='store_true',
        help='Fail on non-2xx status before decoding the body'
    )
    parser.add_argument(
        '--timeout',
        type=float,
        default=17.0,
        help='Connection and response header timeout in seconds (default: 17)'
    )


def setup_call_parser(subparsers):
    """Setup the call subcommand."""
    call_parser = subparsers.add_parser('call', help='Execute one WebHDFS operation')
    add_connection_arguments(call_parser)
    call_parser.add_argument('operation', help='Operation code, e.g. LISTSTATUS')
    call_parser.add_argument('path', nargs='?', default='/', help='Remote path (default: /)')
    call_parser.add_argument('--method', help="HTTP method override (default: the operation's method)")
    call_parser.add_argument(
        '--param',
        action='append',
        default=[],
        metavar='KEY=VALUE',
        help='Extra query parameter, may be repeated'
    )


def parse_params(pairs: List[str]) -> Dict[str, str]:
    """Parse KEY=VALUE strings into a dict."""
    params = {}
    for pair in pairs:
        key, sep, value = pair.partition('=')
        if not sep or not key:
            raise ValueError(f"Invalid parameter {pair!r}, expected KEY=VALUE")
        params[key] = value
    return params


def config_from_args(args: argparse.Namespace) -> Configuration:
    """Map connection flags onto a Configuration."""
    return Configuration(
        addr=args.addr,
        base_path=args.base_path,
        user=args.user,
        password=args.password,
        enable_https=args.https,
        tls_skip_verify=args.insecure,
        enable_auth=args.auth,
        connection_timeout=args.timeout,
        response_header_timeout=args.timeout,
        status_policy=StatusPolicy.STRICT if args.strict_status else StatusPolicy.DECODE_BODY,
    )


def handle_call_command(args: argparse.Namespace) -> int:
    """Handle the call subcommand."""
    try:
        params = parse_params(args.param)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    
    with WebHdfsClient(config_from_args(args)) as client:
        payload = client.execute(args.operation, args.path, params, method=args.method)
    
    print(json.dumps(payload, indent=2, sort_keys=True))
    return 0


def handle_operations_command(args: argparse.Namespace) -> int:
    """Handle the operations subcommand."""
    for operation in Operation:
        print(f"{operation.value:<24} {operation.method}")
    return 0


def configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format='%(asctime)s %(levelname)s %(name)s: %(message)s')


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point for the CLI
    
    Args:
        argv: Command line arguments (None to use sys.argv)
        
    Returns:
        int: Exit code (0 for success, non-zero for failure)
    """
    if argv is None:
        argv = sys.argv[1:]
    
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    
    try:
        if args.command == 'call':
            return handle_call_command(args)
        elif args.command == 'operations':
            return handle_operations_command(args)
        else:
            # No command specified, show help
            parser.print_help()
            return 1
        
    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 130
    except WebHdfsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
