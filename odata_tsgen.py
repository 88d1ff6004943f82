#!/usr/bin/env python3
"""
OData v4 to TypeScript declaration generator.

Fetches the $metadata document of an OData v4 service (or reads a saved copy)
and prints namespaces, interfaces and enums describing its types.
"""

import argparse
import os
import sys
import traceback
from pathlib import Path
from typing import Dict, Optional, Tuple, Union
import requests
from dotenv import load_dotenv
from lxml import etree

from odata_tsgen_lib import MetadataParser, TranslationError, Translator, UnexpectedTranslationError


def load_cookies_from_file(cookie_file: str) -> Optional[Dict[str, str]]:
    """Load cookies from a Netscape format cookie file."""
    cookies = {}

    try:
        with open(cookie_file, 'r') as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith('#'):
                    continue

                # domain, flag, path, secure, expiration, name, value
                parts = line.split('\t')
                if len(parts) >= 7:
                    cookies[parts[5]] = parts[6]
                elif '=' in line:
                    key, value = line.split('=', 1)
                    cookies[key.strip()] = value.strip()

    except OSError as e:
        print(f"ERROR: Failed to read cookie file: {e}", file=sys.stderr)
        return None

    return cookies


def parse_cookie_string(cookie_string: str) -> Dict[str, str]:
    """Parse cookie string like 'key1=val1; key2=val2'."""
    cookies = {}
    for cookie in cookie_string.split(';'):
        cookie = cookie.strip()
        if '=' in cookie:
            key, value = cookie.split('=', 1)
            cookies[key.strip()] = value.strip()
    return cookies


def resolve_service_url(args: argparse.Namespace) -> Optional[str]:
    """Pick the service URL: --service flag > positional argument > environment."""
    if args.service_via_flag:
        return args.service_via_flag
    if args.service_url_pos:
        return args.service_url_pos
    return os.getenv("ODATA_URL") or os.getenv("ODATA_SERVICE_URL")


def resolve_auth(args: argparse.Namespace) -> Optional[Union[Tuple[str, str], Dict[str, str]]]:
    """Pick authentication: cookies (flags, then environment) > basic auth."""
    if args.cookie_file:
        if not Path(args.cookie_file).exists():
            raise ValueError(f"Cookie file not found: {args.cookie_file}")
        cookies = load_cookies_from_file(args.cookie_file)
        if not cookies:
            raise ValueError("Failed to load cookies from file")
        return cookies

    if args.cookie_string:
        cookies = parse_cookie_string(args.cookie_string)
        if not cookies:
            raise ValueError("Failed to parse cookie string")
        return cookies

    env_cookie_file = os.getenv("ODATA_COOKIE_FILE")
    env_cookie_string = os.getenv("ODATA_COOKIE_STRING")
    if env_cookie_file and Path(env_cookie_file).exists():
        return load_cookies_from_file(env_cookie_file)
    if env_cookie_string:
        return parse_cookie_string(env_cookie_string)

    user = args.user if args.user is not None else (os.getenv("ODATA_USER") or os.getenv("ODATA_USERNAME"))
    password = args.password if args.password is not None else (os.getenv("ODATA_PASS") or os.getenv("ODATA_PASSWORD"))
    if user and password:
        return (user, password)
    return None


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="OData v4 metadata to TypeScript declarations",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument("--service", dest="service_via_flag", help="URL of the OData service (overrides positional argument and ODATA_URL env var)")
    parser.add_argument("service_url_pos", nargs='?', help="URL of the OData service (alternative to --service flag or env var)")
    parser.add_argument("-f", "--file", help="Read metadata from a local XML file instead of fetching it")
    parser.add_argument("-o", "--output", help="Write the generated declarations to this file instead of stdout")

    auth_group = parser.add_mutually_exclusive_group()
    auth_group.add_argument("-u", "--user", help="Username for basic authentication (overrides ODATA_USER env var)")
    auth_group.add_argument("--cookie-file", help="Path to cookie file in Netscape format")
    auth_group.add_argument("--cookie-string", help="Cookie string (key1=val1; key2=val2)")
    parser.add_argument("-p", "--password", help="Password for basic authentication (overrides ODATA_PASS env var)")

    parser.add_argument("--inline-primitives", action="store_true", help="Emit TypeScript primitives (string, number, ...) instead of Edm.* references")
    parser.add_argument("-v", "--verbose", "--debug", dest="verbose", action="store_true", help="Enable verbose output to stderr")
    return parser


def main(argv=None) -> int:
    """Main entry point."""
    load_dotenv()
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    try:
        if args.file:
            if args.verbose: print(f"[VERBOSE] Reading metadata from file: {args.file}", file=sys.stderr)
            document = MetadataParser.load_file(args.file)
        else:
            service_url = resolve_service_url(args)
            if not service_url:
                print("ERROR: OData service URL not provided.", file=sys.stderr)
                print("Provide it via the --service flag, as a positional argument, or ODATA_URL environment variable.", file=sys.stderr)
                parser.print_help(file=sys.stderr)
                return 1
            auth = resolve_auth(args)
            if args.verbose and auth is None:
                print("[VERBOSE] No authentication provided or configured. Attempting anonymous access.", file=sys.stderr)
            document = MetadataParser(service_url, auth, verbose=args.verbose).fetch()

        output = Translator(verbose=args.verbose, inline_primitives=args.inline_primitives).translate(document)
    except UnexpectedTranslationError as e:
        print(f"Unknown error:\n{e}", file=sys.stderr)
        print(f"ERROR: {e.message}", file=sys.stderr)
        return 1
    except TranslationError as e:
        if args.verbose: print(f"[VERBOSE] {e}", file=sys.stderr)
        print(f"ERROR: {e.message}", file=sys.stderr)
        return 1
    except requests.exceptions.RequestException:
        # Already reported by the parser
        return 1
    except (ValueError, OSError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except etree.XMLSyntaxError as e:
        print(f"ERROR: Response is not valid XML: {e}", file=sys.stderr)
        return 1

    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
        if args.verbose: print(f"[VERBOSE] Wrote declarations to {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(output + "\n")
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except Exception as e:
        print("\n--- FATAL ERROR ---", file=sys.stderr)
        print(f"An unexpected error occurred: {e}", file=sys.stderr)
        traceback.print_exc(file=sys.stderr)
        print("-------------------", file=sys.stderr)
        sys.exit(1)
