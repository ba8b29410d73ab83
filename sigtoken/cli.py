"""
sigtoken Command Line Interface.

Provides commands for generating keys, issuing ES256 tokens, inspecting
tokens and verifying them.
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional, Tuple

from sigtoken import config
from sigtoken.errors import TokenError
from sigtoken.es256 import ES256Signer
from sigtoken.header import Header
from sigtoken.keys import generate_keypair
from sigtoken.registry import verify_token
from sigtoken.token import Token


def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(message)s'
    )


def _parse_claim(raw: str) -> Tuple[str, Any]:
    """Split NAME=VALUE; VALUE is JSON when it parses, else a plain string."""
    name, sep, value = raw.partition('=')
    if not sep or not name:
        raise ValueError(f"Claim must be NAME=VALUE, got {raw!r}")
    try:
        parsed: Any = json.loads(value)
    except json.JSONDecodeError:
        parsed = value
    return name, parsed


def _describe(token: Token) -> Dict[str, Any]:
    return {
        "header": token.header.to_dict(),
        "claims": token.claims,
        "scopes": list(token.scopes),
        "signed": token.is_signed,
    }


def cmd_keygen(args: argparse.Namespace) -> int:
    """Generate a new P-256 keypair."""
    try:
        keys = generate_keypair()

        if args.env:
            print(f"export {config.PRIVATE_KEY_ENV}='{keys.private_key_jwk}'")
            print(f"export {config.PUBLIC_KEY_ENV}='{keys.public_key_jwk}'")
        else:
            print(f"Key ID: {keys.key_id}")
            print("\n--- PRIVATE KEY (Keep Secret) ---")
            print(keys.private_key_jwk)
            print("\n--- PUBLIC KEY (Share with verifiers) ---")
            print(keys.public_key_jwk)

        return 0

    except Exception as e:
        print(f"Error generating keys: {e}", file=sys.stderr)
        return 1


def cmd_issue(args: argparse.Namespace) -> int:
    """Build, sign and print a token."""
    private_key = args.key or config.get_private_key()

    if not private_key:
        print(f"Error: Missing private key. Set {config.PRIVATE_KEY_ENV} or use --key", file=sys.stderr)
        return 1

    try:
        token = Token(header=Header(type=args.type) if args.type else None)
        for raw in args.claim or []:
            name, value = _parse_claim(raw)
            token.add_claim(name, value)
        for scope in args.scope or []:
            token.add_scope(scope)

        token.sign(ES256Signer(private_key))
        print(token.serialize())
        return 0

    except (TokenError, TypeError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_inspect(args: argparse.Namespace) -> int:
    """Decode a token without verifying it."""
    try:
        token = Token.parse(args.token)
    except TokenError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(_describe(token), indent=2))
    return 0


def cmd_verify(args: argparse.Namespace) -> int:
    """Verify a token's signature."""
    public_key = args.key or config.get_public_key()

    if not public_key:
        print(f"Error: Missing public key. Set {config.PUBLIC_KEY_ENV} or use --key", file=sys.stderr)
        return 1

    try:
        token = Token.parse(args.token)
    except TokenError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    valid = verify_token(token, public_key)

    if args.json:
        result = {"valid": valid}
        if valid:
            result.update(_describe(token))
        print(json.dumps(result, indent=2))
    elif valid:
        print("VALID")
        print(f"   Algorithm: {token.header.algorithm.value}")
        print(f"   Claims:    {json.dumps(token.claims)}")
        print(f"   Scopes:    {' '.join(token.scopes)}")
    else:
        print("INVALID")

    return 0 if valid else 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        prog='sigtoken',
        description='sigtoken CLI - issue and verify ES256 bearer tokens'
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose output')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # keygen command
    p_keygen = subparsers.add_parser('keygen', help='Generate a new P-256 keypair')
    p_keygen.add_argument('--env', action='store_true', help='Output as environment variables')

    # issue command
    p_issue = subparsers.add_parser('issue', help='Issue a signed token')
    p_issue.add_argument('--claim', action='append', help='Claim as NAME=VALUE (repeatable)')
    p_issue.add_argument('--scope', action='append', help='Scope to grant (repeatable)')
    p_issue.add_argument('--type', help='Header typ value')
    p_issue.add_argument('--key', help='Private key (JWK JSON or PEM)')

    # inspect command
    p_inspect = subparsers.add_parser('inspect', help='Decode a token without verifying it')
    p_inspect.add_argument('token', help='The token to inspect')

    # verify command
    p_verify = subparsers.add_parser('verify', help='Verify a token')
    p_verify.add_argument('token', help='The token to verify')
    p_verify.add_argument('--key', help='Public key (JWK JSON or PEM)')
    p_verify.add_argument('--json', action='store_true', help='Output as JSON')

    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if args.command == 'keygen':
        return cmd_keygen(args)
    elif args.command == 'issue':
        return cmd_issue(args)
    elif args.command == 'inspect':
        return cmd_inspect(args)
    elif args.command == 'verify':
        return cmd_verify(args)
    else:
        parser.print_help()
        return 0


if __name__ == '__main__':
    sys.exit(main())
