#!/usr/bin/env python3
import argparse
import datetime
import os
import sys

from jose import jwt

from react_dictionary.auth import ADMIN_ROLE


def generate_token(subject: str, secret: str, algorithm: str = "HS256", hours: int = 12) -> str:
    """Generate an admin JWT for the review page."""
    payload = {
        "sub": subject,
        "role": ADMIN_ROLE,
        "exp": datetime.datetime.now(datetime.timezone.utc) + datetime.timedelta(hours=hours)
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def main():
    parser = argparse.ArgumentParser(description="Generate an admin JWT token")
    parser.add_argument("--subject", type=str, default="admin", help="Subject to include in token")
    parser.add_argument("--hours", type=int, default=12, help="Token lifetime in hours")
    parser.add_argument("--secret", type=str, default=os.getenv("ADMIN_JWT_SECRET"),
                        help="Signing secret (defaults to ADMIN_JWT_SECRET)")
    args = parser.parse_args()

    if not args.secret:
        print("Error: set ADMIN_JWT_SECRET or pass --secret")
        sys.exit(1)

    print(generate_token(args.subject, args.secret, os.getenv("ADMIN_JWT_ALGORITHM", "HS256"), args.hours))


if __name__ == "__main__":
    main()
