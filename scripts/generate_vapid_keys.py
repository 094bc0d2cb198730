"""Print a fresh VAPID key pair in the format expected by the settings."""

from __future__ import annotations

import argparse
import base64

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec


def to_base64_url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def generate_keys() -> tuple[str, str]:
    """Return ``(private_key, public_key)`` for a new P-256 key, base64url encoded.

    The private key is the raw 32 byte scalar accepted by pywebpush; the public
    key is the uncompressed point browsers expect as ``applicationServerKey``.
    """

    private_key = ec.generate_private_key(ec.SECP256R1())
    private_bytes = private_key.private_numbers().private_value.to_bytes(32, byteorder="big")
    public_bytes = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.X962,
        format=serialization.PublicFormat.UncompressedPoint,
    )
    return to_base64_url(private_bytes), to_base64_url(public_bytes)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate VAPID keys for Web Push.")
    parser.add_argument(
        "--subject",
        default="mailto:admin@example.com",
        help="Contact URI written as VAPID_SUBJECT (default: mailto:admin@example.com)",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    private_key, public_key = generate_keys()
    print(f"VAPID_PRIVATE_KEY={private_key}")
    print(f"VAPID_PUBLIC_KEY={public_key}")
    print(f"VAPID_SUBJECT={args.subject}")


if __name__ == "__main__":
    main()
