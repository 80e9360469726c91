import argparse
import getpass

from dotenv import load_dotenv

from config import settings
from security import encrypt_secret
from shopify import save_token_file


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Encrypt an Admin API access token and write the token file."
    )
    parser.add_argument(
        "--path",
        default=settings.shopify_token_file,
        help="Token file location (default: SHOPIFY_TOKEN_FILE)",
    )
    parser.add_argument(
        "--token",
        help="Access token; prompted for when omitted",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    load_dotenv()
    args = parse_args(argv)
    token = args.token or getpass.getpass("Shopify Admin API access token: ")
    if not token:
        raise SystemExit("No token given.")
    save_token_file(args.path, encrypt_secret(token))
    print(f"Token stored in {args.path}")


if __name__ == "__main__":
    main()
