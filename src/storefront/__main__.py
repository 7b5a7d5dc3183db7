"""Entry point for 'python -m storefront' command."""

from storefront.cli import main

if __name__ == "__main__":
    main()
