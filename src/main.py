"""
Pending Releases - Banner release reconciliation tool

Reports, per product, which ESM catalog releases have not yet been installed
on up to three Banner databases.
"""

from pendingreleases.interface.cli import app


if __name__ == "__main__":
    app()
