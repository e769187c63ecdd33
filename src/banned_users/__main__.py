"""Allow ``python -m banned_users`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m banned_users`` behaves identically to the ``banned-users``
console script.
"""

from __future__ import annotations

from banned_users.cli.app import cli

if __name__ == "__main__":
    cli()
