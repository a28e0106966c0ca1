"""User-facing failure notices."""

import logging

import click
from flask import flash, has_request_context


class FlashNotifier:
    """Queue a message with Flask's flash system for the current request."""

    category = 'danger'

    def warn(self, message: str) -> None:
        if has_request_context():
            flash(message, self.category)
        else:
            logging.warning("notice: %s", message)


class EchoNotifier:
    """Print notices to stderr, for command line use."""

    def warn(self, message: str) -> None:
        click.secho(message, fg='yellow', err=True)
