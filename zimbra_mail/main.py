"""Entry point: delegates to the CLI app (one module per mode)."""

from rich.traceback import install

from zimbra_mail.cli import app
from zimbra_mail.utils.logger import configure_logging


def run() -> None:
    install(show_locals=False, max_frames=5, word_wrap=True)
    configure_logging()
    app()


if __name__ == "__main__":
    run()
