# src/seoscan/scoring/log_utils.py
from __future__ import annotations
import logging, re, sys

from seoscan import config

# Pipelinen logger kun URLs; hemmeligheder kan stå i query-strengen eller som user:pass@
_QUERY_SECRET_RE = re.compile(r'(?i)([?&])(api[_-]?key|key|token|access_token|signature|password)=([^&#\s]+)')
_URL_CREDENTIALS_RE = re.compile(r'://([^:@/\s]+):([^@/\s]+)@')


def mask_url_secrets(msg: str) -> str:
    if not isinstance(msg, str):
        msg = str(msg)
    msg = _QUERY_SECRET_RE.sub(lambda m: f"{m.group(1)}{m.group(2)}=****", msg)
    return _URL_CREDENTIALS_RE.sub(r'://\1:****@', msg)


class UrlSecretFilter(logging.Filter):
    """Maskerer URL-hemmeligheder i den færdigformaterede log-besked."""

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            record.msg = mask_url_secrets(record.getMessage())
            record.args = ()
        except (TypeError, ValueError):
            # Forkert %-formatering: lad logging selv rapportere fejlen
            pass
        return True


def configure_logging(level: str | int | None = None, stream=None) -> None:
    """Sætter én handler (stdout som standard) på root-loggeren med URL-maskering."""
    root = logging.getLogger()
    root.handlers.clear()

    handler = logging.StreamHandler(stream=stream or sys.stdout)
    handler.setFormatter(logging.Formatter(config.LOG_FORMAT, datefmt=config.LOG_DATEFMT))
    handler.addFilter(UrlSecretFilter())

    lvl = level if level is not None else config.LOG_LEVEL
    if isinstance(lvl, str):
        lvl = getattr(logging, lvl.upper(), logging.INFO)
    root.setLevel(lvl)
    root.addHandler(handler)

    # httpx logger hver request på INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
