"""
Structured Logging Configuration Module

Provides JSON-formatted structured logging for all ledger operations.
Ledger records carry the account, counterparty and amount they concern
as first-class JSON fields.
"""

import logging
import json
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from .config import get_config

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Record attributes lifted into the JSON entry when present
LEDGER_FIELDS = ("action", "account_id", "counterparty_id", "amount", "balance", "owner")


class JSONFormatter(logging.Formatter):
    """JSON formatter for ledger log records"""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in LEDGER_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                # Amounts stay strings so JSON never turns them into floats
                log_entry[name] = str(value) if isinstance(value, Decimal) else value

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def setup_logging(level: Optional[str] = None, logger_name: str = "branch_ledger",
                  fmt: Optional[str] = None) -> logging.Logger:
    """
    Setup structured logging for the ledger.

    Args:
        level: Log level; defaults to LedgerConfig.log_level
        logger_name: Name of the logger
        fmt: "json" or "text"; defaults to LedgerConfig.log_format

    Returns:
        Configured logger instance
    """
    config = get_config()
    level = level or config.log_level
    fmt = fmt or config.log_format

    logger = logging.getLogger(logger_name)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    if fmt == "text":
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    else:
        handler.setFormatter(JSONFormatter())

    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper()))
    logger.propagate = False

    return logger


def log_action(logger: logging.Logger, level: str, message: str,
               action: Optional[str] = None, account_id: Optional[str] = None,
               counterparty_id: Optional[str] = None, amount: Optional[Decimal] = None,
               balance: Optional[Decimal] = None, owner: Optional[str] = None):
    """
    Log a ledger operation with its structured fields.

    Args:
        logger: Logger instance
        level: Log level (info, warning, error, etc.)
        message: Log message
        action: Operation name (create_account, deposit, ...)
        account_id: Account the operation acted on
        counterparty_id: Other account in a transfer
        amount: Amount moved
        balance: Balance of account_id after the operation
        owner: Account owner's name
    """
    fields = {
        "action": action,
        "account_id": account_id,
        "counterparty_id": counterparty_id,
        "amount": amount,
        "balance": balance,
        "owner": owner,
    }
    fields = {k: v for k, v in fields.items() if v is not None}

    logger.log(getattr(logging, level.upper()), message, extra=fields)
