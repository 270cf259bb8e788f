"""Logging formatters for stderr output."""

import logging


class StreamFormatter(logging.Formatter):
    """Logging formatter that tags records which are not plain info."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with a level prefix for non-info records.

        Parameters
        ----------
        record : logging.LogRecord
            Log record to format

        Returns
        -------
        str
            Formatted log message, prefixed e.g. with ``[warning]``
        """
        msg = super().format(record)

        if record.levelno == logging.INFO:
            return msg

        return f"[{record.levelname.lower()}] {msg}"
