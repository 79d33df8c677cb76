"""
日志配置

LOG_FORMAT=json 输出 JSON 行（默认，便于采集）；LOG_FORMAT=text 输出单行文本，本地调试用。
业务字段通过 logger.xxx(..., extra={...}) 传入，会原样写进日志行。
"""
import json
import logging
import sys
from datetime import datetime, timezone

# LogRecord 自带的属性，其余都视为 extra
_RECORD_ATTRS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}

TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def record_extras(record: logging.LogRecord) -> dict:
    return {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRS and value is not None}


class JsonLogFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **record_extras(record),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


class TextLogFormatter(logging.Formatter):
    def __init__(self):
        super().__init__(TEXT_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = record_extras(record)
        if extras:
            line += " " + " ".join(f"{key}={value}" for key, value in sorted(extras.items()))
        return line


FORMATTERS = {
    "json": JsonLogFormatter,
    "text": TextLogFormatter,
}


def configure_logging(level: str = "INFO", fmt: str = "json", quiet_loggers=()) -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(FORMATTERS.get(fmt.lower(), JsonLogFormatter)())
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper())
    # 第三方库日志太多时单独调高级别
    for name in quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)
