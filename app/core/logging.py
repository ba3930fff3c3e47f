import sys
from typing import Any

from loguru import logger
from opentelemetry.trace import get_current_span

from app.core.config import Configuration
from app.core.paths import ROOT_PATH


def _inject_trace_context(record: dict[str, Any]) -> None:
    """Populate ``trace_id`` / ``span_id`` in ``record['extra']`` if absent."""
    span_ctx = get_current_span().get_span_context()

    if span_ctx and span_ctx.trace_id:
        record.setdefault('extra', {})
        record['extra'].setdefault('trace_id', f'{span_ctx.trace_id:032x}')
        record['extra'].setdefault('span_id', f'{span_ctx.span_id:016x}')


def format_log_record(record: dict[str, Any]) -> str:
    """Custom formatter for loguru records."""
    _inject_trace_context(record)
    extra = record.get('extra', {})

    fmt = (
        '<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | '
        '<level>{level: <8}</level> | '
        '<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan>'
    )

    if 'trace_id' in extra:
        fmt += ' | <blue>{extra[trace_id]}</blue>/<yellow>{extra[span_id]}</yellow>'

    fmt += ' | <level>{message}</level>'

    if record.get('exception'):
        fmt += '\n{exception}'

    return fmt + '\n'


# noinspection PyTypeChecker
def setup_logging(config: Configuration) -> None:
    """Setup Loguru logging with configuration."""
    log_config = config.log

    # Remove default handler
    logger.remove()

    # console logging
    logger.add(
        sys.stderr,
        level='DEBUG' if config.app_environment == 'local' else log_config.level,
        format=format_log_record,  # type: ignore [arg-type]
        colorize=config.app_debug,
        backtrace=config.app_debug,
        diagnose=config.app_debug,
        enqueue=True,
    )

    # file logging
    if log_config.to_file:
        log_file_path = ROOT_PATH / log_config.file_path
        log_file_path.parent.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_file_path,
            level=log_config.level,
            format=format_log_record,  # type: ignore [arg-type]
            rotation='100 MB',
            retention='30 days',
            compression='gz',
            backtrace=True,
            diagnose=False,
            enqueue=True,
        )


def get_logger(name: str | None = None) -> Any:
    """Get a Loguru logger instance."""
    return logger.bind(name=name) if name else logger
