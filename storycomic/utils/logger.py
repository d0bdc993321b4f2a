# storycomic/utils/logger.py
import logging
import logging.config
import yaml
from pathlib import Path
import sys
import json
from typing import Any, Dict, List, Optional

# --- Logging config path and log directory ---
PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_LOGGING_CONFIG_PATH = PROJECT_ROOT / 'logging_config.yaml'
DEFAULT_LOG_DIR = PROJECT_ROOT / 'logs'

BASIC_LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] - %(message)s (BasicConfig)"


class ContextFilter(logging.Filter):
    """Adds trace_id and node_name to every log record, with defaults."""

    def filter(self, record):
        record.trace_id = getattr(record, 'trace_id', 'N/A')
        record.node_name = getattr(record, 'node_name', 'N/A')
        return True


def _load_yaml_config(config_path: Path) -> Optional[Dict[str, Any]]:
    """Reads the YAML config, resolving a relative file_handler filename against the project root."""
    try:
        with open(config_path, 'rt', encoding='utf-8') as f:
            log_config = yaml.safe_load(f.read())
    except (OSError, yaml.YAMLError) as e:
        print(f"Warning: Error reading logging config ({config_path}): {e}")
        return None

    if not isinstance(log_config, dict):
        print(f"Warning: Logging config file is empty or not a dictionary: {config_path}")
        return None

    file_handler_config = log_config.get('handlers', {}).get('file_handler')
    log_dir = DEFAULT_LOG_DIR
    if file_handler_config and 'filename' in file_handler_config:
        filename = Path(file_handler_config['filename'])
        if not filename.is_absolute():
            filename = (PROJECT_ROOT / filename).resolve()
            file_handler_config['filename'] = str(filename)
        log_dir = filename.parent

    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        print(f"Warning: Failed to create log directory {log_dir}: {e}. File logging might fail.")
    return log_config


def setup_logging(config_path: Path = DEFAULT_LOGGING_CONFIG_PATH, default_level=logging.INFO):
    """
    Configures logging from a YAML file.
    Falls back to basicConfig on stdout when the file is missing or unusable,
    then attaches ContextFilter to every handler.
    """
    config_path = Path(config_path)
    log_config = _load_yaml_config(config_path) if config_path.exists() else None

    if log_config:
        try:
            logging.config.dictConfig(log_config)
        except (ValueError, TypeError, AttributeError, ImportError) as e:
            print(f"CRITICAL: Error applying logging config from '{config_path}': {e}", file=sys.stderr)
            print("CRITICAL: Falling back to basic logging.", file=sys.stderr)
            log_config = None

    if not log_config:
        if not config_path.exists():
            print(f"Warning: Logging config file not found: {config_path}. Using basic logging.")
        logging.basicConfig(level=default_level, format=BASIC_LOG_FORMAT, stream=sys.stdout)

    context_filter = ContextFilter()
    loggers_to_process = [logging.root] + [logging.getLogger(name) for name in logging.root.manager.loggerDict]
    for logger_instance in loggers_to_process:
        for handler in getattr(logger_instance, 'handlers', []):
            if not any(isinstance(f, ContextFilter) for f in handler.filters):
                handler.addFilter(context_filter)


_loggers: Dict[str, logging.Logger] = {}


def get_logger(name: str) -> logging.Logger:
    """Returns a cached logger by name."""
    if name not in _loggers:
        _loggers[name] = logging.getLogger(name)
    return _loggers[name]


def _safe_serialize_value(value: Any, max_len: int) -> Any:
    if isinstance(value, dict):
        keys_preview = list(value.keys())[:3]
        keys_str = ", ".join(map(str, keys_preview))
        if len(value) > 3:
            keys_str += "..."
        return f"{{Dict len={len(value)}, keys=[{keys_str}]}}"
    elif isinstance(value, list):
        items_preview = ""
        if value:
            first_item_str = str(value[0])
            if len(first_item_str) > 30:
                first_item_str = first_item_str[:30] + "..."
            items_preview = f"items=[{first_item_str}" + ("...]" if len(value) > 1 else "]")
        return f"[List len={len(value)}, {items_preview}]"
    elif isinstance(value, str):
        if len(value) > max_len:
            return value[:max_len] + "..."
        return value
    elif isinstance(value, (int, float, bool, type(None))):
        return value
    else:
        s_val = str(value)
        type_name = type(value).__name__
        if len(s_val) > max_len:
            return f"<{type_name} '{s_val[:max_len]}...'>"
        return f"<{type_name} '{s_val}'>"


def summarize_for_logging(
        data: Any,
        max_len: int = 100,
        fields_to_show: Optional[List[str]] = None,
        exclude_keys: Optional[List[str]] = None
) -> str:
    """Short JSON summary of a dict or pydantic model, truncating long values."""
    if hasattr(data, 'model_dump'):
        target_dict = data.model_dump(exclude_none=False)
    elif isinstance(data, dict):
        target_dict = data.copy()
    else:
        return str(_safe_serialize_value(data, max_len))

    keys_to_exclude = set(exclude_keys) if exclude_keys else set()
    if fields_to_show is not None:
        keys_to_process = [k for k in fields_to_show if k in target_dict and k not in keys_to_exclude]
    else:
        keys_to_process = [k for k in target_dict.keys() if k not in keys_to_exclude]

    summary = {k: _safe_serialize_value(target_dict[k], max_len) for k in keys_to_process}
    return json.dumps(summary, indent=None, ensure_ascii=False, default=str)
