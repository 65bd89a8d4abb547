# perf_timer/utils/errors.py
class ConfigError(RuntimeError):
    """
    Raised when the timer configuration cannot be loaded.
    Registry operations never raise; only the config layer does.
    """
